"""Reconciliation run orchestration.

One call to :func:`run` loads the owner's zone catalog, assumes the
member role once, discovers the member's tagged VPCs and reconciles
them one after another.
"""

from __future__ import annotations

import uuid
from typing import Any, Callable

from zonelink.base.config import AWSConfig, ReconcilerSettings, RunInput
from zonelink.base.logger import zl_logger
from zonelink.base.models import Zone
from zonelink.catalog import load_private_tagged_zones
from zonelink.factory import service_factory
from zonelink.reconciler import AssociationReconciler

ServiceFactory = Callable[[str, AWSConfig], Any]


def run(
    invocation: RunInput | dict[str, Any],
    settings: ReconcilerSettings | None = None,
    *,
    owner_config: AWSConfig | None = None,
    factory: ServiceFactory = service_factory,
) -> list[Zone]:
    """Run one reconciliation.

    Catalog, credential and VPC listing failures propagate and fail the
    run. Per-VPC failures are logged and do not.

    Args:
        invocation: ``{"roleArn": ..., "region": ...}`` from the scheduler.
        settings: Protocol constants; read from the environment if omitted.
        owner_config: Owner-account client config; ambient credentials if
            omitted.
        factory: Builds a service from a name and config.

    Returns:
        The tagged zone catalog the run reconciled against.
    """
    payload = invocation if isinstance(invocation, RunInput) else RunInput.model_validate(invocation)
    settings = settings or ReconcilerSettings()
    owner_config = owner_config or AWSConfig()
    run_id = uuid.uuid4().hex[:12]
    ctx = {"run_id": run_id, "region": payload.region}

    zl_logger.info("Starting run for role %s", payload.role_arn, operation="run", **ctx)

    owner_dns = factory("dns", owner_config)
    catalog = load_private_tagged_zones(owner_dns, settings)
    zl_logger.info("Loaded %d private zones", len(catalog), operation="load_catalog", **ctx)

    broker = factory("iam", owner_config)
    credentials = broker.assume_role(payload.role_arn, settings.session_name)
    member_config = AWSConfig.from_credentials(
        credentials, payload.region, max_attempts=owner_config.max_attempts
    )
    network = factory("network", member_config)
    member_dns = factory("dns", member_config)

    vpcs = network.list_tagged_vpcs(settings.tag_key)
    zl_logger.info("Found %d tagged VPCs", len(vpcs), operation="list_vpcs", **ctx)

    reconciler = AssociationReconciler(owner_dns, member_dns, settings, run_id=run_id)
    outcomes = reconciler.reconcile_all(vpcs, payload.region, catalog)
    for outcome in outcomes:
        # Failures were already logged at ERROR by the reconciler.
        zl_logger.debug(
            "VPC outcome %s", outcome,
            operation="reconcile", vpc_id=outcome.vpc_id, **ctx,
        )
    failed = [o.vpc_id for o in outcomes if not o.ok]
    if failed:
        zl_logger.debug("Unconverged VPCs %s", failed, operation="run", **ctx)

    return catalog
