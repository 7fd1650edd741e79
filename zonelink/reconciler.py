"""Association reconciliation.

Converges the hosted zones associated with each member VPC onto the
zones its reconciliation tag selects. Additions go through a three-call
sequence across the two accounts::

    owner:  create_vpc_association_authorization
    member: associate_vpc_with_hosted_zone
    owner:  delete_vpc_association_authorization

A failure at any step stops the sequence; nothing is rolled back. An
authorization left behind by a failed or interrupted run is harmless:
the next run recomputes the diff from live state and issues a fresh one.
"""

from __future__ import annotations

from enum import Enum
from typing import Callable, Iterable

from zonelink.base.dns import DNSBlueprint
from zonelink.base.config import ReconcilerSettings
from zonelink.base.exceptions import AssociationStepError, DNSError
from zonelink.base.logger import zl_logger
from zonelink.base.models import (
    Association,
    AssociationPlan,
    OutcomeStatus,
    Vpc,
    VpcOutcome,
    Zone,
)
from zonelink.filters import resolve_desired


def plan_changes(desired: Iterable[str], actual: Iterable[str]) -> AssociationPlan:
    """Diff desired against actual zone ids."""
    desired_ids, actual_ids = set(desired), set(actual)
    return AssociationPlan(
        to_add=tuple(sorted(desired_ids - actual_ids)),
        to_remove=tuple(sorted(actual_ids - desired_ids)),
    )


class SagaState(str, Enum):
    PENDING = "pending"
    AUTHORIZED = "authorized"
    ASSOCIATED = "associated"
    REVOKED = "revoked"
    FAILED = "failed"


class AssociationSaga:
    """Authorize, associate, then revoke, for one zone and VPC.

    ``state`` records how far the sequence got. Revocation is only
    attempted after a successful association.
    """

    def __init__(self, owner: DNSBlueprint, member: DNSBlueprint, association: Association) -> None:
        self.owner = owner
        self.member = member
        self.association = association
        self.state = SagaState.PENDING

    def run(self) -> None:
        """Execute the sequence.

        Raises:
            AssociationStepError: Naming the step that failed, with the
                provider error as its cause.
        """
        self._step("authorize", self.owner.create_association_authorization, SagaState.AUTHORIZED)
        self._step("associate", self.member.associate_vpc, SagaState.ASSOCIATED)
        self._step("revoke", self.owner.delete_association_authorization, SagaState.REVOKED)

    def _step(self, step: str, call: Callable[[Association], None], next_state: SagaState) -> None:
        a = self.association
        zl_logger.debug(
            "Association step %s", step,
            operation=step, vpc_id=a.vpc_id, zone_id=a.zone_id, region=a.region,
        )
        try:
            call(a)
        except DNSError as e:
            failed_in = self.state
            self.state = SagaState.FAILED
            raise AssociationStepError(
                step, a.zone_id, a.vpc_id,
                f"{step} failed after reaching '{failed_in.value}' for zone "
                f"'{a.zone_id}' and VPC '{a.vpc_id}'",
            ) from e
        self.state = next_state


class AssociationReconciler:
    """Reconciles one VPC at a time against the zone catalog.

    Attributes:
        owner: DNS service in the account that owns the zones.
        member: DNS service in the account that owns the VPCs.
        settings: Tag key and dry-run switch.
    """

    def __init__(
        self,
        owner: DNSBlueprint,
        member: DNSBlueprint,
        settings: ReconcilerSettings | None = None,
        run_id: str | None = None,
    ) -> None:
        self.owner = owner
        self.member = member
        self.settings = settings or ReconcilerSettings()
        self.run_id = run_id

    def reconcile(self, vpc: Vpc, region: str, catalog: list[Zone]) -> VpcOutcome:
        """Converge ``vpc`` and report the outcome.

        Any exception raised while resolving, discovering or applying is
        logged with the VPC's context and returned as a failed outcome;
        it never escapes. Changes applied before the failure stay applied.
        """
        added: list[str] = []
        removed: list[str] = []
        ctx = {"run_id": self.run_id, "vpc_id": vpc.id, "region": region}
        try:
            return self._reconcile(vpc, region, catalog, added, removed)
        except Exception as e:
            zl_logger.error(
                "Failed to reconcile VPC %s: %s", vpc.id, e,
                operation="reconcile", exc_info=True, **ctx,
            )
            return VpcOutcome(
                vpc_id=vpc.id,
                status=OutcomeStatus.FAILED,
                added=tuple(added),
                removed=tuple(removed),
                error=str(e),
            )

    def _reconcile(
        self,
        vpc: Vpc,
        region: str,
        catalog: list[Zone],
        added: list[str],
        removed: list[str],
    ) -> VpcOutcome:
        ctx = {"run_id": self.run_id, "vpc_id": vpc.id, "region": region}

        desired = resolve_desired(catalog, vpc, self.settings.tag_key)
        zl_logger.debug("Desired zones %s", sorted(desired), operation="reconcile", **ctx)
        actual = self.member.list_zones_by_vpc(vpc.id, region)
        zl_logger.debug("Actual zones %s", sorted(actual), operation="reconcile", **ctx)

        plan = plan_changes(desired, actual)
        zl_logger.debug(
            "Plan add=%s remove=%s", list(plan.to_add), list(plan.to_remove),
            operation="reconcile", **ctx,
        )
        if plan.is_empty:
            return VpcOutcome(vpc_id=vpc.id, status=OutcomeStatus.UNCHANGED)
        if self.settings.dry_run:
            zl_logger.info(
                "Dry run, would add %s and remove %s", list(plan.to_add), list(plan.to_remove),
                operation="reconcile", **ctx,
            )
            return VpcOutcome(
                vpc_id=vpc.id,
                status=OutcomeStatus.PLANNED,
                added=plan.to_add,
                removed=plan.to_remove,
            )

        for zone_id in plan.to_add:
            AssociationSaga(self.owner, self.member, Association(
                zone_id=zone_id, vpc_id=vpc.id, region=region,
            )).run()
            added.append(zone_id)
            zl_logger.info("Associated zone", operation="associate", zone_id=zone_id, **ctx)

        for zone_id in plan.to_remove:
            self.member.disassociate_vpc(Association(zone_id=zone_id, vpc_id=vpc.id, region=region))
            removed.append(zone_id)
            zl_logger.info("Disassociated zone", operation="disassociate", zone_id=zone_id, **ctx)

        return VpcOutcome(
            vpc_id=vpc.id,
            status=OutcomeStatus.CONVERGED,
            added=tuple(added),
            removed=tuple(removed),
        )

    def reconcile_all(self, vpcs: Iterable[Vpc], region: str, catalog: list[Zone]) -> list[VpcOutcome]:
        """Reconcile each VPC in turn; one VPC's failure never stops the rest."""
        return [self.reconcile(vpc, region, catalog) for vpc in vpcs]


def reconcile(
    owner: DNSBlueprint,
    member: DNSBlueprint,
    vpc: Vpc,
    region: str,
    catalog: list[Zone],
    settings: ReconcilerSettings | None = None,
) -> VpcOutcome:
    """Reconcile a single VPC. See :meth:`AssociationReconciler.reconcile`."""
    return AssociationReconciler(owner, member, settings).reconcile(vpc, region, catalog)
