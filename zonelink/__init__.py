"""zonelink: tag-driven Route 53 private zone associations across accounts.

Entry point for the library. Import :func:`run` to reconcile a member
account's tagged VPCs against the owner's private hosted zones::

    from zonelink import run

    catalog = run({"roleArn": "arn:aws:iam::111111111111:role/zones", "region": "eu-west-1"})
"""

from .base import (
    DNSBlueprint,
    NetworkBlueprint,
    CredentialBrokerBlueprint,
)
from .base.config import AWSConfig, ReconcilerSettings, RunInput
from .driver import run
from .factory import service_factory

__all__ = [
    "DNSBlueprint",
    "NetworkBlueprint",
    "CredentialBrokerBlueprint",
    "AWSConfig",
    "ReconcilerSettings",
    "RunInput",
    "run",
    "service_factory",
]
