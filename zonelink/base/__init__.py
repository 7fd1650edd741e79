"""Abstract service blueprints and core utilities.

Every AWS service used by the reconciler inherits from one of the
blueprints defined here. Import them to type-hint your own code or to
build in-memory fakes for tests.
"""

from .dns import DNSBlueprint
from .network import NetworkBlueprint
from .iam import CredentialBrokerBlueprint
from .supported_services import existing_services


__all__ = [
    "DNSBlueprint",
    "NetworkBlueprint",
    "CredentialBrokerBlueprint",
    "existing_services",
]
