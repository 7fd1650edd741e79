"""AWS service factory.

Maps service names to their AWS SDK implementations.
``SERVICE_REGISTRY`` is consumed by :func:`zonelink.factory.service_factory`.
"""

from zonelink.aws.dns import DNS
from zonelink.aws.network import Network
from zonelink.aws.iam import CredentialBroker


# Service registry for AWS
SERVICE_REGISTRY: dict[str, type] = {
    "dns": DNS,
    "network": Network,
    "iam": CredentialBroker,
}
