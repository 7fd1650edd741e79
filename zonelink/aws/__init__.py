"""AWS provider implementations."""

from .dns import DNS
from .iam import CredentialBroker
from .network import Network

__all__ = [
    "CredentialBroker",
    "DNS",
    "Network",
]
