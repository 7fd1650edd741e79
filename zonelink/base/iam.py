"""Credential broker blueprint."""

from abc import ABC, abstractmethod

from zonelink.base.models import Credentials


class CredentialBrokerBlueprint(ABC):
    """Abstract interface exchanging a role for temporary credentials.

    Maps to AWS STS.
    """

    @abstractmethod
    def assume_role(self, role_arn: str, session_name: str) -> Credentials:
        """Assume ``role_arn`` and return its temporary credentials.

        Args:
            role_arn: ARN of the member-account role.
            session_name: Session name recorded in the member's audit trail.
        """
