"""Network service blueprint."""

from abc import ABC, abstractmethod

from zonelink.base.models import Vpc


class NetworkBlueprint(ABC):
    """Abstract interface for VPC discovery in the member account.

    Maps to AWS EC2.
    """

    @abstractmethod
    def list_tagged_vpcs(self, tag_key: str) -> list[Vpc]:
        """List VPCs carrying ``tag_key``, whatever its value.

        Args:
            tag_key: Tag key that must be present on the VPC.

        Returns:
            VPCs with their tags flattened into a mapping.
        """
