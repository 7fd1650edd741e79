"""DNS service blueprint."""

from abc import ABC, abstractmethod
from typing import Any

from zonelink.base.models import Association, Zone


class DNSBlueprint(ABC):
    """Abstract interface for private hosted zones and their VPC associations.

    Maps to AWS Route 53. The owner account uses the zone listing, tagging
    and authorization calls; the member account uses the association calls.
    """

    # --- Zone catalog ---

    @abstractmethod
    def list_zones(self, page_size: int = 100) -> list[Zone]:
        """List every hosted zone, following pagination to the end.

        Args:
            page_size: Items requested per page.

        Returns:
            Zones with normalized ids and no tags attached.
        """

    @abstractmethod
    def list_zone_tags(self, zone_ids: list[str]) -> dict[str, dict[str, str]]:
        """Fetch tags for a batch of zones in a single call.

        Args:
            zone_ids: Normalized zone ids; at most 10 per call.

        Returns:
            Mapping of zone id to its tag mapping.
        """

    # --- Association state ---

    @abstractmethod
    def list_zones_by_vpc(self, vpc_id: str, region: str, page_size: int = 100) -> list[str]:
        """List the ids of zones currently associated with a VPC.

        Each returned id is normalized. Pagination is followed to the end.
        """

    # --- Association protocol ---

    @abstractmethod
    def create_association_authorization(self, association: Association) -> None:
        """Allow the association's VPC to attach to a zone this account owns."""

    @abstractmethod
    def associate_vpc(self, association: Association, **kwargs: Any) -> None:
        """Associate a VPC with a hosted zone.

        Keyword Args:
            comment (str): Free-form comment recorded with the change.
        """

    @abstractmethod
    def delete_association_authorization(self, association: Association) -> None:
        """Revoke a previously created association authorization."""

    @abstractmethod
    def disassociate_vpc(self, association: Association, **kwargs: Any) -> None:
        """Remove the link between a VPC and a hosted zone.

        Keyword Args:
            comment (str): Free-form comment recorded with the change.
        """
