"""AWS Route 53 implementation of the DNS blueprint."""

from __future__ import annotations

from typing import Any, NoReturn

import boto3
from botocore.exceptions import ClientError

from zonelink.base.dns import DNSBlueprint
from zonelink.base.exceptions import (
    DNSError,
    ZoneNotFoundError,
    VpcNotFoundError,
    AssociationConflictError,
    AssociationNotFoundError,
    LastAssociationError,
    NotAuthorizedError,
    AuthorizationLimitError,
)
from zonelink.base.config import AWSConfig
from zonelink.base.logger import zl_logger
from zonelink.base.models import Association, Zone, normalize_zone_id, tags_to_mapping

_ERROR_MAP: dict[str, type[DNSError]] = {
    "NoSuchHostedZone": ZoneNotFoundError,
    "InvalidVPCId": VpcNotFoundError,
    "ConflictingDomainExists": AssociationConflictError,
    "VPCAssociationNotFound": AssociationNotFoundError,
    "VPCAssociationAuthorizationNotFound": AssociationNotFoundError,
    "LastVPCAssociation": LastAssociationError,
    "NotAuthorizedException": NotAuthorizedError,
    "TooManyVPCAssociationAuthorizations": AuthorizationLimitError,
}

_MAX_TAG_RESOURCES = 10


def _handle(e: ClientError, msg: str) -> NoReturn:
    exc = _ERROR_MAP.get(e.response["Error"]["Code"])
    raise (exc or DNSError)(f"{msg}: {e}") from e


class DNS(DNSBlueprint):
    """AWS Route 53 DNS service.

    Attributes:
        client: boto3 Route 53 client.
    """

    def __init__(self, config: AWSConfig) -> None:
        """Initialize the Route 53 client.

        Args:
            config: AWS configuration object containing credentials and region.
                   Expected attributes:
                   - aws_access_key_id: AWS access key ID
                   - aws_secret_access_key: AWS secret access key
                   - aws_session_token: STS session token, for assumed roles
                   - region_name: AWS region name (e.g., 'us-east-1')
        """
        self.client = boto3.client("route53", **config.client_kwargs())

    # --- Zone catalog ---

    def list_zones(self, page_size: int = 100) -> list[Zone]:
        """List all Route 53 hosted zones.

        Follows ``NextMarker`` until the response is no longer truncated.

        Raises:
            DNSError: On Route 53 API failure.
        """
        params: dict[str, Any] = {"MaxItems": str(page_size)}
        zones: list[Zone] = []
        try:
            while True:
                zl_logger.debug("list_hosted_zones params %s", params, operation="list_hosted_zones")
                resp = self.client.list_hosted_zones(**params)
                zl_logger.debug("list_hosted_zones response %s", resp, operation="list_hosted_zones")
                zones.extend(Zone.from_hosted_zone(z) for z in resp.get("HostedZones", []))
                if not resp.get("IsTruncated"):
                    break
                params["Marker"] = resp["NextMarker"]
        except ClientError as e:
            _handle(e, "Failed to list hosted zones")
        return zones

    def list_zone_tags(self, zone_ids: list[str]) -> dict[str, dict[str, str]]:
        """Fetch tags for up to ten hosted zones.

        Args:
            zone_ids: Normalized zone ids.

        Returns:
            Mapping of zone id to tag mapping. Zones Route 53 omits from
            the response are absent.

        Raises:
            ValueError: If more than ten ids are passed.
            ZoneNotFoundError: If one of the zones no longer exists.
        """
        if len(zone_ids) > _MAX_TAG_RESOURCES:
            raise ValueError(
                f"At most {_MAX_TAG_RESOURCES} zones per tag request, got {len(zone_ids)}"
            )
        if not zone_ids:
            return {}
        params = {"ResourceType": "hostedzone", "ResourceIds": list(zone_ids)}
        try:
            zl_logger.debug("list_tags_for_resources params %s", params, operation="list_tags_for_resources")
            resp = self.client.list_tags_for_resources(**params)
            zl_logger.debug("list_tags_for_resources response %s", resp, operation="list_tags_for_resources")
        except ClientError as e:
            _handle(e, f"Failed to list tags for zones {zone_ids}")
        return {
            normalize_zone_id(tag_set["ResourceId"]): tags_to_mapping(tag_set.get("Tags"))
            for tag_set in resp.get("ResourceTagSets", [])
        }

    # --- Association state ---

    def list_zones_by_vpc(self, vpc_id: str, region: str, page_size: int = 100) -> list[str]:
        """List zones associated with a VPC.

        Follows ``NextToken`` until Route 53 stops returning one.

        Raises:
            VpcNotFoundError: If the VPC id or region is invalid.
            DNSError: On Route 53 API failure.
        """
        params: dict[str, Any] = {
            "VPCId": vpc_id,
            "VPCRegion": region,
            "MaxItems": str(page_size),
        }
        zone_ids: list[str] = []
        try:
            while True:
                zl_logger.debug(
                    "list_hosted_zones_by_vpc params %s", params,
                    operation="list_hosted_zones_by_vpc", vpc_id=vpc_id, region=region,
                )
                resp = self.client.list_hosted_zones_by_vpc(**params)
                zl_logger.debug(
                    "list_hosted_zones_by_vpc response %s", resp,
                    operation="list_hosted_zones_by_vpc", vpc_id=vpc_id, region=region,
                )
                zone_ids.extend(
                    normalize_zone_id(s["HostedZoneId"])
                    for s in resp.get("HostedZoneSummaries", [])
                )
                if not resp.get("NextToken"):
                    break
                params["NextToken"] = resp["NextToken"]
        except ClientError as e:
            _handle(e, f"Failed to list zones associated with '{vpc_id}'")
        return zone_ids

    # --- Association protocol ---

    def create_association_authorization(self, association: Association) -> None:
        """Authorize a VPC in another account to associate with a zone.

        Raises:
            ZoneNotFoundError: If the zone does not exist.
            AuthorizationLimitError: If the zone has too many pending
                authorizations.
        """
        self._call("create_vpc_association_authorization", association)

    def associate_vpc(self, association: Association, **kwargs: Any) -> None:
        """Associate a VPC with a private hosted zone.

        Args:
            association: Zone, VPC and region to link.
            **kwargs: ``comment``, recorded with the change.

        Raises:
            NotAuthorizedError: If no authorization covers the VPC.
            AssociationConflictError: If a zone with the same name is
                already associated.
        """
        self._call("associate_vpc_with_hosted_zone", association, kwargs.get("comment"))

    def delete_association_authorization(self, association: Association) -> None:
        """Revoke a VPC association authorization.

        Raises:
            AssociationNotFoundError: If no such authorization exists.
        """
        self._call("delete_vpc_association_authorization", association)

    def disassociate_vpc(self, association: Association, **kwargs: Any) -> None:
        """Disassociate a VPC from a private hosted zone.

        Args:
            association: Zone, VPC and region to unlink.
            **kwargs: ``comment``, recorded with the change.

        Raises:
            AssociationNotFoundError: If the VPC is not associated.
            LastAssociationError: If this is the zone's only VPC.
        """
        self._call("disassociate_vpc_from_hosted_zone", association, kwargs.get("comment"))

    def _call(self, operation: str, association: Association, comment: str | None = None) -> None:
        """Invoke one association API call with the shared parameters."""
        params = association.as_params()
        if comment:
            params["Comment"] = comment
        context = {
            "operation": operation,
            "vpc_id": association.vpc_id,
            "zone_id": association.zone_id,
            "region": association.region,
        }
        try:
            zl_logger.debug("%s params %s", operation, params, **context)
            resp = getattr(self.client, operation)(**params)
            zl_logger.debug("%s response %s", operation, resp, **context)
        except ClientError as e:
            _handle(
                e,
                f"Failed to {operation.replace('_', ' ')} for zone "
                f"'{association.zone_id}' and VPC '{association.vpc_id}'",
            )
