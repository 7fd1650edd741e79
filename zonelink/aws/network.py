"""AWS EC2 implementation of the Network blueprint."""

from __future__ import annotations

from typing import Any, NoReturn

import boto3
from botocore.exceptions import ClientError

from zonelink.base.network import NetworkBlueprint
from zonelink.base.exceptions import NetworkError
from zonelink.base.config import AWSConfig
from zonelink.base.logger import zl_logger
from zonelink.base.models import Vpc, tags_to_mapping


def _handle(e: ClientError, msg: str) -> NoReturn:
    raise NetworkError(f"{msg}: {e}") from e


class Network(NetworkBlueprint):
    """AWS EC2 VPC discovery.

    Attributes:
        client: boto3 EC2 client.
        region: Region the client is bound to; stamped on every VPC.
    """

    def __init__(self, config: AWSConfig) -> None:
        """Initialize the EC2 client.

        Args:
            config: AWS configuration object. ``region_name`` selects the
                region whose VPCs are listed.
        """
        self.client = boto3.client("ec2", **config.client_kwargs())
        self.region = config.region_name or self.client.meta.region_name

    def list_tagged_vpcs(self, tag_key: str) -> list[Vpc]:
        """List VPCs that carry ``tag_key``.

        The tag filter is applied server side; every page is read.

        Raises:
            NetworkError: On EC2 API failure.
        """
        params: dict[str, Any] = {"Filters": [{"Name": "tag-key", "Values": [tag_key]}]}
        vpcs: list[Vpc] = []
        try:
            zl_logger.debug("describe_vpcs params %s", params, operation="describe_vpcs", region=self.region)
            paginator = self.client.get_paginator("describe_vpcs")
            for page in paginator.paginate(**params):
                zl_logger.debug("describe_vpcs response %s", page, operation="describe_vpcs", region=self.region)
                vpcs.extend(
                    Vpc(
                        id=v["VpcId"],
                        region=self.region,
                        owner_id=v.get("OwnerId"),
                        tags=tags_to_mapping(v.get("Tags")),
                    )
                    for v in page.get("Vpcs", [])
                )
        except ClientError as e:
            _handle(e, f"Failed to list VPCs tagged '{tag_key}'")
        return vpcs
