"""
Data model shared by the reconciliation core and the AWS services.

All models are immutable snapshots: they are rebuilt from the live
accounts on every run and never persisted.
"""

from __future__ import annotations

from datetime import datetime
from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field


_ZONE_ID_PREFIX = "/hostedzone/"


def normalize_zone_id(zone_id: str) -> str:
    """Strip the ``/hostedzone/`` resource path from a Route 53 zone id.

    >>> normalize_zone_id("/hostedzone/ABC123")
    'ABC123'
    """
    if zone_id.startswith(_ZONE_ID_PREFIX):
        return zone_id[len(_ZONE_ID_PREFIX):]
    return zone_id


def tags_to_mapping(tags: list[dict[str, str]] | None) -> dict[str, str]:
    """Flatten a ``[{"Key": k, "Value": v}, ...]`` list into a mapping."""
    return {t["Key"]: t.get("Value", "") for t in tags or []}


class Zone(BaseModel):
    """A hosted zone from the owner account's catalog.

    ``document`` is the provider's zone description with the normalized
    ``Id`` and the ``Tags`` mapping merged in; filters match against it.
    """

    model_config = ConfigDict(frozen=True)

    id: str
    name: str = ""
    is_private: bool = False
    tags: dict[str, str] = Field(default_factory=dict)
    document: dict[str, Any] = Field(default_factory=dict)

    @classmethod
    def from_hosted_zone(cls, hosted_zone: dict[str, Any]) -> Zone:
        """Build a zone from a ``ListHostedZones`` entry."""
        zone_id = normalize_zone_id(hosted_zone["Id"])
        return cls(
            id=zone_id,
            name=hosted_zone.get("Name", ""),
            is_private=bool(hosted_zone.get("Config", {}).get("PrivateZone", False)),
            document={**hosted_zone, "Id": zone_id},
        )

    def with_tags(self, tags: dict[str, str]) -> Zone:
        return self.model_copy(
            update={"tags": dict(tags), "document": {**self.document, "Tags": dict(tags)}}
        )


class Vpc(BaseModel):
    """A member-account VPC carrying the reconciliation tag."""

    model_config = ConfigDict(frozen=True)

    id: str
    region: str
    owner_id: str | None = None
    tags: dict[str, str] = Field(default_factory=dict)


class Credentials(BaseModel):
    """Temporary credentials for one role assumption."""

    model_config = ConfigDict(frozen=True)

    access_key_id: str
    secret_access_key: str = Field(repr=False)
    session_token: str = Field(repr=False)
    expiration: datetime | None = None


class Association(BaseModel):
    """A (zone, VPC, region) link."""

    model_config = ConfigDict(frozen=True)

    zone_id: str
    vpc_id: str
    region: str

    def as_params(self) -> dict[str, Any]:
        """Request parameters shared by every association API call."""
        return {
            "HostedZoneId": self.zone_id,
            "VPC": {"VPCId": self.vpc_id, "VPCRegion": self.region},
        }


class AssociationPlan(BaseModel):
    """Zone ids to associate with and disassociate from one VPC."""

    model_config = ConfigDict(frozen=True)

    to_add: tuple[str, ...] = ()
    to_remove: tuple[str, ...] = ()

    @property
    def is_empty(self) -> bool:
        return not self.to_add and not self.to_remove


class OutcomeStatus(str, Enum):
    CONVERGED = "converged"
    UNCHANGED = "unchanged"
    PLANNED = "planned"
    FAILED = "failed"


class VpcOutcome(BaseModel):
    """Result of reconciling one VPC."""

    model_config = ConfigDict(frozen=True)

    vpc_id: str
    status: OutcomeStatus
    added: tuple[str, ...] = ()
    removed: tuple[str, ...] = ()
    error: str | None = None

    @property
    def ok(self) -> bool:
        return self.status is not OutcomeStatus.FAILED
