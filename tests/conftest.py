"""In-memory Route 53 and EC2 fakes shared by the reconciliation tests."""

from __future__ import annotations

from typing import Any

import pytest

from zonelink.base import DNSBlueprint, NetworkBlueprint, CredentialBrokerBlueprint
from zonelink.base.exceptions import NotAuthorizedError, AssociationNotFoundError
from zonelink.base.models import Association, Credentials, Vpc, Zone


def make_zone(zone_id: str, private: bool = True, name: str | None = None, **extra: Any) -> Zone:
    return Zone.from_hosted_zone({
        "Id": f"/hostedzone/{zone_id}",
        "Name": name or f"{zone_id.lower()}.internal.",
        "Config": {"PrivateZone": private},
        **extra,
    })


class FakeRoute53:
    """Route 53 state seen by both accounts.

    ``calls`` records every mutation in order as ``(operation, zone_id, vpc_id)``.
    ``failures`` maps ``(operation, zone_id)`` to the exception to raise.
    """

    def __init__(self) -> None:
        self.zones: list[Zone] = []
        self.tags: dict[str, dict[str, str]] = {}
        self.associations: dict[str, set[str]] = {}
        self.authorizations: set[tuple[str, str]] = set()
        self.calls: list[tuple[str, str, str]] = []
        self.tag_batches: list[list[str]] = []
        self.failures: dict[tuple[str, str], Exception] = {}

    def add_zone(self, zone_id: str, private: bool = True, tags: dict[str, str] | None = None, **extra: Any) -> None:
        self.zones.append(make_zone(zone_id, private, **extra))
        self.tags[zone_id] = dict(tags or {})


class FakeDNS(DNSBlueprint):
    def __init__(self, world: FakeRoute53) -> None:
        self.world = world

    def _record(self, operation: str, association: Association) -> None:
        failure = self.world.failures.get((operation, association.zone_id))
        if failure is not None:
            raise failure
        self.world.calls.append((operation, association.zone_id, association.vpc_id))

    def list_zones(self, page_size: int = 100) -> list[Zone]:
        return list(self.world.zones)

    def list_zone_tags(self, zone_ids: list[str]) -> dict[str, dict[str, str]]:
        assert len(zone_ids) <= 10
        self.world.tag_batches.append(list(zone_ids))
        return {z: self.world.tags.get(z, {}) for z in zone_ids}

    def list_zones_by_vpc(self, vpc_id: str, region: str, page_size: int = 100) -> list[str]:
        return sorted(self.world.associations.get(vpc_id, set()))

    def create_association_authorization(self, association: Association) -> None:
        self._record("authorize", association)
        self.world.authorizations.add((association.zone_id, association.vpc_id))

    def associate_vpc(self, association: Association, **kwargs: Any) -> None:
        self._record("associate", association)
        if (association.zone_id, association.vpc_id) not in self.world.authorizations:
            raise NotAuthorizedError("no authorization")
        self.world.associations.setdefault(association.vpc_id, set()).add(association.zone_id)

    def delete_association_authorization(self, association: Association) -> None:
        self._record("revoke", association)
        self.world.authorizations.discard((association.zone_id, association.vpc_id))

    def disassociate_vpc(self, association: Association, **kwargs: Any) -> None:
        self._record("disassociate", association)
        zones = self.world.associations.get(association.vpc_id, set())
        if association.zone_id not in zones:
            raise AssociationNotFoundError("not associated")
        zones.discard(association.zone_id)


class FakeNetwork(NetworkBlueprint):
    def __init__(self, vpcs: list[Vpc]) -> None:
        self.vpcs = vpcs
        self.requested_keys: list[str] = []

    def list_tagged_vpcs(self, tag_key: str) -> list[Vpc]:
        self.requested_keys.append(tag_key)
        return [v for v in self.vpcs if tag_key in v.tags]


class FakeBroker(CredentialBrokerBlueprint):
    def __init__(self) -> None:
        self.sessions: list[tuple[str, str]] = []

    def assume_role(self, role_arn: str, session_name: str) -> Credentials:
        self.sessions.append((role_arn, session_name))
        return Credentials(access_key_id="ASIA", secret_access_key="secret", session_token="token")


@pytest.fixture
def world():
    return FakeRoute53()


@pytest.fixture
def owner(world):
    return FakeDNS(world)


@pytest.fixture
def member(world):
    return FakeDNS(world)


@pytest.fixture
def fake_classes():
    return FakeDNS, FakeNetwork, FakeBroker
