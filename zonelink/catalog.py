"""Zone catalog loading.

Builds the owner account's catalog of private hosted zones, each with
its tags attached, once per run.
"""

from __future__ import annotations

from typing import Iterator, Sequence, TypeVar

from zonelink.base.dns import DNSBlueprint
from zonelink.base.config import ReconcilerSettings
from zonelink.base.logger import zl_logger
from zonelink.base.models import Zone

T = TypeVar("T")


def chunked(items: Sequence[T], size: int) -> Iterator[list[T]]:
    """Yield consecutive slices of at most ``size`` items."""
    for start in range(0, len(items), size):
        yield list(items[start:start + size])


def load_private_tagged_zones(
    dns: DNSBlueprint,
    settings: ReconcilerSettings | None = None,
) -> list[Zone]:
    """Return every private hosted zone owned by ``dns``'s account, tagged.

    Provider errors propagate: without a catalog the run cannot proceed.

    Args:
        dns: Owner-account DNS service.
        settings: Page and batch sizes; defaults apply when omitted.

    Returns:
        Private zones in listing order, each with its tag mapping.
    """
    settings = settings or ReconcilerSettings()

    seen: dict[str, Zone] = {}
    for zone in dns.list_zones(page_size=settings.zone_page_size):
        if zone.is_private and zone.id not in seen:
            seen[zone.id] = zone
    zl_logger.debug("Private zones %s", list(seen), operation="load_catalog")

    tags: dict[str, dict[str, str]] = {}
    for batch in chunked(list(seen), settings.tag_batch_size):
        tags.update(dns.list_zone_tags(batch))

    catalog = [zone.with_tags(tags.get(zone_id, {})) for zone_id, zone in seen.items()]
    zl_logger.debug("Tagged catalog %s", [z.document for z in catalog], operation="load_catalog")
    return catalog
