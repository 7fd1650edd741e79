"""Zone filters and desired-state resolution.

A VPC's reconciliation tag holds a JSON list of partial zone documents,
for example::

    [{"Tags": {"env": "prod"}}, {"Name": "shared.internal."}]

A zone is desired when it matches any filter; it matches a filter when
every field the filter specifies matches.
"""

from __future__ import annotations

import json
from typing import Any, Iterable

from zonelink.base.exceptions import MalformedFilterError
from zonelink.base.logger import zl_logger
from zonelink.base.models import Vpc, Zone


def parse_filters(raw: str | None) -> list[dict[str, Any]]:
    """Decode a reconciliation tag value into a filter list.

    Raises:
        MalformedFilterError: If the value is missing, is not JSON, or is
            not a list of objects.
    """
    if raw is None:
        raise MalformedFilterError("Reconciliation tag is missing")
    try:
        filters = json.loads(raw)
    except json.JSONDecodeError as e:
        raise MalformedFilterError(f"Reconciliation tag is not valid JSON: {e}") from e
    if not isinstance(filters, list):
        raise MalformedFilterError(
            f"Reconciliation tag must be a JSON list, got {type(filters).__name__}"
        )
    for index, item in enumerate(filters):
        if not isinstance(item, dict):
            raise MalformedFilterError(
                f"Filter {index} must be a JSON object, got {type(item).__name__}"
            )
    return filters


def matches(pattern: Any, value: Any) -> bool:
    """Partial deep comparison of ``value`` against ``pattern``.

    Mappings match when every pattern key is present and matches; lists
    match when every pattern element matches some element of ``value``;
    anything else compares by equality.
    """
    if isinstance(pattern, dict):
        if not isinstance(value, dict):
            return False
        return all(key in value and matches(sub, value[key]) for key, sub in pattern.items())
    if isinstance(pattern, list):
        if not isinstance(value, list):
            return False
        return all(any(matches(sub, item) for item in value) for sub in pattern)
    if isinstance(pattern, bool) or isinstance(value, bool):
        return type(pattern) is type(value) and pattern == value
    return pattern == value


def match_zones(zones: Iterable[Zone], filters: list[dict[str, Any]]) -> list[str]:
    """Ids of zones selected by any filter, deduplicated, in catalog order."""
    zones = list(zones)
    selected: dict[str, None] = {}
    for zone_filter in filters:
        hits = [z.id for z in zones if matches(zone_filter, z.document)]
        zl_logger.debug("Filter %s matched %s", zone_filter, hits, operation="match_zones")
        selected.update(dict.fromkeys(hits))
    return list(selected)


def resolve_desired(zones: Iterable[Zone], vpc: Vpc, tag_key: str) -> set[str]:
    """Desired zone ids for ``vpc``.

    Only private zones are eligible, even when a filter would select a
    public one.

    Raises:
        MalformedFilterError: If the VPC's tag cannot be parsed.
    """
    filters = parse_filters(vpc.tags.get(tag_key))
    zl_logger.debug("Filters %s", filters, operation="resolve_desired", vpc_id=vpc.id)
    return set(match_zones((z for z in zones if z.is_private), filters))
