"""Tests for filter parsing, matching and desired-state resolution."""

import json
import pytest

from zonelink.base.exceptions import MalformedFilterError
from zonelink.base.models import Vpc, Zone
from zonelink.filters import match_zones, matches, parse_filters, resolve_desired

TAG = "route53zones"


def _zone(zone_id: str, private: bool = True, **document) -> Zone:
    return Zone.from_hosted_zone({
        "Id": f"/hostedzone/{zone_id}",
        "Name": f"{zone_id.lower()}.internal.",
        "Config": {"PrivateZone": private},
        **document,
    })


def _vpc(value: str | None) -> Vpc:
    tags = {"Name": "main"}
    if value is not None:
        tags[TAG] = value
    return Vpc(id="vpc-1", region="eu-west-1", tags=tags)


# --- parse_filters ---

class TestParseFilters:
    def test_list_of_objects(self):
        assert parse_filters('[{"a": 1}, {"b": 2}]') == [{"a": 1}, {"b": 2}]

    def test_empty_list(self):
        assert parse_filters("[]") == []

    def test_missing(self):
        with pytest.raises(MalformedFilterError, match="missing"):
            parse_filters(None)

    def test_invalid_json(self):
        with pytest.raises(MalformedFilterError, match="not valid JSON"):
            parse_filters("{oops")

    def test_not_a_list(self):
        with pytest.raises(MalformedFilterError, match="JSON list"):
            parse_filters('{"a": 1}')

    def test_non_object_item(self):
        with pytest.raises(MalformedFilterError, match="Filter 1"):
            parse_filters('[{"a": 1}, "b"]')


# --- matches ---

class TestMatches:
    def test_empty_pattern_matches_anything(self):
        assert matches({}, {"a": 1})

    def test_nested_partial(self):
        doc = {"Config": {"PrivateZone": True, "Comment": "x"}, "Name": "a."}
        assert matches({"Config": {"PrivateZone": True}}, doc)
        assert not matches({"Config": {"PrivateZone": False}}, doc)

    def test_missing_key(self):
        assert not matches({"Tags": {"env": "prod"}}, {"Tags": {}})

    def test_bool_is_not_int(self):
        assert not matches({"a": 1}, {"a": True})
        assert not matches({"a": True}, {"a": 1})

    def test_list_subset(self):
        assert matches({"x": [2]}, {"x": [1, 2, 3]})
        assert not matches({"x": [4]}, {"x": [1, 2, 3]})

    def test_type_mismatch(self):
        assert not matches({"a": {"b": 1}}, {"a": "b"})


# --- match_zones / resolve_desired ---

class TestResolveDesired:
    def test_or_semantics_and_dedup(self):
        zones = [
            _zone("Z1", a=1, b=9),
            _zone("Z2", a=9, b=2),
            _zone("Z3", a=9, b=9),
            _zone("Z4", a=1, b=2),
        ]
        assert match_zones(zones, [{"a": 1}, {"b": 2}]) == ["Z1", "Z4", "Z2"]
        vpc = _vpc(json.dumps([{"a": 1}, {"b": 2}]))
        assert resolve_desired(zones, vpc, TAG) == {"Z1", "Z2", "Z4"}

    def test_and_within_filter(self):
        zones = [_zone("Z1", a=1, b=9), _zone("Z2", a=1, b=2)]
        assert resolve_desired(zones, _vpc('[{"a": 1, "b": 2}]'), TAG) == {"Z2"}

    def test_match_on_tags(self):
        zones = [
            _zone("Z1").with_tags({"env": "prod", "team": "a"}),
            _zone("Z2").with_tags({"env": "dev"}),
        ]
        assert resolve_desired(zones, _vpc('[{"Tags": {"env": "prod"}}]'), TAG) == {"Z1"}

    def test_match_on_name(self):
        zones = [_zone("Z1"), _zone("Z2")]
        assert resolve_desired(zones, _vpc('[{"Name": "z2.internal."}]'), TAG) == {"Z2"}

    def test_public_zone_never_desired(self):
        zones = [_zone("PUB", private=False).with_tags({"env": "prod"})]
        assert resolve_desired(zones, _vpc('[{"Tags": {"env": "prod"}}]'), TAG) == set()

    def test_empty_filter_list(self):
        assert resolve_desired([_zone("Z1")], _vpc("[]"), TAG) == set()

    def test_missing_tag(self):
        with pytest.raises(MalformedFilterError):
            resolve_desired([_zone("Z1")], _vpc(None), TAG)

    def test_custom_tag_key(self):
        vpc = Vpc(id="vpc-1", region="eu-west-1", tags={"dns": "[{}]"})
        assert resolve_desired([_zone("Z1")], vpc, "dns") == {"Z1"}
