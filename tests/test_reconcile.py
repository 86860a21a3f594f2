import pytest

from meetup_dashboard.models import Event, Group
from meetup_dashboard.reconcile import (
    MATCH_STRATEGIES,
    annotate_event,
    annotate_events,
    effective_region,
    resolve_group,
    strip_org_prefix,
    unmatched_events,
)


@pytest.mark.parametrize(
    "raw, expected",
    [
        ("Graph Database - Tel Aviv", "tel aviv"),
        ("graph database London", "london"),
        ("Graph Database", ""),
        ("London Graph Users", "london graph users"),
    ],
)
def test_strip_org_prefix(raw, expected):
    assert strip_org_prefix(raw) == expected


def test_strategy_order():
    assert [name for name, _ in MATCH_STRATEGIES] == [
        "exact_name", "exact_city", "partial_city", "fuzzy_name", "city_in_name",
    ]


def test_exact_name(groups):
    group, strategy = resolve_group(Event(group_name="GDB London", city="Paris"), groups)
    assert group.name == "GDB London"
    assert strategy == "exact_name"


def test_exact_city_is_case_insensitive(groups):
    group, strategy = resolve_group(Event(group_name="NYC Graphs", city="NEW YORK"), groups)
    assert group.name == "GDB NYC"
    assert strategy == "exact_city"


def test_partial_city_either_direction(groups):
    result = annotate_event(Event(group_name="GDB Tel Aviv-Yafo", city="Tel Aviv"), groups)
    assert result.group.name == "GDB Tel Aviv"
    assert result.strategy == "partial_city"
    assert result.region == "EMEA"

    group, strategy = resolve_group(Event(group_name="x", city="Central London"), groups)
    assert group.name == "GDB London"
    assert strategy == "partial_city"


def test_fuzzy_name_strips_prefix():
    roster = [Group(name="Graph Database Paris", city="", region="EMEA")]
    group, strategy = resolve_group(Event(group_name="Graph Database - Paris"), roster)
    assert group is roster[0]
    assert strategy == "fuzzy_name"


def test_city_in_name():
    roster = [Group(name="GDB Berlin", city="")]
    group, strategy = resolve_group(Event(group_name="Berlin Graph Users", city="Berlin"), roster)
    assert group is roster[0]
    assert strategy == "city_in_name"


def test_earlier_strategy_wins_over_later(groups):
    # exact name points at London even though the city points at NYC
    group, strategy = resolve_group(Event(group_name="GDB London", city="New York"), groups)
    assert group.name == "GDB London"
    assert strategy == "exact_name"


def test_first_candidate_in_sheet_order_wins():
    roster = [
        Group(name="GDB London North", city="London"),
        Group(name="GDB London South", city="London"),
    ]
    group, strategy = resolve_group(Event(group_name="Somewhere", city="London"), roster)
    assert group.name == "GDB London North"
    assert strategy == "exact_city"


def test_empty_keys_never_match(groups):
    assert resolve_group(Event(), groups) == (None, None)
    assert resolve_group(Event(group_name="Graph Database"), groups) == (None, None)

    blank_city = [Group(name="GDB Nowhere", city="")]
    assert resolve_group(Event(group_name="Other", city="Lisbon"), blank_city) == (None, None)


def test_effective_region():
    emea = Group(name="GDB London", city="London", region="EMEA")
    untagged = Group(name="GDB London", city="London")

    assert effective_region(Event(city="Tokyo"), emea) == "EMEA"
    assert effective_region(Event(city="Tokyo"), untagged) == "APAC"
    assert effective_region(Event(city="Paris"), None) == "EMEA"
    assert effective_region(Event(city="Atlantis"), None) is None
    assert effective_region(Event(city=""), None) is None


def test_orphan_event_is_unmatched(groups, events):
    annotated = annotate_events(events, groups)
    assert len(annotated) == len(events)
    assert [a.found_group for a in annotated] == [True, True, True, True, False]

    rows = unmatched_events(annotated)
    assert rows == [{
        "group_name": "GDB Atlantis",
        "city": "Atlantis",
        "title": "Lost Event",
        "year": 2025,
        "region": None,
    }]


def test_annotate_does_not_mutate_inputs(groups, events):
    before = (list(groups), list(events))
    annotate_events(events, groups)
    assert (groups, events) == before
