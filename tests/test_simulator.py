from meetup_dashboard.config import EVENT_TYPES, Settings
from meetup_dashboard.kpis import aggregate_by_year
from meetup_dashboard.pipeline import load_snapshot
from meetup_dashboard.reconcile import annotate_events, unmatched_events
from meetup_dashboard.simulator import SimulatedSource, generate_event_sheet


def _snapshot():
    return load_snapshot(SimulatedSource(current_year=2025), Settings(source="demo"), current_year=2025)


def test_simulated_snapshot_shape():
    snapshot = _snapshot()
    assert snapshot.available_years == (2025, 2024, 2023)
    assert len(snapshot.groups) == 11
    assert {g.region for g in snapshot.groups} == {"AMER", "EMEA", "APAC"}
    # camelCase APAC headers still map
    assert all(g.member_count > 0 for g in snapshot.groups)
    assert {e.event_type for e in snapshot.events} <= set(EVENT_TYPES)


def test_simulated_consolidated_stats_match_events():
    snapshot = _snapshot()
    assert snapshot.consolidated_stats == aggregate_by_year(snapshot.events, snapshot.available_years)


def test_simulated_reconciliation():
    snapshot = _snapshot()
    annotated = annotate_events(snapshot.events, snapshot.groups)

    orphans = {row["group_name"] for row in unmatched_events(annotated)}
    assert orphans == {"Graph Database Reykjavik", "Graph Database Nairobi"}

    bangalore = [a for a in annotated if "Bangalore" in a.event.group_name]
    assert bangalore
    assert {a.group.name for a in bangalore} == {"Graph Database Bengaluru"}
    assert {a.region for a in bangalore} == {"APAC"}


def test_simulation_is_reproducible():
    assert SimulatedSource(current_year=2025).sheets == SimulatedSource(current_year=2025).sheets
    assert generate_event_sheet(2024) == generate_event_sheet(2024)
