from meetup_dashboard.kpis import aggregate_by_year
from meetup_dashboard.pipeline import empty_snapshot, load_snapshot

from .conftest import FakeSource


class NoSheetListSource(FakeSource):
    def list_sheet_names(self, spreadsheet_id):
        raise RuntimeError("sheet listing unavailable")


class BrokenSource:
    def list_sheet_names(self, spreadsheet_id):
        raise RuntimeError("down")

    def fetch_rows(self, spreadsheet_id, range_spec):
        raise RuntimeError("down")


def test_load_snapshot(fake_source, settings):
    snapshot = load_snapshot(fake_source, settings, current_year=2025)

    assert len(snapshot.groups) == 4
    assert len(snapshot.events) == 6
    assert snapshot.available_years == (2025, 2024)
    assert snapshot.overall_stats["total_groups"] == 4
    assert snapshot.overall_stats["total_members"] == 220
    assert snapshot.consolidated_stats == aggregate_by_year(snapshot.events, [2025, 2024])
    assert snapshot.loaded_at is not None
    assert not snapshot.is_empty


def test_load_snapshot_only_fetches_configured_sheets(fake_source, settings):
    load_snapshot(fake_source, settings, current_year=2025)
    sheets = {spec.split("!")[0] for spec in fake_source.fetched}
    assert "Notes" not in sheets
    assert {"AMER Dashboard", "EMEA Dashboard", "APAC Dashboard", "Events 2025", "Events 2024"} <= sheets


def test_failing_sheet_degrades_only_that_sheet(sheets, settings):
    source = FakeSource(sheets, failing={"EMEA Dashboard", "Events 2024"})
    snapshot = load_snapshot(source, settings, current_year=2025)

    assert [g.name for g in snapshot.groups] == ["GDB NYC", "GDB Toronto"]
    assert {e.year for e in snapshot.events} == {2025}
    assert snapshot.consolidated_stats["stats2024"]["total_events"] == 0
    assert snapshot.consolidated_stats["stats2025"]["total_events"] == 4


def test_sheet_listing_failure_keeps_groups(sheets, settings):
    snapshot = load_snapshot(NoSheetListSource(sheets), settings, current_year=2025)
    assert len(snapshot.groups) == 4
    assert snapshot.events == ()
    assert snapshot.available_years == ()
    assert snapshot.consolidated_stats is None


def test_broken_source_yields_empty_snapshot(settings):
    snapshot = load_snapshot(BrokenSource(), settings, current_year=2025)
    assert snapshot.is_empty
    assert snapshot.overall_stats["total_groups"] == 0
    assert snapshot.consolidated_stats is None


def test_empty_snapshot():
    snapshot = empty_snapshot()
    assert snapshot.is_empty
    assert snapshot.overall_stats["years"] == {}
