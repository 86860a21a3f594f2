"""
Meetup Analytics Dashboard - End-to-end analytics pipeline.

Runs the full data pipeline from the spreadsheet to dashboard-ready outputs
and prints smoke-test summaries.

Usage:
    python main.py            # source from DASHBOARD_SOURCE (default: sheets)
    python main.py demo       # simulated spreadsheet
"""

import logging
import sys
from dataclasses import replace
from pathlib import Path

# Add project root to path
sys.path.insert(0, str(Path(__file__).resolve().parent))

from meetup_dashboard.config import load_settings
from meetup_dashboard.dashboard import get_dashboard_view
from meetup_dashboard.filters import (
    DATA_LOADED,
    SET_REGIONS,
    SET_SEARCH,
    FilterSelection,
    reduce_selection,
)
from meetup_dashboard.kpis import aggregate_by_year
from meetup_dashboard.loaders import get_source
from meetup_dashboard.pipeline import load_snapshot
from meetup_dashboard.transforms import build_year_stats_frame

# ---------------------------------------------------------------------------
# Logging setup
# ---------------------------------------------------------------------------
logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s | %(name)s | %(levelname)s | %(message)s",
    datefmt="%H:%M:%S",
)
logger = logging.getLogger(__name__)


def _print_view(view: dict) -> None:
    for key, value in view["kpi_cards"].items():
        print(f"  {key:16s} | {value:,}")

    print("\n  Year statistics:")
    year_df = build_year_stats_frame(view["year_cards"])
    if not year_df.empty:
        print(year_df.to_string(index=False))

    print("\n  Top groups by members:")
    if not view["top_members"].empty:
        print(view["top_members"].to_string(index=False))


def main(argv: list[str]) -> None:
    """Run the full analytics pipeline and print smoke-test outputs."""
    settings = load_settings()
    if argv and argv[0] in ("sheets", "workbook", "demo"):
        settings = replace(settings, source=argv[0])

    print("=" * 70)
    print("  MEETUP ANALYTICS DASHBOARD")
    print(f"  Analytics Pipeline Smoke Test (source: {settings.source})")
    print("=" * 70)
    print()

    # ------------------------------------------------------------------
    # 1. Load source data
    # ------------------------------------------------------------------
    print("[ 1 ] LOADING SOURCE DATA")
    print("-" * 40)

    source = get_source(settings)
    snapshot = load_snapshot(source, settings)

    print(f"\nGroups: {len(snapshot.groups)} rows loaded")
    print(f"Events: {len(snapshot.events)} rows loaded")
    print(f"Available years: {list(snapshot.available_years)}")

    if snapshot.is_empty:
        print("\nNo data loaded. Check GOOGLE_SHEETS_API_KEY / SPREADSHEET_ID.")

    # ------------------------------------------------------------------
    # 2. Unfiltered dashboard
    # ------------------------------------------------------------------
    print("\n")
    print("[ 2 ] DASHBOARD OUTPUTS (no filters)")
    print("-" * 40)

    selection = reduce_selection(FilterSelection(), DATA_LOADED, groups=snapshot.groups)
    view = get_dashboard_view(snapshot, selection)
    _print_view(view)

    unmatched = view["unmatched_events"]
    print(f"\n  Events with no matching group: {len(unmatched)}")
    for row in unmatched[:5]:
        print(f"    {row['group_name']} ({row['city']})")

    # ------------------------------------------------------------------
    # 3. Per-region dashboards
    # ------------------------------------------------------------------
    print("\n")
    print("[ 3 ] DASHBOARD OUTPUTS (per region)")
    print("-" * 40)

    for region in view["options"]["regions"]:
        region_sel = reduce_selection(selection, SET_REGIONS, [region], snapshot.groups)
        print(f"\nRegion {region}: {len(region_sel.groups)} groups selected")
        _print_view(get_dashboard_view(snapshot, region_sel))

    # ------------------------------------------------------------------
    # 4. Consistency checks
    # ------------------------------------------------------------------
    print("\n")
    print("[ 4 ] CONSISTENCY CHECKS")
    print("-" * 40)

    # Consolidated stats must equal a local recompute over all events
    recomputed = aggregate_by_year(snapshot.events, snapshot.available_years)
    consolidated = snapshot.consolidated_stats or {}
    check1 = not consolidated or consolidated == recomputed
    print(f"\n  [{'PASS' if check1 else 'FAIL'}] Consolidated year stats match recomputed stats")

    # Clearing the search with no region clears the group selection
    searched = reduce_selection(selection, SET_SEARCH, "london", snapshot.groups)
    cleared = reduce_selection(searched, SET_SEARCH, "", snapshot.groups)
    check2 = cleared.groups == ()
    print(f"  [{'PASS' if check2 else 'FAIL'}] Search 'london' selected {len(searched.groups)} groups; cleared to {len(cleared.groups)}")

    print("\n" + "=" * 70)
    print("  Pipeline complete.")
    print("=" * 70)


if __name__ == "__main__":
    main(sys.argv[1:])
