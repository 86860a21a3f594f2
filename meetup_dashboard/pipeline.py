"""
Load boundary: fetch everything the dashboard needs into one immutable snapshot.

Groups, events and consolidated year statistics are fetched concurrently and
awaited together. Any failure inside a batch degrades that batch to an empty
result; nothing raises past load_snapshot().

Overlapping loads are not cancelled. Whichever call returns last is the
snapshot the caller keeps.
"""

import logging
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass, field

import pandas as pd

from .config import Settings
from .kpis import aggregate
from .loaders import (
    SheetSource,
    get_available_years,
    load_consolidated_stats,
    load_events,
    load_groups,
)
from .models import Event, Group

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class DashboardSnapshot:
    groups: tuple[Group, ...] = ()
    events: tuple[Event, ...] = ()
    overall_stats: dict = field(default_factory=dict)
    # unfiltered per-year buckets read straight from the sheets, or None
    consolidated_stats: dict | None = None
    available_years: tuple[int, ...] = ()
    loaded_at: pd.Timestamp | None = None

    @property
    def is_empty(self) -> bool:
        return not self.groups and not self.events


def empty_snapshot() -> DashboardSnapshot:
    return DashboardSnapshot(
        overall_stats=aggregate([], [], []),
        loaded_at=pd.Timestamp.now(),
    )


def _result_or(future, default, label: str):
    try:
        return future.result()
    except Exception:
        logger.exception("Loading %s failed, continuing with no data", label)
        return default


def load_snapshot(
    source: SheetSource,
    settings: Settings,
    current_year: int | None = None,
) -> DashboardSnapshot:
    """Fetch groups, events and consolidated stats and compute overall stats.

    Parameters
    ----------
    source : Data source honouring the SheetSource contract.
    settings : Spreadsheet id and group sheet names.
    current_year : Newest year to look for an event sheet. Defaults to today.
    """
    spreadsheet_id = settings.spreadsheet_id

    try:
        years = get_available_years(source, spreadsheet_id, current_year)
    except Exception:
        logger.exception("Could not list sheets, continuing with no event years")
        years = []

    with ThreadPoolExecutor(max_workers=3) as pool:
        groups_future = pool.submit(load_groups, source, spreadsheet_id, settings.groups_sheets)
        events_future = pool.submit(load_events, source, spreadsheet_id, years)
        consolidated_future = pool.submit(load_consolidated_stats, source, spreadsheet_id, years)

        groups = _result_or(groups_future, [], "groups")
        events = _result_or(events_future, [], "events")
        consolidated = _result_or(consolidated_future, None, "consolidated stats")

    snapshot = DashboardSnapshot(
        groups=tuple(groups),
        events=tuple(events),
        overall_stats=aggregate(groups, events, years),
        consolidated_stats=consolidated,
        available_years=tuple(years),
        loaded_at=pd.Timestamp.now(),
    )
    logger.info(
        "Snapshot loaded: %d groups, %d events, years %s",
        len(snapshot.groups), len(snapshot.events), list(snapshot.available_years),
    )
    return snapshot
