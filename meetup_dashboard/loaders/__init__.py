"""Data ingestion loaders for the group and event spreadsheets."""

from .sources import GoogleSheetsSource, SheetSource, WorkbookSource, fetch_batch, get_source
from .groups import load_groups, map_group_row
from .events import get_available_years, load_consolidated_stats, load_events, map_event_row

__all__ = [
    "GoogleSheetsSource",
    "SheetSource",
    "WorkbookSource",
    "fetch_batch",
    "get_source",
    "load_groups",
    "map_group_row",
    "get_available_years",
    "load_events",
    "map_event_row",
    "load_consolidated_stats",
]
