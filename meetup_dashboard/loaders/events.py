"""
Loaders for the per-year event logs.

Source: one sheet per year named 'Events YYYY', columns A-H, first row
headers. Which years exist is discovered from the spreadsheet's sheet list.
Each event's year comes from its sheet name, not from its date column.
"""

import logging
from datetime import date
from typing import Sequence

from ..config import EVENT_COLUMNS, EVENT_FIELD_MAP, EVENT_SHEET_TEMPLATE, YEAR_LOOKBACK
from ..models import Event
from .sources import SheetSource, fetch_batch
from .utils import (
    normalise_event_type,
    pick_field,
    rows_to_records,
    safe_int,
    year_from_sheet_name,
)

logger = logging.getLogger(__name__)


def event_sheet_name(year: int) -> str:
    return EVENT_SHEET_TEMPLATE.format(year=year)


def event_range(year: int) -> str:
    return f"{event_sheet_name(year)}!{EVENT_COLUMNS}"


def get_available_years(
    source: SheetSource,
    spreadsheet_id: str | None,
    current_year: int | None = None,
) -> list[int]:
    """Years with an 'Events YYYY' sheet, newest first.

    Looks back YEAR_LOOKBACK years from current_year (defaults to today).
    """
    if current_year is None:
        current_year = date.today().year

    sheet_names = set(source.list_sheet_names(spreadsheet_id))
    years = [
        year
        for year in range(current_year, current_year - YEAR_LOOKBACK - 1, -1)
        if event_sheet_name(year) in sheet_names
    ]
    logger.info("Available event years: %s", years)
    return years


def map_event_row(record: dict[str, str], year: int | None = None) -> Event:
    """Build an Event from one header-keyed row. Missing fields become zero values."""
    f = EVENT_FIELD_MAP
    return Event(
        timestamp=pick_field(record, f["timestamp"]),
        title=pick_field(record, f["title"]),
        url=pick_field(record, f["url"]),
        date=pick_field(record, f["date"]),
        group_name=pick_field(record, f["group_name"]),
        city=pick_field(record, f["city"]),
        rsvp_count=safe_int(pick_field(record, f["rsvp_count"], "0")),
        event_type=normalise_event_type(pick_field(record, f["event_type"])),
        year=year,
    )


def parse_event_sheet(sheet_name: str, rows: Sequence[Sequence[str]]) -> list[Event]:
    """Map the raw rows of one event sheet (header row first)."""
    if rows:
        logger.debug("Header row from %s: %s", sheet_name, list(rows[0]))

    year = year_from_sheet_name(sheet_name)
    events = [map_event_row(rec, year) for rec in rows_to_records(rows)]

    logger.info("Parsed %d events from %s (year: %s)", len(events), sheet_name, year)
    return events


def load_events(
    source: SheetSource,
    spreadsheet_id: str | None,
    years: Sequence[int],
) -> list[Event]:
    """Fetch every year's event sheet as one concurrent batch."""
    if not years:
        logger.info("No Events sheets found")
        return []

    fetched = fetch_batch(source, spreadsheet_id, [event_range(y) for y in years])

    events: list[Event] = []
    for year in years:
        events.extend(parse_event_sheet(event_sheet_name(year), fetched.get(event_range(year), [])))

    logger.info("Total events loaded: %d", len(events))
    return events


def reduce_event_rows(rows: Sequence[Sequence[str]]) -> dict[str, int]:
    """Reduce one raw event sheet straight to a year bucket.

    Works on the raw cells so the consolidated figures do not depend on the
    record mapping; the result must still equal aggregate_by_year for the
    same sheet.
    """
    records = rows_to_records(rows)
    types = [pick_field(r, EVENT_FIELD_MAP["event_type"]).strip().lower() for r in records]
    return {
        "total_events": len(records),
        "physical_events": types.count("physical"),
        "online_events": types.count("online"),
        "total_rsvps": sum(
            safe_int(pick_field(r, EVENT_FIELD_MAP["rsvp_count"], "0")) for r in records
        ),
    }


def load_consolidated_stats(
    source: SheetSource,
    spreadsheet_id: str | None,
    years: Sequence[int],
) -> dict[str, dict[str, int]] | None:
    """Unfiltered per-year statistics read directly from the event sheets.

    Returns {'stats2024': {...}, ...} or None when there are no event sheets
    or no spreadsheet is configured.
    """
    if not years:
        logger.info("No Events sheets found, no consolidated stats")
        return None

    fetched = fetch_batch(source, spreadsheet_id, [event_range(y) for y in years])

    stats = {}
    for year in years:
        stats[f"stats{year}"] = reduce_event_rows(fetched.get(event_range(year), []))
        logger.info("Consolidated stats %s: %s", year, stats[f"stats{year}"])
    return stats
