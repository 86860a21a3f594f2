"""
KPI computation functions - pure functions with no side effects.

Provides overall totals, per-year buckets, and year-over-year growth.
Inputs are never mutated; calling any function twice on the same inputs
gives the same result.
"""

import logging
from typing import Iterable, Sequence

from .models import Event, Group

logger = logging.getLogger(__name__)


def is_event_type(event: Event, event_type: str) -> bool:
    """Case- and whitespace-insensitive event-type comparison."""
    return (event.event_type or "").strip().lower() == event_type.lower()


def empty_year_bucket() -> dict[str, int]:
    return {"total_events": 0, "physical_events": 0, "online_events": 0, "total_rsvps": 0}


def year_key(year: int) -> str:
    return f"stats{year}"


def _date_year_breakdown(events: Sequence[Event], year: int) -> dict[str, int]:
    in_year = [e for e in events if str(year) in (e.date or "")]
    return {
        "events": len(in_year),
        "physical": sum(1 for e in in_year if is_event_type(e, "Physical")),
        "online": sum(1 for e in in_year if is_event_type(e, "Online")),
        "hybrid": sum(1 for e in in_year if is_event_type(e, "Hybrid")),
        "rsvps": sum(e.rsvp_count for e in in_year),
    }


def aggregate(
    groups: Sequence[Group],
    events: Sequence[Event],
    years: Iterable[int] | None = None,
) -> dict:
    """Overall statistics for a (possibly filtered) set of groups and events.

    Member, RSVP and event totals are summed from the group rows, not
    recounted from events. The per-year breakdown selects events whose
    free-text date contains the year as a substring.

    Parameters
    ----------
    groups, events : Records to reduce.
    years : Years to break down. Defaults to the sheet year tags present
        in `events`, newest first.

    Returns
    -------
    Dict with structure:
    {
        "total_groups": 12,
        "total_members": 5400,
        "total_past_rsvps": 8100,
        "total_past_events": 230,
        "total_upcoming_events": 7,
        "years": {2025: {"events": .., "physical": .., "online": ..,
                         "hybrid": .., "rsvps": ..}, ...},
    }
    """
    if years is None:
        years = sorted({e.year for e in events if e.year is not None}, reverse=True)

    return {
        "total_groups": len(groups),
        "total_members": sum(g.member_count for g in groups),
        "total_past_rsvps": sum(g.past_rsvps for g in groups),
        "total_past_events": sum(g.past_event_count for g in groups),
        "total_upcoming_events": sum(g.upcoming_events for g in groups),
        "years": {year: _date_year_breakdown(events, year) for year in years},
    }


def aggregate_by_year(
    events: Sequence[Event],
    available_years: Iterable[int],
) -> dict[str, dict[str, int]]:
    """One bucket per requested year, keyed 'stats<year>'.

    Events are bucketed by their sheet year tag. Years with no events get
    an all-zero bucket rather than a missing key.
    """
    stats = {}
    for year in available_years:
        in_year = [e for e in events if e.year == year]
        stats[year_key(year)] = {
            "total_events": len(in_year),
            "physical_events": sum(1 for e in in_year if is_event_type(e, "Physical")),
            "online_events": sum(1 for e in in_year if is_event_type(e, "Online")),
            "total_rsvps": sum(e.rsvp_count for e in in_year),
        }
    return stats


def yoy_growth(current: dict | None, previous: dict | None) -> float | None:
    """Percentage change in total_events from `previous` to `current`.

    None when there is nothing to compare against: no previous bucket or
    a previous year with zero events.
    """
    if not current or not previous:
        return None
    prev_total = previous.get("total_events", 0)
    if prev_total == 0:
        return None
    return (current.get("total_events", 0) - prev_total) / prev_total * 100


def year_cards(
    year_stats: dict[str, dict[str, int]] | None,
    available_years: Sequence[int],
) -> list[dict]:
    """Per-year card payloads with growth against the next-older year.

    `available_years` is expected newest first, as returned by
    get_available_years().
    """
    year_stats = year_stats or {}
    cards = []
    for idx, year in enumerate(available_years):
        current = year_stats.get(year_key(year)) or empty_year_bucket()
        previous = None
        if idx + 1 < len(available_years):
            previous = year_stats.get(year_key(available_years[idx + 1]))

        cards.append({
            "year": year,
            **current,
            "yoy_growth": yoy_growth(current, previous),
        })
    return cards
