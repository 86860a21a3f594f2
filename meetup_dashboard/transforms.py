"""
Data transforms: turn record lists into pandas frames for tables and charts.
"""

import logging
from dataclasses import asdict
from typing import Sequence

import pandas as pd

from .config import ORG_PREFIX
from .models import AnnotatedEvent, Group
from .regions import group_region

logger = logging.getLogger(__name__)

GROUP_COLUMNS = [
    "name", "display_name", "city", "region", "member_count", "past_rsvps",
    "past_event_count", "upcoming_events", "founded_date", "pro_join_date",
    "last_event_date",
]

EVENT_COLUMNS = [
    "year", "date", "title", "group_name", "city", "event_type", "rsvp_count",
    "url", "matched_group", "match_strategy", "region",
]

YEAR_COLUMNS = [
    "year", "total_events", "physical_events", "online_events", "total_rsvps", "yoy_growth",
]


def display_name(name: str) -> str:
    """Group name without the organisational prefix, for chart labels."""
    return name.replace(f"{ORG_PREFIX} ", "", 1)


def build_groups_frame(groups: Sequence[Group]) -> pd.DataFrame:
    """One row per group with its resolved region and a short display name."""
    if not groups:
        return pd.DataFrame(columns=GROUP_COLUMNS)

    rows = []
    for group in groups:
        row = asdict(group)
        row["display_name"] = display_name(group.name)
        row["region"] = group_region(group)
        rows.append(row)

    df = pd.DataFrame(rows)[GROUP_COLUMNS]
    logger.debug("Built groups frame with %d rows", len(df))
    return df


def build_events_frame(annotated: Sequence[AnnotatedEvent]) -> pd.DataFrame:
    """One row per event including the reconciliation outcome."""
    if not annotated:
        return pd.DataFrame(columns=EVENT_COLUMNS)

    rows = []
    for item in annotated:
        event = item.event
        rows.append({
            "year": event.year,
            "date": event.date,
            "title": event.title,
            "group_name": event.group_name,
            "city": event.city,
            "event_type": event.event_type,
            "rsvp_count": event.rsvp_count,
            "url": event.url,
            "matched_group": item.group.name if item.group else None,
            "match_strategy": item.strategy,
            "region": item.region,
        })

    df = pd.DataFrame(rows, columns=EVENT_COLUMNS)
    logger.debug("Built events frame with %d rows", len(df))
    return df


def build_year_stats_frame(cards: Sequence[dict]) -> pd.DataFrame:
    """Year cards as a frame, oldest year first for trend charts."""
    if not cards:
        return pd.DataFrame(columns=YEAR_COLUMNS)
    return pd.DataFrame(cards, columns=YEAR_COLUMNS).sort_values("year").reset_index(drop=True)
