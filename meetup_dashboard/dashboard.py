"""
Dashboard-ready output functions.

These are the primary entry points for the Streamlit front end. Each
function returns plain dicts or DataFrames suitable for rendering cards,
charts, and tables. Everything is recomputed from the snapshot and the
current selection on every call.
"""

import logging
from typing import Sequence

import pandas as pd

from .config import EVENT_TYPES, TOP_N_GROUPS
from .filters import (
    FilterSelection,
    available_groups,
    available_regions,
    events_for_year_stats,
    filtered_events,
    filtered_groups,
    group_options,
    has_active_filters,
)
from .kpis import aggregate, aggregate_by_year, year_cards
from .models import AnnotatedEvent, Group
from .pipeline import DashboardSnapshot
from .reconcile import annotate_events, unmatched_events
from .transforms import build_groups_frame, display_name

logger = logging.getLogger(__name__)

_METRICS = {
    "members": "member_count",
    "rsvps": "past_rsvps",
}


def get_kpi_cards(stats: dict) -> dict[str, int]:
    """Headline card values from aggregate() output."""
    return {
        "total_groups": stats.get("total_groups", 0),
        "total_members": stats.get("total_members", 0),
        "past_events": stats.get("total_past_events", 0),
        "upcoming_events": stats.get("total_upcoming_events", 0),
        "total_rsvps": stats.get("total_past_rsvps", 0),
    }


def get_top_groups(
    groups: Sequence[Group],
    metric: str = "members",
    limit: int | None = TOP_N_GROUPS,
) -> pd.DataFrame:
    """Groups ranked by members or past RSVPs.

    Returns
    -------
    DataFrame with columns: name, <metric>. `limit=None` returns the full
    ranking for the expanded chart view.
    """
    attr = _METRICS[metric]
    ranked = sorted(groups, key=lambda g: getattr(g, attr), reverse=True)
    if limit is not None:
        ranked = ranked[:limit]
    return pd.DataFrame(
        [{"name": display_name(g.name), metric: getattr(g, attr)} for g in ranked],
        columns=["name", metric],
    )


def get_groups_table(groups: Sequence[Group]) -> pd.DataFrame:
    """Groups overview table, largest groups first."""
    df = build_groups_frame(groups)
    if df.empty:
        return df
    cols = ["name", "city", "member_count", "past_rsvps", "past_event_count", "upcoming_events"]
    return df.sort_values("member_count", ascending=False, kind="stable")[cols].reset_index(drop=True)


def get_year_stats(
    snapshot: DashboardSnapshot,
    selection: FilterSelection,
    annotated: Sequence[AnnotatedEvent] | None = None,
) -> dict:
    """Per-year buckets for the current selection.

    With no filter active the consolidated figures read from the sheets are
    used as-is; they equal aggregate_by_year over the unfiltered events.
    """
    if not has_active_filters(selection) and snapshot.consolidated_stats is not None:
        logger.debug("Using consolidated stats (no filters)")
        return snapshot.consolidated_stats

    if annotated is None:
        annotated = annotate_events(snapshot.events, snapshot.groups)
    events = events_for_year_stats(annotated, selection)
    return aggregate_by_year(events, snapshot.available_years)


def get_dashboard_view(snapshot: DashboardSnapshot, selection: FilterSelection) -> dict:
    """Single entry point the front end calls after every filter change.

    Returns
    -------
    Dict with keys:
        kpi_cards, overall_stats, year_stats, year_cards, top_members,
        top_rsvps, groups_table, filtered_groups, filtered_events,
        unmatched_events, options, has_filters
    """
    groups = list(snapshot.groups)
    f_groups = filtered_groups(groups, selection)
    f_events = filtered_events(snapshot.events, groups, selection)

    stats = aggregate(f_groups, f_events, snapshot.available_years)
    annotated = annotate_events(snapshot.events, groups)
    year_stats = get_year_stats(snapshot, selection, annotated)

    return {
        "kpi_cards": get_kpi_cards(stats),
        "overall_stats": stats,
        "year_stats": year_stats,
        "year_cards": year_cards(year_stats, snapshot.available_years),
        "top_members": get_top_groups(f_groups, "members"),
        "top_rsvps": get_top_groups(f_groups, "rsvps"),
        "groups_table": get_groups_table(f_groups),
        "filtered_groups": f_groups,
        "filtered_events": f_events,
        "unmatched_events": unmatched_events(annotated),
        "options": {
            "regions": available_regions(groups),
            "groups": available_groups(groups),
            "group_choices": group_options(groups, selection),
            "event_types": list(EVENT_TYPES),
        },
        "has_filters": has_active_filters(selection),
    }
