"""
Filter selection state and the filtered views derived from it.

FilterSelection is immutable; every UI interaction goes through
reduce_selection(), which returns the next selection. The reducer owns the
group auto-selection rules:

- choosing regions replaces the selected groups with every group in them;
- typing a search term (with no region chosen) replaces the selected groups
  with every group whose name or city contains the term;
- with neither regions nor a search term, the group selection is cleared.

Region-driven selection wins whenever regions are non-empty.
"""

import logging
from dataclasses import dataclass, replace
from typing import Iterable, Sequence

from .config import UNKNOWN_REGION
from .models import AnnotatedEvent, Event, Group
from .reconcile import annotate_event
from .regions import group_region

logger = logging.getLogger(__name__)

SET_REGIONS = "set_regions"
SET_GROUPS = "set_groups"
SET_EVENT_TYPES = "set_event_types"
SET_SEARCH = "set_search"
CLEAR = "clear"
DATA_LOADED = "data_loaded"


@dataclass(frozen=True)
class FilterSelection:
    regions: tuple[str, ...] = ()
    groups: tuple[str, ...] = ()
    event_types: tuple[str, ...] = ()
    search: str = ""


def _unique(values: Iterable[str]) -> tuple[str, ...]:
    return tuple(dict.fromkeys(v for v in values if v is not None))


def _group_matches_term(group: Group, term: str) -> bool:
    return term in group.name.lower() or term in group.city.lower()


def auto_selected_groups(
    regions: Sequence[str],
    search: str,
    groups: Sequence[Group],
) -> tuple[str, ...]:
    """Group names implied by the current regions and search term."""
    if regions:
        return _unique(g.name for g in groups if group_region(g) in regions)
    if search:
        term = search.lower()
        return _unique(g.name for g in groups if _group_matches_term(g, term))
    return ()


def reduce_selection(
    selection: FilterSelection,
    action: str,
    value=None,
    groups: Sequence[Group] = (),
) -> FilterSelection:
    """Apply one UI action and return the new selection.

    Parameters
    ----------
    selection : Current selection.
    action : One of SET_REGIONS, SET_GROUPS, SET_EVENT_TYPES, SET_SEARCH,
        CLEAR, DATA_LOADED.
    value : The action's payload (list of names or the search string).
    groups : Full group roster, used for auto-selection.
    """
    if action == SET_REGIONS:
        regions = _unique(value or ())
        return replace(
            selection,
            regions=regions,
            groups=auto_selected_groups(regions, selection.search, groups),
        )

    if action == SET_SEARCH:
        search = value or ""
        return replace(
            selection,
            search=search,
            groups=auto_selected_groups(selection.regions, search, groups),
        )

    if action == SET_GROUPS:
        return replace(selection, groups=_unique(value or ()))

    if action == SET_EVENT_TYPES:
        return replace(selection, event_types=_unique(value or ()))

    if action == CLEAR:
        return FilterSelection()

    if action == DATA_LOADED:
        return replace(
            selection,
            groups=auto_selected_groups(selection.regions, selection.search, groups),
        )

    raise ValueError(f"Unknown filter action: {action!r}")


def has_active_filters(selection: FilterSelection) -> bool:
    return bool(
        selection.regions or selection.groups or selection.event_types or selection.search
    )


# ---------------------------------------------------------------------------
# Filtered views
# ---------------------------------------------------------------------------

def filtered_groups(groups: Sequence[Group], selection: FilterSelection) -> list[Group]:
    """Groups passing the region and group filters, then the search term.

    Region and group checks eliminate first; the search term only decides
    among the survivors.
    """
    term = selection.search.lower()
    result = []
    for group in groups:
        if selection.regions and group_region(group) not in selection.regions:
            continue
        if selection.groups and group.name not in selection.groups:
            continue
        if term and not _group_matches_term(group, term):
            continue
        result.append(group)
    return result


def _event_matches_term(event: Event, term: str) -> bool:
    return (
        term in event.title.lower()
        or term in event.group_name.lower()
        or term in event.city.lower()
    )


def filtered_events(
    events: Sequence[Event],
    groups: Sequence[Group],
    selection: FilterSelection,
) -> list[Event]:
    """Events passing type, group, region and search filters.

    An event's region comes from reconciling it against `groups` at filter
    time, falling back to its own city. Events with no region are dropped
    whenever a region filter is active.
    """
    term = selection.search.lower()
    result = []
    for event in events:
        if selection.event_types and event.event_type not in selection.event_types:
            continue
        if selection.groups and event.group_name not in selection.groups:
            continue
        if selection.regions:
            region = annotate_event(event, groups).region
            if region is None or region not in selection.regions:
                continue
        if term and not _event_matches_term(event, term):
            continue
        result.append(event)

    logger.debug("Filtered events: %d of %d", len(result), len(events))
    return result


def events_for_year_stats(
    annotated: Sequence[AnnotatedEvent],
    selection: FilterSelection,
) -> list[Event]:
    """Events feeding the per-year buckets under the current selection.

    Applies region, group and event-type filters to reconciled events. The
    search term acts only through the groups it auto-selects.
    """
    result = []
    for item in annotated:
        event = item.event
        if selection.regions and (item.region is None or item.region not in selection.regions):
            continue
        if selection.groups and event.group_name not in selection.groups:
            continue
        if selection.event_types and event.event_type not in selection.event_types:
            continue
        result.append(event)
    return result


# ---------------------------------------------------------------------------
# Selectable options
# ---------------------------------------------------------------------------

def available_regions(groups: Sequence[Group]) -> list[str]:
    """Regions present in the roster; 'Unknown' is never offered."""
    return sorted({group_region(g) for g in groups} - {UNKNOWN_REGION})


def available_groups(groups: Sequence[Group]) -> list[str]:
    return sorted({g.name for g in groups})


def group_options(groups: Sequence[Group], selection: FilterSelection) -> list[str]:
    """Group names to offer in the group picker.

    Restricted to the selected regions when any are chosen; selected names
    are listed first, then the rest alphabetically.
    """
    if selection.regions:
        names = {g.name for g in groups if group_region(g) in selection.regions}
    else:
        names = {g.name for g in groups}

    chosen = set(selection.groups)
    return sorted(names, key=lambda n: (n not in chosen, n.lower(), n))
