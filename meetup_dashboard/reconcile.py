"""
Group-event reconciliation.

Event sheets and group sheets are maintained by different people, so an
event's 'Meetup Group Name' often does not match any 'User Group Name'
exactly. Each event is linked to a group by trying the matchers in
MATCH_STRATEGIES in order and stopping at the first one that finds any
candidate. The list runs from most to least precise; reordering it lets
permissive matchers mis-link events that a precise matcher would resolve.

Empty keys never match anything: a blank city or a name that is only the
organisational prefix would otherwise be a substring of every candidate.
"""

import logging
import re
from typing import Callable, Iterable, Sequence

from .config import ORG_PREFIX, UNKNOWN_REGION
from .models import AnnotatedEvent, Event, Group
from .regions import classify_city

logger = logging.getLogger(__name__)

Matcher = Callable[[Event, Sequence[Group]], list[Group]]

_PREFIX = re.compile(rf"^{re.escape(ORG_PREFIX)}\s*", re.IGNORECASE)
_LEADING_DASH = re.compile(r"^-\s*")


def _contains_either(a: str, b: str) -> bool:
    return a in b or b in a


def strip_org_prefix(name: str) -> str:
    """'Graph Database - Tel Aviv' -> 'tel aviv'."""
    stripped = _PREFIX.sub("", name)
    stripped = _LEADING_DASH.sub("", stripped)
    return stripped.strip().lower()


# ---------------------------------------------------------------------------
# Matchers, most precise first
# ---------------------------------------------------------------------------

def match_exact_name(event: Event, groups: Sequence[Group]) -> list[Group]:
    if not event.group_name:
        return []
    return [g for g in groups if g.name == event.group_name]


def match_exact_city(event: Event, groups: Sequence[Group]) -> list[Group]:
    city = event.city.lower()
    if not city:
        return []
    return [g for g in groups if g.city and g.city.lower() == city]


def match_partial_city(event: Event, groups: Sequence[Group]) -> list[Group]:
    """'Tel Aviv' vs 'Tel Aviv-Yafo', in either direction."""
    city = event.city.lower()
    if not city:
        return []
    return [g for g in groups if g.city and _contains_either(g.city.lower(), city)]


def match_fuzzy_name(event: Event, groups: Sequence[Group]) -> list[Group]:
    location = strip_org_prefix(event.group_name)
    if not location:
        return []
    matches = []
    for group in groups:
        candidate = strip_org_prefix(group.name)
        if candidate and _contains_either(candidate, location):
            matches.append(group)
    return matches


def match_city_in_name(event: Event, groups: Sequence[Group]) -> list[Group]:
    city = event.city.lower()
    if not city or not event.group_name:
        return []
    return [g for g in groups if city in g.name.lower()]


MATCH_STRATEGIES: list[tuple[str, Matcher]] = [
    ("exact_name", match_exact_name),
    ("exact_city", match_exact_city),
    ("partial_city", match_partial_city),
    ("fuzzy_name", match_fuzzy_name),
    ("city_in_name", match_city_in_name),
]


def resolve_group(
    event: Event,
    groups: Sequence[Group],
    strategies: Sequence[tuple[str, Matcher]] = MATCH_STRATEGIES,
) -> tuple[Group | None, str | None]:
    """Return (group, strategy_name) for the first matcher with a hit.

    When a matcher returns several candidates the first in sheet order wins.
    Returns (None, None) when no matcher finds anything.
    """
    for name, matcher in strategies:
        matches = matcher(event, groups)
        if matches:
            return matches[0], name
    return None, None


def effective_region(event: Event, group: Group | None) -> str | None:
    """Matched group's region, else the event city's region, else None.

    'Unknown' is never returned: an unclassifiable event has no region and
    drops out of region filters.
    """
    if group is not None and group.region and group.region != UNKNOWN_REGION:
        return group.region
    if not event.city:
        return None
    region = classify_city(event.city)
    return None if region == UNKNOWN_REGION else region


def annotate_event(event: Event, groups: Sequence[Group]) -> AnnotatedEvent:
    group, strategy = resolve_group(event, groups)
    if group is None and event.group_name:
        logger.debug("No group found for: %s (city: %s)", event.group_name, event.city)
    return AnnotatedEvent(
        event=event,
        group=group,
        region=effective_region(event, group),
        strategy=strategy,
    )


def annotate_events(events: Iterable[Event], groups: Sequence[Group]) -> list[AnnotatedEvent]:
    """Reconcile every event against the group roster."""
    annotated = [annotate_event(e, groups) for e in events]

    if annotated:
        without_region = sum(1 for a in annotated if a.region is None)
        unmatched = sum(1 for a in annotated if not a.found_group)
        logger.info(
            "Reconciled %d events: %d without group, %d without region",
            len(annotated), unmatched, without_region,
        )
    return annotated


def unmatched_events(annotated: Iterable[AnnotatedEvent]) -> list[dict]:
    """Diagnostic rows for events that could not be linked to any group."""
    return [
        {
            "group_name": a.event.group_name,
            "city": a.event.city,
            "title": a.event.title,
            "year": a.event.year,
            "region": a.region,
        }
        for a in annotated
        if not a.found_group
    ]
