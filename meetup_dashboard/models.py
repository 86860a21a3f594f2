"""
Record types for the dashboard.

Groups and events are rebuilt from the spreadsheet on every load and never
mutated afterwards, so both are frozen dataclasses. Filters and aggregations
select and reduce over them without editing them.
"""

from dataclasses import dataclass


@dataclass(frozen=True)
class Group:
    """One user group row from a regional dashboard sheet."""

    name: str
    member_count: int = 0
    city: str = ""
    past_rsvps: int = 0
    past_event_count: int = 0
    upcoming_events: int = 0
    founded_date: str = ""
    pro_join_date: str = ""
    last_event_date: str = ""
    timestamp: str = ""
    # AMER / EMEA / APAC, or None when the source sheet carries no region tag
    region: str | None = None


@dataclass(frozen=True)
class Event:
    """One meetup occurrence from an 'Events YYYY' sheet."""

    title: str = ""
    url: str = ""
    # free text, never parsed as a calendar date
    date: str = ""
    group_name: str = ""
    city: str = ""
    rsvp_count: int = 0
    event_type: str = ""
    timestamp: str = ""
    # taken from the sheet name, not from `date`
    year: int | None = None


@dataclass(frozen=True)
class AnnotatedEvent:
    """An event with the outcome of group reconciliation attached."""

    event: Event
    group: Group | None
    region: str | None
    strategy: str | None

    @property
    def found_group(self) -> bool:
        return self.group is not None
