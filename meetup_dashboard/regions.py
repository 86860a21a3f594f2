"""
Region classification from free-text city names.
"""

from .config import REGION_CITIES, UNKNOWN_REGION
from .models import Group


def classify_city(city: str | None) -> str:
    """Return the region whose exemplar list has a city contained in `city`.

    Matching is a case-insensitive substring test, so "Greater London" and
    "London, UK" both resolve to EMEA. Lists are tried in REGION_CITIES order
    and the first hit wins. Returns 'Unknown' when nothing matches.
    """
    city_lower = (city or "").lower()
    if not city_lower:
        return UNKNOWN_REGION

    for region, exemplars in REGION_CITIES.items():
        if any(exemplar in city_lower for exemplar in exemplars):
            return region
    return UNKNOWN_REGION


def group_region(group: Group) -> str:
    """Group's own region, falling back to its city when the tag is absent."""
    return group.region or classify_city(group.city)
