import pytest

from meetup_dashboard.config import REGION_CITIES
from meetup_dashboard.models import Group
from meetup_dashboard.regions import classify_city, group_region


@pytest.mark.parametrize("region", ["AMER", "APAC", "EMEA"])
def test_every_exemplar_classifies_to_its_region(region):
    for city in REGION_CITIES[region]:
        assert classify_city(city) == region
        assert classify_city(city.upper()) == region


def test_substring_and_case_insensitive():
    assert classify_city("Greater London, UK") == "EMEA"
    assert classify_city("SAN FRANCISCO Bay Area") == "AMER"
    assert classify_city("Bangalore Urban") == "APAC"


def test_unlisted_city_is_unknown():
    assert classify_city("Nowhereville") == "Unknown"
    assert classify_city("") == "Unknown"
    assert classify_city(None) == "Unknown"


def test_group_region_prefers_own_tag():
    assert group_region(Group(name="x", city="London", region="AMER")) == "AMER"
    assert group_region(Group(name="x", city="London")) == "EMEA"
    assert group_region(Group(name="x", city="Nowhereville")) == "Unknown"
