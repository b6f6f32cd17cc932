"""Tests for venues.py — venue derivation and resolution."""

import pytest

from rrsched.errors import InvalidRosterError
from rrsched.models import DEFAULT_VENUE_CAPACITY, Competitor, Fixture, Venue
from rrsched.venues import canonical_venues, resolve_venue


def _make_competitor(name, home_venue=None, city=None):
    return Competitor(name, city or f"{name} City", f"{name} Captain",
                      home_venue or f"V{name}")


class TestCanonicalVenues:
    def test_one_per_home_venue_in_roster_order(self):
        comps = [
            _make_competitor("A", "Park"),
            _make_competitor("B", "Oval"),
            _make_competitor("C", "Park"),
        ]
        venues = canonical_venues(comps)
        assert [v.name for v in venues] == ["Park", "Oval"]

    def test_city_from_first_competitor(self):
        comps = [
            _make_competitor("A", "Park", city="North"),
            _make_competitor("B", "Park", city="South"),
        ]
        assert canonical_venues(comps)[0].city == "North"

    def test_default_capacity(self):
        venues = canonical_venues([_make_competitor("A")])
        assert venues[0].capacity == DEFAULT_VENUE_CAPACITY

    def test_venue_info_overrides(self):
        venues = canonical_venues(
            [_make_competitor("A", "Park")],
            {"Park": {"city": "Elsewhere", "capacity": 1200}},
        )
        assert venues[0] == Venue("Park", "Elsewhere", 1200)


class TestResolveVenue:
    def test_prefers_a_home(self):
        a, b = _make_competitor("A"), _make_competitor("B")
        venue, label = resolve_venue(Fixture(a, b), canonical_venues([b, a]))
        assert venue.name == "VA"
        assert label == "home"

    def test_falls_back_to_b_home(self):
        a, b = _make_competitor("A"), _make_competitor("B")
        venues = [Venue("VB", "B City")]
        venue, label = resolve_venue(Fixture(a, b), venues)
        assert venue.name == "VB"
        assert label == "away"

    def test_neutral_fallback_is_first_venue(self):
        a, b = _make_competitor("A"), _make_competitor("B")
        venues = [Venue("Neutral1", "X"), Venue("Neutral2", "Y")]
        venue, label = resolve_venue(Fixture(a, b), venues)
        assert venue.name == "Neutral1"
        assert label == "neutral"

    def test_shared_home_venue_is_home(self):
        a = _make_competitor("A", "Park")
        b = _make_competitor("B", "Park")
        venue, label = resolve_venue(Fixture(b, a), canonical_venues([a, b]))
        assert venue.name == "Park"
        assert label == "home"

    def test_no_venues(self):
        a, b = _make_competitor("A"), _make_competitor("B")
        with pytest.raises(InvalidRosterError):
            resolve_venue(Fixture(a, b), [])
