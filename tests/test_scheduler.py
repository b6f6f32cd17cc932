"""Tests for scheduler.py — assembly, redistribution and generation."""

from collections import Counter
from datetime import date, timedelta

import pytest

from rrsched.errors import InvalidRosterError
from rrsched.models import Competitor, Match, Schedule, Venue
from rrsched.roundrobin import generate_fixtures
from rrsched.scheduler import (
    MATCH_INTERVAL_DAYS, assemble_schedule, generate_schedule, redistribute_matches,
)
from rrsched.venues import canonical_venues


def _make_competitors(*names):
    return [Competitor(n, f"{n} City", f"{n} Captain", f"V{n}") for n in names]


def _make_match(number, d, a="A", b="B", venue="VA", match_type="home"):
    ca, cb = _make_competitors(a, b)
    return Match(ca, cb, Venue(venue, "City"), d, match_type, number)


class TestAssembleSchedule:
    def test_numbers_and_dates(self):
        comps = _make_competitors("A", "B", "C", "D")
        start = date(2024, 3, 1)
        sched = assemble_schedule(generate_fixtures(comps),
                                  canonical_venues(comps), "S1", start)
        assert sched.season == "S1"
        assert [m.number for m in sched.matches] == [1, 2, 3, 4, 5, 6]
        for i, m in enumerate(sched.matches):
            assert m.date == start + timedelta(days=MATCH_INTERVAL_DAYS * i)

    def test_generation_order_preserved(self):
        comps = _make_competitors("A", "B", "C", "D")
        fixtures = generate_fixtures(comps)
        sched = assemble_schedule(fixtures, canonical_venues(comps), "S1",
                                  date(2024, 3, 1))
        assert [(m.competitor_a, m.competitor_b) for m in sched.matches] == [
            (f.competitor_a, f.competitor_b) for f in fixtures
        ]

    def test_labels_follow_venue(self):
        comps = _make_competitors("A", "B", "C", "D")
        sched = assemble_schedule(generate_fixtures(comps),
                                  canonical_venues(comps), "S1", date(2024, 3, 1))
        for m in sched.matches:
            if m.match_type == "home":
                assert m.venue.name == m.competitor_a.home_venue
            elif m.match_type == "away":
                assert m.venue.name == m.competitor_b.home_venue
            else:
                assert m.venue.name not in (m.competitor_a.home_venue,
                                            m.competitor_b.home_venue)


class TestRedistributeMatches:
    def test_cap_one_two_matches(self):
        d = date(2024, 3, 1)
        sched = Schedule("S", [_make_match(1, d), _make_match(2, d, "C", "D")])
        redistribute_matches(sched, 1)
        assert sched.matches[0].date == date(2024, 3, 1)
        assert sched.matches[1].date == date(2024, 3, 2)

    def test_tail_moves_first(self):
        d = date(2024, 3, 1)
        sched = Schedule("S", [
            _make_match(1, d), _make_match(2, d, "C", "D"), _make_match(3, d, "E", "F"),
        ])
        redistribute_matches(sched, 1)
        assert [m.date for m in sched.matches] == [
            date(2024, 3, 1), date(2024, 3, 3), date(2024, 3, 2),
        ]

    def test_under_cap_untouched(self):
        d = date(2024, 3, 1)
        sched = Schedule("S", [_make_match(1, d), _make_match(2, d, "C", "D")])
        redistribute_matches(sched, 2)
        assert all(m.date == d for m in sched.matches)

    def test_preserves_other_fields(self):
        d = date(2024, 3, 1)
        sched = Schedule("S", [
            _make_match(i, d, f"X{i}", f"Y{i}", f"V{i}", "neutral")
            for i in range(1, 6)
        ])
        before = [(m.number, m.venue, m.match_type, m.competitor_a)
                  for m in sched.matches]
        result = redistribute_matches(sched, 2)
        assert result is sched
        assert len(sched.matches) == 5
        assert [(m.number, m.venue, m.match_type, m.competitor_a)
                for m in sched.matches] == before
        counts = Counter(m.date for m in sched.matches)
        assert max(counts.values()) <= 2

    def test_destination_not_rechecked(self):
        """A moved match may land on a date that is already full."""
        sched = Schedule("S", [
            _make_match(1, date(2024, 3, 1)),
            _make_match(2, date(2024, 3, 1), "C", "D"),
            _make_match(3, date(2024, 3, 2), "E", "F"),
        ])
        redistribute_matches(sched, 1)
        counts = Counter(m.date for m in sched.matches)
        assert counts[date(2024, 3, 1)] == 1
        assert counts[date(2024, 3, 2)] == 2

    def test_invalid_cap(self):
        sched = Schedule("S", [_make_match(1, date(2024, 3, 1))])
        with pytest.raises(ValueError):
            redistribute_matches(sched, 0)


class TestGenerateSchedule:
    def test_four_competitors(self):
        comps = _make_competitors("A", "B", "C", "D")
        sched = generate_schedule(comps, "S1", date(2024, 3, 1))
        assert len(sched.matches) == 6
        for c in comps:
            assert len(sched.matches_for(c)) == 3

    def test_odd_roster(self):
        comps = _make_competitors("A", "B", "C", "D", "E")
        sched = generate_schedule(comps, "S1", date(2024, 3, 1))
        assert len(sched.matches) == 10
        for c in comps:
            assert len(sched.matches_for(c)) == 4

    def test_with_cap(self):
        comps = _make_competitors("A", "B", "C", "D")
        sched = generate_schedule(comps, "S1", date(2024, 3, 1), max_per_day=1)
        assert len(sched.matches) == 6
        assert max(Counter(m.date for m in sched.matches).values()) == 1

    def test_venue_info_applied(self):
        comps = _make_competitors("A", "B")
        sched = generate_schedule(comps, "S1", date(2024, 3, 1),
                                  venue_info={"VA": {"capacity": 1000}})
        assert sched.matches[0].venue.capacity == 1000

    def test_deterministic(self):
        comps = _make_competitors("A", "B", "C", "D", "E")
        s1 = generate_schedule(comps, "S1", date(2024, 3, 1))
        s2 = generate_schedule(comps, "S1", date(2024, 3, 1))
        assert s1 == s2

    def test_too_few_competitors(self):
        with pytest.raises(InvalidRosterError):
            generate_schedule(_make_competitors("A"), "S1", date(2024, 3, 1))

    def test_repeated_name_rejected(self):
        # A plain list bypasses Roster de-duplication
        with pytest.raises(InvalidRosterError):
            generate_schedule(_make_competitors("A", "B", "a"), "S1",
                              date(2024, 3, 1))

    def test_invalid_cap_raises_before_generation(self):
        with pytest.raises(ValueError):
            generate_schedule(_make_competitors("A", "B"), "S1",
                              date(2024, 3, 1), max_per_day=0)
