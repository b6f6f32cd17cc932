"""Data models for the round-robin scheduler."""

from dataclasses import dataclass, field
from datetime import date
from typing import Optional

HOME = "home"
AWAY = "away"
NEUTRAL = "neutral"
MATCH_TYPES = (HOME, AWAY, NEUTRAL)

DEFAULT_VENUE_CAPACITY = 50000


@dataclass(frozen=True)
class Competitor:
    """A team on the roster."""
    name: str
    city: str
    captain: str
    home_venue: str

    @property
    def key(self) -> str:
        """Lookup key: names compare case-insensitively."""
        return self.name.casefold()

    def __str__(self) -> str:
        return (f"{self.name} ({self.city}) - Captain: {self.captain}, "
                f"Home: {self.home_venue}")


@dataclass(frozen=True)
class Venue:
    """A ground that can host matches."""
    name: str
    city: str
    capacity: int = DEFAULT_VENUE_CAPACITY

    def __str__(self) -> str:
        return f"{self.name} ({self.city}) - Capacity: {self.capacity}"


@dataclass(frozen=True)
class Fixture:
    """A pairing of two competitors (no venue or date yet)."""
    competitor_a: Competitor
    competitor_b: Competitor

    def involves(self, competitor: Competitor) -> bool:
        return competitor.key in (self.competitor_a.key, self.competitor_b.key)

    def opponent(self, competitor: Competitor) -> Competitor:
        if competitor.key == self.competitor_a.key:
            return self.competitor_b
        return self.competitor_a

    @property
    def pair_key(self) -> tuple[str, str]:
        a, b = self.competitor_a.key, self.competitor_b.key
        return (a, b) if a < b else (b, a)


@dataclass
class Round:
    """A set of fixtures where each competitor plays at most once."""
    number: int
    fixtures: list[Fixture]
    bye: Optional[Competitor] = None


@dataclass
class Match:
    """A fixture with venue, date, label and match number assigned.

    Only ``date`` changes after creation, when overflow is redistributed.
    """
    competitor_a: Competitor
    competitor_b: Competitor
    venue: Venue
    date: date
    match_type: str
    number: int

    def involves(self, competitor: Competitor) -> bool:
        return competitor.key in (self.competitor_a.key, self.competitor_b.key)

    def opponent(self, competitor: Competitor) -> Optional[Competitor]:
        if competitor.key == self.competitor_a.key:
            return self.competitor_b
        if competitor.key == self.competitor_b.key:
            return self.competitor_a
        return None

    def is_home_for(self, competitor: Competitor) -> bool:
        return self.venue.name == competitor.home_venue

    @property
    def pair_key(self) -> tuple[str, str]:
        a, b = self.competitor_a.key, self.competitor_b.key
        return (a, b) if a < b else (b, a)

    def __str__(self) -> str:
        return (f"Match {self.number}: {self.competitor_a.name} vs "
                f"{self.competitor_b.name} at {self.venue.name} on "
                f"{self.date.isoformat()} ({self.match_type})")


@dataclass
class Schedule:
    """A season's matches, kept in generation order."""
    season: str
    matches: list[Match] = field(default_factory=list)

    def add(self, match: Match) -> None:
        self.matches.append(match)

    def __len__(self) -> int:
        return len(self.matches)

    def matches_for(self, competitor: Competitor) -> list[Match]:
        return [m for m in self.matches if m.involves(competitor)]

    def matches_on(self, d: date) -> list[Match]:
        return [m for m in self.matches if m.date == d]

    def matches_at_venue(self, venue: Venue) -> list[Match]:
        return [m for m in self.matches if m.venue.name == venue.name]

    def sorted_by_date(self) -> list[Match]:
        """Matches in date order; same-day matches keep generation order."""
        return sorted(self.matches, key=lambda m: m.date)

    @property
    def first_date(self) -> Optional[date]:
        return min((m.date for m in self.matches), default=None)

    @property
    def last_date(self) -> Optional[date]:
        return max((m.date for m in self.matches), default=None)

    @property
    def duration_days(self) -> int:
        if not self.matches:
            return 0
        return (self.last_date - self.first_date).days + 1

    def has_back_to_back(self, competitor: Competitor, max_days: int = 1) -> bool:
        """True if two of the competitor's matches are within max_days."""
        dates = sorted(m.date for m in self.matches_for(competitor))
        return any((later - earlier).days <= max_days
                   for earlier, later in zip(dates, dates[1:]))

    def summary(self) -> str:
        if not self.matches:
            return "No matches scheduled"
        return (f"Season: {self.season} | Total Matches: {len(self.matches)} "
                f"| Duration: {self.duration_days} days")
