"""Venue derivation and per-fixture venue resolution."""

from typing import Iterable, Optional

from rrsched.errors import InvalidRosterError
from rrsched.models import (
    AWAY, DEFAULT_VENUE_CAPACITY, HOME, NEUTRAL, Competitor, Fixture, Venue,
)


def canonical_venues(competitors: Iterable[Competitor],
                     venue_info: Optional[dict] = None) -> list[Venue]:
    """One venue per distinct home-venue name, in first-encountered order.

    venue_info maps venue name -> {"city": ..., "capacity": ...} and
    overrides the defaults (first competitor's city, default capacity).
    """
    venue_info = venue_info or {}
    venues: list[Venue] = []
    seen: set[str] = set()
    for c in competitors:
        if c.home_venue in seen:
            continue
        seen.add(c.home_venue)
        info = venue_info.get(c.home_venue, {})
        venues.append(Venue(
            name=c.home_venue,
            city=info.get("city", c.city),
            capacity=int(info.get("capacity", DEFAULT_VENUE_CAPACITY)),
        ))
    return venues


def resolve_venue(fixture: Fixture, venues: list[Venue]) -> tuple[Venue, str]:
    """Pick the venue for a fixture and label it relative to (A, B).

    Prefers A's home venue, then B's, then the first venue in the list.
    """
    if not venues:
        raise InvalidRosterError("No venues available")

    by_name = {v.name: v for v in venues}
    a_home = fixture.competitor_a.home_venue
    b_home = fixture.competitor_b.home_venue

    venue = by_name.get(a_home) or by_name.get(b_home) or venues[0]

    if venue.name == a_home:
        label = HOME
    elif venue.name == b_home:
        label = AWAY
    else:
        label = NEUTRAL
    return venue, label
