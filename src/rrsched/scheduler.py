"""Main scheduling engine.

Three phases:
1. Generate round-robin fixtures (roundrobin.py)
2. Assembly - venue + label per fixture, match numbers, two-day cadence dates
3. Redistribution (optional) - cap matches per day by pushing overflow to
   later dates

Every phase is a pass over explicit inputs; nothing is kept between calls.
"""

import logging
from collections import defaultdict
from datetime import date, timedelta
from typing import Iterable, Optional

from rrsched.models import Competitor, Fixture, Match, Schedule, Venue
from rrsched.roundrobin import generate_fixtures
from rrsched.venues import canonical_venues, resolve_venue

logger = logging.getLogger(__name__)

# Days between consecutive matches in generation order
MATCH_INTERVAL_DAYS = 2


# ---------------------------------------------------------------------------
# Phase 2: Assembly
# ---------------------------------------------------------------------------

def assemble_schedule(fixtures: list[Fixture], venues: list[Venue],
                      season: str, start_date: date) -> Schedule:
    """Turn fixtures into numbered, dated matches in generation order.

    Fixture i (0-based) becomes match i+1 on start_date + 2*i days.
    """
    sched = Schedule(season=season)
    for index, fixture in enumerate(fixtures):
        venue, label = resolve_venue(fixture, venues)
        sched.add(Match(
            competitor_a=fixture.competitor_a,
            competitor_b=fixture.competitor_b,
            venue=venue,
            date=start_date + timedelta(days=MATCH_INTERVAL_DAYS * index),
            match_type=label,
            number=index + 1,
        ))
    return sched


# ---------------------------------------------------------------------------
# Phase 3: Redistribution
# ---------------------------------------------------------------------------

def redistribute_matches(sched: Schedule, max_per_day: int) -> Schedule:
    """Cap matches per date by moving overflow forward, in place.

    For each date holding more than max_per_day matches, the excess is
    taken from the tail of that date's group and moved to date+1, date+2,
    ... one match per day. Groups are computed once from the schedule as
    passed in; destination dates are not re-checked, so a moved match can
    land on a date that is already full.

    Match numbers, venues and labels are unchanged. Returns sched.
    """
    if max_per_day < 1:
        raise ValueError(f"max_per_day must be at least 1, got {max_per_day}")

    by_date: dict[date, list[Match]] = defaultdict(list)
    for m in sched.matches:
        by_date[m.date].append(m)

    moved = 0
    for day, day_matches in by_date.items():
        extra = len(day_matches) - max_per_day
        if extra <= 0:
            continue
        new_date = day + timedelta(days=1)
        for i in range(extra):
            match = day_matches[-1 - i]
            logger.debug("Moving match %d from %s to %s",
                         match.number, day, new_date)
            match.date = new_date
            new_date += timedelta(days=1)
        moved += extra

    if moved:
        logger.info("Redistributed %d matches (max %d per day)",
                    moved, max_per_day)
    return sched


# ---------------------------------------------------------------------------
# Entry point
# ---------------------------------------------------------------------------

def generate_schedule(competitors: Iterable[Competitor], season: str,
                      start_date: date, max_per_day: Optional[int] = None,
                      venue_info: Optional[dict] = None) -> Schedule:
    """Generate a complete single round-robin schedule.

    With max_per_day set, overflow is redistributed after assembly.
    Raises InvalidRosterError (fewer than 2 competitors) or ValueError
    (max_per_day < 1) before any schedule is built.
    """
    competitors = list(competitors)
    if max_per_day is not None and max_per_day < 1:
        raise ValueError(f"max_per_day must be at least 1, got {max_per_day}")

    # Phase 1: Round-robin fixtures
    fixtures = generate_fixtures(competitors)
    logger.debug("Generated %d fixtures", len(fixtures))

    # Phase 2: Venues, labels, numbers, dates
    venues = canonical_venues(competitors, venue_info)
    sched = assemble_schedule(fixtures, venues, season, start_date)

    # Phase 3: Per-day cap
    if max_per_day is not None:
        redistribute_matches(sched, max_per_day)

    logger.info("Generated %s", sched.summary())
    return sched
