"""Round-robin fixture generation using the circle method."""

import logging
from typing import Iterable

from rrsched.errors import InvalidRosterError
from rrsched.models import Competitor, Fixture, Round

logger = logging.getLogger(__name__)

# Pads an odd roster to an even size; never leaves this module.
_BYE = object()


def generate_rounds(competitors: Iterable[Competitor]) -> list[Round]:
    """Generate a single round-robin using the circle method.

    For N competitors: N-1 rounds if even, N rounds (with one bye each) if
    odd. Position 0 is anchored; after every round the last entry moves
    to position 1. Round and fixture order are deterministic for a given
    roster order.

    Raises InvalidRosterError for fewer than 2 competitors or for names
    that repeat (case-insensitively).
    """
    working: list = list(competitors)
    if len(working) < 2:
        raise InvalidRosterError(
            f"At least 2 competitors are required, got {len(working)}"
        )
    seen = set()
    for c in working:
        if c.key in seen:
            raise InvalidRosterError(f"Duplicate competitor {c.name}")
        seen.add(c.key)

    num_competitors = len(working)
    if num_competitors % 2 == 1:
        working.append(_BYE)
    n = len(working)

    rounds = []
    for r in range(n - 1):
        fixtures = []
        bye = None
        for i in range(n // 2):
            a = working[i]
            b = working[n - 1 - i]
            if a is _BYE:
                bye = b
            elif b is _BYE:
                bye = a
            else:
                fixtures.append(Fixture(a, b))
        rounds.append(Round(number=r + 1, fixtures=fixtures, bye=bye))

        # Rotate: keep position 0 fixed, last moves to position 1
        working = [working[0], working[-1]] + working[1:-1]

    logger.debug("Generated %d rounds for %d competitors",
                 len(rounds), num_competitors)
    return rounds


def generate_fixtures(competitors: Iterable[Competitor]) -> list[Fixture]:
    """Flatten generate_rounds() into fixtures in emission order."""
    return [f for rnd in generate_rounds(competitors) for f in rnd.fixtures]


def verify_fixtures(fixtures: list[Fixture],
                    competitors: list[Competitor]) -> dict:
    """Verify that fixtures form a complete single round-robin.

    Returns dict with:
    - valid: bool
    - errors: list of error strings
    - pair_counts: dict of (key_a, key_b) -> count
    - matches_per_competitor: dict of name -> fixture count
    """
    errors = []
    pair_counts: dict[tuple[str, str], int] = {}
    per_key: dict[str, int] = {c.key: 0 for c in competitors}

    for f in fixtures:
        if f.competitor_a.key == f.competitor_b.key:
            errors.append(f"{f.competitor_a.name} is paired with itself")
            continue
        pair_counts[f.pair_key] = pair_counts.get(f.pair_key, 0) + 1
        per_key[f.competitor_a.key] = per_key.get(f.competitor_a.key, 0) + 1
        per_key[f.competitor_b.key] = per_key.get(f.competitor_b.key, 0) + 1

    # Check every pair meets exactly once
    for i, c1 in enumerate(competitors):
        for c2 in competitors[i + 1:]:
            key = (c1.key, c2.key) if c1.key < c2.key else (c2.key, c1.key)
            count = pair_counts.get(key, 0)
            if count != 1:
                errors.append(
                    f"{c1.name} vs {c2.name}: paired {count} times (expected 1)"
                )

    return {
        "valid": len(errors) == 0,
        "errors": errors,
        "pair_counts": pair_counts,
        "matches_per_competitor": {c.name: per_key.get(c.key, 0)
                                   for c in competitors},
    }
