"""Constraint validation for generated or re-imported schedules."""

from collections import defaultdict
from datetime import date

from rrsched.models import Competitor, Schedule


def validate_schedule(sched: Schedule, competitors: list[Competitor]) -> dict:
    """Validate a schedule against the round-robin constraints.

    Hard checks:
    - every competitor plays exactly len(competitors) - 1 matches
    - no two matches share a date anywhere in the schedule. This is a
      whole-schedule check, so same-day matches at different venues are
      flagged too.

    Returns dict with:
    - valid: bool (True if no hard constraint violations)
    - errors: list of hard constraint violations
    - warnings: list of soft issues (repeated pairs, unknown competitors)
    - match_count_violations: name -> actual match count
    - date_collisions: date -> number of matches on it
    """
    competitors = list(competitors)
    errors = []
    warnings = []

    # Check: match count per competitor
    expected = len(competitors) - 1
    match_count_violations: dict[str, int] = {}
    for c in competitors:
        actual = len(sched.matches_for(c))
        if actual != expected:
            match_count_violations[c.name] = actual
            errors.append(f"{c.name} has {actual} matches, expected {expected}")

    # Check: date collisions across the whole schedule
    per_date: dict[date, int] = defaultdict(int)
    for m in sched.matches:
        per_date[m.date] += 1
    date_collisions = {d: n for d, n in sorted(per_date.items()) if n > 1}
    for d, n in date_collisions.items():
        errors.append(f"Multiple matches on {d.isoformat()} ({n} matches)")

    # Soft: competitors not on the roster, repeated pairings
    known = {c.key for c in competitors}
    pair_counts: dict[tuple[str, str], int] = defaultdict(int)
    pair_names: dict[tuple[str, str], str] = {}
    for m in sched.matches:
        for c in (m.competitor_a, m.competitor_b):
            if c.key not in known:
                warnings.append(
                    f"Match {m.number} involves {c.name}, who is not on the roster"
                )
        pair_counts[m.pair_key] += 1
        pair_names[m.pair_key] = f"{m.competitor_a.name} vs {m.competitor_b.name}"

    for key, count in pair_counts.items():
        if count > 1:
            warnings.append(f"{pair_names[key]} played {count} times")

    return {
        "valid": len(errors) == 0,
        "errors": errors,
        "warnings": warnings,
        "match_count_violations": match_count_violations,
        "date_collisions": date_collisions,
    }


def format_validation_report(result: dict) -> str:
    """Format validation results as text."""
    lines = []
    lines.append("=" * 60)
    lines.append("SCHEDULE VALIDATION REPORT")
    lines.append("=" * 60)

    if result["valid"]:
        lines.append("\nRESULT: VALID (no hard constraint violations)")
    else:
        lines.append(f"\nRESULT: INVALID ({len(result['errors'])} violations)")

    if result["errors"]:
        lines.append(f"\n--- ERRORS ({len(result['errors'])}) ---")
        for e in result["errors"]:
            lines.append(f"  ERROR: {e}")

    if result["warnings"]:
        lines.append(f"\n--- WARNINGS ({len(result['warnings'])}) ---")
        for w in result["warnings"]:
            lines.append(f"  WARN: {w}")

    return "\n".join(lines)
