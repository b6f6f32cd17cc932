"""Standalone verifier for round-robin schedules.

Can validate a schedule by reading a CSV file + config.yaml.
Usage: rrsched-verify [schedule_csv] [config_yaml]
"""

import csv
import logging
import sys
from pathlib import Path
from typing import Optional

from rrsched.config import load_config, parse_date
from rrsched.constraints import validate_schedule, format_validation_report
from rrsched.errors import MalformedDateError, PersistenceError, SchedulerError
from rrsched.models import DEFAULT_VENUE_CAPACITY, MATCH_TYPES, Match, Schedule, Venue
from rrsched.output import with_csv_suffix
from rrsched.roster import Roster
from rrsched.stats import analyze_fairness, format_fairness_report
from rrsched.venues import canonical_venues

logger = logging.getLogger(__name__)


def parse_csv_schedule(csv_path: str | Path, roster: Roster,
                       season: Optional[str] = None,
                       venue_info: Optional[dict] = None) -> Schedule:
    """Parse a schedule CSV back into a Schedule.

    Competitors are resolved through the roster by name. Venues matching a
    competitor's home venue reuse the canonical Venue; others get a
    placeholder city. Matches are renumbered 1..n in file order. Rows with
    unknown competitors or unparsable dates are skipped. A path without a
    .csv suffix gets one, as when saving.
    """
    csv_path = with_csv_suffix(csv_path)
    venues = {v.name: v for v in canonical_venues(roster, venue_info)}
    sched = Schedule(season=season if season is not None else csv_path.stem)

    try:
        with open(csv_path, newline="", encoding="utf-8") as f:
            rows = list(csv.DictReader(f))
    except (OSError, UnicodeDecodeError, csv.Error) as e:
        raise PersistenceError(f"Cannot read schedule {csv_path}: {e}") from e

    for lineno, row in enumerate(rows, 2):
        name_a = (row.get("Competitor A") or "").strip()
        name_b = (row.get("Competitor B") or "").strip()
        a = roster.find(name_a)
        b = roster.find(name_b)
        if a is None or b is None:
            missing = name_a if a is None else name_b
            logger.warning("%s:%d: unknown competitor %r, skipping row",
                           csv_path, lineno, missing)
            continue

        try:
            match_date = parse_date(row.get("Date") or "")
        except MalformedDateError as e:
            logger.warning("%s:%d: %s, skipping row", csv_path, lineno, e)
            continue

        venue_name = (row.get("Venue") or "").strip()
        venue = venues.get(venue_name)
        if venue is None:
            venue = Venue(venue_name, "Unknown", DEFAULT_VENUE_CAPACITY)
            venues[venue_name] = venue

        match_type = (row.get("Match Type") or "").strip().lower()
        if match_type not in MATCH_TYPES:
            logger.warning("%s:%d: unexpected match type %r",
                           csv_path, lineno, match_type)

        sched.add(Match(
            competitor_a=a,
            competitor_b=b,
            venue=venue,
            date=match_date,
            match_type=match_type,
            number=len(sched.matches) + 1,
        ))

    return sched


def main():
    logging.basicConfig(level=logging.WARNING, format="%(levelname)s: %(message)s")

    if len(sys.argv) < 2:
        print("Usage: rrsched-verify <schedule.csv> [config.yaml]")
        print("  Validates a schedule CSV against the roster in config.")
        sys.exit(1)

    csv_path = with_csv_suffix(sys.argv[1])
    config_path = sys.argv[2] if len(sys.argv) > 2 else "config.yaml"

    if not Path(csv_path).exists():
        print(f"Error: {csv_path} not found")
        sys.exit(1)
    if not Path(config_path).exists():
        print(f"Error: {config_path} not found")
        sys.exit(1)

    try:
        print(f"Loading config from {config_path}...")
        config = load_config(config_path)
        roster = config["roster"]

        print(f"Parsing schedule from {csv_path}...")
        sched = parse_csv_schedule(csv_path, roster,
                                   venue_info=config["venue_info"])
    except SchedulerError as e:
        print(f"Error: {e}")
        sys.exit(1)

    print(f"Loaded {len(sched)} matches")
    if not sched.matches:
        print("No matches found in CSV. Check the format.")
        sys.exit(1)

    competitors = list(roster)
    result = validate_schedule(sched, competitors)
    print(format_validation_report(result))

    stats = analyze_fairness(sched, competitors,
                             config["season"]["back_to_back_days"])
    print("\n" + format_fairness_report(stats))

    sys.exit(0 if result["valid"] else 1)


if __name__ == "__main__":
    main()
