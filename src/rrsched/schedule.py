#!/usr/bin/env python3
"""Round-robin fixture calendar builder.

Generate mode (default):
    rrsched [config.yaml] [--season NAME] [--start-date YYYY-MM-DD]
            [--max-per-day K] [--roster FILE] [-o DIR]

    Generates a single round-robin schedule and writes:
      {DIR}/schedule.csv  - Re-loadable CSV (one row per match)
      {DIR}/schedule.txt  - Human-readable schedule
      {DIR}/stats.txt     - Validation report + fairness report

Query mode:
    rrsched [config.yaml] --list          # show the roster
    rrsched [config.yaml] --team NAME     # matches for one competitor
    rrsched [config.yaml] --date DATE     # matches on one date

    Queries run against a freshly generated schedule, or against the CSV
    given with --load.

Verify mode:
    rrsched [config.yaml] --verify <schedule.csv>

    Re-imports a schedule CSV and checks it against the roster.
    Exit code 0 if valid, 1 if violations found.

Examples:
    rrsched                                   # default config
    rrsched --start-date 2024-03-22 -o ipl24  # custom start + output dir
    rrsched --max-per-day 1 --team "Mumbai Indians"
    rrsched --verify output/schedule.csv
"""

import argparse
import logging
import sys
from datetime import date
from pathlib import Path

from rrsched.config import load_config, parse_date
from rrsched.constraints import validate_schedule, format_validation_report
from rrsched.errors import SchedulerError
from rrsched.output import with_csv_suffix, write_schedule
from rrsched.roster import load_roster_file
from rrsched.scheduler import generate_schedule
from rrsched.stats import analyze_fairness, format_fairness_report
from rrsched.verify import parse_csv_schedule


def _print_matches(title: str, matches) -> None:
    print(f"\n=== {title} ===")
    for m in matches:
        print(m)


def main(argv=None):
    parser = argparse.ArgumentParser(
        description="Round-robin fixture calendar builder",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""\
Output files (generate mode):
  {dir}/schedule.csv   Re-loadable schedule CSV
  {dir}/schedule.txt   Human-readable schedule
  {dir}/stats.txt      Validation report + fairness report

Exit codes:
  0  Schedule valid (or query succeeded)
  1  Constraint violations found, unknown competitor, bad input, or I/O error
""",
    )
    parser.add_argument(
        "config", nargs="?", default="config.yaml",
        help="Path to config YAML file (default: config.yaml)"
    )
    parser.add_argument("--season", help="Season label (overrides config)")
    parser.add_argument(
        "--start-date",
        help="First match date, YYYY-MM-DD (overrides config; default today)"
    )
    parser.add_argument(
        "--max-per-day", type=int, default=None,
        help="Cap matches per date, pushing overflow to later dates"
    )
    parser.add_argument(
        "--roster", metavar="FILE",
        help="Roster file (name|city|captain|home_venue per line) "
             "used instead of the config's competitors"
    )
    parser.add_argument(
        "--output-prefix", "-o", default="output",
        help="Output directory for generated files (default: output/)"
    )
    parser.add_argument(
        "--load", metavar="CSV",
        help="Run --team/--date queries against a saved schedule CSV"
    )
    parser.add_argument("--team", metavar="NAME",
                        help="Show matches for one competitor")
    parser.add_argument("--date", metavar="DATE",
                        help="Show matches on one date (YYYY-MM-DD)")
    parser.add_argument(
        "--verify", metavar="CSV",
        help="Verify an existing schedule CSV instead of generating"
    )
    parser.add_argument("--list", action="store_true",
                        help="List the roster and exit")
    parser.add_argument("-v", "--verbose", action="store_true",
                        help="Show debug logging")
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s: %(message)s",
    )

    config_path = args.config
    if not Path(config_path).exists():
        print(f"Error: config file {config_path} not found")
        sys.exit(1)

    try:
        print(f"Loading config from {config_path}...")
        config = load_config(config_path)
        roster = config["roster"]
        if args.roster:
            print(f"Loading roster from {args.roster}...")
            roster = load_roster_file(args.roster)
        competitors = list(roster)
        if args.list:
            print(roster.summary())
            return
        season_cfg = config["season"]
        b2b_days = season_cfg["back_to_back_days"]

        if args.verify:
            # Verification mode
            print(f"Verifying schedule from {args.verify}...")
            sched = parse_csv_schedule(args.verify, roster,
                                       venue_info=config["venue_info"])
            print(f"Loaded {len(sched)} matches")
            result = validate_schedule(sched, competitors)
            print(format_validation_report(result))
            print("\n" + format_fairness_report(
                analyze_fairness(sched, competitors, b2b_days)
            ))
            sys.exit(0 if result["valid"] else 1)

        if args.load:
            load_path = with_csv_suffix(args.load)
            sched = parse_csv_schedule(load_path, roster,
                                       venue_info=config["venue_info"])
            print(f"Loaded {len(sched)} matches from {load_path}")
        else:
            season = args.season or season_cfg["name"] or "Season"
            if args.start_date:
                start = parse_date(args.start_date)
            else:
                start = season_cfg["start_date"] or date.today()
            max_per_day = (args.max_per_day if args.max_per_day is not None
                           else season_cfg["max_matches_per_day"])

            print(f"Generating schedule for {len(competitors)} competitors "
                  f"(start={start}, max_per_day={max_per_day})...")
            sched = generate_schedule(competitors, season, start,
                                      max_per_day=max_per_day,
                                      venue_info=config["venue_info"])
        print(sched.summary())

        # Query mode
        if args.team or args.date:
            if args.team:
                competitor = roster.get(args.team)
                _print_matches(f"Matches for {competitor.name}",
                               sched.matches_for(competitor))
            if args.date:
                d = parse_date(args.date)
                matches = sched.matches_on(d)
                if matches:
                    _print_matches(f"Matches on {d.isoformat()}", matches)
                else:
                    print(f"No matches found on {d.isoformat()}")
            return

        # Validate
        print("\nValidating...")
        result = validate_schedule(sched, competitors)
        report = format_validation_report(result)
        print(report)

        # Fairness
        stats_text = format_fairness_report(
            analyze_fairness(sched, competitors, b2b_days)
        )
        print("\n" + stats_text)

        # Write outputs
        print("\nWriting output files...")
        write_schedule(sched, output_prefix=args.output_prefix)
        stats_path = Path(args.output_prefix) / "stats.txt"
        stats_path.write_text(report + "\n\n" + stats_text + "\n")
        print(f"Written: {stats_path}")
    except (SchedulerError, ValueError, OSError) as e:
        print(f"Error: {e}")
        sys.exit(1)

    if result["valid"]:
        print("\nSchedule generated successfully!")
    else:
        print(f"\nSchedule has {len(result['errors'])} constraint violations.")


if __name__ == "__main__":
    main()
