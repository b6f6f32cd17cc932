"""Fairness statistics and reporting."""

from typing import Iterable

from rrsched.models import Competitor, Schedule

DEFAULT_BACK_TO_BACK_DAYS = 1


def analyze_fairness(sched: Schedule, competitors: Iterable[Competitor],
                     back_to_back_days: int = DEFAULT_BACK_TO_BACK_DAYS) -> dict:
    """Compute home/away balance and back-to-back flags per competitor.

    A match counts as home for a competitor when its venue is that
    competitor's home venue, whatever the match's label says. Away is
    everything else.

    Returns dict with:
    - all_competitors: competitor names in roster order
    - total_matches, home_counts, away_counts: name -> int
    - back_to_back: name -> bool (two matches within back_to_back_days)
    - back_to_back_days: the threshold used
    """
    all_competitors = []
    total_matches = {}
    home_counts = {}
    away_counts = {}
    back_to_back = {}

    for c in competitors:
        matches = sched.matches_for(c)
        home = sum(1 for m in matches if m.is_home_for(c))
        all_competitors.append(c.name)
        total_matches[c.name] = len(matches)
        home_counts[c.name] = home
        away_counts[c.name] = len(matches) - home
        back_to_back[c.name] = sched.has_back_to_back(c, back_to_back_days)

    return {
        "all_competitors": all_competitors,
        "total_matches": total_matches,
        "home_counts": home_counts,
        "away_counts": away_counts,
        "back_to_back": back_to_back,
        "back_to_back_days": back_to_back_days,
    }


def format_fairness_report(stats: dict) -> str:
    """Format fairness statistics into a human-readable report."""
    lines = []
    lines.append("=" * 60)
    lines.append("SCHEDULE FAIRNESS REPORT")
    lines.append("=" * 60)

    if not stats["all_competitors"]:
        lines.append("\nNo competitors")
        return "\n".join(lines)

    width = max(10, max(len(n) for n in stats["all_competitors"]))
    lines.append(f"\n{'Competitor':<{width}} {'Total':>5} {'Home':>5} "
                 f"{'Away':>5} {'Diff':>5}  B2B")
    lines.append("-" * (width + 30))
    for name in stats["all_competitors"]:
        tot = stats["total_matches"][name]
        h = stats["home_counts"][name]
        a = stats["away_counts"][name]
        b2b = "Yes" if stats["back_to_back"][name] else "No"
        lines.append(f"{name:<{width}} {tot:>5} {h:>5} {a:>5} {h - a:>+5}  {b2b}")

    flagged = [n for n in stats["all_competitors"] if stats["back_to_back"][n]]
    days = stats["back_to_back_days"]
    if flagged:
        lines.append(f"\n{len(flagged)} competitor(s) play twice within "
                     f"{days} day(s): {', '.join(flagged)}")
    else:
        lines.append(f"\nNo competitor plays twice within {days} day(s)")

    return "\n".join(lines)
