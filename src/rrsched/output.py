"""Output formatters for the round-robin scheduler."""

import csv
from io import StringIO
from pathlib import Path

from rrsched.errors import PersistenceError
from rrsched.models import Schedule

CSV_HEADER = ["Match Number", "Competitor A", "Competitor B", "Venue",
              "Date", "Match Type"]


def format_schedule(sched: Schedule) -> str:
    """Format schedule as human-readable text, in date order."""
    lines = []
    lines.append(f"=== Schedule {sched.season} ===")
    lines.append(sched.summary())
    lines.append("")
    for m in sched.sorted_by_date():
        lines.append(str(m))
    return "\n".join(lines) + "\n"


def format_schedule_csv(sched: Schedule) -> str:
    """Format schedule as CSV, one row per match in date order."""
    output = StringIO()
    writer = csv.writer(output, lineterminator="\n")
    writer.writerow(CSV_HEADER)
    for m in sched.sorted_by_date():
        writer.writerow([
            m.number,
            m.competitor_a.name,
            m.competitor_b.name,
            m.venue.name,
            m.date.isoformat(),
            m.match_type,
        ])
    return output.getvalue()


def _write(path: Path, text: str) -> Path:
    try:
        path.write_text(text, encoding="utf-8")
    except OSError as e:
        raise PersistenceError(f"Cannot write {path}: {e}") from e
    return path


def with_csv_suffix(path: str | Path) -> Path:
    """Append .csv to a schedule path that lacks it."""
    path = Path(path)
    if path.suffix != ".csv":
        path = path.with_name(path.name + ".csv")
    return path


def save_schedule_csv(sched: Schedule, path: str | Path) -> Path:
    return _write(with_csv_suffix(path), format_schedule_csv(sched))


def export_schedule_text(sched: Schedule, path: str | Path) -> Path:
    return _write(Path(path), format_schedule(sched))


def write_schedule(sched: Schedule, output_prefix: str = "output") -> list[Path]:
    """Write all output files into {output_prefix}/ directory."""
    out_dir = Path(output_prefix)
    try:
        out_dir.mkdir(parents=True, exist_ok=True)
    except OSError as e:
        raise PersistenceError(f"Cannot create {out_dir}: {e}") from e

    written = []

    # CSV (re-loadable)
    csv_path = save_schedule_csv(sched, out_dir / "schedule.csv")
    print(f"Written: {csv_path}")
    written.append(csv_path)

    # Human-readable schedule
    text_path = export_schedule_text(sched, out_dir / "schedule.txt")
    print(f"Written: {text_path}")
    written.append(text_path)

    return written
