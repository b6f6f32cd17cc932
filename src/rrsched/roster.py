"""Roster store: an ordered list of competitors, looked up by name."""

import logging
from pathlib import Path
from typing import Iterable, Iterator, Optional

from rrsched.errors import PersistenceError, UnknownCompetitorError
from rrsched.models import Competitor

logger = logging.getLogger(__name__)


class Roster:
    """Ordered competitors. Names are stored as given, matched case-insensitively."""

    def __init__(self, competitors: Iterable[Competitor] = ()):
        self._competitors: list[Competitor] = []
        for c in competitors:
            if not self.add(c):
                logger.warning("Skipping duplicate or unnamed competitor %r", c.name)

    def add(self, competitor: Competitor) -> bool:
        if not competitor.name or not competitor.name.strip():
            return False
        if competitor.key in self:
            return False
        self._competitors.append(competitor)
        return True

    def remove(self, name: str) -> bool:
        if not name or not name.strip():
            return False
        key = name.strip().casefold()
        before = len(self._competitors)
        self._competitors = [c for c in self._competitors if c.key != key]
        return len(self._competitors) < before

    def find(self, name: str) -> Optional[Competitor]:
        if not name or not name.strip():
            return None
        key = name.strip().casefold()
        for c in self._competitors:
            if c.key == key:
                return c
        return None

    def get(self, name: str) -> Competitor:
        competitor = self.find(name)
        if competitor is None:
            raise UnknownCompetitorError(name)
        return competitor

    def by_city(self, city: str) -> list[Competitor]:
        if not city or not city.strip():
            return []
        key = city.strip().casefold()
        return [c for c in self._competitors if c.city.casefold() == key]

    def names(self) -> list[str]:
        return [c.name for c in self._competitors]

    def __contains__(self, name: str) -> bool:
        return self.find(name) is not None

    def __iter__(self) -> Iterator[Competitor]:
        return iter(list(self._competitors))

    def __len__(self) -> int:
        return len(self._competitors)

    def summary(self) -> str:
        if not self._competitors:
            return "No competitors available"
        lines = ["=== Competitors ==="]
        for i, c in enumerate(self._competitors, 1):
            lines.append(f"{i}. {c}")
        return "\n".join(lines)


def load_roster_file(path: str | Path) -> Roster:
    """Read a roster from lines of ``name|city|captain|home_venue``."""
    path = Path(path)
    try:
        text = path.read_text()
    except OSError as e:
        raise PersistenceError(f"Cannot read roster file {path}: {e}") from e

    roster = Roster()
    for lineno, line in enumerate(text.splitlines(), 1):
        if not line.strip():
            continue
        parts = [p.strip() for p in line.split("|")]
        if len(parts) < 4:
            logger.warning("%s:%d: expected 4 fields, got %d", path, lineno, len(parts))
            continue
        if not roster.add(Competitor(*parts[:4])):
            logger.warning("%s:%d: duplicate competitor %s", path, lineno, parts[0])
    return roster


def save_roster_file(roster: Roster, path: str | Path) -> Path:
    path = Path(path)
    lines = [f"{c.name}|{c.city}|{c.captain}|{c.home_venue}" for c in roster]
    try:
        path.write_text("\n".join(lines) + "\n")
    except OSError as e:
        raise PersistenceError(f"Cannot write roster file {path}: {e}") from e
    return path
