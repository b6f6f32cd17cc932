"""Config loading and validation for the round-robin scheduler."""

import logging
import re
from datetime import date
from pathlib import Path

import yaml

from rrsched.errors import MalformedDateError, PersistenceError
from rrsched.models import Competitor
from rrsched.roster import Roster
from rrsched.stats import DEFAULT_BACK_TO_BACK_DAYS

logger = logging.getLogger(__name__)

_DATE_RE = re.compile(r"[0-9]{4}-[0-9]{2}-[0-9]{2}")


def parse_date(s) -> date:
    """Parse date string YYYY-MM-DD."""
    if isinstance(s, date):
        return s
    text = str(s).strip()
    # fromisoformat also takes 20240301 and 2024-W09-5 on newer Pythons
    if not _DATE_RE.fullmatch(text):
        raise MalformedDateError(text)
    try:
        return date.fromisoformat(text)
    except ValueError:
        raise MalformedDateError(text) from None


def load_config(path: str | Path) -> dict:
    """Load and validate config YAML, returning structured data.

    Returns dict with:
    - season: {name, start_date, max_matches_per_day, back_to_back_days}
    - roster: Roster
    - venue_info: dict[venue name -> {city, capacity}]
    """
    path = Path(path)
    try:
        with open(path, encoding="utf-8") as f:
            raw = yaml.safe_load(f) or {}
    except (OSError, UnicodeDecodeError) as e:
        raise PersistenceError(f"Cannot read config {path}: {e}") from e
    except yaml.YAMLError as e:
        raise PersistenceError(f"Invalid YAML in {path}: {e}") from e

    # Season
    raw_season = raw.get("season", {})
    max_per_day = raw_season.get("max_matches_per_day")
    season = {
        "name": str(raw_season.get("name", "")),
        "start_date": (parse_date(raw_season["start_date"])
                       if raw_season.get("start_date") else None),
        "max_matches_per_day": int(max_per_day) if max_per_day else None,
        "back_to_back_days": int(raw_season.get("back_to_back_days",
                                                DEFAULT_BACK_TO_BACK_DAYS)),
    }

    # Competitors
    roster = Roster()
    errors = []
    for i, cdata in enumerate(raw.get("competitors", []), 1):
        name = str(cdata.get("name", "")).strip()
        home_venue = str(cdata.get("home_venue", "")).strip()
        if not name:
            errors.append(f"Competitor #{i} has no name")
            continue
        if not home_venue:
            errors.append(f"Competitor {name} has no home_venue")
            continue
        added = roster.add(Competitor(
            name=name,
            city=str(cdata.get("city", "")).strip(),
            captain=str(cdata.get("captain", "")).strip(),
            home_venue=home_venue,
        ))
        if not added:
            errors.append(f"Duplicate competitor {name}")

    # Venues (city/capacity overrides)
    venue_info: dict[str, dict] = {}
    home_venues = {c.home_venue for c in roster}
    for name, vdata in (raw.get("venues") or {}).items():
        vdata = vdata or {}
        if name not in home_venues:
            errors.append(f"Venue {name} is not any competitor's home venue")
        info = {}
        if "city" in vdata:
            info["city"] = str(vdata["city"])
        if "capacity" in vdata:
            info["capacity"] = int(vdata["capacity"])
        venue_info[name] = info

    if errors:
        logger.warning("Config validation errors in %s:", path)
        for e in errors:
            logger.warning("  %s", e)

    return {
        "season": season,
        "roster": roster,
        "venue_info": venue_info,
    }
