"""Error types for the round-robin scheduler."""


class SchedulerError(Exception):
    """Base class for all scheduler errors."""


class InvalidRosterError(SchedulerError):
    """Roster cannot produce a schedule (fewer than 2 competitors)."""


class UnknownCompetitorError(SchedulerError, LookupError):
    def __init__(self, name: str):
        super().__init__(f"Competitor not found: {name}")
        self.name = name


class MalformedDateError(SchedulerError, ValueError):
    def __init__(self, value: str):
        super().__init__(f"Invalid date {value!r}. Use YYYY-MM-DD")
        self.value = value


class PersistenceError(SchedulerError):
    """Reading or writing a schedule/roster file failed."""
