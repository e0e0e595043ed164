"""Exceptions raised by the calendar models.

The generator and filter are pure functions: they either return a complete
result or raise one of these. Hitting a generation safety cap is not an
error and has no exception class.
"""


class CalendarError(ValueError):
    """Base class for invalid calendar input.

    Subclasses ValueError so pydantic validators can raise it directly and
    callers that only care about bad input can catch ValueError.
    """


class InvalidDateError(CalendarError):
    """Raised when a value does not describe a real calendar date.

    Args:
        value: The offending input.
        reason: Why it was rejected.
    """

    def __init__(self, value: object, reason: str = "not a valid YYYY-MM-DD date"):
        self.value = value
        self.reason = reason
        super().__init__(f"Invalid date {value!r}: {reason}")


class InvalidRuleError(CalendarError):
    """Raised when a recurrence rule cannot be expanded.

    Args:
        message: Description of the problem.
    """


class EventNotFoundError(Exception):
    """Raised when stored events are looked up by an unknown id.

    Args:
        event_ids: The ids that were not found.
    """

    def __init__(self, event_ids: list[str]):
        self.event_ids = event_ids
        joined = ", ".join(event_ids)
        super().__init__(f"Event(s) not found: {joined}")
