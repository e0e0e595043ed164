"""Calendar scheduler data models package.

This package contains the calendar date model, recurrence rules, event
shapes, the recurrence instance generator, view filters, conflict detection
and the in-memory event store.
"""

from models.calendar_date import CalendarDate, days_in_month, is_leap_year
from models.conflicts import find_overlapping_events, is_overlapping
from models.event import Event, EventForm, EventTemplate, materialize
from models.event_store import EventStore
from models.exceptions import (
    CalendarError,
    EventNotFoundError,
    InvalidDateError,
    InvalidRuleError,
)
from models.filters import CalendarView, get_filtered_events
from models.generator import (
    GenerationLimits,
    effective_end_date,
    generate_occurrence_dates,
    generate_repeat_instances,
)
from models.recurrence import RecurrenceRule, RepeatType

__all__ = [
    "CalendarDate",
    "days_in_month",
    "is_leap_year",
    "RecurrenceRule",
    "RepeatType",
    "EventTemplate",
    "EventForm",
    "Event",
    "materialize",
    "GenerationLimits",
    "effective_end_date",
    "generate_occurrence_dates",
    "generate_repeat_instances",
    "CalendarView",
    "get_filtered_events",
    "is_overlapping",
    "find_overlapping_events",
    "EventStore",
    "CalendarError",
    "InvalidDateError",
    "InvalidRuleError",
    "EventNotFoundError",
]
