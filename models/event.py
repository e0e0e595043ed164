"""Event models.

Three shapes describe an event through its life:

- EventTemplate: the fields every occurrence of a schedule shares.
- EventForm: a template placed on a date with a repeat rule. This is what a
  caller submits and what the instance generator produces; it has no
  identity.
- Event: a stored occurrence. Only the persistence layer creates these, via
  ``materialize``, assigning an id and (for repeating batches) a group id.
"""

import re
from datetime import time
from typing import Any, Optional

from pydantic import BaseModel, Field, field_validator, model_validator

from models.calendar_date import CalendarDate
from models.recurrence import NO_REPEAT, RecurrenceRule


CLOCK_TIME_PATTERN = re.compile(r"^(\d{1,2}):(\d{2})$")


class EventTemplate(BaseModel):
    """Non-date fields shared verbatim by every occurrence of an event.

    Args:
        title: Event title.
        start_time: Local wall-clock start time (HH:MM).
        end_time: Local wall-clock end time (HH:MM).
        description: Event description.
        location: Event location.
        category: Free-form category label.
        notification_time: Minutes before the start to notify.
    """

    title: str = Field(min_length=1, description="Event title")
    start_time: str = Field(description="Start time (HH:MM)")
    end_time: str = Field(description="End time (HH:MM)")
    description: str = Field(default="", description="Event description")
    location: str = Field(default="", description="Event location")
    category: str = Field(default="", description="Event category")
    notification_time: int = Field(
        default=10, ge=0, description="Notification lead time in minutes"
    )

    @field_validator("start_time", "end_time")
    @classmethod
    def validate_clock_time(cls, value: str) -> str:
        """Normalize a wall-clock time to HH:MM.

        Args:
            value: Time string such as "9:05" or "09:05".

        Returns:
            The time formatted as HH:MM.

        Raises:
            ValueError: If the value is not a valid time of day.
        """
        match = CLOCK_TIME_PATTERN.match(value.strip())
        if match is None:
            raise ValueError(f"Invalid time format: {value!r} (expected HH:MM)")
        hours, minutes = int(match.group(1)), int(match.group(2))
        if hours > 23 or minutes > 59:
            raise ValueError(f"Invalid time of day: {value!r}")
        return f"{hours:02d}:{minutes:02d}"

    @model_validator(mode="after")
    def check_time_order(self) -> "EventTemplate":
        """Require the event to end after it starts.

        Raises:
            ValueError: If end_time is not after start_time.
        """
        if self.end_time <= self.start_time:
            raise ValueError("end_time must be after start_time")
        return self

    @property
    def start(self) -> time:
        """Start time as ``datetime.time``."""
        return time.fromisoformat(self.start_time)

    @property
    def end(self) -> time:
        """End time as ``datetime.time``."""
        return time.fromisoformat(self.end_time)

    def template_fields(self) -> dict[str, Any]:
        """Return only the template fields of this model.

        Returns:
            Dictionary of the shared, non-date fields.
        """
        return {name: getattr(self, name) for name in EventTemplate.model_fields}


class EventForm(EventTemplate):
    """An event template anchored on a date, with its repeat rule.

    Args:
        date: Date of this (first) occurrence.
        repeat: Repeat rule carried along with every generated instance.
    """

    date: CalendarDate = Field(description="Occurrence date (YYYY-MM-DD)")
    repeat: RecurrenceRule = Field(
        default_factory=lambda: NO_REPEAT.model_copy(), description="Repeat rule"
    )

    @property
    def is_repeating(self) -> bool:
        """Whether this form describes a repeating schedule."""
        return self.repeat.is_repeating

    def on_date(self, occurrence_date: CalendarDate) -> "EventForm":
        """Copy this form onto another date.

        Args:
            occurrence_date: Date of the new occurrence.

        Returns:
            A new EventForm that differs only in its date.
        """
        return self.model_copy(update={"date": occurrence_date})


class Event(EventForm):
    """A stored occurrence with identity fields.

    Args:
        id: Identifier assigned by the store.
        group_id: Shared identifier of a repeating schedule, assigned by the
            store when the occurrence was created in a repeating batch.
    """

    id: str = Field(description="Event identifier")
    group_id: Optional[str] = Field(
        default=None, description="Recurrence group identifier"
    )

    def to_form(self) -> EventForm:
        """Drop the identity fields.

        Returns:
            The EventForm this event was materialized from.
        """
        return EventForm(**{name: getattr(self, name) for name in EventForm.model_fields})


def materialize(
    form: EventForm, event_id: str, group_id: Optional[str] = None
) -> Event:
    """Turn an EventForm into a stored Event.

    Args:
        form: Form to store.
        event_id: Identifier to assign.
        group_id: Recurrence group identifier, if any.

    Returns:
        The stored Event.
    """
    fields = {name: getattr(form, name) for name in EventForm.model_fields}
    return Event(id=event_id, group_id=group_id, **fields)
