"""Shared request and response models for API endpoints."""

from typing import Optional

from pydantic import BaseModel, Field

from models.calendar_date import CalendarDate
from models.event import Event, EventForm


# Request Models


class EventListCreateRequest(BaseModel):
    """Request to store a batch of events.

    Args:
        events: Forms to store, usually the output of the instance generator.
    """

    events: list[EventForm] = Field(min_length=1, description="Events to create")


class EventListUpdateRequest(BaseModel):
    """Request to update a batch of stored events.

    Args:
        events: Events carrying their ids and new content.
    """

    events: list[Event] = Field(min_length=1, description="Events to update")


class EventListDeleteRequest(BaseModel):
    """Request to delete a batch of stored events.

    Args:
        event_ids: Ids of the events to delete.
    """

    event_ids: list[str] = Field(min_length=1, description="Event IDs to delete")


class ConflictCheckRequest(EventForm):
    """An event about to be saved, checked for overlaps.

    Args:
        id: Id of the event when it is already stored (editing), so it is
            not reported as overlapping itself.
    """

    id: Optional[str] = Field(default=None, description="Stored event ID, if editing")


# Response Models


class EventListResponse(BaseModel):
    """Response listing events.

    Args:
        events: Matching events in storage order.
    """

    events: list[Event]


class GroupDeleteResponse(BaseModel):
    """Response to deleting a recurrence group.

    Args:
        group_id: The group that was deleted.
        deleted: Number of events removed.
    """

    group_id: str
    deleted: int


class RecurrencePreviewResponse(BaseModel):
    """Occurrences a form would expand to, without storing anything.

    Args:
        dates: Occurrence dates in ascending order.
        events: One form per occurrence.
        count: Number of occurrences.
        end_date: Effective end date used for the expansion.
        description: Human-readable rule description.
    """

    dates: list[CalendarDate]
    events: list[EventForm]
    count: int
    end_date: CalendarDate
    description: str


class ConflictCheckResponse(BaseModel):
    """Stored events overlapping a candidate.

    Args:
        has_conflict: Whether any overlap was found.
        conflicts: The overlapping events.
    """

    has_conflict: bool
    conflicts: list[Event]
