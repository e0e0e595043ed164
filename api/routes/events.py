"""Event endpoints.

Provides the REST API the calendar front end talks to: single-event CRUD
under ``/api/events``, batch operations for repeating schedules under
``/api/events-list``, and an overlap check.
"""

from datetime import date
from typing import Optional

from fastapi import APIRouter, Query, status

from api.dependencies import EventStoreDep, TodayDep
from api.models import (
    ConflictCheckRequest,
    ConflictCheckResponse,
    EventListCreateRequest,
    EventListDeleteRequest,
    EventListResponse,
    EventListUpdateRequest,
    GroupDeleteResponse,
)
from models.calendar_date import CalendarDate
from models.conflicts import find_overlapping_events
from models.event import Event, EventForm
from models.exceptions import EventNotFoundError
from models.filters import CalendarView, get_filtered_events

router = APIRouter(
    prefix="/api",
    tags=["events"],
)


# Single events


@router.get("/events", response_model=EventListResponse)
async def list_events(
    store: EventStoreDep,
    today: TodayDep,
    search: str = Query(default="", description="Text to match in title, description or location"),
    view: Optional[CalendarView] = Query(default=None, description="Calendar view window"),
    reference_date: Optional[date] = Query(
        default=None, alias="date", description="Date the view is centred on (YYYY-MM-DD)"
    ),
):
    """List stored events, optionally searched and limited to a view window.

    Args:
        store: Event store dependency.
        today: Server date, used when no reference date is given.
        search: Case-insensitive text search.
        view: "week" or "month"; omit to skip the date window.
        reference_date: Date the view is centred on.

    Returns:
        Matching events in storage order.
    """
    current = CalendarDate.from_date(reference_date) if reference_date else today
    events = get_filtered_events(store.list_events(), search, current, view)
    return EventListResponse(events=events)


@router.get("/events/{event_id}", response_model=Event)
async def get_event(event_id: str, store: EventStoreDep):
    """Get a single stored event.

    Raises:
        EventNotFoundError: If the event does not exist.
    """
    event = store.get_event(event_id)
    if event is None:
        raise EventNotFoundError([event_id])
    return event


@router.post("/events", response_model=Event, status_code=status.HTTP_201_CREATED)
async def create_event(form: EventForm, store: EventStoreDep):
    """Store a single event.

    Args:
        form: Event to store.
        store: Event store dependency.

    Returns:
        The stored event with its new id.
    """
    return store.create_event(form)


@router.put("/events/{event_id}", response_model=Event)
async def update_event(event_id: str, form: EventForm, store: EventStoreDep):
    """Replace a stored event's content.

    Args:
        event_id: Event to update.
        form: New content.
        store: Event store dependency.

    Returns:
        The updated event.
    """
    return store.update_event(event_id, form)


@router.delete("/events/{event_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_event(event_id: str, store: EventStoreDep):
    """Delete a stored event."""
    store.delete_event(event_id)


@router.post("/events/conflicts", response_model=ConflictCheckResponse)
async def check_conflicts(request: ConflictCheckRequest, store: EventStoreDep):
    """Find stored events overlapping an event about to be saved.

    A conflict is a warning for the caller to show; nothing is refused.

    Args:
        request: Candidate event, with its id when editing.
        store: Event store dependency.

    Returns:
        The overlapping events.
    """
    candidate = EventForm(**request.model_dump(exclude={"id"}))
    conflicts = find_overlapping_events(candidate, store.list_events(), request.id)
    return ConflictCheckResponse(has_conflict=bool(conflicts), conflicts=conflicts)


# Batches


@router.post(
    "/events-list", response_model=list[Event], status_code=status.HTTP_201_CREATED
)
async def create_events(request: EventListCreateRequest, store: EventStoreDep):
    """Store a batch of events.

    Repeating events in the batch share one group id assigned here.

    Args:
        request: Events to store.
        store: Event store dependency.

    Returns:
        The stored events in request order.
    """
    return store.create_events(request.events)


@router.put("/events-list", response_model=list[Event])
async def update_events(request: EventListUpdateRequest, store: EventStoreDep):
    """Update a batch of stored events; nothing changes if any id is unknown."""
    return store.update_events(request.events)


@router.delete("/events-list", status_code=status.HTTP_204_NO_CONTENT)
async def delete_events(request: EventListDeleteRequest, store: EventStoreDep):
    """Delete a batch of stored events; nothing changes if any id is unknown."""
    store.delete_events(request.event_ids)


@router.delete("/events-list/groups/{group_id}", response_model=GroupDeleteResponse)
async def delete_group(group_id: str, store: EventStoreDep):
    """Delete every occurrence of a recurrence group.

    Args:
        group_id: Group to delete.
        store: Event store dependency.

    Returns:
        How many events were removed.
    """
    deleted = store.delete_group(group_id)
    return GroupDeleteResponse(group_id=group_id, deleted=deleted)
