"""Events sub-client for the calendar API.

This module provides EventsClient for the event endpoints (/api/events*,
/api/events-list*, /api/recurrence/*).

This is an internal module. Import from `client` instead.
"""

from datetime import date
from typing import Any

from client._base import BaseClient
from client.models import (
    ConflictCheckResponse,
    EventListResponse,
    GroupDeleteResponse,
    RecurrencePreviewResponse,
)
from models.calendar_date import CalendarDate
from models.event import Event, EventForm
from models.filters import CalendarView
from models.generator import GenerationLimits, generate_repeat_instances


def _filter_none_params(**params: Any) -> dict[str, Any]:
    """Filter out None values from parameters dict."""
    return {k: v for k, v in params.items() if v is not None}


def _form_body(form: EventForm) -> dict[str, Any]:
    """Serialize a form (or event) to its JSON wire shape."""
    return form.model_dump(mode="json")


class EventsClient(BaseClient):
    """Synchronous client for the calendar event endpoints.

    Example:
        with CalendarClient() as client:
            form = EventForm(
                title="Standup",
                date="2025-07-01",
                start_time="09:00",
                end_time="09:15",
                repeat={"type": "weekly", "interval": 1, "end_date": "2025-07-29"},
            )
            created = client.events.save_event(form)
            print(f"Stored {len(created)} occurrences")
    """

    _EVENTS_PATH = "/api/events"
    _EVENTS_LIST_PATH = "/api/events-list"
    _RECURRENCE_PATH = "/api/recurrence"

    # Single events

    def list_events(
        self,
        search: str | None = None,
        view: CalendarView | None = None,
        on_date: CalendarDate | date | None = None,
    ) -> list[Event]:
        """List stored events.

        Args:
            search: Case-insensitive text matched against title, description
                and location.
            view: "week" or "month" to limit results to that view window.
            on_date: Date the view is centred on (server date if omitted).

        Returns:
            Matching events.
        """
        params = _filter_none_params(
            search=search or None,
            view=view,
            date=on_date.isoformat() if on_date is not None else None,
        )
        data = self._get(self._EVENTS_PATH, params=params)
        return EventListResponse(**data).events

    def get(self, event_id: str) -> Event:
        """Get a stored event.

        Raises:
            NotFoundError: If the event does not exist.
        """
        data = self._get(f"{self._EVENTS_PATH}/{event_id}")
        return Event(**data)

    def create(self, form: EventForm) -> Event:
        """Store a single event.

        Args:
            form: The event to store.

        Returns:
            The stored event with its server-assigned id.
        """
        data = self._post(self._EVENTS_PATH, json=_form_body(form))
        return Event(**data)

    def update(self, event_id: str, form: EventForm) -> Event:
        """Replace a stored event's content.

        Raises:
            NotFoundError: If the event does not exist.
        """
        data = self._put(f"{self._EVENTS_PATH}/{event_id}", json=_form_body(form))
        return Event(**data)

    def delete(self, event_id: str) -> None:
        """Delete a stored event.

        Raises:
            NotFoundError: If the event does not exist.
        """
        self._delete(f"{self._EVENTS_PATH}/{event_id}")

    # Batches

    def create_many(self, forms: list[EventForm]) -> list[Event]:
        """Store a batch of events.

        Repeating forms in the batch are given one shared group id by the
        server.

        Returns:
            The stored events in the order given.
        """
        body = {"events": [_form_body(form) for form in forms]}
        data = self._post(self._EVENTS_LIST_PATH, json=body)
        return [Event(**item) for item in data]

    def update_many(self, events: list[Event]) -> list[Event]:
        """Update a batch of stored events.

        Raises:
            NotFoundError: If any id is unknown; nothing is changed.
        """
        body = {"events": [_form_body(event) for event in events]}
        data = self._put(self._EVENTS_LIST_PATH, json=body)
        return [Event(**item) for item in data]

    def delete_many(self, event_ids: list[str]) -> None:
        """Delete a batch of stored events.

        Raises:
            NotFoundError: If any id is unknown; nothing is deleted.
        """
        self._delete(self._EVENTS_LIST_PATH, json={"event_ids": event_ids})

    def delete_group(self, group_id: str) -> int:
        """Delete every occurrence of a recurrence group.

        Returns:
            Number of events removed.
        """
        data = self._delete(f"{self._EVENTS_LIST_PATH}/groups/{group_id}")
        return GroupDeleteResponse(**data).deleted

    # Recurrence and conflicts

    def preview(self, form: EventForm) -> RecurrencePreviewResponse:
        """Ask the server what a form expands to, without storing it."""
        data = self._post(f"{self._RECURRENCE_PATH}/instances", json=_form_body(form))
        return RecurrencePreviewResponse(**data)

    def find_conflicts(
        self, form: EventForm, event_id: str | None = None
    ) -> ConflictCheckResponse:
        """Find stored events overlapping a form.

        Args:
            form: The event about to be saved.
            event_id: Id of the event being edited, so it is not reported
                against itself. Taken from the form when it is an Event.
        """
        body = _form_body(form)
        if event_id is None and isinstance(form, Event):
            event_id = form.id
        body.pop("group_id", None)
        body["id"] = event_id
        data = self._post(f"{self._EVENTS_PATH}/conflicts", json=body)
        return ConflictCheckResponse(**data)

    # Composite operations

    def save_event(
        self,
        data: EventForm,
        editing: bool = False,
        limits: GenerationLimits | None = None,
    ) -> list[Event]:
        """Save an event the way the calendar form does.

        A new repeating event is expanded locally and stored as one batch;
        a new single event goes to the single-event endpoint. When editing,
        a repeating occurrence is updated through the batch endpoint and a
        single event through the single-event endpoint.

        Args:
            data: The form to save. Must be an Event when editing.
            editing: Whether ``data`` is an already stored event.
            limits: Generation limits for the local expansion.

        Returns:
            The stored events.

        Raises:
            ValueError: If editing and ``data`` carries no id.
        """
        if editing:
            if not isinstance(data, Event):
                raise ValueError("Editing requires a stored Event with an id")
            if data.is_repeating:
                return self.update_many([data])
            return [self.update(data.id, data.to_form())]

        if data.is_repeating:
            return self.create_many(generate_repeat_instances(data, limits))
        return [self.create(data)]

    def delete_event(self, event: Event) -> None:
        """Delete an event the way the calendar list does.

        Repeating occurrences go through the batch endpoint, others through
        the single-event endpoint.
        """
        if event.is_repeating:
            self.delete_many([event.id])
        else:
            self.delete(event.id)
