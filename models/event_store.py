"""In-memory event store.

The persistence side of the scheduler: it accepts single events or batches
of generated occurrences, assigns identities, and serves update, delete and
listing requests. Group ids for repeating schedules are assigned here and
nowhere else.
"""

import logging
import threading
from datetime import datetime, timezone
from typing import Any, Optional, Sequence
from uuid import uuid4

from pydantic import BaseModel, Field, PrivateAttr

from models.event import Event, EventForm, materialize
from models.exceptions import EventNotFoundError

logger = logging.getLogger(__name__)


def new_event_id() -> str:
    """Generate a new event identifier."""
    return str(uuid4())


def new_group_id() -> str:
    """Generate a new recurrence group identifier."""
    return f"repeat-{uuid4()}"


class EventStore(BaseModel):
    """Stored events keyed by id, kept in insertion order.

    Args:
        events: Dict mapping event id to Event.
        last_updated: When the store was last modified.
        update_count: Number of mutating operations applied.
    """

    events: dict[str, Event] = Field(
        default_factory=dict, description="Events by ID"
    )
    last_updated: datetime = Field(
        default_factory=lambda: datetime.now(timezone.utc),
        description="Last update time",
    )
    update_count: int = Field(default=0, description="Number of updates")

    _lock: Any = PrivateAttr(default_factory=threading.RLock)

    def _touch(self) -> None:
        self.last_updated = datetime.now(timezone.utc)
        self.update_count += 1

    def _require(self, event_ids: Sequence[str]) -> None:
        missing = [event_id for event_id in event_ids if event_id not in self.events]
        if missing:
            raise EventNotFoundError(missing)

    # ===== Queries =====

    def list_events(self) -> list[Event]:
        """Return all stored events in insertion order."""
        with self._lock:
            return list(self.events.values())

    def get_event(self, event_id: str) -> Optional[Event]:
        """Get an event by id, or None if it does not exist."""
        return self.events.get(event_id)

    def get_group(self, group_id: str) -> list[Event]:
        """Return every stored occurrence of a recurrence group."""
        with self._lock:
            return [event for event in self.events.values() if event.group_id == group_id]

    # ===== Create =====

    def create_event(self, form: EventForm) -> Event:
        """Store a single event.

        Args:
            form: Event to store.

        Returns:
            The stored Event with a fresh id and no group id.
        """
        with self._lock:
            event = materialize(form, new_event_id())
            self.events[event.id] = event
            self._touch()

        logger.info(f"Created event {event.id} on {event.date}")
        return event

    def create_events(self, forms: Sequence[EventForm]) -> list[Event]:
        """Store a batch of events, typically the generator's output.

        Repeating forms in the batch share one newly assigned group id;
        non-repeating forms get none.

        Args:
            forms: Events to store.

        Returns:
            The stored Events, in input order.
        """
        group_id = new_group_id() if any(form.is_repeating for form in forms) else None

        with self._lock:
            created = [
                materialize(
                    form,
                    new_event_id(),
                    group_id if form.is_repeating else None,
                )
                for form in forms
            ]
            for event in created:
                self.events[event.id] = event
            self._touch()

        logger.info(
            f"Created {len(created)} events"
            + (f" in group {group_id}" if group_id else "")
        )
        return created

    # ===== Update =====

    def update_event(self, event_id: str, form: EventForm) -> Event:
        """Replace an event's content, keeping its id and group id.

        Args:
            event_id: Event to update.
            form: New content.

        Returns:
            The updated Event.

        Raises:
            EventNotFoundError: If the event does not exist.
        """
        with self._lock:
            self._require([event_id])
            existing = self.events[event_id]
            event = materialize(form, existing.id, existing.group_id)
            self.events[event_id] = event
            self._touch()

        logger.info(f"Updated event {event_id}")
        return event

    def update_events(self, events: Sequence[Event]) -> list[Event]:
        """Replace several events at once.

        Every id is checked before any change is applied, so a batch with an
        unknown id leaves the store untouched.

        Args:
            events: Events carrying their ids and new content.

        Returns:
            The updated Events.

        Raises:
            EventNotFoundError: If any event does not exist.
        """
        with self._lock:
            self._require([event.id for event in events])
            updated = []
            for event in events:
                existing = self.events[event.id]
                stored = materialize(event, existing.id, existing.group_id)
                self.events[event.id] = stored
                updated.append(stored)
            self._touch()

        logger.info(f"Updated {len(updated)} events")
        return updated

    # ===== Delete =====

    def delete_event(self, event_id: str) -> None:
        """Delete one event.

        Raises:
            EventNotFoundError: If the event does not exist.
        """
        self.delete_events([event_id])

    def delete_events(self, event_ids: Sequence[str]) -> None:
        """Delete several events; all ids are checked first.

        Raises:
            EventNotFoundError: If any event does not exist.
        """
        with self._lock:
            self._require(event_ids)
            for event_id in event_ids:
                self.events.pop(event_id, None)
            self._touch()

        logger.info(f"Deleted {len(event_ids)} event(s)")

    def delete_group(self, group_id: str) -> int:
        """Delete every occurrence of a recurrence group.

        Args:
            group_id: Group to delete.

        Returns:
            Number of events deleted (0 if the group is unknown).
        """
        with self._lock:
            doomed = [
                event_id
                for event_id, event in self.events.items()
                if event.group_id == group_id
            ]
            for event_id in doomed:
                del self.events[event_id]
            if doomed:
                self._touch()

        logger.info(f"Deleted {len(doomed)} event(s) in group {group_id}")
        return len(doomed)

    def clear(self) -> None:
        """Remove every stored event."""
        with self._lock:
            self.events.clear()
            self._touch()

    def get_snapshot(self) -> dict[str, Any]:
        """Get a JSON-ready snapshot of the store.

        Returns:
            Dictionary with all events and bookkeeping counters.
        """
        with self._lock:
            return {
                "last_updated": self.last_updated.isoformat(),
                "update_count": self.update_count,
                "event_count": len(self.events),
                "events": [event.model_dump(mode="json") for event in self.events.values()],
            }
