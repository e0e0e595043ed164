"""Dependency injection providers for the FastAPI application.

This module defines dependencies that can be injected into route handlers,
providing access to the shared EventStore, the settings, and the clock that
supplies "today" for calendar views.
"""

from datetime import date
from typing import Annotated

from fastapi import Depends

from config import Settings, get_settings
from models.calendar_date import CalendarDate
from models.event_store import EventStore
from models.generator import GenerationLimits


# Global state
# A single in-memory store shared by every request for the life of the process
_event_store: EventStore | None = None


def get_event_store() -> EventStore:
    """Get the shared EventStore instance.

    Returns:
        The shared EventStore.

    Raises:
        RuntimeError: If the store hasn't been initialized yet.
    """
    if _event_store is None:
        raise RuntimeError(
            "EventStore not initialized. Call initialize_event_store() first."
        )

    return _event_store


def initialize_event_store() -> EventStore:
    """Create the shared EventStore.

    Called once when the FastAPI app starts up.

    Returns:
        The newly created, empty EventStore.
    """
    global _event_store

    _event_store = EventStore()
    return _event_store


def shutdown_event_store() -> None:
    """Drop the shared EventStore when the app shuts down."""
    global _event_store

    _event_store = None


def get_generation_limits(
    settings: Annotated[Settings, Depends(get_settings)],
) -> GenerationLimits:
    """Build the generator limits from the configured settings."""
    return settings.generation_limits()


def get_today() -> CalendarDate:
    """Return today's date as seen by the server.

    The only place the system clock is read. Tests override this dependency
    to pin the calendar views to a fixed date.
    """
    return CalendarDate.from_date(date.today())


# Type aliases for dependency injection
EventStoreDep = Annotated[EventStore, Depends(get_event_store)]
GenerationLimitsDep = Annotated[GenerationLimits, Depends(get_generation_limits)]
TodayDep = Annotated[CalendarDate, Depends(get_today)]
