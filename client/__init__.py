"""Calendar scheduler API client library.

This module provides a type-safe Python client for the calendar scheduler
REST API.

Example:
    Synchronous usage::

        from client import CalendarClient

        with CalendarClient(base_url="http://localhost:8000") as client:
            client.events.save_event(form)

Exports:
    CalendarClient: Synchronous client for the calendar REST API.

    Exceptions:
        CalendarClientError: Base exception for all client errors.
        ConnectionError: Failed to connect to the server.
        TimeoutError: Request timed out.
        APIError: Server returned an error response.
        BadRequestError: Invalid date or recurrence rule (HTTP 400).
        ValidationError: Request validation failed (HTTP 422).
        NotFoundError: Event not found (HTTP 404).
        ServerError: Server-side error (HTTP 5xx).
"""

from client._events import EventsClient
from client.client import CalendarClient
from client.exceptions import (
    APIError,
    BadRequestError,
    CalendarClientError,
    ConnectionError,
    NotFoundError,
    ServerError,
    TimeoutError,
    ValidationError,
)
from client.models import (
    ConflictCheckResponse,
    EventListResponse,
    GroupDeleteResponse,
    HealthResponse,
    RecurrencePreviewResponse,
)

__all__ = [
    # Main client
    "CalendarClient",
    "EventsClient",
    # Response models
    "ConflictCheckResponse",
    "EventListResponse",
    "GroupDeleteResponse",
    "HealthResponse",
    "RecurrencePreviewResponse",
    # Exceptions
    "CalendarClientError",
    "ConnectionError",
    "TimeoutError",
    "APIError",
    "BadRequestError",
    "ValidationError",
    "NotFoundError",
    "ServerError",
]
