"""Main calendar client class.

CalendarClient is the entry point for talking to the calendar scheduler REST
API. Event operations live on the ``events`` sub-client.

Example:
    Synchronous usage::

        from client import CalendarClient

        with CalendarClient(base_url="http://localhost:8000") as client:
            events = client.events.list_events(view="week", on_date=date(2025, 7, 1))
"""

from typing import Any

from client._events import EventsClient
from client._http import HTTPClient
from client.models import HealthResponse


class CalendarClient:
    """Synchronous client for the calendar scheduler REST API.

    Supports the context manager protocol for automatic resource cleanup.

    Example:
        Basic usage with context manager::

            with CalendarClient(base_url="http://localhost:8000") as client:
                created = client.events.save_event(form)
                client.events.delete_group(created[0].group_id)

        Manual lifecycle management::

            client = CalendarClient()
            try:
                client.events.list_events()
            finally:
                client.close()
    """

    def __init__(
        self,
        base_url: str = "http://localhost:8000",
        timeout: float = 30.0,
        retry_enabled: bool = False,
        max_retries: int = 3,
        transport: Any = None,
    ) -> None:
        """Initialize the calendar client.

        Args:
            base_url: The base URL of the calendar server.
            timeout: Request timeout in seconds.
            retry_enabled: Whether to automatically retry on transient failures.
                Retries on connection errors, timeouts, and HTTP 502/503/504
                with exponential backoff.
            max_retries: Maximum number of retry attempts when retry is enabled.
            transport: Custom HTTP transport (e.g., a test transport).
        """
        self._base_url = base_url
        self._timeout = timeout

        self._http = HTTPClient(
            base_url=base_url,
            timeout=timeout,
            retry_enabled=retry_enabled,
            max_retries=max_retries,
            transport=transport,
        )

        self._events: EventsClient | None = None

    def __enter__(self) -> "CalendarClient":
        return self

    def __exit__(self, *args: Any) -> None:
        self.close()

    def close(self) -> None:
        """Close the client and release resources."""
        self._http.close()

    @property
    def events(self) -> EventsClient:
        """Access the event endpoints (/api/events*, /api/recurrence/*).

        Returns:
            EventsClient instance for event operations.
        """
        if self._events is None:
            self._events = EventsClient(self._http)
        return self._events

    def health(self) -> HealthResponse:
        """Check the server health endpoint.

        Returns:
            The server's health status.
        """
        data = self._http.get("/health")
        return HealthResponse(**data)

    @property
    def base_url(self) -> str:
        """The base URL of the calendar server."""
        return self._base_url
