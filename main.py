"""Main entry point for the calendar scheduler FastAPI application.

This module creates and configures the FastAPI app instance that serves the
REST API for storing, searching and expanding calendar events.

To run the development server:
    uv run uvicorn main:app --reload

To run in production:
    uv run uvicorn main:app --host 0.0.0.0 --port 8000
"""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from pydantic import ValidationError

from api.dependencies import initialize_event_store, shutdown_event_store
from api.exceptions import (
    calendar_error_handler,
    event_not_found_handler,
    generic_exception_handler,
    runtime_error_handler,
    validation_exception_handler,
    value_error_handler,
)
from api.routes import events as events_routes
from api.routes import recurrence as recurrence_routes
from config import get_settings
from models.exceptions import CalendarError, EventNotFoundError

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Manage application lifespan events.

    Creates the shared event store at startup and drops it at shutdown.

    Args:
        app: The FastAPI application instance.

    Yields:
        Control back to FastAPI to handle requests.
    """
    settings = get_settings()
    logging.basicConfig(level=settings.log_level)

    logger.info("Starting calendar scheduler - initializing EventStore")
    initialize_event_store()

    yield

    logger.info("Shutting down calendar scheduler")
    shutdown_event_store()


app = FastAPI(
    title="Calendar Scheduler",
    description="API for scheduling calendar events with recurrence",
    version="0.1.0",
    lifespan=lifespan,
)

# Register exception handlers
# Handlers are matched on the exception's MRO, so subclasses win over ValueError
app.add_exception_handler(EventNotFoundError, event_not_found_handler)
app.add_exception_handler(CalendarError, calendar_error_handler)
app.add_exception_handler(ValidationError, validation_exception_handler)
app.add_exception_handler(ValueError, value_error_handler)
app.add_exception_handler(RuntimeError, runtime_error_handler)
app.add_exception_handler(Exception, generic_exception_handler)

app.include_router(events_routes.router)
app.include_router(recurrence_routes.router)


@app.get("/")
async def root():
    """Root endpoint - returns a welcome message."""
    return {
        "message": "Welcome to the Calendar Scheduler API",
        "version": "0.1.0",
        "docs_url": "/docs",
    }


@app.get("/health")
async def health_check():
    """Health check endpoint for monitoring."""
    return {"status": "healthy"}
