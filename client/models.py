"""Client response models for the calendar API client.

This module re-exports the response models of the API layer and defines
client-specific response models that don't exist in the API layer.
"""

from pydantic import BaseModel, Field

# Re-export response models from API layer for client convenience
from api.models import (
    ConflictCheckResponse,
    EventListResponse,
    GroupDeleteResponse,
    RecurrencePreviewResponse,
)

__all__ = [
    # Re-exported from api.models
    "ConflictCheckResponse",
    "EventListResponse",
    "GroupDeleteResponse",
    "RecurrencePreviewResponse",
    # Client-specific models
    "HealthResponse",
]


class HealthResponse(BaseModel):
    """Response model for API health check.

    Attributes:
        status: Health status ("healthy" when the server is up).
    """

    status: str = Field(..., description="Health status")
