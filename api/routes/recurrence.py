"""Recurrence endpoints.

Lets a caller see what a repeating event will expand to before saving it.
"""

from fastapi import APIRouter

from api.dependencies import GenerationLimitsDep
from api.models import RecurrencePreviewResponse
from models.event import EventForm
from models.generator import effective_end_date, generate_repeat_instances

router = APIRouter(
    prefix="/api/recurrence",
    tags=["recurrence"],
)


@router.post("/instances", response_model=RecurrencePreviewResponse)
async def preview_instances(form: EventForm, limits: GenerationLimitsDep):
    """Expand an event form into its occurrences without storing them.

    Args:
        form: Anchor form; its date is the first occurrence.
        limits: Generation limits from the settings.

    Returns:
        The occurrence dates and one form per occurrence.
    """
    instances = generate_repeat_instances(form, limits)
    if form.is_repeating:
        end_date = effective_end_date(form.date, form.repeat, limits.default_span_days)
    else:
        end_date = form.date

    return RecurrencePreviewResponse(
        dates=[instance.date for instance in instances],
        events=instances,
        count=len(instances),
        end_date=end_date,
        description=form.repeat.describe(),
    )
