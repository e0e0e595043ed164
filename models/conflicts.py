"""Overlap detection between events.

Two events conflict when they fall on the same date and their wall-clock
intervals intersect. Intervals that only touch (one ends at 10:00, the other
starts at 10:00) do not conflict.
"""

from typing import Optional, Sequence

from models.event import Event, EventForm


def is_overlapping(first: EventForm, second: EventForm) -> bool:
    """Check whether two events overlap in time.

    Args:
        first: An event.
        second: Another event.

    Returns:
        True if both are on the same date and their times intersect.
    """
    if first.date != second.date:
        return False
    return first.start < second.end and second.start < first.end


def find_overlapping_events(
    candidate: EventForm,
    events: Sequence[Event],
    candidate_id: Optional[str] = None,
) -> list[Event]:
    """Find stored events that overlap a candidate.

    Args:
        candidate: Event about to be saved.
        events: Stored events to check against.
        candidate_id: Id of the candidate when it is itself stored, so an
            event being edited is not reported as conflicting with itself.
            Taken from the candidate when it is an Event.

    Returns:
        Overlapping events in input order.
    """
    if candidate_id is None and isinstance(candidate, Event):
        candidate_id = candidate.id
    return [
        event
        for event in events
        if event.id != candidate_id and is_overlapping(candidate, event)
    ]
