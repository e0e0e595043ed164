"""Search and date-window filtering for stored events.

All functions are stable filters: they keep the input order and never sort.
"""

from typing import Literal, Optional, Sequence, TypeVar

from models.calendar_date import MAX_DATE, MIN_DATE, CalendarDate
from models.event import EventForm


CalendarView = Literal["week", "month"]

EventT = TypeVar("EventT", bound=EventForm)


def _contains_term(target: str, term: str) -> bool:
    return term.lower() in (target or "").lower()


def search_events(events: Sequence[EventT], term: str) -> list[EventT]:
    """Keep events whose title, description or location contains a term.

    Matching is a case-insensitive substring test on any one of the three
    fields. An empty term matches every event.

    Args:
        events: Events to search.
        term: Search text.

    Returns:
        Matching events in input order.
    """
    if not term:
        return list(events)
    return [
        event
        for event in events
        if _contains_term(event.title, term)
        or _contains_term(event.description, term)
        or _contains_term(event.location, term)
    ]


def get_week_dates(reference: CalendarDate) -> list[CalendarDate]:
    """Return the Sunday-to-Saturday week containing a date.

    Weeks that straddle the ends of the supported range (0001-01-01 or
    9999-12-31) are clamped to it, so they hold fewer than seven dates.

    Args:
        reference: Any date in the week.

    Returns:
        Consecutive dates, Sunday first unless clamped.
    """
    sunday = reference.toordinal() - reference.day_of_week
    first = max(sunday, MIN_DATE.toordinal())
    last = min(sunday + 6, MAX_DATE.toordinal())
    return [CalendarDate.from_ordinal(ordinal) for ordinal in range(first, last + 1)]



def get_month_range(reference: CalendarDate) -> tuple[CalendarDate, CalendarDate]:
    """Return the first and last day of the month containing a date."""
    return reference.first_of_month(), reference.last_of_month()


def filter_events_by_date_range(
    events: Sequence[EventT], start: CalendarDate, end: CalendarDate
) -> list[EventT]:
    """Keep events dated within [start, end], both ends inclusive."""
    return [event for event in events if start <= event.date <= end]


def get_view_range(
    reference: CalendarDate, view: CalendarView
) -> tuple[CalendarDate, CalendarDate]:
    """Return the inclusive date window a calendar view shows.

    Args:
        reference: Date the view is centred on.
        view: "week" or "month".

    Returns:
        (first, last) dates of the window.

    Raises:
        ValueError: If the view is not recognised.
    """
    if view == "week":
        week = get_week_dates(reference)
        return week[0], week[-1]
    if view == "month":
        return get_month_range(reference)
    raise ValueError(f"Unknown calendar view: {view!r}")


def get_filtered_events(
    events: Sequence[EventT],
    search_term: str,
    current_date: CalendarDate,
    view: Optional[CalendarView],
) -> list[EventT]:
    """Apply the text search and the view window together.

    Args:
        events: Events to filter.
        search_term: Text to match against title, description or location.
        current_date: Reference date of the view, supplied by the caller.
        view: "week", "month", or None to skip the date window.

    Returns:
        Events passing both filters, in input order.

    Raises:
        ValueError: If the view is not recognised.
    """
    searched = search_events(events, search_term)
    if view is None:
        return searched
    start, end = get_view_range(current_date, view)
    return filter_events_by_date_range(searched, start, end)
