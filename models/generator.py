"""Recurrence instance generator.

Expands an anchor EventForm and its RecurrenceRule into the concrete,
date-ascending list of occurrences. Every candidate is computed from the
anchor and the step number, never from the previous candidate, so a skipped
month or year cannot drift the cadence.

Termination is bounded three ways: the effective end date, a cap on candidate
steps examined and a cap on occurrences emitted. Reaching a cap truncates the
result and logs a warning; it is not an error.
"""

import logging
from typing import Iterator, Optional

from pydantic import BaseModel, Field

from models.calendar_date import MAX_DATE, CalendarDate
from models.event import EventForm
from models.exceptions import InvalidRuleError
from models.recurrence import RecurrenceRule, validate_rule

logger = logging.getLogger(__name__)


DEFAULT_MAX_OCCURRENCES = 365
DEFAULT_MAX_STEPS = 1000
DEFAULT_SPAN_DAYS = 365


class GenerationLimits(BaseModel):
    """Safety limits applied while expanding a rule.

    Args:
        max_occurrences: Maximum number of occurrences returned.
        max_steps: Maximum number of candidate steps examined, including
            skipped months and years.
        default_span_days: Days after the anchor used as the end date when
            the rule has none.
    """

    max_occurrences: int = Field(default=DEFAULT_MAX_OCCURRENCES, ge=1)
    max_steps: int = Field(default=DEFAULT_MAX_STEPS, ge=1)
    default_span_days: int = Field(default=DEFAULT_SPAN_DAYS, ge=0)


DEFAULT_LIMITS = GenerationLimits()


def effective_end_date(
    anchor: CalendarDate,
    rule: RecurrenceRule,
    default_span_days: int = DEFAULT_SPAN_DAYS,
) -> CalendarDate:
    """Return the last date an occurrence may fall on.

    Args:
        anchor: Date of the first occurrence.
        rule: Recurrence rule.
        default_span_days: Span used when the rule has no end date.

    Returns:
        The rule's end date, or the anchor plus the default span (clamped to
        the last supported date).
    """
    if rule.end_date is not None:
        return rule.end_date
    if anchor.toordinal() + default_span_days > MAX_DATE.toordinal():
        return MAX_DATE
    return anchor.add_days(default_span_days)


def _month_candidate(
    anchor: CalendarDate, months: int
) -> Optional[tuple[CalendarDate, Optional[CalendarDate]]]:
    year, month_index = divmod(anchor.year * 12 + (anchor.month - 1) + months, 12)
    marker = CalendarDate.try_create(year, month_index + 1, 1)
    if marker is None:
        return None
    return marker, CalendarDate.try_create(year, month_index + 1, anchor.day)


def _year_candidate(
    anchor: CalendarDate, years: int
) -> Optional[tuple[CalendarDate, Optional[CalendarDate]]]:
    marker = CalendarDate.try_create(anchor.year + years, anchor.month, 1)
    if marker is None:
        return None
    return marker, CalendarDate.try_create(anchor.year + years, anchor.month, anchor.day)


def _iter_candidates(
    anchor: CalendarDate, rule: RecurrenceRule, end: CalendarDate
) -> Iterator[tuple[CalendarDate, Optional[CalendarDate]]]:
    """Yield (position, candidate) pairs for k = 0, 1, 2, ...

    ``position`` is the date the step stands for and is what the end-date
    check compares against. ``candidate`` is the occurrence for the step, or
    None when the step lands on a month or year lacking the anchor's day.
    Iteration ends once a step would leave the supported date range.
    """
    step = 0
    while True:
        offset = step * rule.interval
        if rule.type in ("daily", "weekly"):
            days = offset * (7 if rule.type == "weekly" else 1)
            if anchor.toordinal() + days > end.toordinal():
                return
            candidate = anchor.add_days(days)
            pair = (candidate, candidate)
        elif rule.type == "monthly":
            pair = _month_candidate(anchor, offset)
        elif rule.type == "yearly":
            pair = _year_candidate(anchor, offset)
        else:
            raise InvalidRuleError(f"Cannot step a {rule.type!r} rule")

        if pair is None:
            return
        yield pair
        step += 1


def generate_occurrence_dates(
    anchor: CalendarDate,
    rule: RecurrenceRule,
    limits: Optional[GenerationLimits] = None,
) -> list[CalendarDate]:
    """Expand a rule into the dates on which occurrences exist.

    Args:
        anchor: Date of the first occurrence.
        rule: Recurrence rule.
        limits: Safety limits (defaults to DEFAULT_LIMITS).

    Returns:
        Strictly increasing list of dates, all on or before the effective end
        date. Never empty: the anchor itself is always included.

    Raises:
        InvalidRuleError: If the rule is invalid or ends before the anchor.
    """
    limits = limits or DEFAULT_LIMITS
    validate_rule(rule)

    if not rule.is_repeating:
        return [anchor]

    end = effective_end_date(anchor, rule, limits.default_span_days)
    if end < anchor:
        raise InvalidRuleError(
            f"end_date {end} is before the first occurrence {anchor}"
        )

    dates: list[CalendarDate] = []
    previous: Optional[CalendarDate] = None
    steps = 0

    for position, candidate in _iter_candidates(anchor, rule, end):
        if steps >= limits.max_steps:
            logger.warning(
                f"Stopped expanding {rule.type} rule from {anchor} after "
                f"{limits.max_steps} steps with {len(dates)} occurrences"
            )
            break
        steps += 1

        if position > end:
            break
        if candidate is None:
            continue
        if candidate > end:
            break
        if previous is not None and candidate <= previous:
            logger.warning(
                f"Step did not advance past {previous} for {rule.type} rule "
                f"from {anchor}; stopping"
            )
            break
        if len(dates) >= limits.max_occurrences:
            logger.warning(
                f"Reached {limits.max_occurrences} occurrences for {rule.type} "
                f"rule from {anchor}; dropping {candidate} and later dates"
            )
            break

        dates.append(candidate)
        previous = candidate

    logger.debug(
        f"Expanded {rule.type} rule (interval {rule.interval}) from {anchor} "
        f"to {end}: {len(dates)} occurrences in {steps} steps"
    )
    return dates


def generate_repeat_instances(
    form: EventForm, limits: Optional[GenerationLimits] = None
) -> list[EventForm]:
    """Expand an anchor form into one form per occurrence.

    Every returned form carries the anchor's template fields and rule
    verbatim; only ``date`` differs. No ids or group ids are assigned here.

    Args:
        form: Anchor form; its date is the first occurrence.
        limits: Safety limits (defaults to DEFAULT_LIMITS).

    Returns:
        Date-ascending list of forms. A non-repeating form yields a list
        holding just that form.

    Raises:
        InvalidRuleError: If the form's rule cannot be expanded.
    """
    if not form.is_repeating:
        validate_rule(form.repeat)
        return [form]

    return [
        form.on_date(occurrence_date)
        for occurrence_date in generate_occurrence_dates(form.date, form.repeat, limits)
    ]
