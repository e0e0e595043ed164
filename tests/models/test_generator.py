"""Unit tests for the recurrence instance generator.

This module tests the expansion of an anchor date and rule into occurrence
dates, covering:

1. One-off events (the anchor comes back unchanged)
2. Daily and weekly stepping
3. Monthly and yearly stepping with skipped months and years
4. End dates, the default span and the safety caps
5. Expanding whole event forms
"""

import logging

import pytest

from models.calendar_date import MAX_DATE, CalendarDate, is_leap_year
from models.exceptions import InvalidRuleError
from models.generator import (
    DEFAULT_LIMITS,
    GenerationLimits,
    effective_end_date,
    generate_occurrence_dates,
    generate_repeat_instances,
)
from models.recurrence import RecurrenceRule
from tests.fixtures.events import create_event_form


def _dates(anchor: str, type: str, interval: int = 1, end_date: str | None = None, limits=None):
    rule = RecurrenceRule(type=type, interval=interval, end_date=end_date)
    return [
        d.isoformat()
        for d in generate_occurrence_dates(CalendarDate.parse(anchor), rule, limits)
    ]


# =============================================================================
# One-off events
# =============================================================================


class TestNoRepeat:
    """Tests for rules of type none."""

    def test_returns_anchor_only(self):
        """A one-off rule yields exactly the anchor date."""
        assert _dates("2025-07-01", "none") == ["2025-07-01"]

    def test_ignores_end_date(self):
        """A one-off rule ignores any end date, even one before the anchor."""
        assert _dates("2025-07-01", "none", end_date="2025-01-01") == ["2025-07-01"]

    def test_instance_is_unchanged_form(self):
        """The single instance keeps every template field."""
        form = create_event_form(description="Quarterly review", location="Room 4")

        instances = generate_repeat_instances(form)

        assert instances == [form]


# =============================================================================
# Daily and weekly
# =============================================================================


class TestDailyAndWeekly:
    """Tests for fixed-length stepping."""

    def test_daily_inclusive_end(self):
        """Daily stepping includes both the anchor and the end date."""
        assert _dates("2024-01-01", "daily", end_date="2024-01-05") == [
            "2024-01-01",
            "2024-01-02",
            "2024-01-03",
            "2024-01-04",
            "2024-01-05",
        ]

    def test_daily_across_year_boundary(self):
        """Daily stepping rolls over December 31."""
        assert _dates("2024-12-30", "daily", end_date="2025-01-02") == [
            "2024-12-30",
            "2024-12-31",
            "2025-01-01",
            "2025-01-02",
        ]

    def test_daily_interval(self):
        """Every third day."""
        assert _dates("2025-02-25", "daily", 3, "2025-03-08") == [
            "2025-02-25",
            "2025-02-28",
            "2025-03-03",
            "2025-03-06",
        ]

    def test_biweekly(self):
        """Every two weeks within a month."""
        assert _dates("2024-01-01", "weekly", 2, "2024-02-01") == [
            "2024-01-01",
            "2024-01-15",
            "2024-01-29",
        ]

    @pytest.mark.parametrize("interval", [1, 2, 3, 5])
    def test_weekly_spacing(self, interval):
        """Consecutive weekly occurrences are exactly 7 * interval days apart."""
        rule = RecurrenceRule(type="weekly", interval=interval, end_date="2025-12-31")
        dates = generate_occurrence_dates(CalendarDate.parse("2025-01-03"), rule)

        gaps = {b.toordinal() - a.toordinal() for a, b in zip(dates, dates[1:])}
        assert gaps == {7 * interval}

    def test_end_date_equal_to_anchor(self):
        """An end date on the anchor yields just the anchor."""
        assert _dates("2025-07-01", "weekly", end_date="2025-07-01") == ["2025-07-01"]


# =============================================================================
# Monthly and yearly
# =============================================================================


class TestMonthly:
    """Tests for calendar-month stepping."""

    def test_day_31_skips_short_months(self):
        """Anchor day 31 only lands in 31-day months."""
        assert _dates("2024-01-31", "monthly", end_date="2024-06-30") == [
            "2024-01-31",
            "2024-03-31",
            "2024-05-31",
        ]

    def test_day_31_over_a_year(self):
        """Every returned date has day 31 and months never shift to month-end."""
        dates = _dates("2025-01-31", "monthly", end_date="2025-12-31")

        assert dates == [
            "2025-01-31",
            "2025-03-31",
            "2025-05-31",
            "2025-07-31",
            "2025-08-31",
            "2025-10-31",
            "2025-12-31",
        ]

    def test_skips_do_not_shift_cadence(self):
        """With interval 2 the cadence stays on odd months even after skips."""
        assert _dates("2025-01-31", "monthly", 2, "2025-12-31") == [
            "2025-01-31",
            "2025-03-31",
            "2025-05-31",
            "2025-07-31",
        ]

    def test_day_30_skips_february(self):
        """February never has a 30th."""
        dates = _dates("2024-01-30", "monthly", end_date="2024-04-30")

        assert dates == ["2024-01-30", "2024-03-30", "2024-04-30"]

    def test_day_29_in_leap_february(self):
        """February 29 exists in leap years only."""
        assert _dates("2024-01-29", "monthly", end_date="2024-03-01") == [
            "2024-01-29",
            "2024-02-29",
        ]
        assert _dates("2025-01-29", "monthly", end_date="2025-03-01") == ["2025-01-29"]

    def test_quarterly_across_years(self):
        """Every three months crosses the year boundary."""
        assert _dates("2024-11-15", "monthly", 3, "2025-08-15") == [
            "2024-11-15",
            "2025-02-15",
            "2025-05-15",
            "2025-08-15",
        ]


class TestYearly:
    """Tests for calendar-year stepping."""

    def test_leap_day_skips_common_years(self):
        """A February 29 anchor only recurs in leap years."""
        assert _dates("2024-02-29", "yearly", end_date="2030-02-28") == [
            "2024-02-29",
            "2028-02-29",
        ]

    def test_leap_day_every_year_is_leap(self):
        """Every returned date is February 29 of a leap year."""
        dates = generate_occurrence_dates(
            CalendarDate.parse("2024-02-29"),
            RecurrenceRule(type="yearly", end_date="2100-12-31"),
        )

        assert all(d.month == 2 and d.day == 29 for d in dates)
        assert all(is_leap_year(d.year) for d in dates)
        # 2100 is not a leap year
        assert dates[-1].isoformat() == "2096-02-29"

    def test_leap_day_interval_keeps_cadence(self):
        """Every third year from 2024 only hits leap years 2024 and 2036."""
        assert _dates("2024-02-29", "yearly", 3, "2040-12-31") == [
            "2024-02-29",
            "2036-02-29",
        ]

    def test_ordinary_date(self):
        """A regular date recurs every year."""
        assert _dates("2023-07-04", "yearly", end_date="2026-07-04") == [
            "2023-07-04",
            "2024-07-04",
            "2025-07-04",
            "2026-07-04",
        ]


# =============================================================================
# End dates and safety caps
# =============================================================================


class TestEffectiveEndDate:
    """Tests for effective_end_date."""

    def test_uses_rule_end_date(self):
        """An explicit end date wins."""
        rule = RecurrenceRule(type="daily", end_date="2025-08-01")

        assert effective_end_date(CalendarDate.parse("2025-07-01"), rule).isoformat() == "2025-08-01"

    def test_default_span_from_anchor(self):
        """Without an end date the schedule runs 365 days from the anchor."""
        rule = RecurrenceRule(type="daily")

        assert effective_end_date(CalendarDate.parse("2025-07-01"), rule).isoformat() == "2026-07-01"

    def test_default_span_clamped(self):
        """The default span stops at the last supported date."""
        rule = RecurrenceRule(type="daily")

        assert effective_end_date(CalendarDate.parse("9999-06-01"), rule) == MAX_DATE


class TestLimits:
    """Tests for the step and occurrence caps."""

    def test_weekly_default_span(self):
        """A weekly rule with no end date covers 53 weeks of the default span."""
        dates = _dates("2025-07-01", "weekly")

        assert len(dates) == 53
        assert dates[-1] == "2026-06-30"

    def test_daily_default_span_hits_occurrence_cap(self, caplog):
        """A daily rule over the default 366-day window is capped at 365."""
        with caplog.at_level(logging.WARNING, logger="models.generator"):
            dates = _dates("2025-07-01", "daily")

        assert len(dates) == DEFAULT_LIMITS.max_occurrences
        assert dates[-1] == "2026-06-30"
        assert "occurrences" in caplog.text

    def test_custom_occurrence_cap(self):
        """A smaller cap truncates without error."""
        limits = GenerationLimits(max_occurrences=3)

        assert _dates("2025-01-01", "daily", end_date="2025-12-31", limits=limits) == [
            "2025-01-01",
            "2025-01-02",
            "2025-01-03",
        ]

    def test_step_cap_counts_skipped_steps(self, caplog):
        """Skipped months count toward the step cap."""
        limits = GenerationLimits(max_steps=2)

        with caplog.at_level(logging.WARNING, logger="models.generator"):
            dates = _dates("2025-01-31", "monthly", end_date="2025-12-31", limits=limits)

        assert dates == ["2025-01-31"]
        assert "steps" in caplog.text

    def test_no_warning_when_end_date_reached(self, caplog):
        """Reaching the end date is normal termination."""
        with caplog.at_level(logging.WARNING, logger="models.generator"):
            _dates("2024-01-01", "daily", end_date="2024-01-05")

        assert caplog.records == []

    def test_stops_at_last_supported_date(self):
        """Stepping past year 9999 ends the schedule instead of failing."""
        assert _dates("9999-12-01", "monthly") == ["9999-12-01"]
        assert _dates("9999-12-30", "daily") == ["9999-12-30", "9999-12-31"]
        assert _dates("9999-03-01", "yearly") == ["9999-03-01"]

    @pytest.mark.parametrize(
        "anchor,type,interval",
        [
            ("2025-01-31", "monthly", 1),
            ("2024-02-29", "yearly", 1),
            ("2025-03-15", "weekly", 3),
            ("2025-12-31", "daily", 7),
        ],
    )
    def test_dates_strictly_increasing_and_bounded(self, anchor, type, interval):
        """Every schedule is strictly increasing and within the effective end."""
        rule = RecurrenceRule(type=type, interval=interval)
        start = CalendarDate.parse(anchor)
        dates = generate_occurrence_dates(start, rule)
        end = effective_end_date(start, rule)

        assert dates[0] == start
        assert all(a < b for a, b in zip(dates, dates[1:]))
        assert all(d <= end for d in dates)


class TestInvalidRules:
    """Tests for rules that cannot be expanded."""

    def test_end_before_anchor(self):
        """An end date before the anchor is rejected."""
        with pytest.raises(InvalidRuleError, match="before the first occurrence"):
            _dates("2025-07-01", "daily", end_date="2025-06-30")

    def test_zero_interval(self):
        """A repeating rule with interval 0 is rejected, not clamped."""
        rule = RecurrenceRule.model_construct(type="weekly", interval=0, end_date=None)

        with pytest.raises(InvalidRuleError):
            generate_occurrence_dates(CalendarDate.parse("2025-07-01"), rule)


# =============================================================================
# Form expansion
# =============================================================================


class TestGenerateRepeatInstances:
    """Tests for expanding whole event forms."""

    def test_instances_copy_template(self, weekly_form):
        """Every instance differs from the anchor only in its date."""
        instances = generate_repeat_instances(weekly_form)

        assert [i.date.isoformat() for i in instances] == [
            "2025-07-01",
            "2025-07-08",
            "2025-07-15",
            "2025-07-22",
            "2025-07-29",
        ]
        for instance in instances:
            assert instance.template_fields() == weekly_form.template_fields()
            assert instance.repeat == weekly_form.repeat

    def test_instances_have_no_identity(self, weekly_form):
        """The generator never assigns ids or group ids."""
        instances = generate_repeat_instances(weekly_form)

        assert all(not hasattr(instance, "id") for instance in instances)
        assert all(not hasattr(instance, "group_id") for instance in instances)

    def test_limits_passed_through(self, weekly_form):
        """Limits apply to form expansion too."""
        instances = generate_repeat_instances(weekly_form, GenerationLimits(max_occurrences=2))

        assert len(instances) == 2
