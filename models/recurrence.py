"""Recurrence rule model."""

from typing import Literal, Optional, get_args

from pydantic import BaseModel, Field, model_validator

from models.calendar_date import CalendarDate
from models.exceptions import InvalidRuleError


RepeatType = Literal["none", "daily", "weekly", "monthly", "yearly"]
REPEAT_TYPES: tuple[str, ...] = get_args(RepeatType)


class RecurrenceRule(BaseModel):
    """Describes how an event repeats.

    A rule of type "none" describes a one-off event; its interval and end date
    may be stored but are never used. Every other type needs an interval of at
    least 1.

    Args:
        type: Repeat type (none, daily, weekly, monthly, yearly).
        interval: Repeat every N periods.
        end_date: Last date an occurrence may fall on. When omitted the
            generator uses a default span from the anchor date.
    """

    type: RepeatType = Field(default="none", description="Repeat type")
    interval: int = Field(default=1, ge=0, description="Repeat every N periods")
    end_date: Optional[CalendarDate] = Field(
        default=None, description="Last possible occurrence date (YYYY-MM-DD)"
    )

    @model_validator(mode="after")
    def check_interval(self) -> "RecurrenceRule":
        """Require a positive interval on repeating rules.

        Raises:
            InvalidRuleError: If a repeating rule has interval 0.
        """
        validate_rule(self)
        return self

    @property
    def is_repeating(self) -> bool:
        """Whether this rule produces more than the anchor occurrence."""
        return self.type != "none"

    def describe(self) -> str:
        """Generate a human-readable description of the rule.

        Returns:
            Text such as "Every 2 weeks, until 2025-06-30".
        """
        if not self.is_repeating:
            return "Does not repeat"

        units = {"daily": "day", "weekly": "week", "monthly": "month", "yearly": "year"}
        if self.interval == 1:
            head = self.type.capitalize()
        else:
            head = f"Every {self.interval} {units[self.type]}s"

        if self.end_date:
            head += f", until {self.end_date}"
        return head


def validate_rule(rule: RecurrenceRule) -> None:
    """Check a rule before expansion.

    Pydantic validates rules built through the constructor, but rules made
    with ``model_construct`` or mutated afterwards bypass it, so the
    generator calls this again.

    Args:
        rule: Rule to check.

    Raises:
        InvalidRuleError: If the type is unknown or a repeating rule has an
            interval below 1.
    """
    if rule.type not in REPEAT_TYPES:
        raise InvalidRuleError(f"Unknown repeat type: {rule.type!r}")
    if rule.type != "none" and (not isinstance(rule.interval, int) or rule.interval < 1):
        raise InvalidRuleError(
            f"interval must be at least 1 for {rule.type} repeat, got {rule.interval!r}"
        )


NO_REPEAT = RecurrenceRule(type="none", interval=0)
