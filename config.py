"""Application configuration.

Settings are read from environment variables, optionally loaded from a
``.env`` file in the working directory:

    CALENDAR_MAX_OCCURRENCES    cap on occurrences per generated schedule (365)
    CALENDAR_MAX_STEPS          cap on candidate steps examined (1000)
    CALENDAR_DEFAULT_SPAN_DAYS  default schedule length in days (365)
    CALENDAR_LOG_LEVEL          root log level (INFO)
"""

import os
from functools import lru_cache

from dotenv import load_dotenv
from pydantic import BaseModel, Field, field_validator

from models.generator import (
    DEFAULT_MAX_OCCURRENCES,
    DEFAULT_MAX_STEPS,
    DEFAULT_SPAN_DAYS,
    GenerationLimits,
)


class Settings(BaseModel):
    """Runtime settings for the scheduler service.

    Args:
        max_occurrences: Cap on occurrences per generated schedule.
        max_steps: Cap on candidate steps examined per schedule.
        default_span_days: Schedule length used when a rule has no end date.
        log_level: Root logging level name.
    """

    max_occurrences: int = Field(default=DEFAULT_MAX_OCCURRENCES, ge=1)
    max_steps: int = Field(default=DEFAULT_MAX_STEPS, ge=1)
    default_span_days: int = Field(default=DEFAULT_SPAN_DAYS, ge=0)
    log_level: str = Field(default="INFO")

    @field_validator("log_level")
    @classmethod
    def normalize_log_level(cls, level: str) -> str:
        """Upper-case and check the log level name.

        Raises:
            ValueError: If the level is not a standard logging level.
        """
        level = level.upper()
        if level not in {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}:
            raise ValueError(f"Unknown log level: {level}")
        return level

    def generation_limits(self) -> GenerationLimits:
        """Build the generator limits these settings describe."""
        return GenerationLimits(
            max_occurrences=self.max_occurrences,
            max_steps=self.max_steps,
            default_span_days=self.default_span_days,
        )

    @classmethod
    def from_env(cls) -> "Settings":
        """Build settings from the environment (after loading ``.env``)."""
        load_dotenv()
        values = {
            "max_occurrences": os.getenv("CALENDAR_MAX_OCCURRENCES"),
            "max_steps": os.getenv("CALENDAR_MAX_STEPS"),
            "default_span_days": os.getenv("CALENDAR_DEFAULT_SPAN_DAYS"),
            "log_level": os.getenv("CALENDAR_LOG_LEVEL"),
        }
        return cls(**{key: value for key, value in values.items() if value is not None})


@lru_cache
def get_settings() -> Settings:
    """Return the process-wide settings, read once."""
    return Settings.from_env()
