"""
Runtime configuration.

Values come from environment variables (prefixed CHESS_TRACKER_) and fall back to defaults that work for a local run.
"""

import logging
import os
from typing import Mapping, Optional, Self

from pydantic import BaseModel, field_validator

ENV_PREFIX = "CHESS_TRACKER_"
LOG_LEVELS = ("CRITICAL", "ERROR", "WARNING", "INFO", "DEBUG")


class Settings(BaseModel):
    database_url: str = "sqlite:///./chess_tracker.db"
    echo_sql: bool = False
    log_level: str = "INFO"

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, value: str) -> str:
        level = value.upper()
        if level not in LOG_LEVELS:
            raise ValueError(f"Unknown log level {value!r}. Pick one from {', '.join(LOG_LEVELS)}")
        return level

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> Self:
        """Only the variables that are set override the defaults. Pydantic takes care of parsing 'true'/'0'/... for the booleans."""
        environ = os.environ if environ is None else environ
        overrides = {
            name: environ[f"{ENV_PREFIX}{name.upper()}"]
            for name in cls.model_fields
            if f"{ENV_PREFIX}{name.upper()}" in environ
        }
        return cls(**overrides)


def configure_logging(settings: Settings) -> None:
    """For applications embedding the tracker. The library modules themselves only create loggers."""
    logging.basicConfig(
        level=settings.log_level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
