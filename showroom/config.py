"""
Centralized configuration with environment variable overrides.

Business hours, slot granularity, week-start convention and the showroom
timezone are configurable here. Nothing is hardcoded in scheduling logic.
"""

import logging
import os
import re
from dataclasses import dataclass, field
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from dotenv import load_dotenv

from showroom.logging_context import LOG_FORMAT, install_request_id_filter

load_dotenv()

logger = logging.getLogger(__name__)

_CLOCK_PATTERN = re.compile(r"^([01]\d|2[0-3]):[0-5]\d$")

WEEK_START_CHOICES = ("sunday", "monday")


def _safe_int(env_var: str, default: str) -> int:
    """Parse an integer from an env var with a clear error on bad values."""
    raw = os.getenv(env_var, default)
    try:
        return int(raw)
    except (ValueError, TypeError):
        raise ValueError(
            f"Invalid integer for {env_var}: {raw!r}"
        ) from None


def _minutes(clock: str) -> int:
    hours, minutes = clock.split(":")
    return int(hours) * 60 + int(minutes)


@dataclass(frozen=True)
class SchedulingConfig:
    """Business hours and calendar conventions for showroom visits."""

    opening_time: str = os.getenv("SHOWROOM_OPENING_TIME", "09:00")
    closing_time: str = os.getenv("SHOWROOM_CLOSING_TIME", "18:00")
    slot_minutes: int = _safe_int("SLOT_MINUTES", "30")
    week_start: str = os.getenv("WEEK_START", "sunday").lower()
    timezone: str = os.getenv("SHOWROOM_TIMEZONE", "UTC")


@dataclass(frozen=True)
class AppConfig:
    """Root configuration aggregating all sub-configs."""

    scheduling: SchedulingConfig = field(default_factory=SchedulingConfig)
    showroom_name: str = os.getenv("SHOWROOM_NAME", "Maison Showroom")
    log_level: str = os.getenv("LOG_LEVEL", "INFO")


def _validate_config(config: AppConfig) -> None:
    """Validate configuration values are within acceptable ranges."""
    scheduling = config.scheduling
    for name, value in [
        ("SHOWROOM_OPENING_TIME", scheduling.opening_time),
        ("SHOWROOM_CLOSING_TIME", scheduling.closing_time),
    ]:
        if not _CLOCK_PATTERN.match(value):
            raise ValueError(f"{name} must be HH:MM, got {value!r}")

    if _minutes(scheduling.opening_time) >= _minutes(scheduling.closing_time):
        raise ValueError(
            "SHOWROOM_OPENING_TIME must be before SHOWROOM_CLOSING_TIME, "
            f"got {scheduling.opening_time} / {scheduling.closing_time}"
        )
    if scheduling.slot_minutes < 1:
        raise ValueError(f"SLOT_MINUTES must be >= 1, got {scheduling.slot_minutes}")
    if 60 % scheduling.slot_minutes and scheduling.slot_minutes % 60:
        raise ValueError(
            f"SLOT_MINUTES must divide or be a multiple of 60, got {scheduling.slot_minutes}"
        )
    if scheduling.week_start not in WEEK_START_CHOICES:
        raise ValueError(
            f"WEEK_START must be one of {WEEK_START_CHOICES}, got {scheduling.week_start!r}"
        )
    if not scheduling.timezone.strip():
        raise ValueError("SHOWROOM_TIMEZONE must not be empty")
    if scheduling.timezone.upper() != "UTC":
        try:
            ZoneInfo(scheduling.timezone)
        except (ZoneInfoNotFoundError, ValueError, OSError):
            raise ValueError(
                f"SHOWROOM_TIMEZONE is not a known IANA zone: {scheduling.timezone!r}"
            ) from None


def load_config() -> AppConfig:
    """Load and validate application configuration."""
    config = AppConfig()
    _validate_config(config)
    logging.basicConfig(
        level=getattr(logging, config.log_level.upper(), logging.INFO),
        format=LOG_FORMAT,
        datefmt="%Y-%m-%d %H:%M:%S",
    )
    install_request_id_filter()
    logger.info("Configuration loaded for '%s'", config.showroom_name)
    return config


# Singleton instance
settings = load_config()
