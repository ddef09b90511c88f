"""
Centralized configuration with environment variable overrides.

API endpoints, scheduling granularity and limits are configurable here.
Nothing is hardcoded in scheduling or client logic.
"""

import logging
import os
from dataclasses import dataclass, field

from dotenv import load_dotenv

load_dotenv()

logger = logging.getLogger(__name__)

MINUTES_PER_DAY = 1440
WEEKDAY_NAMES = (
    "Sunday", "Monday", "Tuesday", "Wednesday", "Thursday", "Friday", "Saturday",
)


def _safe_int(env_var: str, default: str) -> int:
    """Parse an integer from an env var with a clear error on bad values."""
    raw = os.getenv(env_var, default)
    try:
        return int(raw)
    except (ValueError, TypeError):
        raise ValueError(
            f"Invalid integer for {env_var}: {raw!r}"
        ) from None


def _safe_float(env_var: str, default: str) -> float:
    """Parse a float from an env var with a clear error on bad values."""
    raw = os.getenv(env_var, default)
    try:
        return float(raw)
    except (ValueError, TypeError):
        raise ValueError(
            f"Invalid float for {env_var}: {raw!r}"
        ) from None


@dataclass(frozen=True)
class ApiConfig:
    """External booking API settings."""

    server_url: str = os.getenv("BOOKING_SERVER_URL", "http://localhost:8000/api/v2")
    request_timeout_sec: float = _safe_float("BOOKING_REQUEST_TIMEOUT", "10.0")


@dataclass(frozen=True)
class SchedulingConfig:
    """Slot granularity and booking limits."""

    slot_interval_minutes: int = _safe_int("SLOT_INTERVAL_MINUTES", "30")
    max_week_count: int = _safe_int("MAX_WEEK_COUNT", "52")
    calendar_first_weekday: str = os.getenv("CALENDAR_FIRST_WEEKDAY", "Sunday")
    upcoming_days_horizon: int = _safe_int("UPCOMING_DAYS_HORIZON", "28")


@dataclass(frozen=True)
class AppConfig:
    """Root configuration aggregating all sub-configs."""

    api: ApiConfig = field(default_factory=ApiConfig)
    scheduling: SchedulingConfig = field(default_factory=SchedulingConfig)
    log_level: str = os.getenv("LOG_LEVEL", "INFO")
    app_name: str = os.getenv("APP_NAME", "marketplace-booking")


def _validate_config(config: AppConfig) -> None:
    """Validate configuration values are within acceptable ranges."""
    if not config.api.server_url.startswith(("http://", "https://")):
        raise ValueError(
            f"BOOKING_SERVER_URL must be an http(s) URL, got {config.api.server_url!r}"
        )
    if config.api.request_timeout_sec <= 0:
        raise ValueError(
            f"BOOKING_REQUEST_TIMEOUT must be > 0, got {config.api.request_timeout_sec}"
        )

    interval = config.scheduling.slot_interval_minutes
    if interval < 1 or MINUTES_PER_DAY % interval != 0:
        raise ValueError(
            f"SLOT_INTERVAL_MINUTES must be a positive divisor of {MINUTES_PER_DAY}, "
            f"got {interval}"
        )
    if config.scheduling.max_week_count < 1:
        raise ValueError(
            f"MAX_WEEK_COUNT must be >= 1, got {config.scheduling.max_week_count}"
        )
    if config.scheduling.calendar_first_weekday not in WEEKDAY_NAMES:
        raise ValueError(
            "CALENDAR_FIRST_WEEKDAY must be a weekday name, "
            f"got {config.scheduling.calendar_first_weekday!r}"
        )
    if config.scheduling.upcoming_days_horizon < 1:
        raise ValueError(
            "UPCOMING_DAYS_HORIZON must be >= 1, "
            f"got {config.scheduling.upcoming_days_horizon}"
        )


def load_config() -> AppConfig:
    """Load and validate application configuration."""
    config = AppConfig()
    _validate_config(config)
    logging.basicConfig(
        level=getattr(logging, config.log_level.upper(), logging.INFO),
        format="%(asctime)s [%(name)s] %(levelname)s: %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )
    logger.info("Configuration loaded for '%s'", config.app_name)
    return config


# Singleton instance
settings = load_config()
