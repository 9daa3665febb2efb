"""
BlipBurst | blipburst/config.py
Injector configuration loaded from environment variables (and .env).
Every field is optional; unset fields fall back to the injector defaults.
"""
from __future__ import annotations

import os
from dataclasses import dataclass
from datetime import datetime, timezone

from dotenv import load_dotenv

load_dotenv()  # loads .env file if present; silently skips if absent


def parse_when(value: datetime | str) -> datetime:
    """Coerce a datetime or ISO-8601 string to an aware datetime. Naive means UTC."""
    if isinstance(value, str):
        value = datetime.fromisoformat(value.strip())
    if value.tzinfo is None:
        value = value.replace(tzinfo=timezone.utc)
    return value


def _optional_env(key: str) -> str | None:
    value = os.getenv(key)
    if value is None or not value.strip():
        return None
    return value.strip()


def _env_date(key: str) -> datetime | None:
    raw = _optional_env(key)
    if raw is None:
        return None
    try:
        return parse_when(raw)
    except ValueError as exc:
        raise EnvironmentError(
            f"Environment variable '{key}' is not an ISO-8601 timestamp: {raw!r}"
        ) from exc


def _env_number(key: str, kind: type) -> float | int | None:
    raw = _optional_env(key)
    if raw is None:
        return None
    try:
        return kind(raw)
    except ValueError as exc:
        raise EnvironmentError(
            f"Environment variable '{key}' must be {kind.__name__}: {raw!r}"
        ) from exc


@dataclass(frozen=True)
class BlipBurstConfig:
    start_date: datetime | None = None
    end_date: datetime | None = None
    frequency: float | None = None  # errors per minute, 0 = single burst
    total: int | None = None
    url: str | None = None
    log_level: str = "INFO"

    @classmethod
    def from_env(cls) -> "BlipBurstConfig":
        return cls(
            start_date=_env_date("BLIPBURST_START"),
            end_date=_env_date("BLIPBURST_END"),
            frequency=_env_number("BLIPBURST_FREQUENCY", float),
            total=_env_number("BLIPBURST_TOTAL", int),
            url=_optional_env("BLIPBURST_URL"),
            log_level=os.getenv("LOG_LEVEL", "INFO"),
        )
