from __future__ import annotations

import os
from dataclasses import dataclass

from dotenv import load_dotenv

DEFAULT_BASE_URL = "https://dev.backend.mobo.land/api/v1/portal"
CALENDARS = {"gregorian", "persian"}


@dataclass(frozen=True)
class AppConfig:
    base_url: str = DEFAULT_BASE_URL
    timeout_seconds: float = 30
    verify_ssl: bool = True
    retry_max_attempts: int = 3
    retry_backoff_ms: int = 150
    page_size: int = 10
    search_debounce_ms: int = 600
    timezone: str = "UTC"
    calendar: str = "gregorian"
    access_token: str | None = None

    @classmethod
    def from_env(cls, env_file: str | None = ".env") -> "AppConfig":
        load_dotenv(env_file)
        config = cls(
            base_url=os.getenv("PORTAL_BASE_URL", DEFAULT_BASE_URL).strip(),
            timeout_seconds=float(os.getenv("PORTAL_TIMEOUT_SECONDS", "30")),
            verify_ssl=_parse_bool(os.getenv("PORTAL_VERIFY_SSL"), default=True),
            retry_max_attempts=int(os.getenv("PORTAL_RETRY_MAX_ATTEMPTS", "3")),
            retry_backoff_ms=int(os.getenv("PORTAL_RETRY_BACKOFF_MS", "150")),
            page_size=int(os.getenv("PORTAL_PAGE_SIZE", "10")),
            search_debounce_ms=int(os.getenv("PORTAL_SEARCH_DEBOUNCE_MS", "600")),
            timezone=os.getenv("PORTAL_TIMEZONE", "UTC").strip() or "UTC",
            calendar=os.getenv("PORTAL_CALENDAR", "gregorian").strip().lower(),
            access_token=os.getenv("PORTAL_ACCESS_TOKEN") or None,
        )
        config.validate()
        return config

    def validate(self) -> None:
        if not self.base_url:
            raise ValueError("PORTAL_BASE_URL must not be empty")
        if self.timeout_seconds <= 0:
            raise ValueError("PORTAL_TIMEOUT_SECONDS must be greater than 0")
        if self.retry_max_attempts < 1:
            raise ValueError("PORTAL_RETRY_MAX_ATTEMPTS must be >= 1")
        if self.retry_backoff_ms < 0:
            raise ValueError("PORTAL_RETRY_BACKOFF_MS must be >= 0")
        if self.page_size < 1:
            raise ValueError("PORTAL_PAGE_SIZE must be >= 1")
        if self.search_debounce_ms < 0:
            raise ValueError("PORTAL_SEARCH_DEBOUNCE_MS must be >= 0")
        if self.calendar not in CALENDARS:
            raise ValueError(f"PORTAL_CALENDAR must be one of {sorted(CALENDARS)}, got {self.calendar!r}")


def _parse_bool(value: str | None, default: bool = True) -> bool:
    if value is None:
        return default
    normalized = value.strip().lower()
    if normalized in {"1", "true", "t", "yes", "y", "on"}:
        return True
    if normalized in {"0", "false", "f", "no", "n", "off"}:
        return False
    return default
