from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date, datetime, time, timezone, tzinfo
from typing import Any, Protocol
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

import jdatetime
from pydantic import BaseModel, ConfigDict, Field

END_OF_DAY = time(23, 59, 59, 999000)
UTC_ALIASES = {"UTC", "Z", "Etc/UTC"}


class InvertedDateRangeError(ValueError):
    pass


class DateRange(BaseModel):
    model_config = ConfigDict(frozen=True, populate_by_name=True)

    from_: str = Field(alias="from")
    to: str

    def to_wire(self) -> dict[str, str]:
        return self.model_dump(by_alias=True)


class CalendarSystem(Protocol):
    name: str

    def to_gregorian(self, marker: Any) -> date: ...


class GregorianCalendar:
    name = "gregorian"

    def to_gregorian(self, marker: Any) -> date:
        if isinstance(marker, datetime):
            return marker.date()
        if isinstance(marker, date):
            return marker
        year, month, day = _split_marker(marker)
        return date(year, month, day)


class PersianCalendar:
    """Solar Hijri markers as picked in the console's date inputs."""

    name = "persian"

    def to_gregorian(self, marker: Any) -> date:
        if isinstance(marker, jdatetime.datetime):
            return marker.togregorian().date()
        if isinstance(marker, jdatetime.date):
            return marker.togregorian()
        # plain datetime.date values are already Gregorian
        if isinstance(marker, datetime):
            return marker.date()
        if isinstance(marker, date):
            return marker
        year, month, day = _split_marker(marker)
        return jdatetime.date(year, month, day).togregorian()


CALENDAR_SYSTEMS: dict[str, type] = {
    GregorianCalendar.name: GregorianCalendar,
    PersianCalendar.name: PersianCalendar,
}


def get_calendar(name: str) -> CalendarSystem:
    try:
        return CALENDAR_SYSTEMS[name.strip().lower()]()
    except KeyError as exc:
        raise ValueError(f"Unsupported calendar: {name!r}") from exc


def resolve_timezone(timezone_name: str | None) -> tzinfo:
    if not timezone_name or timezone_name in UTC_ALIASES:
        return timezone.utc
    try:
        return ZoneInfo(timezone_name)
    except (ZoneInfoNotFoundError, ValueError) as exc:
        raise ValueError(f"Unknown timezone: {timezone_name!r}") from exc


@dataclass(frozen=True)
class CalendarRangeNormalizer:
    calendar: CalendarSystem = field(default_factory=GregorianCalendar)
    tz: tzinfo = timezone.utc

    @classmethod
    def from_names(cls, calendar: str = "gregorian", timezone_name: str | None = "UTC") -> "CalendarRangeNormalizer":
        return cls(calendar=get_calendar(calendar), tz=resolve_timezone(timezone_name))

    def normalize(self, start: Any, end: Any | None = None) -> DateRange:
        start_day = self.calendar.to_gregorian(start)
        end_day = self.calendar.to_gregorian(end) if end is not None else start_day
        if end_day < start_day:
            raise InvertedDateRangeError(f"Date range ends before it starts: {start_day} > {end_day}")
        start_local = datetime.combine(start_day, time.min, tzinfo=self.tz)
        end_local = datetime.combine(end_day, END_OF_DAY, tzinfo=self.tz)
        return DateRange(from_=to_utc_iso(start_local), to=to_utc_iso(end_local))


def to_utc_iso(value: datetime) -> str:
    return value.astimezone(timezone.utc).isoformat(timespec="milliseconds").replace("+00:00", "Z")


def _split_marker(marker: Any) -> tuple[int, int, int]:
    if isinstance(marker, str):
        parts = marker.strip().replace("/", "-").split("-")
    elif isinstance(marker, (tuple, list)):
        parts = list(marker)
    else:
        raise TypeError(f"Unsupported date marker: {marker!r}")
    if len(parts) != 3:
        raise ValueError(f"Date marker must have year, month and day: {marker!r}")
    try:
        year, month, day = (int(part) for part in parts)
    except (TypeError, ValueError) as exc:
        raise ValueError(f"Invalid date marker: {marker!r}") from exc
    return year, month, day
