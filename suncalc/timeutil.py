"""Helpers for building the timezone-aware instants used by the requests."""

from __future__ import annotations

from datetime import datetime, timedelta, timezone, tzinfo
from typing import Union
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from .errors import DateError

__all__ = [
    "resolve_timezone",
    "on_date",
    "midnight",
    "plus_days",
    "with_timezone",
    "today",
    "tomorrow",
]

TimeZoneLike = Union[str, tzinfo, None]


def resolve_timezone(tz: TimeZoneLike) -> tzinfo:
    """Return a :class:`tzinfo` for an IANA identifier, ``"UTC"`` or a tzinfo.

    ``None`` resolves to the local time zone of the host.
    """

    if tz is None:
        return datetime.now().astimezone().tzinfo
    if isinstance(tz, tzinfo):
        return tz
    if tz.upper() in ("UTC", "Z"):
        return timezone.utc
    try:
        return ZoneInfo(tz)
    except (ZoneInfoNotFoundError, ValueError, OSError) as exc:
        raise DateError(f"Could not determine time zone: {tz}") from exc


def on_date(
    year: int,
    month: int,
    day: int,
    hour: int = 0,
    minute: int = 0,
    second: int = 0,
    tz: TimeZoneLike = "UTC",
) -> datetime:
    """Return the instant of the given wall-clock time in *tz*."""

    zone = resolve_timezone(tz)
    try:
        return datetime(year, month, day, hour, minute, second, tzinfo=zone)
    except ValueError as exc:
        raise DateError(
            f"Could not construct date from {year}-{month}-{day} {hour}:{minute}:{second}"
        ) from exc


def midnight(when: datetime) -> datetime:
    """Return the start of the day of *when*, in its own time zone."""

    return when.replace(hour=0, minute=0, second=0, microsecond=0)


def plus_days(when: datetime, days: float) -> datetime:
    """Add *days* of elapsed time to *when*, keeping its time zone."""

    shifted = when.astimezone(timezone.utc) + timedelta(days=days)
    return shifted.astimezone(when.tzinfo)


def with_timezone(when: datetime, tz: TimeZoneLike) -> datetime:
    """Project *when* into another time zone without moving the instant."""

    return when.astimezone(resolve_timezone(tz))


def today(tz: TimeZoneLike = None) -> datetime:
    return midnight(datetime.now(resolve_timezone(tz)))


def tomorrow(tz: TimeZoneLike = None) -> datetime:
    zone = resolve_timezone(tz)
    date = datetime.now(zone).date() + timedelta(days=1)
    return datetime(date.year, date.month, date.day, tzinfo=zone)
