# -*- coding: utf-8 -*-
"""Reminders — time-of-day parsing and next-occurrence arithmetic."""

from __future__ import annotations

import re
from datetime import date, datetime, time, timedelta, tzinfo
from typing import Optional, Union
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from ..errors import InvalidArgument

_TIME_RE = re.compile(r"^(\d{1,2}):(\d{2})$")


def parse_time_of_day(value: Union[str, time]) -> time:
    """Parse ``HH:MM`` (24h) into a ``time``."""
    if isinstance(value, time):
        return value.replace(second=0, microsecond=0, tzinfo=None)
    m = _TIME_RE.match((value or "").strip()) if isinstance(value, str) else None
    if not m:
        raise InvalidArgument(f"Invalid time of day {value!r}, expected HH:MM")
    hours, minutes = int(m.group(1)), int(m.group(2))
    if hours > 23 or minutes > 59:
        raise InvalidArgument(f"Invalid time of day {value!r}, out of range")
    return time(hours, minutes)


def format_time_of_day(value: time) -> str:
    return f"{value.hour:02d}:{value.minute:02d}"


def resolve_timezone(name: str | None) -> Optional[tzinfo]:
    """Return the named IANA zone, or ``None`` for the host's local zone."""
    if not name:
        return None
    try:
        return ZoneInfo(name)
    except (ZoneInfoNotFoundError, ValueError) as exc:
        raise InvalidArgument(f"Unknown timezone {name!r}") from exc


def localize(naive: datetime, tz: Optional[tzinfo]) -> datetime:
    """Attach ``tz`` to a wall-clock time; ``None`` means the host's local zone."""
    if tz is None:
        # The host's offset for that date, DST included.
        return naive.astimezone()
    return naive.replace(tzinfo=tz)


def today_in(tz: Optional[tzinfo]) -> date:
    return datetime.now(tz).date()


def next_occurrence(time_of_day: time, now: datetime, tz: Optional[tzinfo] = None) -> datetime:
    """Next instant strictly after ``now`` whose wall-clock time in ``tz`` is ``time_of_day``.

    The offset is looked up again for the target date, so a daily reminder
    stays on the same wall-clock time across DST changes.
    """
    if now.tzinfo is None:
        raise InvalidArgument("now must be timezone-aware")
    day = now.astimezone(tz).date()
    candidate = localize(datetime.combine(day, time_of_day), tz)
    # Compare instants, not wall clocks: same-tzinfo comparisons ignore utcoffset.
    if candidate.timestamp() <= now.timestamp():
        candidate = localize(datetime.combine(day + timedelta(days=1), time_of_day), tz)
    return candidate


def seconds_until(target: datetime, now: datetime) -> float:
    return max(target.timestamp() - now.timestamp(), 0.0)
