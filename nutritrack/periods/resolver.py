# -*- coding: utf-8 -*-
"""Periods — trailing-window date arithmetic.

Every granularity resolves to a window of N calendar days ending on the
reference date (inclusive on both ends):

    day   -> 1 day
    week  -> 7 days
    month -> 30 days
    year  -> 365 days

Dates are plain calendar dates; a datetime reference is truncated to its own
date without any timezone conversion.
"""

from __future__ import annotations

from datetime import date, datetime, timedelta
from typing import Union

from ..errors import InvalidArgument
from .models import Granularity, PeriodRange

DateLike = Union[date, datetime, str]

_REPORT_TYPES = {
    "weekly": Granularity.week,
    "monthly": Granularity.month,
    "yearly": Granularity.year,
}


def parse_date(value: DateLike) -> date:
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if isinstance(value, str):
        raw = value.strip()
        try:
            if len(raw) == 10:
                return date.fromisoformat(raw)
            return datetime.fromisoformat(raw).date()
        except ValueError as exc:
            raise InvalidArgument(f"Invalid date {value!r}, expected YYYY-MM-DD") from exc
    raise InvalidArgument(f"Unsupported date value: {value!r}")


def parse_granularity(value: Union[Granularity, str]) -> Granularity:
    if isinstance(value, Granularity):
        return value
    try:
        return Granularity(str(value).strip().lower())
    except ValueError as exc:
        allowed = ", ".join(g.value for g in Granularity)
        raise InvalidArgument(f"Invalid granularity {value!r}, expected one of: {allowed}") from exc


def resolve_range(reference_date: DateLike, granularity: Union[Granularity, str]) -> PeriodRange:
    """Return the trailing window for ``granularity`` ending at ``reference_date``."""
    end = parse_date(reference_date)
    gran = parse_granularity(granularity)
    start = end - timedelta(days=gran.window_days - 1)
    return PeriodRange(start=start, end=end)


def custom_range(start: DateLike, end: DateLike) -> PeriodRange:
    start_date = parse_date(start)
    end_date = parse_date(end)
    if start_date > end_date:
        raise InvalidArgument(
            f"Start date {start_date.isoformat()} is after end date {end_date.isoformat()}"
        )
    return PeriodRange(start=start_date, end=end_date)


def report_range(report_type: str, today: DateLike) -> PeriodRange:
    """Map a report preset (weekly/monthly/yearly) to its period."""
    gran = _REPORT_TYPES.get((report_type or "").strip().lower())
    if gran is None:
        raise InvalidArgument(f"Invalid report type {report_type!r}, expected weekly, monthly or yearly")
    return resolve_range(today, gran)
