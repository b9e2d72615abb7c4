# -*- coding: utf-8 -*-
"""Periods — value types and Pydantic response models."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date, timedelta
from enum import Enum
from typing import Dict, List

from pydantic import BaseModel, Field


class Granularity(str, Enum):
    day = "day"
    week = "week"
    month = "month"
    year = "year"

    @property
    def window_days(self) -> int:
        return _WINDOW_DAYS[self]


_WINDOW_DAYS = {
    Granularity.day: 1,
    Granularity.week: 7,
    Granularity.month: 30,
    Granularity.year: 365,
}


@dataclass(frozen=True)
class PeriodRange:
    """Inclusive calendar-date range."""

    start: date
    end: date

    def __len__(self) -> int:
        return (self.end - self.start).days + 1

    def dates(self) -> List[date]:
        return [self.start + timedelta(days=i) for i in range(len(self))]

    def as_strings(self) -> Dict[str, str]:
        return {"start": self.start.isoformat(), "end": self.end.isoformat()}

    def to_query(self) -> Dict[str, str]:
        """Query parameters expected by the backend's period endpoints."""
        return {"start_date": self.start.isoformat(), "end_date": self.end.isoformat()}


class PeriodRangeResponse(BaseModel):
    start: str = Field(..., description="YYYY-MM-DD")
    end: str = Field(..., description="YYYY-MM-DD")
    granularity: str | None = Field(None, description="day|week|month|year, null for custom ranges")
    days: int = Field(..., ge=1)
    dates: List[str] = Field(default_factory=list)

    @classmethod
    def from_range(cls, period: PeriodRange, granularity: Granularity | None = None) -> "PeriodRangeResponse":
        return cls(
            start=period.start.isoformat(),
            end=period.end.isoformat(),
            granularity=granularity.value if granularity is not None else None,
            days=len(period),
            dates=[d.isoformat() for d in period.dates()],
        )
