# -*- coding: utf-8 -*-
"""Periods — API endpoints."""

from __future__ import annotations

from fastapi import APIRouter, HTTPException, Query

from ..config import settings
from ..errors import InvalidArgument
from ..reminders.timing import resolve_timezone, today_in
from .models import PeriodRangeResponse
from .resolver import custom_range, parse_granularity, resolve_range

router = APIRouter(prefix="/api/periods", tags=["Periods"])


@router.get("/resolve", response_model=PeriodRangeResponse, summary="Resolve a trailing period window")
def resolve(
    granularity: str = Query(..., description="day|week|month|year"),
    date_: str | None = Query(default=None, alias="date", description="YYYY-MM-DD, defaults to today"),
):
    try:
        gran = parse_granularity(granularity)
        period = resolve_range(date_ or today_in(resolve_timezone(settings.timezone)), gran)
    except InvalidArgument as exc:
        raise HTTPException(status_code=400, detail=str(exc)) from exc
    return PeriodRangeResponse.from_range(period, gran)


@router.get("/custom", response_model=PeriodRangeResponse, summary="Validate a custom date range")
def custom(
    start: str = Query(..., description="YYYY-MM-DD"),
    end: str = Query(..., description="YYYY-MM-DD"),
):
    try:
        period = custom_range(start, end)
    except InvalidArgument as exc:
        raise HTTPException(status_code=400, detail=str(exc)) from exc
    return PeriodRangeResponse.from_range(period)
