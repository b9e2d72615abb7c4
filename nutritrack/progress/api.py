# -*- coding: utf-8 -*-
"""Progress — API endpoints."""

from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException, Query

from ..errors import ApiError, InvalidArgument
from ..periods import parse_granularity, resolve_range
from ..reminders.api import get_reminder_service
from ..reminders.service import ReminderService
from .models import ProgressSummaryResponse
from .summary import collect_days, summarize

router = APIRouter(prefix="/api/progress", tags=["Progress"])


@router.get("/summary", response_model=ProgressSummaryResponse, summary="Averages and adherence over a period")
async def progress_summary(
    granularity: str = Query("week", description="day|week|month|year"),
    date_: str | None = Query(default=None, alias="date", description="YYYY-MM-DD, defaults to today"),
    service: ReminderService = Depends(get_reminder_service),
):
    try:
        gran = parse_granularity(granularity)
        period = resolve_range(date_ or service.today(), gran)
    except InvalidArgument as exc:
        raise HTTPException(status_code=400, detail=str(exc)) from exc

    client = service.client
    if client is None:
        raise HTTPException(status_code=503, detail="Backend client not configured")
    try:
        days = await collect_days(client, period)
        profile = await client.get_health_profile()
    except ApiError as exc:
        raise HTTPException(status_code=502, detail=f"Backend call failed: {exc}") from exc

    return ProgressSummaryResponse(
        start=period.start.isoformat(),
        end=period.end.isoformat(),
        granularity=gran.value,
        days=len(period),
        **summarize(days, profile),
    )
