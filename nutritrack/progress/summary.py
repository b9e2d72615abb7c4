# -*- coding: utf-8 -*-
"""Progress — per-day collection from the backend and period summaries."""

from __future__ import annotations

import asyncio
import logging
from datetime import date
from typing import Any, Dict, List, Mapping, Optional

from ..client import ApiClient
from ..errors import ApiError
from ..periods import PeriodRange
from . import metrics

logger = logging.getLogger(__name__)


def daily_calories_of(profile: Optional[Mapping[str, Any]]) -> Optional[float]:
    if not profile:
        return None
    try:
        value = float(profile.get("daily_calories") or 0.0)
    except (TypeError, ValueError):
        return None
    return value if value > 0 else None


def empty_day(day: date) -> Dict[str, Any]:
    return {"date": day.isoformat(), "meals": [], "daily_totals": None}


async def collect_days(client: ApiClient, period: PeriodRange) -> List[Dict[str, Any]]:
    """One ``/meals/daily`` payload per day; failed days come back empty."""

    async def _one(day: date) -> Dict[str, Any]:
        try:
            return await client.get_daily_meals(day.isoformat())
        except ApiError as exc:
            logger.warning("Error fetching meals for %s: %s", day.isoformat(), exc)
            return empty_day(day)

    return list(await asyncio.gather(*(_one(d) for d in period.dates())))


def weight_goal_progress(profile: Optional[Mapping[str, Any]]) -> Optional[float]:
    if not profile:
        return None
    goal = profile.get("weight_goal") or {}
    starting = goal.get("starting_weight", profile.get("starting_weight"))
    current = profile.get("current_weight")
    target = profile.get("target_weight")
    if starting is None or current is None or target is None:
        return None
    try:
        pct = metrics.goal_progress_percentage(float(starting), float(current), float(target))
    except (TypeError, ValueError):
        return None
    return round(pct, 1)


def summarize(days: List[Mapping[str, Any]], profile: Optional[Mapping[str, Any]]) -> Dict[str, Any]:
    target = daily_calories_of(profile)
    averages = {n: metrics.weekly_average(days, n) for n in metrics.NUTRIENTS}
    progress = metrics.progress_percentage(averages["calories"], target)
    return {
        "daily_target": target,
        "averages": averages,
        "maxima": {n: metrics.max_value(days, n) for n in metrics.NUTRIENTS},
        "logging_percentage": metrics.logging_percentage(days),
        "calorie_adherence": metrics.calorie_adherence(days, target),
        "days_on_target": metrics.days_within_target(days, target) if target else 0,
        "calorie_progress": progress,
        "calorie_band": metrics.progress_band(progress),
        "macro_distribution": metrics.macro_distribution(
            averages["protein"], averages["carbs"], averages["fat"]
        ),
        "weight_goal_progress": weight_goal_progress(profile),
    }
