# -*- coding: utf-8 -*-
"""Progress — derived percentages for charts and progress bars.

Daily payloads are the backend's ``/meals/daily`` responses:

    {"date": "2024-03-15", "meals": [...],
     "daily_totals": {"consumed": {"calories": 1800, "protein": 90, ...},
                      "target": {...}}}
"""

from __future__ import annotations

from typing import Any, Dict, Iterable, List, Mapping, Optional

NUTRIENTS = ("calories", "protein", "carbs", "fat")

# kcal per gram
MACRO_KCAL = {"protein": 4.0, "carbs": 4.0, "fat": 9.0}

ADHERENCE_TOLERANCE = 0.1


def round_half_up(value: float) -> int:
    return int(value + 0.5) if value >= 0 else -int(-value + 0.5)


def consumed(day: Mapping[str, Any], nutrient: str) -> float:
    totals = day.get("daily_totals") or {}
    values = totals.get("consumed") or {}
    try:
        return float(values.get(nutrient) or 0.0)
    except (TypeError, ValueError):
        return 0.0


def meal_count(day: Mapping[str, Any]) -> int:
    return len(day.get("meals") or [])


def weekly_average(days: List[Mapping[str, Any]], nutrient: str) -> int:
    if not days:
        return 0
    total = sum(consumed(d, nutrient) for d in days)
    return round_half_up(total / len(days))


def max_value(days: List[Mapping[str, Any]], nutrient: str) -> float:
    if not days:
        return 0.0
    return max(consumed(d, nutrient) for d in days)


def logging_percentage(days: List[Mapping[str, Any]]) -> int:
    """Share of days with at least one logged meal."""
    if not days:
        return 0
    logged = sum(1 for d in days if meal_count(d) > 0)
    return round_half_up(logged / len(days) * 100)


def within_target(calories: float, target: float, tolerance: float = ADHERENCE_TOLERANCE) -> bool:
    if calories <= 0 or target <= 0:
        return False
    return abs(calories - target) <= target * tolerance


def days_within_target(days: Iterable[Mapping[str, Any]], target: float) -> int:
    return sum(1 for d in days if within_target(consumed(d, "calories"), target))


def calorie_adherence(days: List[Mapping[str, Any]], target: Optional[float]) -> int:
    """Share of days whose calories landed within 10% of ``target``."""
    if not days or not target:
        return 0
    return round_half_up(days_within_target(days, target) / len(days) * 100)


def progress_percentage(current: float, target: Optional[float]) -> int:
    if not target:
        return 0
    return min(round_half_up(current / target * 100), 100)


def progress_band(percentage: float) -> str:
    if percentage < 50:
        return "low"
    if percentage < 80:
        return "moderate"
    if percentage < 100:
        return "high"
    return "over"


def macro_distribution(protein_g: float, carbs_g: float, fat_g: float) -> Dict[str, float]:
    """Percent of macro calories contributed by each macro (sums to 100, or all zero)."""
    kcal = {
        "protein": max(protein_g, 0.0) * MACRO_KCAL["protein"],
        "carbs": max(carbs_g, 0.0) * MACRO_KCAL["carbs"],
        "fat": max(fat_g, 0.0) * MACRO_KCAL["fat"],
    }
    total = sum(kcal.values())
    if total <= 0:
        return {k: 0.0 for k in kcal}
    return {k: round(v / total * 100, 1) for k, v in kcal.items()}


def goal_progress_percentage(starting_weight: float, current_weight: float, target_weight: float) -> float:
    """Percent of the planned weight change already achieved, clamped to 0..100."""
    total_change = abs(target_weight - starting_weight)
    if total_change <= 0:
        return 0.0
    current_change = abs(starting_weight - current_weight)
    return max(0.0, min(current_change / total_change * 100, 100.0))
