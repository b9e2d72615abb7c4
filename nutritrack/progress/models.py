# -*- coding: utf-8 -*-
"""Progress — Pydantic models."""

from __future__ import annotations

from typing import Dict, Optional

from pydantic import BaseModel, Field


class ProgressSummaryResponse(BaseModel):
    start: str = Field(..., description="YYYY-MM-DD")
    end: str = Field(..., description="YYYY-MM-DD")
    granularity: str
    days: int = Field(..., ge=1)
    daily_target: Optional[float] = Field(None, description="kcal/day from the health profile")
    averages: Dict[str, int] = Field(default_factory=dict)
    maxima: Dict[str, float] = Field(default_factory=dict)
    logging_percentage: int = Field(0, ge=0, le=100)
    calorie_adherence: int = Field(0, ge=0, le=100)
    days_on_target: int = Field(0, ge=0)
    calorie_progress: int = Field(0, ge=0, le=100)
    calorie_band: str = Field(..., description="low|moderate|high|over")
    macro_distribution: Dict[str, float] = Field(default_factory=dict)
    weight_goal_progress: Optional[float] = Field(None, ge=0, le=100)
