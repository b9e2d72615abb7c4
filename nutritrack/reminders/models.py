# -*- coding: utf-8 -*-
"""Reminders — Pydantic models."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from .timing import format_time_of_day, parse_time_of_day

MEAL_LABELS = ("breakfast", "lunch", "dinner")


@dataclass(frozen=True)
class ReminderSetting:
    label: str
    time_of_day: str
    enabled: bool = True


class NotificationSettings(BaseModel):
    """Persisted under the ``notification-settings`` key, camelCase on disk and on the wire."""

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    enabled: bool = False
    meal_reminders: bool = Field(True, alias="mealReminders")
    daily_summary: bool = Field(True, alias="dailySummary")
    achievements: bool = True
    breakfast_time: str = Field("08:00", alias="breakfastTime")
    lunch_time: str = Field("12:30", alias="lunchTime")
    dinner_time: str = Field("18:30", alias="dinnerTime")

    @field_validator("breakfast_time", "lunch_time", "dinner_time")
    @classmethod
    def _normalize_time(cls, value: str) -> str:
        return format_time_of_day(parse_time_of_day(value))

    def meal_reminder_settings(self) -> List[ReminderSetting]:
        active = self.enabled and self.meal_reminders
        return [
            ReminderSetting(label="breakfast", time_of_day=self.breakfast_time, enabled=active),
            ReminderSetting(label="lunch", time_of_day=self.lunch_time, enabled=active),
            ReminderSetting(label="dinner", time_of_day=self.dinner_time, enabled=active),
        ]

    def to_store(self) -> Dict[str, Any]:
        return self.model_dump(by_alias=True)


class PermissionResponse(BaseModel):
    permission: str = Field(..., description="default|granted|denied")
    supported: bool = True


class ReminderInfo(BaseModel):
    label: str
    time_of_day: str = Field(..., description="HH:MM")
    status: str = Field(..., description="armed|fired|cancelled")
    next_fire_at: Optional[str] = None
    fire_count: int = Field(0, ge=0)
    last_fired_at: Optional[str] = None


class RemindersResponse(BaseModel):
    permission: str
    reminders: List[ReminderInfo] = Field(default_factory=list)
    recent_failures: List[str] = Field(default_factory=list)


class NotificationOut(BaseModel):
    title: str
    body: str = ""
    tag: Optional[str] = None
    data: Dict[str, Any] = Field(default_factory=dict)
    require_interaction: bool = False
    created_at: str


class OutboxResponse(BaseModel):
    count: int
    notifications: List[NotificationOut]


class AchievementCheckResponse(BaseModel):
    start: str
    end: str
    shown: List[NotificationOut] = Field(default_factory=list)
