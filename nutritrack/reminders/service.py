# -*- coding: utf-8 -*-
"""Reminders — settings -> schedule glue, daily summary and achievements."""

from __future__ import annotations

import logging
from datetime import date
from functools import partial
from typing import Any, Dict, List, Mapping, Optional, Tuple

from ..client import ApiClient
from ..errors import ApiError
from ..periods import Granularity, PeriodRange, resolve_range
from ..progress.metrics import consumed, days_within_target, meal_count, round_half_up
from ..progress.summary import collect_days, daily_calories_of
from .models import NotificationSettings
from .notifier import Notification, ReminderNotifier
from .scheduler import ReminderScheduler, ScheduledTimer
from .storage import (
    LAST_DAILY_SUMMARY_KEY,
    LAST_PERFECT_WEEK_KEY,
    LAST_STREAK_KEY,
    LocalStore,
    load_notification_settings,
    save_notification_settings,
)

logger = logging.getLogger(__name__)

DAILY_SUMMARY_LABEL = "daily-summary"
STREAK_DAYS = 7


def iso_week_key(day: date) -> str:
    year, week, _ = day.isocalendar()
    return f"{year}-W{week:02d}"


class ReminderService:
    def __init__(
        self,
        *,
        scheduler: ReminderScheduler,
        notifier: ReminderNotifier,
        store: LocalStore,
        client: Optional[ApiClient] = None,
        summary_time: str = "21:00",
    ) -> None:
        self.scheduler = scheduler
        self.notifier = notifier
        self.store = store
        self.client = client
        self.summary_time = summary_time

    def today(self) -> date:
        return self.scheduler.now().date()

    # ---- settings ----

    def load_settings(self) -> NotificationSettings:
        return load_notification_settings(self.store)

    def apply_settings(
        self,
        prefs: NotificationSettings,
        *,
        daily_calories: Optional[float],
    ) -> List[ScheduledTimer]:
        """Persist ``prefs``, drop every armed reminder and arm the enabled ones."""
        save_notification_settings(self.store, prefs)
        self.scheduler.cancel_all()

        armed: List[ScheduledTimer] = []
        meals = [r for r in prefs.meal_reminder_settings() if r.enabled]
        if meals and not daily_calories:
            logger.info("No daily calorie target yet, meal reminders not scheduled")
        elif meals:
            meal_calories = round_half_up(daily_calories / 3)
            for reminder in meals:
                armed.append(
                    self.scheduler.schedule(
                        reminder.label,
                        reminder.time_of_day,
                        partial(self._send_meal_reminder, meal_calories),
                    )
                )
        if prefs.enabled and prefs.daily_summary and self.client is not None:
            armed.append(self.scheduler.schedule(DAILY_SUMMARY_LABEL, self.summary_time, self.send_daily_summary))
        return armed

    async def fetch_daily_calories(self) -> Optional[float]:
        if self.client is None:
            return None
        try:
            profile = await self.client.get_health_profile()
        except ApiError as exc:
            logger.warning("Could not load health profile: %s", exc)
            return None
        return daily_calories_of(profile)

    async def update_settings(
        self,
        prefs: NotificationSettings,
        *,
        daily_calories: Optional[float] = None,
    ) -> List[ScheduledTimer]:
        if daily_calories is None and prefs.enabled:
            daily_calories = await self.fetch_daily_calories()
        return self.apply_settings(prefs, daily_calories=daily_calories)

    async def refresh(self) -> List[ScheduledTimer]:
        return await self.update_settings(self.load_settings())

    def disable(self) -> int:
        prefs = self.load_settings().model_copy(update={"enabled": False})
        save_notification_settings(self.store, prefs)
        return self.scheduler.cancel_all()

    # ---- reminders ----

    def _send_meal_reminder(self, meal_calories: int, label: str) -> Optional[Notification]:
        return self.notifier.show_meal_reminder(label, meal_calories)

    async def send_daily_summary(self, label: str = DAILY_SUMMARY_LABEL) -> Optional[Notification]:  # noqa: ARG002
        if self.client is None:
            return None
        today = self.today()
        daily = await self.client.get_daily_meals(today.isoformat())
        profile = await self.client.get_health_profile()
        return self.maybe_show_daily_summary(daily, profile, today=today)

    def maybe_show_daily_summary(
        self,
        daily: Mapping[str, Any],
        profile: Optional[Mapping[str, Any]],
        *,
        today: date,
    ) -> Optional[Notification]:
        """At most one summary per calendar day, and only once a meal is logged."""
        key = today.isoformat()
        if self.store.get(LAST_DAILY_SUMMARY_KEY) == key:
            return None
        target = daily_calories_of(profile)
        meals = meal_count(daily)
        if not target or meals == 0:
            return None
        shown = self.notifier.show_daily_summary(consumed(daily, "calories"), target, meals)
        if shown is not None:
            self.store.set(LAST_DAILY_SUMMARY_KEY, key)
        return shown

    # ---- achievements ----

    def check_achievements(
        self,
        days: List[Mapping[str, Any]],
        profile: Optional[Mapping[str, Any]],
        *,
        today: date,
    ) -> List[Notification]:
        if not self.load_settings().achievements:
            return []

        shown: List[Notification] = []
        logged = sum(1 for d in days if meal_count(d) > 0)
        if logged >= STREAK_DAYS and self.store.get(LAST_STREAK_KEY) != today.isoformat():
            note = self.notifier.show_achievement("streak", {"days": STREAK_DAYS})
            if note is not None:
                self.store.set(LAST_STREAK_KEY, today.isoformat())
                shown.append(note)

        target = daily_calories_of(profile)
        week_key = iso_week_key(today)
        if (
            target
            and days_within_target(days, target) >= STREAK_DAYS
            and self.store.get(LAST_PERFECT_WEEK_KEY) != week_key
        ):
            note = self.notifier.show_achievement("perfect_week")
            if note is not None:
                self.store.set(LAST_PERFECT_WEEK_KEY, week_key)
                shown.append(note)
        return shown

    async def collect_days(self, period: PeriodRange) -> List[Dict[str, Any]]:
        if self.client is None:
            raise RuntimeError("No backend client configured")
        return await collect_days(self.client, period)

    async def check_recent_achievements(self) -> Tuple[PeriodRange, List[Notification]]:
        today = self.today()
        period = resolve_range(today, Granularity.week)
        if self.client is None:
            return period, []
        days = await self.collect_days(period)
        profile = await self.client.get_health_profile()
        return period, self.check_achievements(days, profile, today=today)
