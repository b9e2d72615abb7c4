# -*- coding: utf-8 -*-

from __future__ import annotations

import asyncio
import shutil
import tempfile
import unittest
from datetime import date, datetime, timedelta, timezone
from pathlib import Path
from typing import Any, Dict, Optional

import httpx

from nutritrack.client import ApiClient
from nutritrack.periods import resolve_range
from nutritrack.reminders import InMemoryNotificationHost, ReminderNotifier, ReminderScheduler, ReminderService
from nutritrack.reminders.models import NotificationSettings
from nutritrack.reminders.service import DAILY_SUMMARY_LABEL, iso_week_key
from nutritrack.reminders.storage import LAST_DAILY_SUMMARY_KEY, LAST_PERFECT_WEEK_KEY, LocalStore
from timer_fixtures import ManualTimers

START = datetime(2024, 3, 15, 7, 0, tzinfo=timezone.utc)


def _day(d: str, calories: float, meals: int = 3) -> Dict[str, Any]:
    return {
        "date": d,
        "meals": [{"id": f"{d}-{i}"} for i in range(meals)],
        "daily_totals": {"consumed": {"calories": calories, "protein": 100, "carbs": 200, "fat": 60}},
    }


def _backend(profile: Dict[str, Any], days: Dict[str, Dict[str, Any]], failing: tuple = ()) -> httpx.MockTransport:
    def handler(request: httpx.Request) -> httpx.Response:
        path = request.url.path
        if path == "/api/health/profile":
            return httpx.Response(200, json=profile)
        if path == "/api/meals/daily":
            d = request.url.params.get("date")
            if d in failing:
                return httpx.Response(500, json={"error": "boom"})
            return httpx.Response(200, json=days.get(d, {"date": d, "meals": [], "daily_totals": None}))
        return httpx.Response(404, json={"error": "not found"})

    return httpx.MockTransport(handler)


class _ServiceCase:
    def _build(self, transport: Optional[httpx.MockTransport] = None) -> None:
        self._tmp = Path(tempfile.mkdtemp(prefix="nutritrack-test-"))
        self.timers = ManualTimers(START)
        self.host = InMemoryNotificationHost(auto_grant=True)
        self.host.request_permission()
        self.scheduler = ReminderScheduler(
            host=self.host, backend=self.timers, clock=self.timers.clock, tz=timezone.utc
        )
        client = None
        if transport is not None:
            client = ApiClient(base_url="http://backend.test/api", transport=transport)
        self.service = ReminderService(
            scheduler=self.scheduler,
            notifier=ReminderNotifier(self.host),
            store=LocalStore(self._tmp / "store.json"),
            client=client,
        )

    def _cleanup(self) -> None:
        shutil.rmtree(self._tmp, ignore_errors=True)


class TestApplySettings(_ServiceCase, unittest.TestCase):
    def setUp(self) -> None:
        self._build()

    def tearDown(self) -> None:
        self._cleanup()

    def test_enabled_arms_three_meal_reminders(self) -> None:
        timers = self.service.apply_settings(NotificationSettings(enabled=True), daily_calories=2000)
        self.assertEqual([t.label for t in timers], ["breakfast", "lunch", "dinner"])
        self.assertEqual(self.service.load_settings().enabled, True)

        self.timers.run_until(START.replace(hour=8))
        outbox = self.host.outbox()
        self.assertEqual(len(outbox), 1)
        self.assertEqual(outbox[0].title, "🍳 Time for Breakfast!")
        self.assertIn("Target: 667 calories", outbox[0].body)

    def test_disabling_clears_previous_reminders(self) -> None:
        self.service.apply_settings(NotificationSettings(enabled=True), daily_calories=2000)
        timers = self.service.apply_settings(NotificationSettings(enabled=False), daily_calories=2000)
        self.assertEqual(timers, [])
        self.assertEqual(self.scheduler.timers(), [])
        self.timers.advance(days=2)
        self.assertEqual(self.host.outbox(), [])

    def test_meal_reminders_need_a_calorie_target(self) -> None:
        timers = self.service.apply_settings(NotificationSettings(enabled=True), daily_calories=None)
        self.assertEqual(timers, [])

    def test_meal_reminders_switch_gates_arming(self) -> None:
        prefs = NotificationSettings(enabled=True, meal_reminders=False)
        self.assertEqual({r.enabled for r in prefs.meal_reminder_settings()}, {False})
        self.assertEqual(self.service.apply_settings(prefs, daily_calories=2000), [])
        self.assertEqual(self.timers.live(), [])

    def test_collect_days_needs_a_client(self) -> None:
        with self.assertRaises(RuntimeError):
            asyncio.run(self.service.collect_days(resolve_range(START, "week")))

    def test_changed_times_rearm(self) -> None:
        self.service.apply_settings(NotificationSettings(enabled=True), daily_calories=2000)
        self.service.apply_settings(
            NotificationSettings(enabled=True, breakfast_time="09:30"), daily_calories=2000
        )
        self.assertEqual(len(self.timers.live()), 3)
        self.timers.run_until(START.replace(hour=9))
        self.assertEqual(self.host.outbox(), [])
        self.timers.run_until(START.replace(hour=9, minute=30))
        self.assertEqual(len(self.host.outbox()), 1)

    def test_disable(self) -> None:
        self.service.apply_settings(NotificationSettings(enabled=True), daily_calories=2000)
        self.assertEqual(self.service.disable(), 3)
        self.assertFalse(self.service.load_settings().enabled)


class TestDailySummaryAndAchievements(_ServiceCase, unittest.TestCase):
    def setUp(self) -> None:
        self._build()
        self.today = date(2024, 3, 15)
        self.profile = {"daily_calories": 2000}

    def tearDown(self) -> None:
        self._cleanup()

    def test_daily_summary_once_per_day(self) -> None:
        daily = _day("2024-03-15", 1950)
        first = self.service.maybe_show_daily_summary(daily, self.profile, today=self.today)
        assert first is not None
        self.assertEqual(first.title, "🎯 Daily Summary")
        self.assertEqual(self.service.store.get(LAST_DAILY_SUMMARY_KEY), "2024-03-15")
        self.assertIsNone(self.service.maybe_show_daily_summary(daily, self.profile, today=self.today))

    def test_daily_summary_skipped_without_meals(self) -> None:
        daily = _day("2024-03-15", 0, meals=0)
        self.assertIsNone(self.service.maybe_show_daily_summary(daily, self.profile, today=self.today))
        self.assertIsNone(self.service.store.get(LAST_DAILY_SUMMARY_KEY))

    def test_streak_and_perfect_week(self) -> None:
        week = [_day((self.today - timedelta(days=i)).isoformat(), 2050) for i in range(7)]
        shown = self.service.check_achievements(week, self.profile, today=self.today)
        self.assertEqual([n.tag for n in shown], ["achievement-streak", "achievement-perfect_week"])
        self.assertEqual(self.service.store.get(LAST_PERFECT_WEEK_KEY), iso_week_key(self.today))

        again = self.service.check_achievements(week, self.profile, today=self.today)
        self.assertEqual(again, [])

    def test_streak_without_perfect_week(self) -> None:
        week = [_day((self.today - timedelta(days=i)).isoformat(), 2500) for i in range(7)]
        shown = self.service.check_achievements(week, self.profile, today=self.today)
        self.assertEqual([n.tag for n in shown], ["achievement-streak"])

    def test_achievements_switch(self) -> None:
        self.service.apply_settings(NotificationSettings(achievements=False), daily_calories=None)
        week = [_day((self.today - timedelta(days=i)).isoformat(), 2000) for i in range(7)]
        self.assertEqual(self.service.check_achievements(week, self.profile, today=self.today), [])


class TestServiceWithBackend(_ServiceCase, unittest.IsolatedAsyncioTestCase):
    def tearDown(self) -> None:
        self._cleanup()

    async def test_update_settings_fetches_profile_and_arms_summary(self) -> None:
        self._build(_backend({"daily_calories": 2100}, {}))
        timers = await self.service.update_settings(NotificationSettings(enabled=True))
        self.assertEqual(
            [t.label for t in timers], ["breakfast", "lunch", "dinner", DAILY_SUMMARY_LABEL]
        )
        self.timers.run_until(START.replace(hour=12, minute=30))
        lunch = [n for n in self.host.outbox() if n.tag == "meal-reminder-lunch"]
        self.assertIn("Target: 700 calories", lunch[0].body)

    async def test_daily_summary_fires_from_scheduler(self) -> None:
        days = {"2024-03-15": _day("2024-03-15", 1000, meals=2)}
        self._build(_backend({"daily_calories": 2000}, days))
        await self.service.update_settings(NotificationSettings(enabled=True, meal_reminders=False))

        self.timers.run_until(START.replace(hour=21))
        for _ in range(20):
            await asyncio.sleep(0)
            if self.host.outbox():
                break
        tags = [n.tag for n in self.host.outbox()]
        self.assertEqual(tags, ["daily-summary"])
        self.assertTrue(self.host.outbox()[0].body.startswith("1000 calories remaining"))
        self.assertEqual(self.scheduler.get(DAILY_SUMMARY_LABEL).target, START.replace(hour=21) + timedelta(days=1))

    async def test_recent_achievements_over_trailing_week(self) -> None:
        days = {
            (date(2024, 3, 15) - timedelta(days=i)).isoformat(): _day(
                (date(2024, 3, 15) - timedelta(days=i)).isoformat(), 1990
            )
            for i in range(7)
        }
        self._build(_backend({"daily_calories": 2000}, days))
        period, shown = await self.service.check_recent_achievements()
        self.assertEqual(period.start, date(2024, 3, 9))
        self.assertEqual(period.end, date(2024, 3, 15))
        self.assertEqual(len(shown), 2)

    async def test_failed_day_counts_as_empty(self) -> None:
        days = {
            (date(2024, 3, 15) - timedelta(days=i)).isoformat(): _day(
                (date(2024, 3, 15) - timedelta(days=i)).isoformat(), 1990
            )
            for i in range(7)
        }
        self._build(_backend({"daily_calories": 2000}, days, failing=("2024-03-12",)))
        with self.assertLogs("nutritrack.progress.summary", level="WARNING"):
            _, shown = await self.service.check_recent_achievements()
        self.assertEqual(shown, [])


if __name__ == "__main__":
    unittest.main()
