# -*- coding: utf-8 -*-

from __future__ import annotations

import unittest
from datetime import date, datetime

from nutritrack.errors import InvalidArgument
from nutritrack.periods import Granularity, custom_range, report_range, resolve_range


class TestResolveRange(unittest.TestCase):
    def test_day_is_single_date(self) -> None:
        period = resolve_range(date(2024, 3, 15), "day")
        self.assertEqual(period.as_strings(), {"start": "2024-03-15", "end": "2024-03-15"})
        self.assertEqual(len(period), 1)

    def test_week_is_trailing_seven_days(self) -> None:
        period = resolve_range("2024-03-15", "week")
        self.assertEqual(period.as_strings(), {"start": "2024-03-09", "end": "2024-03-15"})
        self.assertEqual(len(period), 7)
        self.assertEqual(period.dates()[0], date(2024, 3, 9))
        self.assertEqual(period.dates()[-1], date(2024, 3, 15))

    def test_month_and_year_windows_cross_leap_day(self) -> None:
        month = resolve_range(date(2024, 3, 15), Granularity.month)
        self.assertEqual(month.start, date(2024, 2, 15))
        self.assertEqual(len(month), 30)

        year = resolve_range(date(2024, 3, 15), Granularity.year)
        self.assertEqual(year.start, date(2023, 3, 17))
        self.assertEqual(len(year), 365)

    def test_datetime_uses_its_calendar_date(self) -> None:
        period = resolve_range(datetime(2024, 3, 15, 23, 59), "week")
        self.assertEqual(period.end, date(2024, 3, 15))

    def test_deterministic_and_ordered(self) -> None:
        for ref in (date(2024, 1, 1), date(2024, 2, 29), date(2023, 12, 31)):
            for gran in Granularity:
                first = resolve_range(ref, gran)
                self.assertEqual(first, resolve_range(ref, gran))
                self.assertLessEqual(first.start, first.end)
                self.assertEqual(first.end, ref)

    def test_invalid_granularity_fails_fast(self) -> None:
        with self.assertRaises(InvalidArgument):
            resolve_range(date(2024, 3, 15), "fortnight")
        # InvalidArgument is a ValueError for callers that only know the builtin.
        with self.assertRaises(ValueError):
            resolve_range(date(2024, 3, 15), "")

    def test_invalid_date_string(self) -> None:
        for bad in ("15/03/2024", "2024-03-15garbage", "2024-03-15xyz", "2024-02-30", ""):
            with self.subTest(value=bad), self.assertRaises(InvalidArgument):
                resolve_range(bad, "day")

    def test_full_iso_datetime_string(self) -> None:
        period = resolve_range("2024-03-15T23:30:00+09:00", "day")
        self.assertEqual((period.start.isoformat(), period.end.isoformat()), ("2024-03-15", "2024-03-15"))

    def test_to_query(self) -> None:
        period = resolve_range("2024-03-15", "week")
        self.assertEqual(period.to_query(), {"start_date": "2024-03-09", "end_date": "2024-03-15"})


class TestCustomAndReportRanges(unittest.TestCase):
    def test_custom_range_rejects_reversed_dates(self) -> None:
        with self.assertRaises(InvalidArgument):
            custom_range("2024-03-15", "2024-03-01")

    def test_custom_range_single_day(self) -> None:
        period = custom_range("2024-03-15", "2024-03-15")
        self.assertEqual(len(period), 1)

    def test_report_presets(self) -> None:
        self.assertEqual(report_range("weekly", "2024-03-15"), resolve_range("2024-03-15", "week"))
        self.assertEqual(report_range("Monthly", "2024-03-15"), resolve_range("2024-03-15", "month"))
        with self.assertRaises(InvalidArgument):
            report_range("daily", "2024-03-15")


if __name__ == "__main__":
    unittest.main()
