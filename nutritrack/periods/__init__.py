# -*- coding: utf-8 -*-
"""Period range resolution for day/week/month/year aggregation requests."""

from .models import Granularity, PeriodRange
from .resolver import custom_range, parse_date, parse_granularity, report_range, resolve_range

__all__ = [
    'Granularity',
    'PeriodRange',
    'custom_range',
    'parse_date',
    'parse_granularity',
    'report_range',
    'resolve_range',
]
