# -*- coding: utf-8 -*-
"""
Meal reminder module
"""

from .notifier import InMemoryNotificationHost, Notification, PermissionState, ReminderNotifier
from .scheduler import ReminderScheduler, ScheduledTimer, SchedulerState
from .service import ReminderService

__all__ = [
    'InMemoryNotificationHost',
    'Notification',
    'PermissionState',
    'ReminderNotifier',
    'ReminderScheduler',
    'ReminderService',
    'ScheduledTimer',
    'SchedulerState',
]
