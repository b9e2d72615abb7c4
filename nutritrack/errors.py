# -*- coding: utf-8 -*-
"""Error taxonomy shared by the periods, reminders and client packages."""

from __future__ import annotations

from typing import Optional


class NutriTrackError(Exception):
    """Base class for all NutriTrack errors."""


class InvalidArgument(NutriTrackError, ValueError):
    """Bad granularity, date string or time-of-day string."""


class PermissionDenied(NutriTrackError):
    """Notification permission is not granted."""

    def __init__(self, state: str) -> None:
        super().__init__(f"Notification permission not granted (state={state})")
        self.state = state


class CallbackFailure(NutriTrackError):
    """A reminder callback raised while firing."""

    def __init__(self, label: str, cause: BaseException) -> None:
        super().__init__(f"Reminder callback for {label!r} failed: {cause}")
        self.label = label
        self.cause = cause


class ApiError(NutriTrackError):
    """The REST backend answered with an error or a non-JSON body."""

    def __init__(self, message: str, *, status_code: Optional[int] = None) -> None:
        super().__init__(message)
        self.status_code = status_code
