# -*- coding: utf-8 -*-
"""
Daily reminder scheduler.

Each label owns at most one live timer. Scheduling a label again cancels its
previous timer before arming the new one; after a fire the same timer is
re-armed for the next day's occurrence of its time of day.

Timers come from a ``TimerBackend`` (the asyncio loop in production) and the
current time from an injectable clock, so tests can drive time by hand.
With ``tz=None`` targets follow the host's local zone, DST included.
"""

from __future__ import annotations

import asyncio
import inspect
import logging
from collections import deque
from dataclasses import dataclass, field
from datetime import datetime, time, tzinfo
from enum import Enum
from functools import partial
from typing import Any, Callable, Deque, Dict, List, Optional, Protocol, Set, Union

from ..errors import CallbackFailure, InvalidArgument
from .notifier import NotificationHost, PermissionState
from .timing import format_time_of_day, next_occurrence, parse_time_of_day, seconds_until

logger = logging.getLogger(__name__)

Clock = Callable[[], datetime]
ReminderCallback = Callable[[str], Any]


class TimerHandle(Protocol):
    def cancel(self) -> None: ...


class TimerBackend(Protocol):
    def call_later(self, delay: float, callback: Callable[[], None]) -> TimerHandle: ...


class AsyncioTimerBackend:
    """Arms timers on the running asyncio loop (or an explicit one)."""

    def __init__(self, loop: Optional[asyncio.AbstractEventLoop] = None) -> None:
        self._loop = loop

    def call_later(self, delay: float, callback: Callable[[], None]) -> asyncio.TimerHandle:
        loop = self._loop or asyncio.get_running_loop()
        return loop.call_later(delay, callback)


class ReminderStatus(str, Enum):
    armed = "armed"
    fired = "fired"
    cancelled = "cancelled"


@dataclass(eq=False)
class ScheduledTimer:
    """Cancellation token for one label's reminder."""

    label: str
    time_of_day: time
    callback: ReminderCallback
    scheduler: "ReminderScheduler" = field(repr=False)
    target: Optional[datetime] = None
    status: ReminderStatus = ReminderStatus.armed
    fire_count: int = 0
    last_fired_at: Optional[datetime] = None
    handle: Optional[TimerHandle] = field(default=None, repr=False)

    @property
    def time_str(self) -> str:
        return format_time_of_day(self.time_of_day)

    @property
    def active(self) -> bool:
        return self.status is not ReminderStatus.cancelled

    def cancel(self) -> None:
        self.scheduler.cancel_timer(self)


@dataclass
class SchedulerState:
    """Label -> timer map plus recent callback failures."""

    timers: Dict[str, ScheduledTimer] = field(default_factory=dict)
    failures: Deque[CallbackFailure] = field(default_factory=lambda: deque(maxlen=50))


class ReminderScheduler:
    def __init__(
        self,
        *,
        state: Optional[SchedulerState] = None,
        host: Optional[NotificationHost] = None,
        backend: Optional[TimerBackend] = None,
        clock: Optional[Clock] = None,
        tz: Optional[tzinfo] = None,
    ) -> None:
        self.state = state or SchedulerState()
        self.host = host
        self.backend: TimerBackend = backend or AsyncioTimerBackend()
        self.tz = tz
        self._clock = clock
        self._tasks: Set[asyncio.Future] = set()

    # ---- permission ----

    @property
    def permission(self) -> PermissionState:
        if self.host is None or not self.host.is_supported:
            return PermissionState.denied
        return self.host.permission

    def request_permission(self) -> PermissionState:
        if self.host is None or not self.host.is_supported:
            logger.warning("Notifications are not supported by this host")
            return PermissionState.denied
        try:
            return self.host.request_permission()
        except Exception:
            logger.exception("Error requesting notification permission")
            return PermissionState.denied

    # ---- scheduling ----

    def now(self) -> datetime:
        current = self._clock() if self._clock else datetime.now(self.tz)
        if current.tzinfo is None:
            current = current.astimezone()
        return current.astimezone(self.tz) if self.tz else current

    def schedule(
        self,
        label: str,
        time_of_day: Union[str, time],
        callback: ReminderCallback,
    ) -> ScheduledTimer:
        """Arm ``callback`` for the next occurrence of ``time_of_day``.

        Any timer already armed for ``label`` is cancelled first.
        """
        if not label:
            raise InvalidArgument("Reminder label must not be empty")
        tod = parse_time_of_day(time_of_day)

        self.cancel(label)
        timer = ScheduledTimer(label=label, time_of_day=tod, callback=callback, scheduler=self)
        self.state.timers[label] = timer
        self._arm(timer, next_occurrence(tod, self.now(), self.tz))
        return timer

    def cancel(self, label: str) -> bool:
        timer = self.state.timers.pop(label, None)
        if timer is None:
            return False
        self._disarm(timer)
        return True

    def cancel_timer(self, timer: ScheduledTimer) -> None:
        if self.state.timers.get(timer.label) is timer:
            self.state.timers.pop(timer.label, None)
        self._disarm(timer)

    def cancel_all(self) -> int:
        timers = list(self.state.timers.values())
        self.state.timers.clear()
        for timer in timers:
            self._disarm(timer)
        if timers:
            logger.info("Cancelled %d reminder(s)", len(timers))
        return len(timers)

    def get(self, label: str) -> Optional[ScheduledTimer]:
        return self.state.timers.get(label)

    def timers(self) -> List[ScheduledTimer]:
        return sorted(
            self.state.timers.values(),
            key=lambda t: t.target.timestamp() if t.target else float("inf"),
        )

    # ---- internals ----

    def _arm(self, timer: ScheduledTimer, target: datetime) -> None:
        delay = seconds_until(target, self.now())
        timer.target = target
        timer.status = ReminderStatus.armed
        timer.handle = self.backend.call_later(delay, partial(self._fire, timer))
        logger.info("Reminder armed: %s at %s (in %.0fs)", timer.label, target.isoformat(), delay)

    def _disarm(self, timer: ScheduledTimer) -> None:
        if timer.handle is not None:
            timer.handle.cancel()
            timer.handle = None
        if timer.status is not ReminderStatus.cancelled:
            timer.status = ReminderStatus.cancelled
            logger.info("Reminder cancelled: %s", timer.label)

    def _fire(self, timer: ScheduledTimer) -> None:
        if timer.status is not ReminderStatus.armed or self.state.timers.get(timer.label) is not timer:
            return
        fired_at = self.now()
        timer.handle = None
        timer.status = ReminderStatus.fired
        timer.fire_count += 1
        timer.last_fired_at = fired_at
        logger.info("Reminder fired: %s", timer.label)

        try:
            result = timer.callback(timer.label)
            if inspect.isawaitable(result):
                self._spawn(timer.label, result)
        except Exception as exc:
            self._record_failure(timer.label, exc)

        # The callback may have cancelled or replaced this timer.
        if timer.status is not ReminderStatus.fired or self.state.timers.get(timer.label) is not timer:
            return
        reference = fired_at
        if timer.target is not None and timer.target.timestamp() > fired_at.timestamp():
            reference = timer.target
        self._arm(timer, next_occurrence(timer.time_of_day, reference, self.tz))

    def _spawn(self, label: str, awaitable: Any) -> None:
        task = asyncio.ensure_future(awaitable)
        self._tasks.add(task)
        task.add_done_callback(partial(self._task_done, label))

    def _task_done(self, label: str, task: asyncio.Future) -> None:
        self._tasks.discard(task)
        if task.cancelled():
            return
        exc = task.exception()
        if exc is not None:
            self._record_failure(label, exc)

    def _record_failure(self, label: str, exc: BaseException) -> None:
        failure = CallbackFailure(label, exc)
        self.state.failures.append(failure)
        logger.error("%s", failure, exc_info=exc)
