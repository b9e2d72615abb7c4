# -*- coding: utf-8 -*-
"""Reminders — notification host + message builders."""

from __future__ import annotations

import logging
from collections import deque
from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum
from typing import Any, Deque, Dict, List, Optional, Protocol

from ..errors import PermissionDenied
from ..progress.metrics import round_half_up

logger = logging.getLogger(__name__)


class PermissionState(str, Enum):
    default = "default"
    granted = "granted"
    denied = "denied"


@dataclass
class Notification:
    title: str
    body: str = ""
    tag: Optional[str] = None
    data: Dict[str, Any] = field(default_factory=dict)
    require_interaction: bool = False
    created_at: str = field(
        default_factory=lambda: datetime.now(timezone.utc).isoformat().replace("+00:00", "Z")
    )


class NotificationHost(Protocol):
    """Where notifications end up (a browser, a desktop notifier, an outbox)."""

    @property
    def is_supported(self) -> bool: ...

    @property
    def permission(self) -> PermissionState: ...

    def request_permission(self) -> PermissionState: ...

    def deliver(self, notification: Notification) -> None: ...


class InMemoryNotificationHost:
    """Keeps delivered notifications in a bounded outbox the UI polls."""

    def __init__(self, *, auto_grant: bool = True, supported: bool = True, max_outbox: int = 100) -> None:
        self.auto_grant = auto_grant
        self.supported = supported
        self._permission = PermissionState.default
        self._outbox: Deque[Notification] = deque(maxlen=max(1, max_outbox))

    @property
    def is_supported(self) -> bool:
        return self.supported

    @property
    def permission(self) -> PermissionState:
        if not self.supported:
            return PermissionState.denied
        return self._permission

    def set_permission(self, state: PermissionState) -> None:
        self._permission = PermissionState(state)

    def request_permission(self) -> PermissionState:
        if not self.supported:
            return PermissionState.denied
        # Like a browser prompt, an explicit answer is sticky.
        if self._permission is PermissionState.default:
            self._permission = PermissionState.granted if self.auto_grant else PermissionState.denied
        return self._permission

    def deliver(self, notification: Notification) -> None:
        # Same tag replaces the previous notification.
        if notification.tag:
            for existing in list(self._outbox):
                if existing.tag == notification.tag:
                    self._outbox.remove(existing)
        self._outbox.append(notification)

    def outbox(self) -> List[Notification]:
        return list(self._outbox)

    def clear(self) -> int:
        count = len(self._outbox)
        self._outbox.clear()
        return count


MEAL_EMOJIS = {
    "breakfast": "🍳",
    "lunch": "🍱",
    "dinner": "🍽️",
    "snack": "🍎",
}

ACHIEVEMENTS = {
    "streak": ("🔥", "Streak Achievement!"),
    "goal_reached": ("🎉", "Goal Reached!"),
    "perfect_week": ("⭐", "Perfect Week!"),
    "milestone": ("🏆", "Milestone Unlocked!"),
}


class ReminderNotifier:
    def __init__(self, host: Optional[NotificationHost]) -> None:
        self.host = host

    def require_granted(self) -> None:
        state = self.host.permission if self.host is not None else PermissionState.denied
        if state is not PermissionState.granted:
            raise PermissionDenied(state.value)

    def show(
        self,
        title: str,
        *,
        body: str = "",
        tag: Optional[str] = None,
        data: Optional[Dict[str, Any]] = None,
        require_interaction: bool = False,
    ) -> Optional[Notification]:
        if self.host is None or not self.host.is_supported:
            logger.warning("Notifications are not supported")
            return None
        if self.host.permission is PermissionState.default:
            self.host.request_permission()
        if self.host.permission is not PermissionState.granted:
            logger.warning("Notification permission not granted, dropping %r", tag or title)
            return None

        notification = Notification(
            title=title,
            body=body,
            tag=tag,
            data=dict(data or {}),
            require_interaction=require_interaction,
        )
        self.host.deliver(notification)
        return notification

    def show_meal_reminder(self, meal_type: str, target_calories: Optional[int]) -> Optional[Notification]:
        emoji = MEAL_EMOJIS.get(meal_type, "🍴")
        meal_name = meal_type[:1].upper() + meal_type[1:]
        body = "Don't forget to log your meal."
        if target_calories is not None:
            body += f" Target: {target_calories} calories"
        return self.show(
            f"{emoji} Time for {meal_name}!",
            body=body,
            tag=f"meal-reminder-{meal_type}",
            data={"type": "meal-reminder", "mealType": meal_type},
        )

    def show_daily_summary(self, consumed: float, target: float, meals_logged: int) -> Optional[Notification]:
        consumed_i = round_half_up(consumed)
        target_i = round_half_up(target)
        percentage = round_half_up(consumed / target * 100) if target else 0

        if 90 <= percentage <= 110:
            emoji, message = "🎯", "Perfect! You hit your target!"
        elif percentage < 90:
            emoji, message = "📉", f"{target_i - consumed_i} calories remaining"
        else:
            emoji, message = "📈", f"{consumed_i - target_i} calories over target"

        return self.show(
            f"{emoji} Daily Summary",
            body=f"{message}\n{meals_logged} meals logged today\n{consumed_i}/{target_i} calories",
            tag="daily-summary",
            data={"type": "daily-summary"},
            require_interaction=True,
        )

    def show_achievement(self, achievement_type: str, details: Optional[Dict[str, Any]] = None) -> Optional[Notification]:
        details = details or {}
        if achievement_type == "streak":
            body = f"{details.get('days', 7)} days of consistent tracking! Keep it up!"
        elif achievement_type == "goal_reached":
            body = f"You've hit your {details.get('goal', '')} goal! Amazing work!"
        elif achievement_type == "perfect_week":
            body = "You stayed within your targets all week!"
        else:
            body = str(details.get("message") or "Great job!")
        emoji, title = ACHIEVEMENTS.get(achievement_type, ("🎊", "Achievement Unlocked!"))
        return self.show(
            f"{emoji} {title}",
            body=body,
            tag=f"achievement-{achievement_type}",
            data={"type": "achievement", "achievementType": achievement_type},
            require_interaction=True,
        )

    def show_custom(self, emoji: str, title: str, body: str, tag: Optional[str] = None) -> Optional[Notification]:
        if not tag:
            tag = f"custom-{int(datetime.now(timezone.utc).timestamp() * 1000)}"
        return self.show(f"{emoji} {title}", body=body, tag=tag, data={"type": "custom"})
