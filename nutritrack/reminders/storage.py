# -*- coding: utf-8 -*-
"""Reminders — flat JSON key/value store (the service's localStorage)."""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any, Dict, Optional

from pydantic import ValidationError

from .models import NotificationSettings

logger = logging.getLogger(__name__)

SETTINGS_KEY = "notification-settings"
LAST_DAILY_SUMMARY_KEY = "last-daily-summary"
LAST_STREAK_KEY = "last-streak-achievement"
LAST_PERFECT_WEEK_KEY = "last-perfect-week"
AUTH_TOKEN_KEY = "auth_token"


class LocalStore:
    def __init__(self, path: Path) -> None:
        self.path = path

    def _read(self) -> Dict[str, Any]:
        if not self.path.exists():
            return {}
        try:
            data = json.loads(self.path.read_text(encoding="utf-8"))
        except (OSError, ValueError) as exc:
            logger.warning("Ignoring unreadable store %s: %s", self.path, exc)
            return {}
        return data if isinstance(data, dict) else {}

    def _write(self, data: Dict[str, Any]) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        self.path.write_text(json.dumps(data, ensure_ascii=False, indent=2), encoding="utf-8")

    def get(self, key: str, default: Any = None) -> Any:
        return self._read().get(key, default)

    def set(self, key: str, value: Any) -> None:
        data = self._read()
        data[key] = value
        self._write(data)

    def remove(self, key: str) -> None:
        data = self._read()
        if key in data:
            del data[key]
            self._write(data)


def load_notification_settings(store: LocalStore) -> NotificationSettings:
    raw: Optional[Any] = store.get(SETTINGS_KEY)
    if not isinstance(raw, dict):
        return NotificationSettings()
    try:
        return NotificationSettings.model_validate(raw)
    except ValidationError as exc:
        logger.warning("Invalid stored notification settings, using defaults: %s", exc)
        return NotificationSettings()


def save_notification_settings(store: LocalStore, settings: NotificationSettings) -> None:
    store.set(SETTINGS_KEY, settings.to_store())
