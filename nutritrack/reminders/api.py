# -*- coding: utf-8 -*-
"""Reminders — API endpoints."""

from __future__ import annotations

from dataclasses import asdict
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Query

from ..client import ApiClient
from ..config import settings
from ..errors import ApiError, PermissionDenied
from .models import (
    AchievementCheckResponse,
    NotificationOut,
    NotificationSettings,
    OutboxResponse,
    PermissionResponse,
    ReminderInfo,
    RemindersResponse,
)
from .notifier import InMemoryNotificationHost, Notification, PermissionState, ReminderNotifier
from .scheduler import ReminderScheduler, ScheduledTimer
from .service import ReminderService
from .storage import AUTH_TOKEN_KEY, LocalStore
from .timing import resolve_timezone

router = APIRouter(prefix="/api/notifications", tags=["Notifications"])

_service: Optional[ReminderService] = None


def build_reminder_service() -> ReminderService:
    store = LocalStore(settings.store_path)
    host = InMemoryNotificationHost(auto_grant=settings.notify_auto_grant, max_outbox=settings.outbox_size)
    scheduler = ReminderScheduler(host=host, tz=resolve_timezone(settings.timezone))
    client = ApiClient(token_provider=lambda: store.get(AUTH_TOKEN_KEY))
    return ReminderService(
        scheduler=scheduler,
        notifier=ReminderNotifier(host),
        store=store,
        client=client,
        summary_time=settings.summary_time,
    )


def get_reminder_service() -> ReminderService:
    global _service
    if _service is None:
        _service = build_reminder_service()
    return _service


def _outbox_host(service: ReminderService) -> InMemoryNotificationHost:
    host = service.notifier.host
    if not isinstance(host, InMemoryNotificationHost):
        raise HTTPException(status_code=404, detail="Notification host has no outbox")
    return host


def _reminder_info(timer: ScheduledTimer) -> ReminderInfo:
    return ReminderInfo(
        label=timer.label,
        time_of_day=timer.time_str,
        status=timer.status.value,
        next_fire_at=timer.target.isoformat() if timer.target else None,
        fire_count=timer.fire_count,
        last_fired_at=timer.last_fired_at.isoformat() if timer.last_fired_at else None,
    )


def _notification_out(notification: Notification) -> NotificationOut:
    return NotificationOut(**asdict(notification))


def _permission(service: ReminderService) -> PermissionResponse:
    host = service.scheduler.host
    return PermissionResponse(
        permission=service.scheduler.permission.value,
        supported=bool(host is not None and host.is_supported),
    )


@router.get("/settings", response_model=NotificationSettings, summary="Stored notification settings")
def get_settings(service: ReminderService = Depends(get_reminder_service)):
    return service.load_settings()


@router.put("/settings", response_model=RemindersResponse, summary="Save settings and reschedule reminders")
async def put_settings(
    prefs: NotificationSettings,
    daily_calories: float | None = Query(default=None, gt=0, description="Override the profile's daily calorie target"),
    service: ReminderService = Depends(get_reminder_service),
):
    timers = await service.update_settings(prefs, daily_calories=daily_calories)
    return RemindersResponse(
        permission=service.scheduler.permission.value,
        reminders=[_reminder_info(t) for t in timers],
    )


@router.get("/reminders", response_model=RemindersResponse, summary="Armed reminders")
def list_reminders(service: ReminderService = Depends(get_reminder_service)):
    scheduler = service.scheduler
    return RemindersResponse(
        permission=scheduler.permission.value,
        reminders=[_reminder_info(t) for t in scheduler.timers()],
        recent_failures=[str(f) for f in scheduler.state.failures],
    )


@router.delete("/reminders", response_model=RemindersResponse, summary="Disable notifications and clear reminders")
def clear_reminders(service: ReminderService = Depends(get_reminder_service)):
    service.disable()
    return RemindersResponse(permission=service.scheduler.permission.value)


@router.get("/permission", response_model=PermissionResponse, summary="Notification permission state")
def get_permission(service: ReminderService = Depends(get_reminder_service)):
    return _permission(service)


@router.post("/permission", response_model=PermissionResponse, summary="Request notification permission")
async def request_permission(service: ReminderService = Depends(get_reminder_service)):
    state = service.scheduler.request_permission()
    if state is PermissionState.granted:
        prefs = service.load_settings()
        if not prefs.enabled:
            await service.update_settings(prefs.model_copy(update={"enabled": True}))
    return _permission(service)


@router.post("/test", response_model=NotificationOut, summary="Send a test notification")
def send_test(service: ReminderService = Depends(get_reminder_service)):
    try:
        service.notifier.require_granted()
    except PermissionDenied as exc:
        raise HTTPException(status_code=403, detail=str(exc)) from exc
    shown = service.notifier.show_custom(
        "🧪",
        "Test Notification",
        "If you see this, notifications are working perfectly!",
        "test-notification",
    )
    if shown is None:
        raise HTTPException(status_code=403, detail="Notification permission not granted")
    return _notification_out(shown)


@router.post("/achievements/check", response_model=AchievementCheckResponse, summary="Check the last 7 days for achievements")
async def check_achievements(service: ReminderService = Depends(get_reminder_service)):
    try:
        period, shown = await service.check_recent_achievements()
    except ApiError as exc:
        raise HTTPException(status_code=502, detail=f"Backend call failed: {exc}") from exc
    return AchievementCheckResponse(
        start=period.start.isoformat(),
        end=period.end.isoformat(),
        shown=[_notification_out(n) for n in shown],
    )


@router.get("/outbox", response_model=OutboxResponse, summary="Delivered notifications")
def outbox(service: ReminderService = Depends(get_reminder_service)):
    items = _outbox_host(service).outbox()
    return OutboxResponse(count=len(items), notifications=[_notification_out(n) for n in items])


@router.delete("/outbox", response_model=OutboxResponse, summary="Clear delivered notifications")
def clear_outbox(service: ReminderService = Depends(get_reminder_service)):
    _outbox_host(service).clear()
    return OutboxResponse(count=0, notifications=[])
