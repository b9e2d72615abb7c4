# -*- coding: utf-8 -*-
"""
NutriTrack companion service API

Period range resolution, meal reminder scheduling and allergen checks for the
nutrition-tracking web app.
"""

from __future__ import annotations

import logging

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from .allergy.api import router as allergy_router
from .config import settings
from .periods.api import router as periods_router
from .progress.api import router as progress_router
from .reminders.api import get_reminder_service, router as reminders_router

logger = logging.getLogger(__name__)

app = FastAPI(
    title="NutriTrack",
    description="Period ranges, progress summaries, meal reminders and allergen checks",
    version="1.0.0",
    docs_url="/api/docs",
    redoc_url="/api/redoc",
    openapi_url="/api/openapi.json",
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.on_event("startup")
async def _startup_schedule_reminders() -> None:
    # Timers are armed on the server's event loop.
    service = get_reminder_service()
    timers = await service.refresh()
    logger.info("Startup: %d reminder(s) armed", len(timers))


@app.on_event("shutdown")
def _shutdown_cancel_reminders() -> None:
    get_reminder_service().scheduler.cancel_all()


@app.get("/api/health")
def health():
    return {"status": "ok"}


app.include_router(periods_router)
app.include_router(progress_router)
app.include_router(reminders_router)
app.include_router(allergy_router)


def run() -> None:
    """Console entry point (used by pyproject [project.scripts])."""
    import uvicorn

    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    uvicorn.run("nutritrack.api:app", host=settings.host, port=settings.port, reload=False)
