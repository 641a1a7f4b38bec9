# hub/scheduler.py
from __future__ import annotations

import logging
from typing import Callable, Optional

from apscheduler.schedulers.asyncio import AsyncIOScheduler
from apscheduler.triggers.cron import CronTrigger
from sqlalchemy import select
from sqlalchemy.orm import Session

from hub.config import Settings
from hub.models import Habit
from hub.services.gateway import GatewayClient
from hub.services.habits import analyze_user

log = logging.getLogger("scheduler")


def _parse_cron(expr: str) -> CronTrigger:
    """
    Accepts standard 5-field cron: 'min hour day month dow'
    """
    minute, hour, day, month, dow = expr.split()
    return CronTrigger(minute=minute, hour=hour, day=day, month=month, day_of_week=dow, timezone="UTC")


async def run_habit_analysis(session_factory: Callable[[], Session], gateway: GatewayClient) -> int:
    """
    One sweep over every user that tracks habits. A failing user is logged
    and skipped. Returns the number of insights stored.
    """
    if not gateway.configured:
        log.warning("Habit analysis skipped: AI gateway API key is not configured")
        return 0

    stored = 0
    with session_factory() as db:
        user_ids = db.execute(select(Habit.user_id).distinct()).scalars().all()
        for user_id in user_ids:
            try:
                stored += len(await analyze_user(db, user_id, gateway))
            except Exception:
                db.rollback()
                log.exception("Habit analysis failed for user %s", user_id)
    log.info("Habit analysis completed: users=%s insights=%s", len(user_ids), stored)
    return stored


def start_scheduler(
    settings: Settings,
    session_factory: Callable[[], Session],
    gateway: GatewayClient,
) -> Optional[AsyncIOScheduler]:
    """
    Bootstraps AsyncIOScheduler for the daily habit analysis:
      HABIT_ANALYSIS_ENABLED=true|false
      HABIT_ANALYSIS_CRON="0 6 * * *"
    Must be called with the event loop running.
    """
    if not settings.habit_analysis_enabled:
        log.info("Habit analysis disabled via HABIT_ANALYSIS_ENABLED")
        return None

    sched = AsyncIOScheduler(timezone="UTC")
    sched.add_job(
        run_habit_analysis,
        _parse_cron(settings.habit_analysis_cron),
        args=[session_factory, gateway],
    )
    sched.start()
    log.info("Habit analysis scheduled: %s", settings.habit_analysis_cron)
    return sched
