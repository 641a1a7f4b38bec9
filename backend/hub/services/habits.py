# backend/hub/services/habits.py
from __future__ import annotations

import logging
from datetime import date, timedelta
from typing import Any, Dict, List
from uuid import UUID

from sqlalchemy.orm import Session

from hub.models import Habit, HabitInsight, HabitLog
from hub.services.features import HABIT_INSIGHTS
from hub.services.gateway import GatewayClient
from hub.services.pipeline import run_feature

log = logging.getLogger(__name__)

INSIGHT_WINDOW_DAYS = 14


def recent_logs(db: Session, user_id: UUID, days: int) -> List[HabitLog]:
    since = date.today() - timedelta(days=days)
    return (
        db.query(HabitLog)
          .filter(HabitLog.user_id == user_id, HabitLog.logged_at >= since)
          .order_by(HabitLog.logged_at.asc())
          .all()
    )


def toggle_today(db: Session, user_id: UUID, habit: Habit) -> HabitLog:
    """
    Flip today's completion for ``habit``: an existing log is inverted,
    otherwise a completed log is created. Last write wins.
    """
    today = date.today()
    existing = (
        db.query(HabitLog)
          .filter_by(habit_id=habit.id, user_id=user_id, logged_at=today)
          .first()
    )
    if existing:
        existing.completed = not existing.completed
        entry = existing
    else:
        entry = HabitLog(habit_id=habit.id, user_id=user_id, completed=True, logged_at=today)
        db.add(entry)
    db.commit()
    db.refresh(entry)
    return entry


def insights_payload(db: Session, user_id: UUID, days: int = INSIGHT_WINDOW_DAYS) -> Dict[str, Any]:
    """Request body for the habit-insights feature, logs labelled with their habit's name."""
    habits = db.query(Habit).filter_by(user_id=user_id).order_by(Habit.created_at.desc()).all()
    names = {h.id: h.name for h in habits}
    logs = recent_logs(db, user_id, days)
    return {
        "habits": [{"name": h.name, "frequency": h.frequency or "daily"} for h in habits],
        "logs": [
            {
                "habit_name": names.get(l.habit_id, "Unknown"),
                "logged_at": l.logged_at.isoformat(),
                "completed": bool(l.completed),
                "notes": l.notes,
            }
            for l in logs
        ],
    }


async def analyze_user(db: Session, user_id: UUID, gateway: GatewayClient) -> List[HabitInsight]:
    """Run the habit-insights feature for one user and store every insight it returns."""
    payload = insights_payload(db, user_id)
    if not payload["habits"]:
        return []

    result = await run_feature(HABIT_INSIGHTS, payload, gateway)
    stored: List[HabitInsight] = []
    for item in result.get("insights") or []:
        if not isinstance(item, dict) or not item.get("message"):
            continue
        row = HabitInsight(
            user_id=user_id,
            insight_text=str(item["message"]),
            insight_type=str(item.get("type") or "daily_analysis"),
        )
        db.add(row)
        stored.append(row)
    db.commit()
    return stored
