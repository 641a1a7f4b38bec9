# backend/hub/routers/habits.py
from __future__ import annotations

from uuid import UUID

from fastapi import APIRouter, Depends, HTTPException, Query
from sqlalchemy.orm import Session

from hub.db import get_db
from hub.deps import current_user_id, get_gateway
from hub.models import Habit, HabitInsight, HabitLog
from hub.schemas import HabitCreate
from hub.services import habits as habit_service
from hub.services.features import HABIT_INSIGHTS
from hub.services.gateway import GatewayClient
from hub.services.pipeline import run_feature

router = APIRouter(prefix="/habits", tags=["habits"])


def _serialize_habit(h: Habit) -> dict:
    return {
        "id": str(h.id),
        "name": h.name,
        "description": h.description,
        "frequency": h.frequency,
        "color": h.color,
        "created_at": h.created_at.isoformat() if h.created_at else None,
    }


def _serialize_log(l: HabitLog) -> dict:
    return {
        "id": str(l.id),
        "habit_id": str(l.habit_id),
        "completed": bool(l.completed),
        "notes": l.notes,
        "logged_at": l.logged_at.isoformat(),
    }


def _owned_habit(db: Session, user_id: UUID, habit_id: UUID) -> Habit:
    habit = db.query(Habit).filter_by(id=habit_id, user_id=user_id).first()
    if not habit:
        raise HTTPException(404, "habit not found")
    return habit


@router.get("")
def list_habits(user_id: UUID = Depends(current_user_id), db: Session = Depends(get_db)):
    rows = db.query(Habit).filter_by(user_id=user_id).order_by(Habit.created_at.desc()).all()
    return [_serialize_habit(h) for h in rows]


@router.post("")
def create_habit(body: HabitCreate, user_id: UUID = Depends(current_user_id), db: Session = Depends(get_db)):
    if not body.name.strip():
        raise HTTPException(400, "name is required")
    habit = Habit(
        user_id=user_id,
        name=body.name.strip(),
        description=body.description,
        frequency=body.frequency,
        color=body.color,
    )
    db.add(habit)
    db.commit()
    db.refresh(habit)
    return _serialize_habit(habit)


@router.delete("/{habit_id}")
def delete_habit(habit_id: UUID, user_id: UUID = Depends(current_user_id), db: Session = Depends(get_db)):
    habit = _owned_habit(db, user_id, habit_id)
    db.delete(habit)
    db.commit()
    return {"id": str(habit_id), "status": "deleted"}


@router.get("/logs")
def list_logs(
    days: int = Query(7, ge=0, le=366),
    user_id: UUID = Depends(current_user_id),
    db: Session = Depends(get_db),
):
    return [_serialize_log(l) for l in habit_service.recent_logs(db, user_id, days)]


@router.post("/{habit_id}/toggle")
def toggle_habit(habit_id: UUID, user_id: UUID = Depends(current_user_id), db: Session = Depends(get_db)):
    habit = _owned_habit(db, user_id, habit_id)
    entry = habit_service.toggle_today(db, user_id, habit)
    return _serialize_log(entry)


@router.post("/insights")
async def habit_insights(
    user_id: UUID = Depends(current_user_id),
    db: Session = Depends(get_db),
    gateway: GatewayClient = Depends(get_gateway),
):
    payload = habit_service.insights_payload(db, user_id)
    if not payload["habits"]:
        raise HTTPException(400, "Add some habits first")
    return await run_feature(HABIT_INSIGHTS, payload, gateway)


@router.get("/insights/history")
def insight_history(
    limit: int = Query(20, ge=1, le=200),
    user_id: UUID = Depends(current_user_id),
    db: Session = Depends(get_db),
):
    rows = (
        db.query(HabitInsight)
          .filter_by(user_id=user_id)
          .order_by(HabitInsight.created_at.desc())
          .limit(limit)
          .all()
    )
    return [
        {
            "id": str(r.id),
            "insight_text": r.insight_text,
            "insight_type": r.insight_type,
            "created_at": r.created_at.isoformat() if r.created_at else None,
        }
        for r in rows
    ]
