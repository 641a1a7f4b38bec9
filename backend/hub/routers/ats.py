# backend/hub/routers/ats.py
from __future__ import annotations

from typing import Any, Optional
from uuid import UUID

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from hub.db import get_db
from hub.deps import current_user_id, get_gateway
from hub.models import AtsScan
from hub.schemas import AtsScanCreate
from hub.services.features import ATS_OPTIMIZER
from hub.services.gateway import GatewayClient
from hub.services.pipeline import run_feature
from hub.services.resumes import resolve_resume_text

router = APIRouter(prefix="/ats-scans", tags=["ats"])


def _int_or_none(x: Any) -> Optional[int]:
    try:
        if x is None:
            return None
        return int(x)
    except (TypeError, ValueError):
        return None


def _str_list(x: Any) -> list[str]:
    return [str(i) for i in x] if isinstance(x, list) else []


def _optimized_resume(result: dict) -> Optional[str]:
    parts = []
    if isinstance(result.get("optimizedSummary"), str):
        parts.append(result["optimizedSummary"])
    parts.extend(f"- {b}" for b in _str_list(result.get("optimizedBullets")))
    return "\n".join(parts) or None


def _serialize_scan(s: AtsScan) -> dict:
    return {
        "id": str(s.id),
        "resume_id": str(s.resume_id) if s.resume_id else None,
        "target_role": s.target_role,
        "ats_score": s.ats_score,
        "missing_keywords": s.missing_keywords or [],
        "suggestions": s.suggestions or [],
        "optimized_resume": s.optimized_resume,
        "created_at": s.created_at.isoformat() if s.created_at else None,
    }


@router.post("")
async def create_scan(
    body: AtsScanCreate,
    user_id: UUID = Depends(current_user_id),
    db: Session = Depends(get_db),
    gateway: GatewayClient = Depends(get_gateway),
):
    resume_text = resolve_resume_text(db, user_id, body.resume_id, body.resume_content)
    result = await run_feature(
        ATS_OPTIMIZER,
        {"resumeContent": resume_text, "targetRole": body.target_role},
        gateway,
    )

    suggestions = result.get("suggestions")
    scan = AtsScan(
        user_id=user_id,
        resume_id=body.resume_id,
        target_role=body.target_role,
        ats_score=_int_or_none(result.get("score")),
        missing_keywords=_str_list(result.get("missingKeywords")),
        suggestions=suggestions if isinstance(suggestions, list) else [],
        optimized_resume=_optimized_resume(result),
    )
    db.add(scan)
    db.commit()
    db.refresh(scan)
    return {"id": str(scan.id), "result": result}


@router.get("")
def list_scans(user_id: UUID = Depends(current_user_id), db: Session = Depends(get_db)):
    rows = db.query(AtsScan).filter_by(user_id=user_id).order_by(AtsScan.created_at.desc()).all()
    return [_serialize_scan(s) for s in rows]
