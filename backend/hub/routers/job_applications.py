# backend/hub/routers/job_applications.py
from __future__ import annotations

from uuid import UUID

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session

from hub.db import get_db
from hub.deps import current_user_id, get_gateway
from hub.models import JobApplication
from hub.schemas import JobApplicationCreate
from hub.services.features import JOB_ASSISTANT
from hub.services.gateway import GatewayClient
from hub.services.pipeline import run_feature
from hub.services.resumes import resolve_resume_text

router = APIRouter(prefix="/job-applications", tags=["job-applications"])


def _serialize_application(a: JobApplication) -> dict:
    return {
        "id": str(a.id),
        "resume_id": str(a.resume_id) if a.resume_id else None,
        "job_description": a.job_description,
        "generated_bullets": a.generated_bullets,
        "cover_letter": a.cover_letter,
        "summary": a.summary,
        "settings": a.settings or {},
        "created_at": a.created_at.isoformat() if a.created_at else None,
    }


@router.post("")
async def generate_application(
    body: JobApplicationCreate,
    user_id: UUID = Depends(current_user_id),
    db: Session = Depends(get_db),
    gateway: GatewayClient = Depends(get_gateway),
):
    if not body.job_description.strip():
        raise HTTPException(400, "Please provide both job description and resume.")
    resume_text = resolve_resume_text(db, user_id, body.resume_id, body.resume_content)

    settings = {"tone": body.tone}
    if body.cover_letter_length:
        settings["coverLetterLength"] = body.cover_letter_length

    result = await run_feature(
        JOB_ASSISTANT,
        {"resumeContent": resume_text, "jobDescription": body.job_description, "settings": settings},
        gateway,
    )

    bullets = result.get("bullets")
    app_row = JobApplication(
        user_id=user_id,
        resume_id=body.resume_id,
        job_description=body.job_description,
        generated_bullets="\n".join(str(b) for b in bullets) if isinstance(bullets, list) else None,
        cover_letter=str(result.get("coverLetter") or ""),
        summary=str(result.get("summary") or ""),
        settings=settings,
    )
    db.add(app_row)
    db.commit()
    db.refresh(app_row)
    return {"id": str(app_row.id), "result": result}


@router.get("")
def list_applications(user_id: UUID = Depends(current_user_id), db: Session = Depends(get_db)):
    rows = (
        db.query(JobApplication)
          .filter_by(user_id=user_id)
          .order_by(JobApplication.created_at.desc())
          .all()
    )
    return [_serialize_application(a) for a in rows]
