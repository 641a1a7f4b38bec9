# backend/hub/routers/resumes.py
from uuid import UUID

from fastapi import APIRouter, Depends, File, HTTPException, UploadFile
from sqlalchemy.orm import Session

from hub.db import get_db
from hub.deps import current_user_id
from hub.models import Resume
from hub.services.resumes import clean_text, extract_text

router = APIRouter(prefix="/resumes", tags=["resumes"])


def _serialize_resume(r: Resume, with_content: bool = False) -> dict:
    out = {
        "id": str(r.id),
        "file_name": r.file_name,
        "parsed_data": r.parsed_data or {},
        "created_at": r.created_at.isoformat() if r.created_at else None,
    }
    if with_content:
        out["content"] = r.content
    return out


@router.post("/upload")
async def upload_resume(
    file: UploadFile = File(...),
    user_id: UUID = Depends(current_user_id),
    db: Session = Depends(get_db),
):
    data = await file.read()
    try:
        raw = extract_text(file.filename, data)
    except HTTPException:
        raise
    except Exception as e:
        raise HTTPException(status_code=400, detail=f"Failed to parse: {e}")

    cleaned = clean_text(raw or "")
    if not cleaned:
        raise HTTPException(status_code=422, detail="No readable text found in document.")

    resume = Resume(
        user_id=user_id,
        file_name=file.filename,
        content=cleaned,
        parsed_data={"chars": len(cleaned)},
    )
    db.add(resume)
    db.commit()
    db.refresh(resume)
    return _serialize_resume(resume, with_content=True)


@router.get("")
def list_resumes(user_id: UUID = Depends(current_user_id), db: Session = Depends(get_db)):
    rows = db.query(Resume).filter_by(user_id=user_id).order_by(Resume.created_at.desc()).all()
    return [_serialize_resume(r) for r in rows]


@router.get("/{resume_id}")
def get_resume(resume_id: UUID, user_id: UUID = Depends(current_user_id), db: Session = Depends(get_db)):
    resume = db.query(Resume).filter_by(id=resume_id, user_id=user_id).first()
    if not resume:
        raise HTTPException(404, "resume not found")
    return _serialize_resume(resume, with_content=True)


@router.delete("/{resume_id}")
def delete_resume(resume_id: UUID, user_id: UUID = Depends(current_user_id), db: Session = Depends(get_db)):
    deleted = db.query(Resume).filter_by(id=resume_id, user_id=user_id).delete(synchronize_session=False)
    db.commit()
    if not deleted:
        raise HTTPException(404, "resume not found")
    return {"id": str(resume_id), "status": "deleted"}
