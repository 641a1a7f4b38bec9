# backend/hub/routers/profile.py
from uuid import UUID

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from hub.db import get_db
from hub.deps import current_user_id
from hub.models import Profile
from hub.schemas import ProfileUpdate

router = APIRouter(prefix="/profile", tags=["profile"])


def _serialize_profile(p: Profile) -> dict:
    return {
        "id": str(p.id),
        "email": p.email,
        "full_name": p.full_name,
        "created_at": p.created_at.isoformat() if p.created_at else None,
        "updated_at": p.updated_at.isoformat() if p.updated_at else None,
    }


@router.get("")
def get_profile(user_id: UUID = Depends(current_user_id), db: Session = Depends(get_db)):
    return _serialize_profile(db.get(Profile, user_id))


@router.patch("")
def update_profile(body: ProfileUpdate, user_id: UUID = Depends(current_user_id), db: Session = Depends(get_db)):
    profile = db.get(Profile, user_id)
    for key, value in body.model_dump(exclude_unset=True).items():
        setattr(profile, key, value)
    db.commit()
    db.refresh(profile)
    return _serialize_profile(profile)
