# backend/hub/routers/support.py
from __future__ import annotations

from uuid import UUID

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session

from hub.db import get_db
from hub.deps import current_user_id, get_gateway
from hub.models import KnowledgeBaseEntry, SupportConversation
from hub.schemas import ConversationCreate, KnowledgeBaseCreate, SupportMessageIn
from hub.services.gateway import GatewayClient
from hub.services.support import send_message

router = APIRouter(prefix="/support", tags=["support"])


def _serialize_conversation(c: SupportConversation) -> dict:
    return {
        "id": str(c.id),
        "customer_name": c.customer_name,
        "customer_email": c.customer_email,
        "subject": c.subject,
        "status": c.status,
        "priority": c.priority,
        "messages": c.messages or [],
        "created_at": c.created_at.isoformat() if c.created_at else None,
        "updated_at": c.updated_at.isoformat() if c.updated_at else None,
    }


def _serialize_entry(k: KnowledgeBaseEntry) -> dict:
    return {
        "id": str(k.id),
        "title": k.title,
        "content": k.content,
        "category": k.category,
        "created_at": k.created_at.isoformat() if k.created_at else None,
    }


# ----------------------------
# Conversations
# ----------------------------

@router.get("/conversations")
def list_conversations(user_id: UUID = Depends(current_user_id), db: Session = Depends(get_db)):
    rows = (
        db.query(SupportConversation)
          .filter_by(user_id=user_id)
          .order_by(SupportConversation.updated_at.desc())
          .all()
    )
    return [_serialize_conversation(c) for c in rows]


@router.post("/conversations")
def create_conversation(
    body: ConversationCreate,
    user_id: UUID = Depends(current_user_id),
    db: Session = Depends(get_db),
):
    conv = SupportConversation(
        user_id=user_id,
        subject=body.subject,
        customer_name=body.customer_name,
        customer_email=body.customer_email,
        status="open",
        priority="medium",
        messages=[],
    )
    db.add(conv)
    db.commit()
    db.refresh(conv)
    return _serialize_conversation(conv)


@router.post("/conversations/{conversation_id}/messages")
async def post_message(
    conversation_id: UUID,
    body: SupportMessageIn,
    user_id: UUID = Depends(current_user_id),
    db: Session = Depends(get_db),
    gateway: GatewayClient = Depends(get_gateway),
):
    if not body.content.strip():
        raise HTTPException(400, "content is required")
    conv = db.query(SupportConversation).filter_by(id=conversation_id, user_id=user_id).first()
    if not conv:
        raise HTTPException(404, "conversation not found")

    conv, result = await send_message(db, user_id, conv, body.content, gateway)
    return {"conversation": _serialize_conversation(conv), "result": result}


# ----------------------------
# Knowledge base
# ----------------------------

@router.get("/knowledge-base")
def list_entries(user_id: UUID = Depends(current_user_id), db: Session = Depends(get_db)):
    rows = (
        db.query(KnowledgeBaseEntry)
          .filter_by(user_id=user_id)
          .order_by(KnowledgeBaseEntry.created_at.desc())
          .all()
    )
    return [_serialize_entry(k) for k in rows]


@router.post("/knowledge-base")
def create_entry(body: KnowledgeBaseCreate, user_id: UUID = Depends(current_user_id), db: Session = Depends(get_db)):
    entry = KnowledgeBaseEntry(user_id=user_id, title=body.title, content=body.content, category=body.category)
    db.add(entry)
    db.commit()
    db.refresh(entry)
    return _serialize_entry(entry)


@router.delete("/knowledge-base/{entry_id}")
def delete_entry(entry_id: UUID, user_id: UUID = Depends(current_user_id), db: Session = Depends(get_db)):
    deleted = (
        db.query(KnowledgeBaseEntry)
          .filter_by(id=entry_id, user_id=user_id)
          .delete(synchronize_session=False)
    )
    db.commit()
    if not deleted:
        raise HTTPException(404, "knowledge base entry not found")
    return {"id": str(entry_id), "status": "deleted"}
