# backend/hub/services/support.py
from __future__ import annotations

import logging
from datetime import datetime, timezone
from typing import Any, Dict, Tuple
from uuid import UUID

from sqlalchemy.orm import Session

from hub.models import KnowledgeBaseEntry, SupportConversation
from hub.services.features import SUPPORT_CHAT
from hub.services.gateway import GatewayClient
from hub.services.pipeline import run_feature

log = logging.getLogger(__name__)

EMPTY_REPLY = "I apologize, but I could not process your request. Please try again."
SUBJECT_CHARS = 50
PRIORITIES = ("low", "medium", "high")


def _now_iso() -> str:
    return datetime.now(timezone.utc).isoformat()


def subject_from(text: str) -> str:
    return text[:SUBJECT_CHARS] + ("..." if len(text) > SUBJECT_CHARS else "")


async def send_message(
    db: Session,
    user_id: UUID,
    conversation: SupportConversation,
    content: str,
    gateway: GatewayClient,
) -> Tuple[SupportConversation, Dict[str, Any]]:
    """
    One chat turn: ask the support agent with the prior history and the
    user's knowledge base, then append both messages to the conversation.
    Nothing is written if the AI call fails.
    """
    previous = list(conversation.messages or [])
    kb = (
        db.query(KnowledgeBaseEntry)
          .filter_by(user_id=user_id)
          .order_by(KnowledgeBaseEntry.created_at.asc())
          .all()
    )
    body = {
        "message": content,
        "conversationHistory": [{"role": m.get("role"), "content": m.get("content")} for m in previous],
        "knowledgeBase": [{"title": k.title, "content": k.content} for k in kb],
    }
    result = await run_feature(SUPPORT_CHAT, body, gateway)

    user_msg = {"role": "user", "content": content, "timestamp": _now_iso()}
    ai_msg = {"role": "assistant", "content": str(result.get("reply") or EMPTY_REPLY), "timestamp": _now_iso()}

    if not previous:
        conversation.subject = subject_from(content)
    if result.get("shouldEscalate") is True:
        conversation.status = "escalated"
        if result.get("suggestedTicketPriority") in PRIORITIES:
            conversation.priority = result["suggestedTicketPriority"]
        log.info("Conversation %s escalated (priority=%s)", conversation.id, conversation.priority)

    # New list so the JSON column registers the change
    conversation.messages = previous + [user_msg, ai_msg]
    conversation.updated_at = datetime.now(timezone.utc)
    db.commit()
    db.refresh(conversation)
    return conversation, result
