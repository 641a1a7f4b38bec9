# backend/hub/services/features.py
"""
The five AI features. Each one differs from the others only in its request
body, its prompt builder, its fallback shape and the gateway statuses it maps
to a dedicated error.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Callable, Dict, List, Optional, Type

from pydantic import BaseModel

from hub.errors import CreditsExhaustedError, HubError, RateLimitError
from hub.schemas import (
    AtsOptimizerRequest,
    HabitInsightsRequest,
    JobAssistantRequest,
    KnowledgeQueryRequest,
    SupportChatRequest,
)
from hub.services import prompts


def _default_errors() -> Dict[int, Callable[[], HubError]]:
    return {429: RateLimitError}


@dataclass(frozen=True)
class Feature:
    name: str
    label: str
    request_model: Type[BaseModel]
    build_messages: Callable[[Any], List[Dict[str, str]]]
    fallback: Callable[[str], Dict[str, Any]]
    model: Optional[str] = None  # None => gateway default
    errors: Dict[int, Callable[[], HubError]] = field(default_factory=_default_errors)


def support_fallback(text: str) -> Dict[str, Any]:
    return {"reply": text, "shouldEscalate": False}


def habit_fallback(text: str) -> Dict[str, Any]:
    return {"insights": [{"type": "suggestion", "message": text}]}


def knowledge_fallback(text: str) -> Dict[str, Any]:
    return {"answer": text, "citations": [], "confidence": "medium"}


def ats_fallback(text: str) -> Dict[str, Any]:
    return {"score": 50, "suggestions": [], "rawAnalysis": text}


def job_fallback(text: str) -> Dict[str, Any]:
    return {"bullets": [], "coverLetter": text, "summary": ""}


SUPPORT_CHAT = Feature(
    name="ai-support-chat",
    label="support response",
    request_model=SupportChatRequest,
    build_messages=prompts.build_support_messages,
    fallback=support_fallback,
)

HABIT_INSIGHTS = Feature(
    name="ai-habit-insights",
    label="habit insights",
    request_model=HabitInsightsRequest,
    build_messages=prompts.build_habit_messages,
    fallback=habit_fallback,
)

KNOWLEDGE_QUERY = Feature(
    name="ai-knowledge-query",
    label="knowledge response",
    request_model=KnowledgeQueryRequest,
    build_messages=prompts.build_knowledge_messages,
    fallback=knowledge_fallback,
)

ATS_OPTIMIZER = Feature(
    name="ai-ats-optimizer",
    label="ATS analysis",
    request_model=AtsOptimizerRequest,
    build_messages=prompts.build_ats_messages,
    fallback=ats_fallback,
)

JOB_ASSISTANT = Feature(
    name="ai-job-assistant",
    label="job application materials",
    request_model=JobAssistantRequest,
    build_messages=prompts.build_job_messages,
    fallback=job_fallback,
    errors={429: RateLimitError, 402: CreditsExhaustedError},
)

FEATURES = (SUPPORT_CHAT, HABIT_INSIGHTS, KNOWLEDGE_QUERY, ATS_OPTIMIZER, JOB_ASSISTANT)
