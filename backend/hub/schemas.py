from pydantic import BaseModel, ConfigDict, Field, model_validator
from typing import Any, List, Optional
from uuid import UUID


# ----------------------------
# AI function bodies (camelCase on the wire)
# ----------------------------

class _Body(BaseModel):
    # Only presence is checked; unknown keys are ignored and numbers read as text.
    model_config = ConfigDict(extra="ignore", coerce_numbers_to_str=True)


class _Item(_Body):
    """Array entry: any field may be null and a non-object entry reads as empty."""

    @model_validator(mode="before")
    @classmethod
    def _as_mapping(cls, data: Any) -> Any:
        return data if isinstance(data, dict) else {}


class ChatTurn(_Item):
    role: Any = None
    content: Any = None


class KnowledgeItem(_Item):
    title: Any = None
    content: Any = None


class SupportChatRequest(_Body):
    message: str
    conversationHistory: Optional[List[ChatTurn]] = None
    knowledgeBase: Optional[List[KnowledgeItem]] = None


class HabitItem(_Item):
    name: Any = None
    frequency: Any = None


class HabitLogItem(_Item):
    habit_name: Any = None
    logged_at: Any = None
    completed: Any = None
    notes: Any = None


class HabitInsightsRequest(_Body):
    habits: List[HabitItem]
    logs: List[HabitLogItem]


class DocumentItem(_Item):
    title: Any = None
    content: Any = None


class KnowledgeQueryRequest(_Body):
    query: str
    documents: Optional[List[DocumentItem]] = None


class AtsOptimizerRequest(_Body):
    resumeContent: str
    targetRole: str


class JobSettings(_Item):
    tone: Any = None
    coverLetterLength: Any = None


class JobAssistantRequest(_Body):
    resumeContent: str
    jobDescription: str
    settings: Optional[JobSettings] = None


# ----------------------------
# Workspace routes (snake_case)
# ----------------------------

class ProfileUpdate(BaseModel):
    email: Optional[str] = None
    full_name: Optional[str] = None


class JobApplicationCreate(BaseModel):
    job_description: str
    resume_id: Optional[UUID] = None
    resume_content: Optional[str] = None
    tone: str = "professional"  # professional|conversational|confident
    cover_letter_length: Optional[str] = None


class HabitCreate(BaseModel):
    name: str
    description: Optional[str] = None
    frequency: str = "daily"
    color: str = "#22c55e"


class AtsScanCreate(BaseModel):
    target_role: str
    resume_id: Optional[UUID] = None
    resume_content: Optional[str] = None


class ConversationCreate(BaseModel):
    subject: str = "New Conversation"
    customer_name: Optional[str] = None
    customer_email: Optional[str] = None


class SupportMessageIn(BaseModel):
    content: str


class KnowledgeBaseCreate(BaseModel):
    title: str
    content: str
    category: Optional[str] = None


class DocumentCreate(BaseModel):
    title: str
    content: str = ""
    url: str = ""


class DocumentUpdate(BaseModel):
    title: Optional[str] = None
    content: Optional[str] = None
    metadata: Optional[dict] = None


class DocumentQueryIn(BaseModel):
    query: str = Field(..., description="Question to answer from the user's documents")
