import uuid
from datetime import date, datetime, timezone

from sqlalchemy import Column, String, Text, JSON, Integer, TIMESTAMP, Date, ForeignKey, Boolean, Uuid
from sqlalchemy.orm import relationship
from hub.db import Base


def _now() -> datetime:
    return datetime.now(timezone.utc)


class Profile(Base):
    __tablename__ = "profiles"
    # id is the authenticated user's id
    id = Column(Uuid, primary_key=True)
    email = Column(Text)
    full_name = Column(Text)
    created_at = Column(TIMESTAMP(timezone=True), nullable=False, default=_now)
    updated_at = Column(TIMESTAMP(timezone=True), nullable=False, default=_now, onupdate=_now)


class Resume(Base):
    __tablename__ = "resumes"
    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    user_id = Column(Uuid, ForeignKey("profiles.id", ondelete="CASCADE"), nullable=False, index=True)
    file_name = Column(Text)
    content = Column(Text)
    parsed_data = Column(JSON)
    created_at = Column(TIMESTAMP(timezone=True), nullable=False, default=_now)


class JobApplication(Base):
    __tablename__ = "job_applications"
    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    user_id = Column(Uuid, ForeignKey("profiles.id", ondelete="CASCADE"), nullable=False, index=True)
    resume_id = Column(Uuid, ForeignKey("resumes.id", ondelete="SET NULL"))
    job_description = Column(Text, nullable=False)
    generated_bullets = Column(Text)
    cover_letter = Column(Text)
    summary = Column(Text)
    settings = Column(JSON, default=dict)
    created_at = Column(TIMESTAMP(timezone=True), nullable=False, default=_now)


class Habit(Base):
    __tablename__ = "habits"
    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    user_id = Column(Uuid, ForeignKey("profiles.id", ondelete="CASCADE"), nullable=False, index=True)
    name = Column(Text, nullable=False)
    description = Column(Text)
    frequency = Column(String, default="daily")
    color = Column(String, default="#22c55e")
    created_at = Column(TIMESTAMP(timezone=True), nullable=False, default=_now)

    logs = relationship("HabitLog", back_populates="habit", cascade="all, delete-orphan")


class HabitLog(Base):
    __tablename__ = "habit_logs"
    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    habit_id = Column(Uuid, ForeignKey("habits.id", ondelete="CASCADE"), nullable=False, index=True)
    user_id = Column(Uuid, ForeignKey("profiles.id", ondelete="CASCADE"), nullable=False, index=True)
    completed = Column(Boolean, default=False)
    notes = Column(Text)
    logged_at = Column(Date, nullable=False, default=date.today)

    habit = relationship("Habit", back_populates="logs")


class HabitInsight(Base):
    __tablename__ = "habit_insights"
    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    user_id = Column(Uuid, ForeignKey("profiles.id", ondelete="CASCADE"), nullable=False, index=True)
    insight_text = Column(Text, nullable=False)
    insight_type = Column(String, default="daily_analysis")
    created_at = Column(TIMESTAMP(timezone=True), nullable=False, default=_now)


class AtsScan(Base):
    __tablename__ = "ats_scans"
    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    user_id = Column(Uuid, ForeignKey("profiles.id", ondelete="CASCADE"), nullable=False, index=True)
    resume_id = Column(Uuid, ForeignKey("resumes.id", ondelete="SET NULL"))
    target_role = Column(Text, nullable=False)
    ats_score = Column(Integer)
    missing_keywords = Column(JSON)
    suggestions = Column(JSON)
    optimized_resume = Column(Text)
    created_at = Column(TIMESTAMP(timezone=True), nullable=False, default=_now)


class SupportConversation(Base):
    __tablename__ = "support_conversations"
    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    user_id = Column(Uuid, ForeignKey("profiles.id", ondelete="CASCADE"), nullable=False, index=True)
    customer_name = Column(Text)
    customer_email = Column(Text)
    subject = Column(Text)
    status = Column(String, default="open")
    priority = Column(String, default="medium")
    # ordered list of {role, content, timestamp}
    messages = Column(JSON, default=list)
    created_at = Column(TIMESTAMP(timezone=True), nullable=False, default=_now)
    updated_at = Column(TIMESTAMP(timezone=True), nullable=False, default=_now, onupdate=_now)


class KnowledgeBaseEntry(Base):
    __tablename__ = "knowledge_base"
    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    user_id = Column(Uuid, ForeignKey("profiles.id", ondelete="CASCADE"), nullable=False, index=True)
    title = Column(Text, nullable=False)
    content = Column(Text, nullable=False)
    category = Column(Text)
    created_at = Column(TIMESTAMP(timezone=True), nullable=False, default=_now)


class Document(Base):
    __tablename__ = "documents"
    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    user_id = Column(Uuid, ForeignKey("profiles.id", ondelete="CASCADE"), nullable=False, index=True)
    title = Column(Text, nullable=False)
    content = Column(Text)
    doc_type = Column(String, default="note")
    file_url = Column(Text)
    # "metadata" is reserved on declarative classes
    meta = Column("metadata", JSON, default=dict)
    created_at = Column(TIMESTAMP(timezone=True), nullable=False, default=_now)
    updated_at = Column(TIMESTAMP(timezone=True), nullable=False, default=_now, onupdate=_now)


class DocumentQuery(Base):
    __tablename__ = "document_queries"
    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    user_id = Column(Uuid, ForeignKey("profiles.id", ondelete="CASCADE"), nullable=False, index=True)
    query = Column(Text, nullable=False)
    response = Column(Text)
    citations = Column(JSON, default=list)
    created_at = Column(TIMESTAMP(timezone=True), nullable=False, default=_now)
