# backend/hub/services/resumes.py
from __future__ import annotations

import io
import re
from typing import Optional
from uuid import UUID

from docx import Document as DocxDocument  # python-docx
from fastapi import HTTPException
from pypdf import PdfReader
from sqlalchemy.orm import Session
from unidecode import unidecode

from hub.models import Resume

SUPPORTED_SUFFIXES = (".pdf", ".docx", ".txt")


def clean_text(text: str) -> str:
    # Normalize unicode to ASCII-ish for ATS friendliness
    text = unidecode(text)
    # Collapse control chars & binary noise
    text = re.sub(r"[^\x09\x0A\x0D\x20-\x7E]", " ", text)  # keep tabs/newlines/printables
    # Collapse excessive whitespace
    text = re.sub(r"[ \t]{2,}", " ", text)
    text = re.sub(r"\n{3,}", "\n\n", text)
    return text.strip()


def read_pdf(data: bytes) -> str:
    try:
        reader = PdfReader(io.BytesIO(data))
        return "\n\n".join((p.extract_text() or "") for p in reader.pages)
    except Exception:
        # Extraction failed: keep whatever bytes decode, cleaning removes the noise
        return data.decode("utf-8", errors="ignore")


def read_docx(data: bytes) -> str:
    doc = DocxDocument(io.BytesIO(data))
    return "\n".join(p.text for p in doc.paragraphs)


def extract_text(filename: str, data: bytes) -> str:
    """Raw text of an uploaded resume; 415 for anything but PDF, DOCX or TXT."""
    name = (filename or "").lower()
    if name.endswith(".pdf"):
        return read_pdf(data)
    if name.endswith(".docx"):
        return read_docx(data)
    if name.endswith(".txt") or not name:
        return data.decode("utf-8", errors="ignore")
    raise HTTPException(status_code=415, detail="Unsupported file type. Upload PDF, DOCX, or TXT.")


def resolve_resume_text(
    db: Session,
    user_id: UUID,
    resume_id: Optional[UUID],
    resume_content: Optional[str],
) -> str:
    """Inline text wins over the stored resume; a given resume_id must belong to the caller."""
    if resume_id is None:
        if not resume_content:
            raise HTTPException(400, detail="resume_id or resume_content is required")
        return resume_content
    resume = db.query(Resume).filter_by(id=resume_id, user_id=user_id).first()
    if not resume:
        raise HTTPException(404, detail="resume not found")
    return resume_content or resume.content or ""
