# backend/hub/routers/documents.py
from __future__ import annotations

from uuid import UUID

from fastapi import APIRouter, Depends, HTTPException, Query
from sqlalchemy.orm import Session

from hub.db import get_db
from hub.deps import current_user_id, get_gateway
from hub.models import Document, DocumentQuery
from hub.schemas import DocumentCreate, DocumentQueryIn, DocumentUpdate
from hub.services.features import KNOWLEDGE_QUERY
from hub.services.gateway import GatewayClient
from hub.services.pipeline import run_feature

router = APIRouter(prefix="/documents", tags=["documents"])


def _serialize_document(d: Document) -> dict:
    return {
        "id": str(d.id),
        "title": d.title,
        "content": d.content,
        "doc_type": d.doc_type,
        "file_url": d.file_url,
        "metadata": d.meta or {},
        "created_at": d.created_at.isoformat() if d.created_at else None,
        "updated_at": d.updated_at.isoformat() if d.updated_at else None,
    }


def _serialize_query(q: DocumentQuery) -> dict:
    return {
        "id": str(q.id),
        "query": q.query,
        "response": q.response,
        "citations": q.citations or [],
        "created_at": q.created_at.isoformat() if q.created_at else None,
    }


def _owned_document(db: Session, user_id: UUID, document_id: UUID) -> Document:
    doc = db.query(Document).filter_by(id=document_id, user_id=user_id).first()
    if not doc:
        raise HTTPException(404, "document not found")
    return doc


@router.get("")
def list_documents(user_id: UUID = Depends(current_user_id), db: Session = Depends(get_db)):
    rows = db.query(Document).filter_by(user_id=user_id).order_by(Document.created_at.desc()).all()
    return [_serialize_document(d) for d in rows]


@router.post("")
def create_document(body: DocumentCreate, user_id: UUID = Depends(current_user_id), db: Session = Depends(get_db)):
    title, content, url = body.title.strip(), body.content.strip(), body.url.strip()
    if not title:
        raise HTTPException(400, "Please provide a title for your document.")
    if not content and not url:
        raise HTTPException(400, "Please provide content or a URL for your document.")

    doc = Document(
        user_id=user_id,
        title=title,
        content=content or f"URL: {url}",
        doc_type="link" if url else "note",
        file_url=url or None,
    )
    db.add(doc)
    db.commit()
    db.refresh(doc)
    return _serialize_document(doc)


@router.patch("/{document_id}")
def update_document(
    document_id: UUID,
    body: DocumentUpdate,
    user_id: UUID = Depends(current_user_id),
    db: Session = Depends(get_db),
):
    doc = _owned_document(db, user_id, document_id)
    changes = body.model_dump(exclude_unset=True)
    if "metadata" in changes:
        doc.meta = changes.pop("metadata") or {}
    for key, value in changes.items():
        setattr(doc, key, value)
    db.commit()
    db.refresh(doc)
    return _serialize_document(doc)


@router.delete("/{document_id}")
def delete_document(document_id: UUID, user_id: UUID = Depends(current_user_id), db: Session = Depends(get_db)):
    doc = _owned_document(db, user_id, document_id)
    db.delete(doc)
    db.commit()
    return {"id": str(document_id), "status": "deleted"}


@router.post("/query")
async def query_documents(
    body: DocumentQueryIn,
    user_id: UUID = Depends(current_user_id),
    db: Session = Depends(get_db),
    gateway: GatewayClient = Depends(get_gateway),
):
    if not body.query.strip():
        raise HTTPException(400, "query is required")
    docs = db.query(Document).filter_by(user_id=user_id).order_by(Document.created_at.desc()).all()
    if not docs:
        raise HTTPException(400, "Please add some documents to your knowledge base first.")

    payload = {
        "query": body.query,
        "documents": [{"id": str(d.id), "title": d.title, "content": d.content} for d in docs],
    }
    result = await run_feature(KNOWLEDGE_QUERY, payload, gateway)

    # append-only history
    citations = result.get("citations")
    row = DocumentQuery(
        user_id=user_id,
        query=body.query,
        response=result.get("answer") if isinstance(result.get("answer"), str) else None,
        citations=citations if isinstance(citations, list) else [],
    )
    db.add(row)
    db.commit()
    db.refresh(row)
    return {"id": str(row.id), "result": result}


@router.get("/queries")
def list_queries(
    limit: int = Query(50, ge=1, le=500),
    user_id: UUID = Depends(current_user_id),
    db: Session = Depends(get_db),
):
    rows = (
        db.query(DocumentQuery)
          .filter_by(user_id=user_id)
          .order_by(DocumentQuery.created_at.desc())
          .limit(limit)
          .all()
    )
    return [_serialize_query(q) for q in rows]
