"""
Essay routes: /api/essays
"""

from fastapi import APIRouter, HTTPException
from pydantic import BaseModel

from dyscorrect.core.clean import clean_ocr_text
from dyscorrect.core.tokenize import word_count
from dyscorrect.server.deps import get_essay_store, get_session_store


router = APIRouter(prefix="/api/essays", tags=["essays"])


class CreateEssayRequest(BaseModel):
    text: str
    student_id: str | None = None
    title: str | None = None
    clean: bool = False  # run OCR cleanup before storing


def essay_summary(essay) -> dict:
    return {
        "id": essay.id,
        "text": essay.text,
        "student_id": essay.student_id,
        "title": essay.title,
        "created_at": essay.created_at,
    }


@router.get("")
async def list_essays(student_id: str | None = None, db: int = 0):
    """List essays, optionally for one student."""
    store = get_essay_store(db)
    essays = store.list_for_student(student_id) if student_id else store.list_all()
    return {"essays": [essay_summary(e) for e in essays]}


@router.post("")
async def create_essay(req: CreateEssayRequest, db: int = 0):
    """Store a new essay."""
    text = clean_ocr_text(req.text) if req.clean else req.text
    store = get_essay_store(db)
    essay_id = store.add(text, student_id=req.student_id, title=req.title)
    return {"id": essay_id, "text": text, "word_count": word_count(text)}


@router.get("/{essay_id}")
async def get_essay(essay_id: str, db: int = 0):
    """Get an essay by ID."""
    store = get_essay_store(db)
    essay = store.get(essay_id)
    if not essay:
        raise HTTPException(status_code=404, detail="Essay not found")

    return {
        **essay_summary(essay),
        "word_count": word_count(essay.text),
        "reviewed": store.has_data(essay_id, "result"),
    }


@router.delete("/{essay_id}")
async def delete_essay(essay_id: str, db: int = 0):
    """Delete an essay and its review sessions."""
    store = get_essay_store(db)
    if not store.get(essay_id):
        raise HTTPException(status_code=404, detail="Essay not found")

    removed = get_session_store(db).delete_for_essay(essay_id)
    store.delete(essay_id)
    return {"success": True, "sessions_deleted": removed}


@router.get("/{essay_id}/result")
async def get_essay_result(essay_id: str, db: int = 0):
    """Final reviewed text and corrections."""
    store = get_essay_store(db)
    if not store.get(essay_id):
        raise HTTPException(status_code=404, detail="Essay not found")

    result = store.get_result(essay_id)
    if result is None:
        raise HTTPException(status_code=404, detail="Essay has not been reviewed yet")
    return result


@router.get("/{essay_id}/sessions")
async def list_essay_sessions(essay_id: str, db: int = 0):
    """List review sessions for an essay."""
    sessions = get_session_store(db).list_for_essay(essay_id)
    return {"sessions": [s.to_dict() for s in sessions]}
