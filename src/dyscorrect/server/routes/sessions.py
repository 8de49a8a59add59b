"""
Review session routes: /api/sessions
"""

from fastapi import APIRouter, HTTPException
from pydantic import BaseModel

from dyscorrect.core.analysis import BackendError
from dyscorrect.core.errors import (
    AnalysisServiceError, NotFoundError, SessionBusyError, TokenNotFoundError,
)
from dyscorrect.core.matcher import reconcile
from dyscorrect.core.store import TokenStore
from dyscorrect.core.tokenize import tokenize
from dyscorrect.server.deps import get_analyzer, get_essay_store, get_session_store


router = APIRouter(prefix="/api/sessions", tags=["sessions"])


class BackendErrorIn(BaseModel):
    word: str
    type: str = "error"
    suggestion: str | None = None
    dyslexiaPattern: str | None = None
    dyslexia_pattern: str | None = None
    explanation: str | None = None
    confidence: float | None = None
    source: str | None = None


class CreateSessionRequest(BaseModel):
    essay_id: str
    errors: list[BackendErrorIn] | None = None  # None = ask the analysis service
    debug: bool = False


class ActionRequest(BaseModel):
    token_id: str
    action: str
    new_word: str | None = None


class BulkActionRequest(BaseModel):
    action: str


def session_view(sessions, session_id: str) -> dict:
    session = sessions.require(session_id)
    store = sessions.load_tokens(session_id)
    return {
        **session.to_dict(),
        "tokens": [t.to_dict() for t in store.tokens()],
        "text": store.reconstruct(),
        "stats": store.stats(),
    }


@router.post("")
async def create_session(req: CreateSessionRequest, db: int = 0):
    """Analyze an essay and start a review session."""
    essays = get_essay_store(db)
    sessions = get_session_store(db)

    essay = essays.get(req.essay_id)
    if not essay:
        raise HTTPException(status_code=404, detail="Essay not found")

    model_used = None
    processing_time_ms = None
    if req.errors is not None:
        errors = [BackendError.from_dict(e.model_dump()) for e in req.errors]
    else:
        try:
            result = get_analyzer().analyze(essay.text, debug=req.debug)
        except AnalysisServiceError as e:
            raise HTTPException(status_code=502, detail=str(e))
        errors = result.words
        model_used = result.model_used
        processing_time_ms = result.processing_time_ms

    tokens, unmatched = reconcile(tokenize(essay.text), errors)
    session_id = sessions.create(
        essay.id,
        TokenStore(tokens),
        model_used=model_used,
        processing_time_ms=processing_time_ms,
        unmatched_errors=len(unmatched),
    )
    return session_view(sessions, session_id)


@router.get("/{session_id}")
async def get_session(session_id: str, db: int = 0):
    """Get a session with its tokens and current text."""
    try:
        return session_view(get_session_store(db), session_id)
    except NotFoundError:
        raise HTTPException(status_code=404, detail="Session not found")


@router.post("/{session_id}/actions")
async def dispatch_action(session_id: str, req: ActionRequest, db: int = 0):
    """Accept, reject or edit one token."""
    sessions = get_session_store(db)
    try:
        token = sessions.dispatch(session_id, req.token_id, req.action, req.new_word)
    except TokenNotFoundError:
        raise HTTPException(status_code=404, detail="Token not found")
    except NotFoundError:
        raise HTTPException(status_code=404, detail="Session not found")
    except SessionBusyError:
        raise HTTPException(status_code=409, detail="Session is busy, retry")

    store = sessions.load_tokens(session_id)
    return {
        "token": token.to_dict(),
        "text": store.reconstruct(),
        "stats": store.stats(),
    }


@router.post("/{session_id}/actions/all")
async def dispatch_all(session_id: str, req: BulkActionRequest, db: int = 0):
    """Apply one action to every flagged token."""
    sessions = get_session_store(db)
    try:
        touched = sessions.dispatch_all(session_id, req.action)
    except NotFoundError:
        raise HTTPException(status_code=404, detail="Session not found")
    except SessionBusyError:
        raise HTTPException(status_code=409, detail="Session is busy, retry")

    store = sessions.load_tokens(session_id)
    return {
        "token_ids": touched,
        "text": store.reconstruct(),
        "stats": store.stats(),
    }


@router.post("/{session_id}/finalize")
async def finalize_session(session_id: str, db: int = 0):
    """Persist the final text and corrections onto the essay."""
    sessions = get_session_store(db)
    try:
        return sessions.finalize(session_id, get_essay_store(db))
    except NotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))
    except SessionBusyError:
        raise HTTPException(status_code=409, detail="Session is busy, retry")


@router.delete("/{session_id}")
async def delete_session(session_id: str, db: int = 0):
    """Discard a session."""
    if not get_session_store(db).delete(session_id):
        raise HTTPException(status_code=404, detail="Session not found")
    return {"success": True}
