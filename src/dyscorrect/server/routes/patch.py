"""
Offset patch route: /api/patch
"""

from fastapi import APIRouter, HTTPException
from pydantic import BaseModel

from dyscorrect.core.errors import PatchError
from dyscorrect.core.patch import apply_position_corrections


router = APIRouter(prefix="/api/patch", tags=["patch"])


class PositionIn(BaseModel):
    start: int
    end: int


class CorrectionIn(BaseModel):
    word: str = ""
    suggestion: str = ""
    pattern: str = ""
    confidence: float = 0.0
    position: PositionIn | None = None
    accepted: bool = False
    replacement: str | None = None


class PatchRequest(BaseModel):
    text: str
    corrections: list[CorrectionIn]


@router.post("")
async def patch_text(req: PatchRequest):
    """Apply accepted offset corrections to text."""
    try:
        text = apply_position_corrections(req.text, [c.model_dump() for c in req.corrections])
    except PatchError as e:
        raise HTTPException(status_code=400, detail=str(e))
    return {"text": text}
