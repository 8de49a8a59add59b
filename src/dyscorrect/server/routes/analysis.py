"""
Analysis service proxy: /api/analysis
"""

from fastapi import APIRouter, HTTPException
from pydantic import BaseModel

from dyscorrect.core.clean import clean_ocr_text
from dyscorrect.core.errors import AnalysisServiceError
from dyscorrect.server.deps import get_analyzer


router = APIRouter(prefix="/api/analysis", tags=["analysis"])


class AnalyzeRequest(BaseModel):
    text: str
    debug: bool = False


class CleanRequest(BaseModel):
    text: str


@router.get("/health")
async def health():
    """Health of the upstream analysis service."""
    analyzer = get_analyzer()
    if not hasattr(analyzer, "health"):
        return {"status": "ok", "analyzer": "openai"}
    try:
        return analyzer.health()
    except AnalysisServiceError as e:
        raise HTTPException(status_code=502, detail=str(e))


@router.get("/patterns")
async def patterns():
    """Dyslexia patterns known to the analysis service."""
    analyzer = get_analyzer()
    if not hasattr(analyzer, "patterns"):
        return {"patterns": []}
    try:
        return {"patterns": analyzer.patterns()}
    except AnalysisServiceError as e:
        raise HTTPException(status_code=502, detail=str(e))


@router.post("/analyze")
async def analyze(req: AnalyzeRequest):
    """Run analysis without starting a review session."""
    try:
        result = get_analyzer().analyze(req.text, debug=req.debug)
    except AnalysisServiceError as e:
        raise HTTPException(status_code=502, detail=str(e))
    return result.to_dict()


@router.post("/clean")
async def clean(req: CleanRequest):
    """Normalize OCR output."""
    return {"text": clean_ocr_text(req.text)}
