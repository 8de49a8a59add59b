# src/dyscorrect/core/analysis.py
"""
Typed contracts for the external analysis service.

BackendError  - one word-level finding from /analyze
Correction    - an offset-based correction record
AnalyzeResult - normalized /analyze response

The service is inconsistent about key casing (camelCase vs snake_case),
so every from_dict accepts both.
"""

from dataclasses import dataclass, field


def _first(data: dict, *keys, default=None):
    for key in keys:
        value = data.get(key)
        if value is not None:
            return value
    return default


@dataclass(frozen=True)
class BackendError:
    word: str
    type: str = "error"          # "error" | "correct"
    suggestion: str | None = None
    pattern: str | None = None
    explanation: str | None = None
    confidence: float | None = None
    source: str | None = None

    @property
    def is_error(self) -> bool:
        return self.type != "correct"

    def to_dict(self) -> dict:
        return {
            "word": self.word,
            "type": self.type,
            "suggestion": self.suggestion,
            "dyslexiaPattern": self.pattern,
            "explanation": self.explanation,
            "confidence": self.confidence,
            "source": self.source,
        }

    @classmethod
    def from_dict(cls, data: dict) -> "BackendError":
        confidence = data.get("confidence")
        return cls(
            word=data["word"],
            type=data.get("type") or "error",
            suggestion=data.get("suggestion"),
            pattern=_first(data, "dyslexiaPattern", "dyslexia_pattern", "pattern"),
            explanation=data.get("explanation"),
            confidence=float(confidence) if confidence is not None else None,
            source=data.get("source"),
        )


@dataclass(frozen=True)
class Position:
    start: int
    end: int


@dataclass(frozen=True)
class Correction:
    word: str
    suggestion: str
    pattern: str = ""
    confidence: float = 0.0
    position: Position | None = None
    accepted: bool = False
    replacement: str | None = None  # reviewer override of suggestion

    @property
    def text(self) -> str:
        """The string that replaces the range when applied."""
        return self.replacement if self.replacement is not None else self.suggestion

    def to_dict(self) -> dict:
        d = {
            "word": self.word,
            "suggestion": self.suggestion,
            "pattern": self.pattern,
            "confidence": self.confidence,
            "accepted": self.accepted,
        }
        if self.position is not None:
            d["position"] = {"start": self.position.start, "end": self.position.end}
        if self.replacement is not None:
            d["replacement"] = self.replacement
        return d

    @classmethod
    def from_dict(cls, data: dict) -> "Correction":
        pos = data.get("position")
        if pos is None and "start" in data and "end" in data:
            pos = {"start": data["start"], "end": data["end"]}

        replacement = data.get("replacement")
        suggestion = data.get("suggestion")
        if suggestion is None:
            suggestion = replacement if replacement is not None else data.get("word", "")

        return cls(
            word=data.get("word", ""),
            suggestion=suggestion,
            pattern=_first(data, "pattern", "dyslexiaPattern", "dyslexia_pattern", default=""),
            confidence=float(data.get("confidence") or 0.0),
            position=Position(int(pos["start"]), int(pos["end"])) if pos else None,
            accepted=bool(data.get("accepted", False)),
            replacement=replacement,
        )


@dataclass
class AnalyzeResult:
    success: bool
    original_text: str
    corrected_text: str
    words: list[BackendError] = field(default_factory=list)
    processing_time_ms: float | None = None
    model_used: str | None = None

    @property
    def errors(self) -> list[BackendError]:
        return [w for w in self.words if w.is_error]

    @property
    def total_errors(self) -> int:
        return len(self.errors)

    def to_dict(self) -> dict:
        return {
            "success": self.success,
            "original_text": self.original_text,
            "corrected_text": self.corrected_text,
            "total_errors": self.total_errors,
            "data": [w.to_dict() for w in self.words],
            "processing_time_ms": self.processing_time_ms,
            "model_used": self.model_used,
        }

    @classmethod
    def from_response(cls, payload: dict, text: str) -> "AnalyzeResult":
        """Normalize a raw /analyze payload for the given request text."""
        return cls(
            success=bool(payload.get("success", False)),
            original_text=_first(payload, "originalText", "original_text", default=text),
            corrected_text=_first(payload, "correctedText", "corrected_text", default=text),
            words=[BackendError.from_dict(item) for item in payload.get("data") or []],
            processing_time_ms=_first(payload, "processingTimeMs", "processing_time_ms"),
            model_used=_first(payload, "modelUsed", "model_used"),
        )
