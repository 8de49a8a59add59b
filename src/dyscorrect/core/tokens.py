# src/dyscorrect/core/tokens.py
"""
Token - the unit of editable essay text.
"""

import uuid
from dataclasses import dataclass


# kind
WORD = "word"
WHITESPACE = "whitespace"

# state
FLAGGED = "flagged"
CORRECTED = "corrected"
IGNORED = "ignored"

STATES = (FLAGGED, CORRECTED, IGNORED)


def generate_token_id() -> str:
    return f"tok_{uuid.uuid4().hex[:12]}"


@dataclass(frozen=True)
class Token:
    id: str
    original_word: str
    display_word: str
    kind: str = WORD
    state: str = IGNORED
    corrected_word: str | None = None
    suggestion: str | None = None
    pattern: str | None = None
    explanation: str | None = None
    confidence: float | None = None
    source: str | None = None
    is_error: bool = False  # matched to a backend error at analysis time

    @property
    def is_word(self) -> bool:
        return self.kind == WORD

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "original_word": self.original_word,
            "display_word": self.display_word,
            "kind": self.kind,
            "state": self.state,
            "corrected_word": self.corrected_word,
            "suggestion": self.suggestion,
            "pattern": self.pattern,
            "explanation": self.explanation,
            "confidence": self.confidence,
            "source": self.source,
            "is_error": self.is_error,
        }

    @classmethod
    def from_dict(cls, data: dict) -> "Token":
        return cls(
            id=data["id"],
            original_word=data["original_word"],
            display_word=data["display_word"],
            kind=data.get("kind", WORD),
            state=data.get("state", IGNORED),
            corrected_word=data.get("corrected_word"),
            suggestion=data.get("suggestion"),
            pattern=data.get("pattern"),
            explanation=data.get("explanation"),
            confidence=data.get("confidence"),
            source=data.get("source"),
            is_error=data.get("is_error", False),
        )
