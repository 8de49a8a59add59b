# src/dyscorrect/core/reconstruct.py
"""
Text reconstruction and review summaries.
"""

from typing import Iterable

from dyscorrect.core.tokens import Token, FLAGGED, CORRECTED, IGNORED


def reconstruct(tokens: Iterable[Token]) -> str:
    return "".join(t.display_word for t in tokens)


def original_text(tokens: Iterable[Token]) -> str:
    return "".join(t.original_word for t in tokens)


def derive_corrections(tokens: Iterable[Token]) -> list[dict]:
    """Audit list of every token whose final state is corrected."""
    return [
        {
            "original": t.original_word,
            "corrected": t.display_word,
            "pattern": t.pattern,
        }
        for t in tokens
        if t.state == CORRECTED
    ]


def review_stats(tokens: Iterable[Token]) -> dict:
    words = [t for t in tokens if t.is_word]
    return {
        "total_errors": sum(1 for t in words if t.is_error),
        "corrected": sum(1 for t in words if t.state == CORRECTED),
        "ignored": sum(1 for t in words if t.state == IGNORED),
        "pending": sum(1 for t in words if t.state == FLAGGED),
    }
