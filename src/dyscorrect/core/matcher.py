# src/dyscorrect/core/matcher.py
"""
Error matching - align backend errors onto token occurrences.

Backend errors are per-occurrence: an error for "book" flags one "book",
not every "book" in the essay. Each error is consumed by the first
unflagged occurrence of its word, reading left to right.
"""

import logging
import re
from collections import deque
from typing import Callable, Iterable

from dyscorrect.core.analysis import BackendError
from dyscorrect.core.tokenize import tokenize, is_whitespace
from dyscorrect.core.tokens import (
    Token, WORD, WHITESPACE, FLAGGED, IGNORED, generate_token_id,
)


logger = logging.getLogger(__name__)

# ASCII only; Unicode punctuation stays in the match key.
PUNCTUATION = re.compile(r"""[.,!?;:'"()\[\]{}]""")
LEADING_PUNCT = re.compile(r"""^[.,!?;:'"()\[\]{}]+""")
TRAILING_PUNCT = re.compile(r"""[.,!?;:'"()\[\]{}]+$""")

DEFAULT_CONFIDENCE = 0.85
DEFAULT_SOURCE = "ai"


def strip_punctuation(word: str) -> str:
    return PUNCTUATION.sub("", word)


def carry_punctuation(piece: str, suggestion: str) -> str:
    """Re-attach the punctuation around piece to a bare suggestion ("bal." + "ball" -> "ball.")."""
    lead = LEADING_PUNCT.search(piece)
    trail = TRAILING_PUNCT.search(piece)
    if lead:
        suggestion = lead.group() + LEADING_PUNCT.sub("", suggestion)
    if trail:
        suggestion = TRAILING_PUNCT.sub("", suggestion) + trail.group()
    return suggestion


def _build_lookup(errors: Iterable[BackendError]) -> dict[str, deque]:
    lookup: dict[str, deque] = {}
    for err in errors:
        if not err.is_error:
            continue
        key = strip_punctuation(err.word)
        if not key:
            continue
        lookup.setdefault(key, deque()).append(err)
    return lookup


def _flagged(token_id: str, piece: str, err: BackendError) -> Token:
    return Token(
        id=token_id,
        original_word=piece,
        display_word=piece,
        kind=WORD,
        state=FLAGGED,
        corrected_word=carry_punctuation(piece, err.suggestion) if err.suggestion else piece,
        suggestion=err.suggestion,
        pattern=err.pattern,
        explanation=err.explanation,
        confidence=err.confidence or DEFAULT_CONFIDENCE,
        source=err.source or DEFAULT_SOURCE,
        is_error=True,
    )


def reconcile(
    pieces: list[str],
    errors: Iterable[BackendError],
    id_factory: Callable[[], str] = generate_token_id,
) -> tuple[list[Token], list[BackendError]]:
    """
    Build one Token per piece and flag those that match an error.

    Returns (tokens, unmatched) where unmatched holds the errors that no
    token consumed: words absent from the text, or more errors for a word
    than it has occurrences.
    """
    lookup = _build_lookup(errors)
    tokens = []

    for piece in pieces:
        if is_whitespace(piece):
            tokens.append(Token(
                id=id_factory(),
                original_word=piece,
                display_word=piece,
                kind=WHITESPACE,
                state=IGNORED,
            ))
            continue

        queue = lookup.get(strip_punctuation(piece))
        if queue:
            tokens.append(_flagged(id_factory(), piece, queue.popleft()))
            continue

        tokens.append(Token(
            id=id_factory(),
            original_word=piece,
            display_word=piece,
            kind=WORD,
            state=IGNORED,
        ))

    unmatched = [err for queue in lookup.values() for err in queue]
    if unmatched:
        logger.debug(
            "dropped %d unmatched backend errors: %s",
            len(unmatched), [e.word for e in unmatched],
        )
    return tokens, unmatched


def match_errors(
    pieces: list[str],
    errors: Iterable[BackendError],
    id_factory: Callable[[], str] = generate_token_id,
) -> list[Token]:
    tokens, _ = reconcile(pieces, errors, id_factory)
    return tokens


def unmatched_errors(pieces: list[str], errors: Iterable[BackendError]) -> list[BackendError]:
    _, unmatched = reconcile(pieces, errors)
    return unmatched


def build_tokens(
    text: str,
    errors: Iterable[BackendError] = (),
    id_factory: Callable[[], str] = generate_token_id,
) -> list[Token]:
    """Tokenize text and match errors in one step."""
    return match_errors(tokenize(text), errors, id_factory)
