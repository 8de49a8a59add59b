# src/dyscorrect/core/tokenize.py
"""
Whitespace-preserving tokenization.

Text is split into alternating runs of whitespace and non-whitespace.
Joining the pieces back together always yields the original string.
"""

import re


WHITESPACE_SPLIT = re.compile(r"(\s+)")
WHITESPACE_ONLY = re.compile(r"^\s+$")


def tokenize(text: str) -> list[str]:
    """Split text into whitespace and word runs, keeping every character."""
    if not text:
        return []
    # re.split yields "" at the edges when text starts/ends with whitespace
    return [piece for piece in WHITESPACE_SPLIT.split(text) if piece]


def is_whitespace(piece: str) -> bool:
    return bool(WHITESPACE_ONLY.match(piece))


def spans(text: str) -> list[tuple[str, int]]:
    """Tokenize and pair each piece with its character offset in text."""
    result = []
    position = 0
    for piece in tokenize(text):
        result.append((piece, position))
        position += len(piece)
    return result


def word_count(text: str) -> int:
    return sum(1 for piece in tokenize(text) if not is_whitespace(piece))
