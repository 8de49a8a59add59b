# src/dyscorrect/core/patch.py
"""
Offset-based correction application.

Accepted corrections are applied right to left (descending start) so that
a replacement never shifts the offsets of one still waiting to be applied.

Precondition: accepted ranges are in bounds and do not overlap. Violations
raise PatchError before the text is touched.
"""

import logging
from typing import Iterable, Sequence

from dyscorrect.core.analysis import Correction
from dyscorrect.core.errors import PatchError, ReconstructionMismatchError
from dyscorrect.core.reconstruct import reconstruct, original_text
from dyscorrect.core.store import TokenStore
from dyscorrect.core.tokens import Token


logger = logging.getLogger(__name__)


def _as_correction(item) -> Correction:
    if isinstance(item, Correction):
        return item
    return Correction.from_dict(item)


def check_ranges(text: str, corrections: Sequence[Correction]) -> None:
    """Raise PatchError if any positioned correction is out of bounds or overlaps."""
    positioned = [c for c in corrections if c.position is not None]

    for c in positioned:
        start, end = c.position.start, c.position.end
        if not 0 <= start <= end <= len(text):
            raise PatchError(
                f"Range [{start}, {end}) for {c.word!r} is out of bounds "
                f"for text of length {len(text)}"
            )

    ordered = sorted(positioned, key=lambda c: (c.position.start, c.position.end))
    for prev, cur in zip(ordered, ordered[1:]):
        if prev.position.end > cur.position.start:
            raise PatchError(
                f"Overlapping ranges [{prev.position.start}, {prev.position.end}) "
                f"and [{cur.position.start}, {cur.position.end})"
            )


def apply_position_corrections(text: str, corrections: Iterable) -> str:
    accepted = [c for c in map(_as_correction, corrections) if c.accepted]
    check_ranges(text, accepted)

    positioned = sorted(
        (c for c in accepted if c.position is not None),
        key=lambda c: (c.position.start, c.position.end),
        reverse=True,
    )

    result = text
    for c in positioned:
        result = result[:c.position.start] + c.text + result[c.position.end:]

    # No offsets: replace the first occurrence of the word
    for c in accepted:
        if c.position is not None or not c.word:
            continue
        if c.word not in result:
            logger.debug("unpositioned correction %r not found in text", c.word)
            continue
        result = result.replace(c.word, c.text, 1)

    return result


def apply_corrections(base_text: str, corrections) -> str:
    """
    Apply corrections in either representation.

    corrections may be a TokenStore, a sequence of Token (the reviewed
    token state for base_text), or a sequence of Correction / offset dicts.
    """
    if isinstance(corrections, TokenStore):
        corrections = corrections.tokens()
    items = list(corrections)
    if not items:
        return base_text

    if all(isinstance(item, Token) for item in items):
        if original_text(items) != base_text:
            raise ReconstructionMismatchError("Tokens were not produced from base_text")
        return reconstruct(items)

    if any(isinstance(item, Token) for item in items):
        raise TypeError("Cannot mix tokens and offset corrections")

    return apply_position_corrections(base_text, items)
