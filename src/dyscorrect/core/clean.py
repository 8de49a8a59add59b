# src/dyscorrect/core/clean.py
"""
OCR text cleanup before analysis.

Optional: the review screen sends raw text so the essay keeps its layout.
"""

import logging
import re
import unicodedata


logger = logging.getLogger(__name__)

HORIZONTAL_SPACE = re.compile(r"[ \t]+")
EXTRA_NEWLINES = re.compile(r"\n{3,}")
LEADING_PUNCT = re.compile(r"^[.,:;!?]+\s*", re.MULTILINE)
ZERO_WIDTH = re.compile(r"[\u200B-\u200D\uFEFF]")
REPEATED_PUNCT = re.compile(r"([.!?])\1+")


def _has_content(line: str) -> bool:
    """True if line has anything besides whitespace, punctuation and symbols."""
    for ch in line:
        if ch.isspace():
            continue
        if unicodedata.category(ch)[0] in ("P", "S"):
            continue
        return True
    return False


def clean_ocr_text(text: str) -> str:
    if not text:
        return ""

    cleaned = HORIZONTAL_SPACE.sub(" ", text)
    cleaned = EXTRA_NEWLINES.sub("\n\n", cleaned)
    cleaned = "\n".join(line.strip() for line in cleaned.split("\n"))
    cleaned = LEADING_PUNCT.sub("", cleaned)
    cleaned = ZERO_WIDTH.sub("", cleaned)
    cleaned = REPEATED_PUNCT.sub(r"\1", cleaned)
    cleaned = cleaned.replace("…", "...")
    cleaned = "\n".join(line for line in cleaned.split("\n") if _has_content(line))
    cleaned = cleaned.strip()

    logger.debug(
        "cleaned OCR text: %d -> %d chars", len(text), len(cleaned),
    )
    return cleaned
