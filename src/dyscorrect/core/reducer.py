# src/dyscorrect/core/reducer.py
"""
Action reducer - the per-token review state machine.

    flagged/ignored --accept--> corrected
    flagged/corrected --reject--> ignored
    any --edit(new_word)--> corrected

reduce_token never mutates its input and never touches original_word.
Unknown actions and invalid payloads return the token unchanged.
"""

import logging
from dataclasses import replace

from dyscorrect.core.tokens import Token, CORRECTED, IGNORED


logger = logging.getLogger(__name__)

ACCEPT = "accept"
REJECT = "reject"
EDIT = "edit"

ACTIONS = (ACCEPT, REJECT, EDIT)


def _blank(word: str | None) -> bool:
    return word is None or not word.strip()


def reduce_token(token: Token, action: str, new_word: str | None = None) -> Token:
    if not token.is_word:
        return token

    if action == ACCEPT:
        target = token.corrected_word or token.suggestion or token.original_word
        if _blank(target):
            logger.debug("accept on %s rejected: empty replacement", token.id)
            return token
        return replace(token, display_word=target, state=CORRECTED)

    if action == REJECT:
        return replace(token, display_word=token.original_word, state=IGNORED)

    if action == EDIT:
        if _blank(new_word):
            logger.debug("edit on %s rejected: empty replacement", token.id)
            return token
        return replace(
            token,
            display_word=new_word,
            corrected_word=new_word,
            state=CORRECTED,
        )

    return token
