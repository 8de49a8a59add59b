# src/dyscorrect/core/store.py
"""
TokenStore - owned, id-indexed collection of tokens for one review.

Tokens live in a dict keyed by id; a separate list keeps text order.
dispatch() is the only way to change a token.
"""

from typing import Iterable

from dyscorrect.core.analysis import BackendError
from dyscorrect.core.errors import TokenNotFoundError
from dyscorrect.core.matcher import build_tokens
from dyscorrect.core.reducer import reduce_token
from dyscorrect.core.reconstruct import (
    reconstruct, original_text, derive_corrections, review_stats,
)
from dyscorrect.core.tokens import Token, FLAGGED


class TokenStore:
    def __init__(self, tokens: Iterable[Token] = ()):
        self._by_id: dict[str, Token] = {}
        self._order: list[str] = []
        for token in tokens:
            if token.id in self._by_id:
                raise ValueError(f"Duplicate token id: {token.id}")
            self._by_id[token.id] = token
            self._order.append(token.id)

    @classmethod
    def from_text(cls, text: str, errors: Iterable[BackendError] = ()) -> "TokenStore":
        return cls(build_tokens(text, errors))

    def __len__(self) -> int:
        return len(self._order)

    def __iter__(self):
        return iter(self.tokens())

    def __contains__(self, token_id: str) -> bool:
        return token_id in self._by_id

    def tokens(self) -> list[Token]:
        return [self._by_id[tid] for tid in self._order]

    def get(self, token_id: str) -> Token:
        if token_id not in self._by_id:
            raise TokenNotFoundError(token_id)
        return self._by_id[token_id]

    def dispatch(self, token_id: str, action: str, new_word: str | None = None) -> Token:
        """Apply one reviewer action to one token and return the new record."""
        token = self.get(token_id)
        updated = reduce_token(token, action, new_word)
        self._by_id[token_id] = updated
        return updated

    def dispatch_all(self, action: str) -> list[str]:
        """Apply action to every currently flagged token, one at a time."""
        targets = [tid for tid in self._order if self._by_id[tid].state == FLAGGED]
        for tid in targets:
            self.dispatch(tid, action)
        return targets

    def flagged(self) -> list[Token]:
        return [t for t in self.tokens() if t.state == FLAGGED]

    def reconstruct(self) -> str:
        return reconstruct(self.tokens())

    def original_text(self) -> str:
        return original_text(self.tokens())

    def corrections(self) -> list[dict]:
        return derive_corrections(self.tokens())

    def stats(self) -> dict:
        return review_stats(self.tokens())

    def to_dict(self) -> dict:
        return {"tokens": [t.to_dict() for t in self.tokens()]}

    @classmethod
    def from_dict(cls, data: dict) -> "TokenStore":
        return cls(Token.from_dict(t) for t in data.get("tokens", []))
