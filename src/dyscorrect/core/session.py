# src/dyscorrect/core/session.py
"""
Review sessions - one analysis of one essay, and the reviewer's edits.

The token arena is saved as JSON after every action. Actions for one
session are serialized under a Redis lock so concurrent requests cannot
interleave a load/reduce/save cycle. A request that cannot take the lock
within lock_wait seconds fails with SessionBusyError before touching
anything.
"""

import json
import logging
import uuid
from contextlib import contextmanager
from dataclasses import dataclass, asdict

from redis.exceptions import LockNotOwnedError

from dyscorrect.core.document import EssayStore, utcnow
from dyscorrect.core.errors import EssayNotFoundError, SessionBusyError, SessionNotFoundError
from dyscorrect.core.store import TokenStore
from dyscorrect.core.tokens import Token
from dyscorrect.core.state import get_namespace, scoped_key


logger = logging.getLogger(__name__)


@dataclass
class Session:
    id: str
    essay_id: str
    created_at: str
    model_used: str | None = None
    processing_time_ms: float | None = None
    unmatched_errors: int = 0
    finalized_at: str | None = None

    def to_dict(self) -> dict:
        return asdict(self)

    @classmethod
    def from_dict(cls, data: dict) -> "Session":
        return cls(
            id=data["id"],
            essay_id=data["essay_id"],
            created_at=data["created_at"],
            model_used=data.get("model_used"),
            processing_time_ms=data.get("processing_time_ms"),
            unmatched_errors=data.get("unmatched_errors", 0),
            finalized_at=data.get("finalized_at"),
        )


class SessionStore:
    """Stores review sessions in Redis."""

    def __init__(self, client, lock_timeout: float = 5.0, lock_wait: float = 1.0):
        self.client = client
        self.lock_timeout = lock_timeout
        self.lock_wait = lock_wait

    @property
    def namespace(self) -> str:
        return get_namespace(self.client)

    def _session_key(self, session_id: str) -> str:
        return scoped_key(self.namespace, "session", session_id)

    def _tokens_key(self, session_id: str) -> str:
        return scoped_key(self.namespace, "session", session_id, "tokens")

    def _lock_key(self, session_id: str) -> str:
        return scoped_key(self.namespace, "session", session_id, "lock")

    def _essay_sessions_key(self, essay_id: str) -> str:
        return scoped_key(self.namespace, "essay", essay_id, "sessions")

    def create(
        self,
        essay_id: str,
        store: TokenStore,
        model_used: str | None = None,
        processing_time_ms: float | None = None,
        unmatched_errors: int = 0,
    ) -> str:
        session = Session(
            id=uuid.uuid4().hex[:12],
            essay_id=essay_id,
            created_at=utcnow(),
            model_used=model_used,
            processing_time_ms=processing_time_ms,
            unmatched_errors=unmatched_errors,
        )
        self._save_session(session)
        self._save_tokens(session.id, store)
        self.client.rpush(self._essay_sessions_key(essay_id), session.id)
        logger.info("created session %s for essay %s (%d tokens)", session.id, essay_id, len(store))
        return session.id

    def _save_session(self, session: Session) -> None:
        self.client.set(self._session_key(session.id), json.dumps(session.to_dict()))

    def _save_tokens(self, session_id: str, store: TokenStore) -> None:
        self.client.set(self._tokens_key(session_id), json.dumps(store.to_dict()))

    def get(self, session_id: str) -> Session | None:
        data = self.client.get(self._session_key(session_id))
        if not data:
            return None
        return Session.from_dict(json.loads(data))

    def require(self, session_id: str) -> Session:
        session = self.get(session_id)
        if session is None:
            raise SessionNotFoundError(session_id)
        return session

    def load_tokens(self, session_id: str) -> TokenStore:
        data = self.client.get(self._tokens_key(session_id))
        if not data:
            raise SessionNotFoundError(session_id)
        return TokenStore.from_dict(json.loads(data))

    def list_for_essay(self, essay_id: str) -> list[Session]:
        session_ids = self.client.lrange(self._essay_sessions_key(essay_id), 0, -1)
        sessions = []
        for sid in session_ids:
            session = self.get(sid.decode())
            if session:
                sessions.append(session)
        return sessions

    @contextmanager
    def _locked(self, session_id: str):
        """Hold the session lock, or raise SessionBusyError after lock_wait seconds."""
        lock = self.client.lock(
            self._lock_key(session_id),
            timeout=self.lock_timeout,
            blocking_timeout=self.lock_wait,
        )
        if not lock.acquire():
            raise SessionBusyError(session_id)
        try:
            yield
        finally:
            try:
                lock.release()
            except LockNotOwnedError:
                # lock expired before release; whatever the block wrote stays written
                logger.warning(
                    "lock on session %s expired after %.1fs", session_id, self.lock_timeout
                )

    def dispatch(self, session_id: str, token_id: str, action: str, new_word: str | None = None) -> Token:
        """Apply one reviewer action and persist the result."""
        self.require(session_id)
        with self._locked(session_id):
            store = self.load_tokens(session_id)
            token = store.dispatch(token_id, action, new_word)
            self._save_tokens(session_id, store)
        logger.debug("session %s: %s %s -> %s", session_id, action, token_id, token.state)
        return token

    def dispatch_all(self, session_id: str, action: str) -> list[str]:
        self.require(session_id)
        with self._locked(session_id):
            store = self.load_tokens(session_id)
            touched = store.dispatch_all(action)
            self._save_tokens(session_id, store)
        logger.debug("session %s: %s on %d flagged tokens", session_id, action, len(touched))
        return touched

    def delete(self, session_id: str) -> bool:
        session = self.get(session_id)
        if session is None:
            return False
        self.client.delete(self._session_key(session_id), self._tokens_key(session_id))
        self.client.lrem(self._essay_sessions_key(session.essay_id), 0, session_id)
        return True

    def delete_for_essay(self, essay_id: str) -> int:
        """Delete every session of an essay. Returns how many were removed."""
        removed = 0
        for session in self.list_for_essay(essay_id):
            if self.delete(session.id):
                removed += 1
        self.client.delete(self._essay_sessions_key(essay_id))
        return removed

    def finalize(self, session_id: str, essays: EssayStore) -> dict:
        """Write the reconstructed text and corrections onto the essay."""
        session = self.require(session_id)
        essay = essays.get(session.essay_id)
        if essay is None:
            raise EssayNotFoundError(session.essay_id)

        with self._locked(session_id):
            store = self.load_tokens(session_id)
            session.finalized_at = utcnow()
            result = {
                "essay_id": essay.id,
                "session_id": session.id,
                "original_text": store.original_text(),
                "corrected_text": store.reconstruct(),
                "corrections": store.corrections(),
                "stats": store.stats(),
                "model_used": session.model_used,
                "processing_time_ms": session.processing_time_ms,
                "finalized_at": session.finalized_at,
            }
            essays.set_result(essay.id, result)
            self._save_session(session)

        logger.info(
            "finalized session %s: %d corrections", session_id, len(result["corrections"])
        )
        return result
