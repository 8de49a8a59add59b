"""
Shared dependencies for routes.
"""

import redis

from dyscorrect.config import get_settings
from dyscorrect.core.analyzer import get_analyzer as _get_analyzer
from dyscorrect.core.document import EssayStore
from dyscorrect.core.session import SessionStore


def get_redis(db: int = 0):
    settings = get_settings()
    return redis.Redis(host=settings.redis_host, port=settings.redis_port, db=db)


def get_essay_store(db: int = 0) -> EssayStore:
    return EssayStore(get_redis(db))


def get_session_store(db: int = 0) -> SessionStore:
    settings = get_settings()
    return SessionStore(get_redis(db), lock_timeout=settings.lock_timeout, lock_wait=settings.lock_wait)


def get_analyzer():
    return _get_analyzer(get_settings())
