# src/dyscorrect/core/state.py
"""
Key namespacing for everything dyscorrect keeps in Redis.

All essay and session keys live under `<namespace>:...`. The active
namespace is itself stored in Redis so the server and CLI agree on it.
"""

import redis


STATE_KEY = "dyscorrect:state:namespace"
DEFAULT_NAMESPACE = "default"


def validate_namespace(namespace: str) -> str:
    if not namespace or ":" in namespace or "*" in namespace:
        raise ValueError(f"invalid namespace: {namespace!r}")
    return namespace


def get_namespace(client: redis.Redis) -> str:
    value = client.get(STATE_KEY)
    return value.decode() if value else DEFAULT_NAMESPACE


def set_namespace(client: redis.Redis, namespace: str) -> None:
    client.set(STATE_KEY, validate_namespace(namespace))


def scoped_key(namespace: str, *parts: str) -> str:
    """scoped_key("default", "essay", "ab12") -> "default:essay:ab12"."""
    return ":".join((namespace, *parts))


def clear_namespace(client: redis.Redis, namespace: str) -> int:
    """Delete every key under namespace. Returns the number deleted."""
    deleted = 0
    for key in client.scan_iter(scoped_key(validate_namespace(namespace), "*")):
        deleted += client.delete(key)
    return deleted
