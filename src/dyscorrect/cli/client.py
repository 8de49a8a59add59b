"""
HTTP client for the dyscorrect API.
"""

import httpx

from dyscorrect.config import get_settings


def base_url() -> str:
    return get_settings().api_url.rstrip("/")


# === Essays ===

def create_essay(text: str, student_id: str = None, title: str = None, clean: bool = False) -> dict:
    payload = {"text": text, "clean": clean}
    if student_id:
        payload["student_id"] = student_id
    if title:
        payload["title"] = title
    r = httpx.post(f"{base_url()}/essays", json=payload, timeout=60)
    r.raise_for_status()
    return r.json()


def list_essays(student_id: str = None) -> list[dict]:
    params = {"student_id": student_id} if student_id else None
    r = httpx.get(f"{base_url()}/essays", params=params)
    r.raise_for_status()
    return r.json()["essays"]


def get_essay(essay_id: str) -> dict:
    r = httpx.get(f"{base_url()}/essays/{essay_id}")
    r.raise_for_status()
    return r.json()


def delete_essay(essay_id: str) -> dict:
    r = httpx.delete(f"{base_url()}/essays/{essay_id}")
    r.raise_for_status()
    return r.json()


def get_essay_result(essay_id: str) -> dict:
    r = httpx.get(f"{base_url()}/essays/{essay_id}/result")
    r.raise_for_status()
    return r.json()


# === Sessions ===

def create_session(essay_id: str, errors: list[dict] = None) -> dict:
    payload = {"essay_id": essay_id}
    if errors is not None:
        payload["errors"] = errors
    r = httpx.post(f"{base_url()}/sessions", json=payload, timeout=120)
    r.raise_for_status()
    return r.json()


def get_session(session_id: str) -> dict:
    r = httpx.get(f"{base_url()}/sessions/{session_id}")
    r.raise_for_status()
    return r.json()


def dispatch_action(session_id: str, token_id: str, action: str, new_word: str = None) -> dict:
    payload = {"token_id": token_id, "action": action}
    if new_word is not None:
        payload["new_word"] = new_word
    r = httpx.post(f"{base_url()}/sessions/{session_id}/actions", json=payload)
    r.raise_for_status()
    return r.json()


def dispatch_all(session_id: str, action: str) -> dict:
    r = httpx.post(f"{base_url()}/sessions/{session_id}/actions/all", json={"action": action})
    r.raise_for_status()
    return r.json()


def finalize_session(session_id: str) -> dict:
    r = httpx.post(f"{base_url()}/sessions/{session_id}/finalize")
    r.raise_for_status()
    return r.json()


def delete_session(session_id: str) -> dict:
    r = httpx.delete(f"{base_url()}/sessions/{session_id}")
    r.raise_for_status()
    return r.json()


# === Analysis ===

def analysis_health() -> dict:
    r = httpx.get(f"{base_url()}/analysis/health", timeout=30)
    r.raise_for_status()
    return r.json()


def analysis_patterns() -> list[dict]:
    r = httpx.get(f"{base_url()}/analysis/patterns", timeout=30)
    r.raise_for_status()
    return r.json()["patterns"]
