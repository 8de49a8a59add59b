# src/dyscorrect/core/document.py
"""
Essay storage and retrieval.

An essay is the scanned/typed source text. Each finished review writes its
result (final text, corrections, stats) back onto the essay.
"""

import json
import uuid
from dataclasses import dataclass, asdict
from datetime import datetime, timezone

import redis

from dyscorrect.core.state import get_namespace, scoped_key


RESULT_STAGE = "result"


def generate_id() -> str:
    return uuid.uuid4().hex[:12]


def utcnow() -> str:
    return datetime.now(timezone.utc).isoformat()


@dataclass
class Essay:
    id: str
    text: str
    created_at: str
    namespace: str
    student_id: str | None = None
    title: str | None = None


class EssayStore:
    def __init__(self, client: redis.Redis):
        self.client = client

    @property
    def namespace(self) -> str:
        return get_namespace(self.client)

    def _essay_key(self, essay_id: str) -> str:
        return scoped_key(self.namespace, "essay", essay_id)

    def _index_key(self) -> str:
        return scoped_key(self.namespace, "essay_index")

    def _student_key(self, student_id: str) -> str:
        return scoped_key(self.namespace, "student", student_id, "essays")

    def _data_key(self, essay_id: str, stage: str) -> str:
        return scoped_key(self.namespace, "essay", essay_id, "data", stage)

    def add(self, text: str, student_id: str | None = None, title: str | None = None) -> str:
        essay = Essay(
            id=generate_id(),
            text=text,
            created_at=utcnow(),
            namespace=self.namespace,
            student_id=student_id,
            title=title,
        )
        self.client.set(self._essay_key(essay.id), json.dumps(asdict(essay)))
        self.client.sadd(self._index_key(), essay.id)
        if student_id:
            self.client.sadd(self._student_key(student_id), essay.id)
        return essay.id

    def get(self, essay_id: str) -> Essay | None:
        data = self.client.get(self._essay_key(essay_id))
        if data is None:
            return None
        return Essay(**json.loads(data.decode()))

    def _load(self, essay_ids) -> list[Essay]:
        essays = []
        for essay_id in essay_ids:
            essay = self.get(essay_id.decode())
            if essay:
                essays.append(essay)
        return sorted(essays, key=lambda e: e.created_at, reverse=True)

    def list_all(self) -> list[Essay]:
        return self._load(self.client.smembers(self._index_key()))

    def list_for_student(self, student_id: str) -> list[Essay]:
        return self._load(self.client.smembers(self._student_key(student_id)))

    def search(self, query: str) -> list[Essay]:
        query_lower = query.lower()
        return [e for e in self.list_all() if query_lower in e.text.lower()]

    def delete(self, essay_id: str) -> bool:
        essay = self.get(essay_id)
        if essay is None:
            return False
        self.client.delete(self._essay_key(essay_id))
        self.client.srem(self._index_key(), essay_id)
        if essay.student_id:
            self.client.srem(self._student_key(essay.student_id), essay_id)
        pattern = scoped_key(self.namespace, "essay", essay_id, "data", "*")
        for key in self.client.scan_iter(pattern):
            self.client.delete(key)
        return True

    def set_data(self, essay_id: str, stage: str, data) -> None:
        self.client.set(self._data_key(essay_id, stage), json.dumps(data))

    def get_data(self, essay_id: str, stage: str):
        data = self.client.get(self._data_key(essay_id, stage))
        if data is None:
            return None
        return json.loads(data.decode())

    def has_data(self, essay_id: str, stage: str) -> bool:
        return bool(self.client.exists(self._data_key(essay_id, stage)))

    def set_result(self, essay_id: str, result: dict) -> None:
        self.set_data(essay_id, RESULT_STAGE, result)

    def get_result(self, essay_id: str) -> dict | None:
        return self.get_data(essay_id, RESULT_STAGE)
