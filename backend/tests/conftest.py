"""
Shared fixtures: settings, an in-memory record store and a fake chat client.

Nothing here touches the network.
"""

from __future__ import annotations

from types import SimpleNamespace
from typing import Any, Iterable, Optional

import pytest

from blogforge.core.config import Settings
from blogforge.data.store import FetchError, PersistError, RecordStore
from blogforge.schemas.records import DestinationRecord, SourceRecord


VALID_CONTENT = {
    "main_title": "T",
    "main_description": "D",
    "read_more_titles": ["a", "b", "c"],
    "read_more_descriptions": ["x", "y", "z"],
}


def make_settings(**overrides: Any) -> Settings:
    values: dict[str, Any] = {
        "supabase_url": "https://example.supabase.co",
        "supabase_anon_key": "anon-key",
        "openrouter_api_key": "sk-or-test",
        "from_table": "faq_entries",
        "to_table": "blogs",
    }
    values.update(overrides)
    return Settings(_env_file=None, **values)


def completion(content: Optional[str]) -> SimpleNamespace:
    """Shape of an openai ChatCompletion, as far as the generator reads it."""
    return SimpleNamespace(choices=[SimpleNamespace(message=SimpleNamespace(content=content))])


class FakeChatClient:
    """
    Stands in for AsyncOpenAI.

    `replies` is either one reply used for every call or a list consumed in
    order. A reply may be a string, an exception to raise, or a ready-made
    response object.
    """

    def __init__(self, replies: Any = None):
        self._replies = list(replies) if isinstance(replies, list) else None
        self._reply = replies
        self.calls: list[dict[str, Any]] = []
        self.chat = SimpleNamespace(completions=SimpleNamespace(create=self._create))

    async def _create(self, **kwargs: Any) -> Any:
        self.calls.append(kwargs)
        reply = self._replies.pop(0) if self._replies is not None else self._reply
        if isinstance(reply, BaseException):
            raise reply
        if isinstance(reply, SimpleNamespace):
            return reply
        return completion(reply)


class FakeRecordStore(RecordStore):
    """In-memory source/destination tables."""

    def __init__(
        self,
        rows: Iterable[dict[str, Any]] = (),
        *,
        fail_fetch: Iterable[int] = (),
        fail_insert: Iterable[int] = (),
        existing: Iterable[int] = (),
    ):
        self.rows = {row["id"]: row for row in rows}
        self.fail_fetch = set(fail_fetch)
        self.fail_insert = set(fail_insert)
        self.existing = set(existing)
        self.fetched: list[int] = []
        self.inserted: list[DestinationRecord] = []
        self.closed = False

    async def fetch_source(self, record_id: int) -> Optional[SourceRecord]:
        self.fetched.append(record_id)
        if record_id in self.fail_fetch:
            raise FetchError("connection reset by peer")
        row = self.rows.get(record_id)
        return SourceRecord.from_row(row) if row else None

    async def insert_destination(self, record: DestinationRecord) -> None:
        if record.source_id in self.fail_insert:
            raise PersistError("duplicate key value violates unique constraint")
        self.inserted.append(record)

    async def destination_has_source(self, record_id: int) -> bool:
        return record_id in self.existing

    async def close(self) -> None:
        self.closed = True


def faq_row(record_id: int, category: str = "General") -> dict[str, Any]:
    return {
        "id": record_id,
        "question": f"Question {record_id}?",
        "answer": f"Answer {record_id}.",
        "category_display_name": category,
    }


@pytest.fixture
def settings() -> Settings:
    return make_settings()

