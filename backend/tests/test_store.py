"""
Tests for SupabaseRecordStore against a fake PostgREST query builder.
"""

import httpx
import pytest
from conftest import VALID_CONTENT, faq_row, make_settings
from postgrest.exceptions import APIError as PostgrestAPIError

from blogforge.data.store import FetchError, PersistError, SupabaseRecordStore
from blogforge.schemas.content import GeneratedContent
from blogforge.schemas.records import DestinationRecord, SourceRecord


class FakeResponse:
    def __init__(self, data):
        self.data = data


class FakeQuery:
    """Records the builder chain and returns canned data (or raises) on execute()."""

    def __init__(self, client, table):
        self.client = client
        self.table = table
        self.ops = []

    def select(self, columns):
        self.ops.append(("select", columns))
        return self

    def eq(self, column, value):
        self.ops.append(("eq", column, value))
        return self

    def limit(self, n):
        self.ops.append(("limit", n))
        return self

    def insert(self, row):
        self.ops.append(("insert", row))
        return self

    async def execute(self):
        self.client.executed.append((self.table, self.ops))
        if self.client.error is not None:
            raise self.client.error
        return FakeResponse(self.client.data)


class FakePostgrest:
    def __init__(self):
        self.closed = False

    async def aclose(self):
        self.closed = True


class FakeSupabase:
    def __init__(self, data=None, error=None):
        self.data = data if data is not None else []
        self.error = error
        self.executed = []
        self.postgrest = FakePostgrest()

    def table(self, name):
        return FakeQuery(self, name)


def _store(client, **overrides):
    return SupabaseRecordStore(client, make_settings(**overrides))


def _destination():
    source = SourceRecord.from_row(faq_row(5, category="Cat"))
    return DestinationRecord.build(source, GeneratedContent.from_payload(VALID_CONTENT))


@pytest.mark.asyncio
async def test_fetch_source_queries_by_id():
    client = FakeSupabase(data=[faq_row(5, category="Cat")])

    record = await _store(client).fetch_source(5)

    assert record == SourceRecord(id=5, question="Question 5?", answer="Answer 5.", category="Cat")
    table, ops = client.executed[0]
    assert table == "faq_entries"
    assert ops == [("select", "id, question, answer, category_display_name"), ("eq", "id", 5)]


@pytest.mark.asyncio
async def test_fetch_source_returns_none_without_rows():
    assert await _store(FakeSupabase(data=[])).fetch_source(5) is None


@pytest.mark.asyncio
async def test_fetch_errors_are_wrapped():
    error = PostgrestAPIError({"message": "relation does not exist", "code": "42P01"})
    with pytest.raises(FetchError, match="relation does not exist"):
        await _store(FakeSupabase(error=error)).fetch_source(5)

    with pytest.raises(FetchError):
        await _store(FakeSupabase(error=httpx.ConnectError("refused"))).fetch_source(5)


@pytest.mark.asyncio
async def test_malformed_row_is_a_fetch_error():
    with pytest.raises(FetchError, match="malformed row"):
        await _store(FakeSupabase(data=[{"question": "no id"}])).fetch_source(5)


@pytest.mark.asyncio
async def test_insert_destination_writes_blog_columns():
    client = FakeSupabase()

    await _store(client).insert_destination(_destination())

    table, ops = client.executed[0]
    assert table == "blogs"
    assert ops == [
        (
            "insert",
            {
                "category_display_name": "Cat",
                "title": "T",
                "description": "D",
                "read_more_titles": ["a", "b", "c"],
                "read_more_texts": ["x", "y", "z"],
            },
        )
    ]


@pytest.mark.asyncio
async def test_insert_carries_source_id_when_configured():
    client = FakeSupabase()

    await _store(client, source_id_column="faq_id").insert_destination(_destination())

    _, ops = client.executed[0]
    assert ops[0][1]["faq_id"] == 5


@pytest.mark.asyncio
async def test_insert_errors_are_wrapped():
    error = PostgrestAPIError({"message": "permission denied for table blogs", "code": "42501"})
    with pytest.raises(PersistError, match="permission denied"):
        await _store(FakeSupabase(error=error)).insert_destination(_destination())


@pytest.mark.asyncio
async def test_destination_has_source():
    assert await _store(FakeSupabase(data=[{"faq_id": 5}]), source_id_column="faq_id").destination_has_source(5)
    assert not await _store(FakeSupabase(data=[]), source_id_column="faq_id").destination_has_source(5)


@pytest.mark.asyncio
async def test_destination_has_source_without_column_never_queries():
    client = FakeSupabase(data=[{"faq_id": 5}])

    assert await _store(client).destination_has_source(5) is False
    assert client.executed == []


@pytest.mark.asyncio
async def test_close_releases_postgrest_session():
    client = FakeSupabase()

    await _store(client).close()

    assert client.postgrest.closed
