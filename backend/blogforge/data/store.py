"""
Record store abstraction for the source and destination tables.

The orchestrator only talks to `RecordStore`; `SupabaseRecordStore` is the
production implementation backed by the Supabase async client.
"""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from typing import Optional

import httpx
from postgrest.exceptions import APIError as PostgrestAPIError
from pydantic import ValidationError
from supabase import AsyncClient, acreate_client

from ..core.config import Settings
from ..schemas.records import SOURCE_COLUMNS, DestinationRecord, SourceRecord

logger = logging.getLogger(__name__)


class StoreError(RuntimeError):
    """Base class for data store failures."""


class FetchError(StoreError):
    pass


class PersistError(StoreError):
    pass


class RecordStore(ABC):
    """Point reads from the source table, appends to the destination table."""

    @abstractmethod
    async def fetch_source(self, record_id: int) -> Optional[SourceRecord]:
        """Return the source row with this id, or None when there is none."""
        raise NotImplementedError

    @abstractmethod
    async def insert_destination(self, record: DestinationRecord) -> None:
        """Append one destination row."""
        raise NotImplementedError

    @abstractmethod
    async def destination_has_source(self, record_id: int) -> bool:
        """Whether a destination row already carries this source id."""
        raise NotImplementedError

    async def close(self) -> None:
        """Release client connections. Nothing to do by default."""
        return None


def _describe(exc: Exception) -> str:
    if isinstance(exc, PostgrestAPIError):
        return exc.message or str(exc)
    return str(exc) or exc.__class__.__name__


class SupabaseRecordStore(RecordStore):
    """RecordStore backed by Supabase (PostgREST) tables."""

    def __init__(self, client: AsyncClient, settings: Settings):
        self.client = client
        self.from_table = settings.from_table
        self.to_table = settings.to_table
        self.source_id_column = settings.source_id_column

    @classmethod
    async def connect(cls, settings: Settings) -> "SupabaseRecordStore":
        client = await acreate_client(settings.supabase_url, settings.supabase_anon_key)
        logger.info("Supabase client ready (from=%s, to=%s)", settings.from_table, settings.to_table)
        return cls(client, settings)

    async def fetch_source(self, record_id: int) -> Optional[SourceRecord]:
        try:
            response = await (
                self.client.table(self.from_table)
                .select(SOURCE_COLUMNS)
                .eq("id", record_id)
                .execute()
            )
        except (PostgrestAPIError, httpx.HTTPError) as e:
            raise FetchError(_describe(e)) from e

        rows = response.data or []
        if not rows:
            return None
        try:
            return SourceRecord.from_row(rows[0])
        except (KeyError, ValidationError) as e:
            raise FetchError(f"malformed row: {e}") from e

    async def insert_destination(self, record: DestinationRecord) -> None:
        try:
            await self.client.table(self.to_table).insert(record.to_row(self.source_id_column)).execute()
        except (PostgrestAPIError, httpx.HTTPError) as e:
            raise PersistError(_describe(e)) from e

    async def destination_has_source(self, record_id: int) -> bool:
        if not self.source_id_column:
            return False
        try:
            response = await (
                self.client.table(self.to_table)
                .select(self.source_id_column)
                .eq(self.source_id_column, record_id)
                .limit(1)
                .execute()
            )
        except (PostgrestAPIError, httpx.HTTPError) as e:
            raise FetchError(_describe(e)) from e
        return bool(response.data)

    async def close(self) -> None:
        await self.client.postgrest.aclose()
        logger.info("Supabase client closed")
