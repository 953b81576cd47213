"""
Blogforge Data Access
=====================

Source/destination table access behind the RecordStore interface.
"""

from .store import FetchError, PersistError, RecordStore, StoreError, SupabaseRecordStore

__all__ = [
    "RecordStore",
    "SupabaseRecordStore",
    "StoreError",
    "FetchError",
    "PersistError",
]
