"""Storage layer for cashbook application."""

from cashbook.database.base import KeyValueStorage
from cashbook.database.factories import create_sqlite_storage
from cashbook.database.record_store import RecordStore

__all__ = ["KeyValueStorage", "create_sqlite_storage", "RecordStore"]
