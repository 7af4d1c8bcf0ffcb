"""Generic SQLAlchemy key-value storage implementation."""

from typing import Optional
from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from cashbook.database.base import KeyValueStorage
from cashbook.database.models import KeyValueEntry, create_session_factory
from cashbook.domain.errors import StorageError, load_failed, save_failed


class SQLAlchemyStorage(KeyValueStorage):
    """SQLAlchemy-based implementation of the KeyValueStorage interface."""

    def __init__(self, database_url: str):
        """Initialize SQLAlchemy storage.

        Args:
            database_url: SQLAlchemy database URL (e.g., 'sqlite:///path/to.db')
        """
        self.database_url = database_url
        self.session_factory = create_session_factory(database_url)
        self._session: Optional[Session] = None

    def _get_session(self) -> Session:
        """Get current session, creating one if needed."""
        if self._session is None:
            self._session = self.session_factory()
        return self._session

    def connect(self) -> None:
        """Connect to the storage backend."""
        # Connection is lazy, so this is a no-op
        pass

    def disconnect(self) -> None:
        """Disconnect from the storage backend."""
        if self._session is not None:
            self._session.close()
            self._session = None

    def initialize_schema(self) -> None:
        """Initialize schema (create tables)."""
        # Schema is created automatically by create_session_factory
        pass

    def get(self, key: str) -> Optional[str]:
        """Return the value stored under key, or None if absent.

        Raises:
            StorageError: If the database read fails
        """
        session = self._get_session()
        try:
            # Column query so values written by other sessions are always visible
            return session.execute(
                select(KeyValueEntry.value).where(KeyValueEntry.key == key)
            ).scalar_one_or_none()
        except SQLAlchemyError as e:
            session.rollback()
            raise StorageError(load_failed()) from e

    def set(self, key: str, value: str) -> None:
        """Store value under key in a single commit."""
        session = self._get_session()
        try:
            entry = session.get(KeyValueEntry, key, populate_existing=True)
            if entry is None:
                session.add(KeyValueEntry(key=key, value=value))
            else:
                entry.value = value
            session.commit()
        except SQLAlchemyError as e:
            session.rollback()
            raise StorageError(save_failed()) from e

    def delete(self, key: str) -> None:
        """Remove key if present."""
        session = self._get_session()
        try:
            entry = session.get(KeyValueEntry, key, populate_existing=True)
            if entry is not None:
                session.delete(entry)
                session.commit()
        except SQLAlchemyError as e:
            session.rollback()
            raise StorageError(save_failed()) from e
