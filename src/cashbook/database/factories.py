"""Storage factory functions for creating storage instances."""

import os
from pathlib import Path
from typing import Optional

from cashbook.database.sqlalchemy_db import SQLAlchemyStorage


def create_sqlite_storage(database_path: Optional[str] = None) -> SQLAlchemyStorage:
    """Create a SQLite-backed key-value storage instance.

    Args:
        database_path: Path to SQLite database file. If None, checks CASHBOOK_DB_PATH
            environment variable, then defaults to ~/.cashbook/cashbook.db

    Returns:
        SQLAlchemyStorage instance configured for SQLite
    """
    if database_path is None:
        database_path = os.environ.get("CASHBOOK_DB_PATH")

    if database_path is None:
        db_dir = Path.home() / ".cashbook"
        db_dir.mkdir(exist_ok=True)
        database_path = str(db_dir / "cashbook.db")

    database_url = f"sqlite:///{database_path}"
    return SQLAlchemyStorage(database_url)
