"""Shared pytest fixtures for cashbook tests."""

import tempfile
import os
from decimal import Decimal
import pytest

from cashbook.database.factories import create_sqlite_storage
from cashbook.database.record_store import RecordStore
from cashbook.domain.entities import Transaction
from cashbook.domain.transaction import TransactionService


@pytest.fixture
def temp_db():
    """Create a temporary storage database for testing."""
    fd, db_path = tempfile.mkstemp(suffix=".db")
    os.close(fd)

    storage = create_sqlite_storage(database_path=db_path)
    # Store the path for tests that need it
    storage.database_path = db_path
    storage.connect()
    storage.initialize_schema()

    yield storage

    storage.disconnect()
    if os.path.exists(db_path):
        os.unlink(db_path)


@pytest.fixture
def record_store(temp_db):
    """Create a RecordStore over the temporary storage."""
    return RecordStore(temp_db)


@pytest.fixture
def transaction_service(record_store):
    """Create a TransactionService with a temporary store."""
    return TransactionService(record_store)


@pytest.fixture
def sample_transactions():
    """A small ledger spanning two months."""
    return [
        Transaction(id="1", amount=Decimal("8000"), date="2024-01-05", note="January salary"),
        Transaction(
            id="2", amount=Decimal("-120.50"), date="2024-01-10",
            category="network", note="broadband bill",
        ),
        Transaction(
            id="3", amount=Decimal("-300"), date="2024-01-20",
            category="office-expense", note="printer paper",
        ),
        Transaction(id="4", amount=Decimal("-79.50"), date="2024-02-02", category="network"),
        Transaction(id="5", amount=Decimal("500"), date="2024-02-15", note="paid 500 deposit back"),
        Transaction(id="6", amount=Decimal("-40"), date="2024-02-16"),
    ]


@pytest.fixture
def stored_transactions(record_store, sample_transactions):
    """Persist the sample ledger and return it."""
    record_store.save_all(sample_transactions)
    return sample_transactions


@pytest.fixture
def cli_runner():
    """Create a Click CLI test runner."""
    from click.testing import CliRunner

    return CliRunner()
