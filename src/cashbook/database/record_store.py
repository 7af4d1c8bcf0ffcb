"""Record store: the transaction collection under a single storage key."""

import json
from decimal import Decimal
from typing import Iterable

from cashbook.database.base import KeyValueStorage
from cashbook.database.mappers import record_to_transaction, transaction_to_record
from cashbook.domain.entities import Transaction
from cashbook.logging_setup import get_logger

TRANSACTIONS_KEY = "transactions"

logger = get_logger(__name__)


class RecordStore:
    """Read-all/write-all persistence of the transaction list.

    Callers always read-modify-write the full list; there is no partial
    update and no migration handling.
    """

    def __init__(self, storage: KeyValueStorage, key: str = TRANSACTIONS_KEY):
        """Initialize record store.

        Args:
            storage: Key-value storage backend
            key: Storage key holding the serialized collection
        """
        self.storage = storage
        self.key = key

    def load_all(self) -> list[Transaction]:
        """Load every persisted transaction.

        Missing or unparsable content yields an empty list. Individual
        entries that cannot be read are skipped.

        Raises:
            StorageError: If the storage backend fails to read
        """
        raw = self.storage.get(self.key)
        if raw is None:
            return []

        try:
            records = json.loads(raw, parse_float=Decimal)
        except (json.JSONDecodeError, TypeError) as e:
            logger.warning("Ignoring unparsable transaction data under %r: %s", self.key, e)
            return []

        if not isinstance(records, list):
            logger.warning(
                "Ignoring transaction data under %r: expected a list, got %s",
                self.key,
                type(records).__name__,
            )
            return []

        transactions = []
        for index, record in enumerate(records):
            try:
                transactions.append(record_to_transaction(record))
            except ValueError as e:
                logger.warning("Skipping unreadable transaction at index %d: %s", index, e)

        logger.debug("Loaded %d transaction(s)", len(transactions))
        return transactions

    def save_all(self, transactions: Iterable[Transaction]) -> None:
        """Replace the persisted collection in a single write.

        Raises:
            StorageError: If the storage backend fails to write
        """
        records = [transaction_to_record(txn) for txn in transactions]
        self.storage.set(self.key, json.dumps(records, ensure_ascii=False))
        logger.debug("Saved %d transaction(s)", len(records))

    def clear(self) -> None:
        """Remove the persisted collection entirely."""
        self.storage.delete(self.key)
        logger.debug("Cleared transaction collection")
