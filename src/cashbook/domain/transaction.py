"""Transaction domain service."""

import time
from decimal import Decimal
from typing import Callable, Optional

from cashbook.database.record_store import RecordStore
from cashbook.domain.entities import Transaction, TransactionForm, TransactionType
from cashbook.domain.errors import (
    NotFoundError,
    ValidationError,
    amount_not_positive,
    date_required,
    invalid_record_date,
    transaction_not_found,
)
from cashbook.logging_setup import get_logger
from cashbook.utils.date_parser import parse_iso_date

logger = get_logger(__name__)


def signed_amount(txn_type: TransactionType, magnitude: Decimal) -> Decimal:
    """Apply the direction of a transaction to an unsigned magnitude.

    Income is stored positive, expense negative.
    """
    magnitude = abs(magnitude)
    if TransactionType(txn_type) == TransactionType.EXPENSE:
        return -magnitude
    return magnitude


def split_amount(amount: Decimal) -> tuple[TransactionType, Decimal]:
    """Inverse of signed_amount: recover (type, magnitude) from a signed amount."""
    if amount > 0:
        return TransactionType.INCOME, amount
    return TransactionType.EXPENSE, abs(amount)


def validate_form(form: TransactionForm) -> None:
    """Validate entry form data.

    Raises:
        ValidationError: With ``field`` set to the first offending field
    """
    if form.amount is None or form.amount <= 0:
        raise ValidationError(amount_not_positive(), field="amount")
    if not form.date or not form.date.strip():
        raise ValidationError(date_required(), field="date")
    if parse_iso_date(form.date) is None:
        raise ValidationError(invalid_record_date(form.date), field="date")


def form_to_fields(form: TransactionForm) -> dict:
    """Derive the persisted fields of a transaction from form data."""
    txn_type = TransactionType(form.type)
    return {
        "amount": signed_amount(txn_type, form.amount),
        # Income carries no category
        "category": "" if txn_type == TransactionType.INCOME else (form.category or ""),
        "note": form.note or "",
        "date": form.date.strip(),
    }


def transaction_to_form(txn: Transaction) -> TransactionForm:
    """Pre-populate an edit form from an existing transaction."""
    txn_type, magnitude = split_amount(txn.amount)
    return TransactionForm(
        amount=magnitude,
        type=txn_type,
        date=txn.date,
        category=txn.category,
        note=txn.note,
    )


class TransactionService:
    """Service for managing transactions.

    Every mutation reads the full collection, changes it and writes it back.
    """

    def __init__(self, store: RecordStore, clock: Callable[[], float] = time.time):
        """Initialize transaction service.

        Args:
            store: Record store holding the transaction collection
            clock: Returns the current time in seconds; used for new ids
        """
        self.store = store
        self.clock = clock

    def _new_id(self, existing: list[Transaction]) -> str:
        """Generate a millisecond timestamp id not used by any existing record."""
        used = {txn.id for txn in existing}
        candidate = int(self.clock() * 1000)
        while str(candidate) in used:
            candidate += 1
        return str(candidate)

    def list_transactions(self) -> list[Transaction]:
        """Return every stored transaction in insertion order."""
        return self.store.load_all()

    def get_transaction(self, transaction_id: str) -> Optional[Transaction]:
        """Get transaction by ID.

        Args:
            transaction_id: Transaction ID

        Returns:
            Transaction entity or None if not found
        """
        for txn in self.store.load_all():
            if txn.id == transaction_id:
                return txn
        return None

    def require_transaction(self, transaction_id: str) -> Transaction:
        """Get transaction by ID or raise NotFoundError."""
        txn = self.get_transaction(transaction_id)
        if txn is None:
            raise NotFoundError(transaction_not_found(transaction_id))
        return txn

    def form_for(self, transaction_id: str) -> TransactionForm:
        """Return the edit form for an existing transaction.

        Raises:
            NotFoundError: If the transaction doesn't exist
        """
        return transaction_to_form(self.require_transaction(transaction_id))

    def create_transaction(self, form: TransactionForm) -> Transaction:
        """Create a transaction from entry form data.

        Args:
            form: Validated or unvalidated form data

        Returns:
            The stored transaction

        Raises:
            ValidationError: If the form is invalid; nothing is saved
            StorageError: If writing the collection fails
        """
        validate_form(form)
        transactions = self.store.load_all()
        txn = Transaction(id=self._new_id(transactions), **form_to_fields(form))
        transactions.append(txn)
        self.store.save_all(transactions)
        logger.info("Created transaction %s (%s)", txn.id, txn.amount)
        return txn

    def update_transaction(self, transaction_id: str, form: TransactionForm) -> Transaction:
        """Replace the fields of an existing transaction, keeping its id and position.

        Raises:
            ValidationError: If the form is invalid
            NotFoundError: If the transaction doesn't exist
            StorageError: If writing the collection fails
        """
        validate_form(form)
        transactions = self.store.load_all()
        for index, existing in enumerate(transactions):
            if existing.id == transaction_id:
                updated = Transaction(id=transaction_id, **form_to_fields(form))
                transactions[index] = updated
                self.store.save_all(transactions)
                logger.info("Updated transaction %s", transaction_id)
                return updated
        raise NotFoundError(transaction_not_found(transaction_id))

    def delete_transaction(self, transaction_id: str) -> None:
        """Delete a transaction.

        Raises:
            NotFoundError: If the transaction doesn't exist
            StorageError: If writing the collection fails
        """
        transactions = self.store.load_all()
        remaining = [txn for txn in transactions if txn.id != transaction_id]
        if len(remaining) == len(transactions):
            raise NotFoundError(transaction_not_found(transaction_id))
        self.store.save_all(remaining)
        logger.info("Deleted transaction %s", transaction_id)

    def clear_transactions(self) -> int:
        """Delete every transaction. Returns how many were removed."""
        count = len(self.store.load_all())
        self.store.clear()
        logger.info("Cleared %d transaction(s)", count)
        return count
