"""Tests for the transaction service."""

import dataclasses
from decimal import Decimal

import pytest

from cashbook.database.record_store import RecordStore
from cashbook.domain.entities import Transaction, TransactionForm, TransactionType
from cashbook.domain.errors import NotFoundError, StorageError, ValidationError
from cashbook.domain.transaction import (
    TransactionService,
    signed_amount,
    split_amount,
    transaction_to_form,
    validate_form,
)


def _form(amount="50", txn_type=TransactionType.EXPENSE, date="2024-01-15", category="network", note=""):
    return TransactionForm(
        amount=Decimal(amount), type=txn_type, date=date, category=category, note=note
    )


class FixedClock:
    """Clock returning a constant time."""

    def __init__(self, seconds):
        self.seconds = seconds

    def __call__(self):
        return self.seconds


class TestSignConversion:
    """Tests for the shared sign conversion."""

    def test_expense_is_negative(self):
        assert signed_amount(TransactionType.EXPENSE, Decimal("12.5")) == Decimal("-12.5")

    def test_income_is_positive(self):
        assert signed_amount(TransactionType.INCOME, Decimal("12.5")) == Decimal("12.5")

    def test_magnitude_sign_is_ignored(self):
        assert signed_amount("income", Decimal("-3")) == Decimal("3")
        assert signed_amount("expense", Decimal("-3")) == Decimal("-3")

    def test_split_amount(self):
        assert split_amount(Decimal("7")) == (TransactionType.INCOME, Decimal("7"))
        assert split_amount(Decimal("-7")) == (TransactionType.EXPENSE, Decimal("7"))

    def test_round_trip(self):
        for amount in (Decimal("0.01"), Decimal("-99.99"), Decimal("1000")):
            assert signed_amount(*split_amount(amount)) == amount


class TestValidation:
    """Tests for entry form validation."""

    @pytest.mark.parametrize("amount", ["0", "-5"])
    def test_amount_must_be_positive(self, amount):
        with pytest.raises(ValidationError) as excinfo:
            validate_form(_form(amount=amount))
        assert excinfo.value.field == "amount"
        assert "greater than 0" in str(excinfo.value)

    @pytest.mark.parametrize("date", ["", "   "])
    def test_date_required(self, date):
        with pytest.raises(ValidationError) as excinfo:
            validate_form(_form(date=date))
        assert excinfo.value.field == "date"

    @pytest.mark.parametrize(
        "date",
        ["yesterday-ish", "2024", "2024-01", "20240115", "2024-01-15T10:30", "2024-02-30", "2024-1-5"],
    )
    def test_date_must_be_iso(self, date):
        with pytest.raises(ValidationError) as excinfo:
            validate_form(_form(date=date))
        assert excinfo.value.field == "date"

    def test_valid_form(self):
        validate_form(_form())


def test_create_expense(transaction_service, record_store):
    """Test creating an expense stores a negative amount."""
    txn = transaction_service.create_transaction(_form(amount="50", note="broadband"))

    assert txn.amount == Decimal("-50")
    assert txn.category == "network"
    assert txn.note == "broadband"
    assert txn.date == "2024-01-15"
    assert record_store.load_all() == [txn]


def test_create_income_clears_category(transaction_service):
    """Test income never keeps a category."""
    txn = transaction_service.create_transaction(
        _form(amount="8000", txn_type=TransactionType.INCOME, category="salary")
    )

    assert txn.amount == Decimal("8000")
    assert txn.category == ""


def test_create_invalid_saves_nothing(transaction_service, record_store):
    """Test validation failures leave the store untouched."""
    with pytest.raises(ValidationError):
        transaction_service.create_transaction(_form(amount="0"))

    assert record_store.load_all() == []


def test_ids_are_timestamp_based_and_unique(record_store):
    """Test ids come from the clock and never collide."""
    service = TransactionService(record_store, clock=FixedClock(1705312800.123))

    first = service.create_transaction(_form())
    second = service.create_transaction(_form())

    assert first.id == "1705312800123"
    assert second.id == "1705312800124"


def test_appends_in_insertion_order(transaction_service):
    """Test new transactions go to the end of the collection."""
    first = transaction_service.create_transaction(_form(note="a"))
    second = transaction_service.create_transaction(_form(note="b"))

    assert [txn.id for txn in transaction_service.list_transactions()] == [first.id, second.id]


def test_get_transaction(transaction_service, stored_transactions):
    """Test lookup by id."""
    assert transaction_service.get_transaction("3") == stored_transactions[2]
    assert transaction_service.get_transaction("missing") is None


def test_require_transaction_missing(transaction_service):
    """Test missing ids raise NotFoundError."""
    with pytest.raises(NotFoundError, match="Transaction nope not found"):
        transaction_service.require_transaction("nope")


def test_form_for_edit(transaction_service, stored_transactions):
    """Test the edit form is pre-populated with magnitude and type."""
    form = transaction_service.form_for("2")

    assert form == TransactionForm(
        amount=Decimal("120.50"),
        type=TransactionType.EXPENSE,
        date="2024-01-10",
        category="network",
        note="broadband bill",
    )


def test_transaction_to_form_income():
    """Test income converts back to a positive magnitude."""
    form = transaction_to_form(Transaction(id="1", amount=Decimal("10"), date="2024-01-01"))

    assert form.type == TransactionType.INCOME
    assert form.amount == Decimal("10")


def test_update_in_place(transaction_service, stored_transactions):
    """Test update keeps the id and position."""
    updated = transaction_service.update_transaction(
        "2", _form(amount="99", category="tax", date="2024-01-11")
    )

    assert updated == Transaction(
        id="2", amount=Decimal("-99"), date="2024-01-11", category="tax", note=""
    )
    loaded = transaction_service.list_transactions()
    assert [txn.id for txn in loaded] == ["1", "2", "3", "4", "5", "6"]
    assert loaded[1] == updated


def test_update_expense_to_income(transaction_service, stored_transactions):
    """Test switching type flips the sign and clears the category."""
    form = transaction_service.form_for("3")

    updated = transaction_service.update_transaction(
        "3", dataclasses.replace(form, type=TransactionType.INCOME)
    )

    assert updated.amount == Decimal("300")
    assert updated.category == ""


def test_update_missing(transaction_service, stored_transactions):
    """Test updating an unknown id raises NotFoundError."""
    with pytest.raises(NotFoundError):
        transaction_service.update_transaction("missing", _form())


def test_update_invalid_keeps_record(transaction_service, stored_transactions):
    """Test an invalid edit leaves the record as it was."""
    with pytest.raises(ValidationError):
        transaction_service.update_transaction("2", _form(amount="-1"))

    assert transaction_service.get_transaction("2") == stored_transactions[1]


def test_delete(transaction_service, stored_transactions):
    """Test delete removes only the given record."""
    transaction_service.delete_transaction("4")

    assert [txn.id for txn in transaction_service.list_transactions()] == ["1", "2", "3", "5", "6"]


def test_delete_missing(transaction_service, stored_transactions):
    """Test deleting an unknown id raises NotFoundError and changes nothing."""
    with pytest.raises(NotFoundError):
        transaction_service.delete_transaction("missing")

    assert transaction_service.list_transactions() == stored_transactions


def test_clear(transaction_service, stored_transactions):
    """Test clear removes everything and reports the count."""
    assert transaction_service.clear_transactions() == 6
    assert transaction_service.list_transactions() == []


class ReadOnlyStore(RecordStore):
    """Record store whose writes fail."""

    def __init__(self, transactions):
        self.transactions = transactions

    def load_all(self):
        return list(self.transactions)

    def save_all(self, transactions):
        raise StorageError("Save failed, please try again")


def test_save_failure_is_reported(sample_transactions):
    """Test a failing write raises StorageError and the data is unchanged."""
    store = ReadOnlyStore(sample_transactions)
    service = TransactionService(store)

    with pytest.raises(StorageError, match="Save failed"):
        service.create_transaction(_form())

    assert store.load_all() == sample_transactions
