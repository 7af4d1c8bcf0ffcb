"""Mapper functions to convert between domain entities and persisted records.

A persisted record is the JSON object shape ``{id, amount, category, note, date}``
stored inside the single ``transactions`` array.
"""

from decimal import Decimal
from typing import Any, Union

from cashbook.domain import entities as domain
from cashbook.utils.amount_parser import to_decimal


def _amount_to_json(amount: Decimal) -> Union[int, float, str]:
    """Return the JSON value for an amount.

    Amounts are written as JSON numbers. An amount a float cannot hold
    exactly is written as its decimal string instead.
    """
    if amount == amount.to_integral_value():
        return int(amount)
    as_float = float(amount)
    if Decimal(repr(as_float)) == amount:
        return as_float
    return str(amount)


def _text_field(record: dict, name: str) -> str:
    value = record.get(name)
    if value is None:
        return ""
    if isinstance(value, str):
        return value
    if isinstance(value, (int, float, Decimal)) and not isinstance(value, bool):
        return str(value)
    raise ValueError(f"Record {record.get('id')} has a non-text {name}")


def transaction_to_record(txn: domain.Transaction) -> dict[str, Any]:
    """Convert a Transaction entity to its persisted JSON object."""
    return {
        "id": txn.id,
        "amount": _amount_to_json(txn.amount),
        "category": txn.category,
        "note": txn.note,
        "date": txn.date,
    }


def record_to_transaction(record: Any) -> domain.Transaction:
    """Convert a persisted JSON object to a Transaction entity.

    Numeric category or note values are read as text.

    Raises:
        ValueError: If the record is not an object, lacks a usable id or
            amount, or has a category or note that is not text
    """
    if not isinstance(record, dict):
        raise ValueError(f"Expected an object, got {type(record).__name__}")

    record_id = record.get("id")
    if record_id is None or record_id == "":
        raise ValueError("Record has no id")
    if "amount" not in record:
        raise ValueError(f"Record {record_id} has no amount")

    date_value = record.get("date")
    return domain.Transaction(
        id=str(record_id),
        amount=to_decimal(record["amount"]),
        date=date_value if isinstance(date_value, str) else "",
        category=_text_field(record, "category"),
        note=_text_field(record, "note"),
    )
