"""Shared domain error messages and error types."""

from typing import Optional


class DomainError(ValueError):
    """Base class for domain-level errors.

    Subclasses provide semantic categories while preserving ValueError
    compatibility for existing error handling.
    """


class ValidationError(DomainError):
    """Invalid input or failed validation in domain logic.

    ``field`` names the offending form field so callers can report the
    problem next to it.
    """

    def __init__(self, message: str, field: Optional[str] = None):
        super().__init__(message)
        self.field = field

    def __str__(self) -> str:
        message = super().__str__()
        if self.field:
            return f"{self.field}: {message}"
        return message


class NotFoundError(DomainError):
    """Requested domain entity does not exist."""


class StorageError(DomainError):
    """Persisting the record collection failed."""


def transaction_not_found(transaction_id: str) -> str:
    """Return message for missing transaction."""
    return f"Transaction {transaction_id} not found"


def amount_not_positive() -> str:
    """Return message for a non-positive amount."""
    return "Amount must be greater than 0"


def date_required() -> str:
    """Return message for a missing date."""
    return "Please choose a date"


def invalid_record_date(value: str) -> str:
    """Return message for a date that is not YYYY-MM-DD."""
    return f"Invalid date '{value}', expected YYYY-MM-DD"


def save_failed() -> str:
    """Return message shown when a write to storage fails."""
    return "Save failed, please try again"


def load_failed() -> str:
    """Return message shown when reading from storage fails."""
    return "Could not read saved data, please try again"
