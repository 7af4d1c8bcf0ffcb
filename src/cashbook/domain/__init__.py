"""Domain layer for cashbook application."""

from cashbook.domain.transaction import TransactionService
from cashbook.domain.aggregation import (
    compute_balance,
    compute_category_breakdown,
    compute_monthly_trend,
)
from cashbook.domain.filters import apply_filters, resolve_time_window
from cashbook.domain.categorizer import suggest_categories

__all__ = [
    "TransactionService",
    "compute_balance",
    "compute_category_breakdown",
    "compute_monthly_trend",
    "apply_filters",
    "resolve_time_window",
    "suggest_categories",
]
