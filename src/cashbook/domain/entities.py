"""Domain model entities for cashbook.

These are pure data classes representing business concepts, independent of
how the record collection is persisted.
"""

from dataclasses import dataclass, field
from datetime import date
from decimal import Decimal
from enum import Enum
from typing import Any, Optional


class TransactionType(str, Enum):
    """Direction of a transaction, encoded in the sign of its amount."""

    INCOME = "income"
    EXPENSE = "expense"


class TimeRange(str, Enum):
    """Time window modes offered by the records and dashboard views."""

    MONTH = "month"
    YEAR = "year"
    CUSTOM = "custom"


class ReportPeriod(str, Enum):
    """Bucketing used by the report bar chart."""

    DAY = "day"
    WEEK = "week"
    MONTH = "month"
    YEAR = "year"


@dataclass(frozen=True)
class Transaction:
    """Transaction domain entity.

    ``amount`` is signed: positive for income, negative for expense.
    ``date`` is kept as the stored string; it is normally ``YYYY-MM-DD`` but
    persisted data is not guaranteed to parse.
    """

    id: str
    amount: Decimal
    date: str
    category: str = ""
    note: str = ""

    @property
    def is_income(self) -> bool:
        return self.amount > 0

    @property
    def is_expense(self) -> bool:
        return self.amount < 0


@dataclass(frozen=True)
class TransactionForm:
    """Entry/edit form data: unsigned magnitude plus a direction."""

    amount: Decimal
    type: TransactionType
    date: str
    category: Optional[str] = None
    note: Optional[str] = None


@dataclass(frozen=True)
class TimeWindow:
    """Inclusive calendar date range."""

    start: date
    end: date

    @property
    def is_empty(self) -> bool:
        return self.start > self.end

    def contains(self, value: date) -> bool:
        return self.start <= value <= self.end


@dataclass(frozen=True)
class BalanceSummary:
    """Income, expense and balance totals."""

    income: Decimal = Decimal("0")
    expense: Decimal = Decimal("0")
    balance: Decimal = Decimal("0")


@dataclass(frozen=True)
class TransactionStats:
    """Record counts and the largest single income and expense."""

    transaction_count: int = 0
    income_count: int = 0
    expense_count: int = 0
    max_income: Decimal = Decimal("0")
    max_expense: Decimal = Decimal("0")


@dataclass(frozen=True)
class CategoryBreakdown:
    """Expense total of one category and its share of all expenses."""

    category: str
    amount: Decimal
    percentage: str

    def to_chart_dict(self) -> dict[str, Any]:
        """Return the pie chart shape ``{name, amount, percentage}``."""
        return {
            "name": self.category,
            "amount": self.amount,
            "percentage": self.percentage,
        }


@dataclass(frozen=True)
class MonthlyTrend:
    """Income and expense totals for one ``YYYY-MM`` month."""

    month: str
    income: Decimal = Decimal("0")
    expense: Decimal = Decimal("0")

    def to_chart_dict(self) -> dict[str, Any]:
        return {"month": self.month, "income": self.income, "expense": self.expense}


@dataclass(frozen=True)
class CategoryStats:
    """Income and expense recorded against a single vocabulary category."""

    category: str
    income: Decimal = Decimal("0")
    expense: Decimal = Decimal("0")


@dataclass(frozen=True)
class ReportBar:
    """One bar of the report chart."""

    name: str
    value: Decimal


@dataclass(frozen=True)
class CategorySuggestion:
    """Categories suggested for a note.

    ``selected`` is set only when exactly one category matched.
    """

    matches: tuple[str, ...] = ()

    @property
    def selected(self) -> Optional[str]:
        if len(self.matches) == 1:
            return self.matches[0]
        return None


@dataclass(frozen=True)
class FinancialOverview:
    """Dashboard view model built from a snapshot of the records."""

    summary: BalanceSummary
    category_breakdown: tuple[CategoryBreakdown, ...] = field(default_factory=tuple)
    monthly_trend: tuple[MonthlyTrend, ...] = field(default_factory=tuple)
    window: Optional[TimeWindow] = None
    stats: TransactionStats = field(default_factory=TransactionStats)
