"""Amount parsing utilities."""

from decimal import Decimal, InvalidOperation
import re


def parse_amount(amount_str: str) -> Decimal:
    """Parse an amount string into a Decimal.

    Handles various formats:
    - "123.45"
    - "¥123.45"
    - "-123.45"
    - "1,234.56"
    - "(123.45)" (negative in parentheses)

    Args:
        amount_str: Amount string

    Returns:
        Decimal amount

    Raises:
        ValueError: If amount string cannot be parsed
    """
    if not amount_str or not amount_str.strip():
        raise ValueError("Empty amount string")

    amount_str = amount_str.strip()

    is_negative = False
    if amount_str.startswith("(") and amount_str.endswith(")"):
        is_negative = True
        amount_str = amount_str[1:-1]

    # Remove currency symbols and thousands separators
    amount_str = re.sub(r"[$€£¥]", "", amount_str)
    amount_str = amount_str.replace(",", "").strip()

    try:
        amount = Decimal(amount_str)
    except InvalidOperation as e:
        raise ValueError(f"Could not parse amount '{amount_str}': {e}")
    if not amount.is_finite():
        raise ValueError(f"Could not parse amount '{amount_str}': not a finite number")
    if is_negative:
        amount = -amount
    return amount


def to_decimal(value) -> Decimal:
    """Convert a persisted JSON number (int, float, str or Decimal) to Decimal."""
    if isinstance(value, bool):
        raise ValueError(f"Invalid amount {value!r}")
    if isinstance(value, Decimal):
        amount = value
    elif isinstance(value, (int, float, str)):
        try:
            amount = Decimal(str(value))
        except InvalidOperation:
            raise ValueError(f"Invalid amount {value!r}")
    else:
        raise ValueError(f"Invalid amount {value!r}")
    if not amount.is_finite():
        raise ValueError(f"Invalid amount {value!r}")
    return amount


def format_plain_amount(amount: Decimal) -> str:
    """Render an amount without trailing zeros or exponent, e.g. ``-50`` or ``12.5``."""
    text = format(amount.normalize(), "f")
    return "0" if text in ("-0", "0") else text


def format_money(amount: Decimal) -> str:
    """Render an amount for display, e.g. ``¥1,234.50``."""
    sign = "-" if amount < 0 else ""
    return f"{sign}¥{abs(amount):,.2f}"
