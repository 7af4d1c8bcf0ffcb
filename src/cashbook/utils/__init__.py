"""Utility functions for cashbook."""

from cashbook.utils.date_parser import parse_date, parse_record_date, get_date_range
from cashbook.utils.amount_parser import parse_amount, format_money

__all__ = ["parse_date", "parse_record_date", "get_date_range", "parse_amount", "format_money"]
