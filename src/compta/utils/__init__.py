"""Utility functions for compta."""

from compta.utils.date_parser import parse_date, get_date_range
from compta.utils.amount_parser import parse_amount, round_amount

__all__ = ["parse_date", "get_date_range", "parse_amount", "round_amount"]
