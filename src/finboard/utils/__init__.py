"""Utility functions for finboard."""

from finboard.utils.date_parser import parse_date, get_date_range
from finboard.utils.amount_parser import parse_amount
from finboard.utils.money import format_currency, to_minor_units, from_minor_units

__all__ = [
    "parse_date",
    "get_date_range",
    "parse_amount",
    "format_currency",
    "to_minor_units",
    "from_minor_units",
]
