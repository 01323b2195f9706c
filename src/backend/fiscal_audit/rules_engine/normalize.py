"""Canonical forms used when comparing values across documents."""

from __future__ import annotations

import re
from datetime import date
from decimal import Decimal
from typing import Optional

_NON_DIGIT = re.compile(r"\D")
_NON_ALNUM = re.compile(r"[^a-zA-Z0-9]")


def digits_only(value: Optional[str]) -> str:
    """Strip punctuation from a tax identifier ("12.345.678/0001-99" -> "12345678000199")."""
    if not value:
        return ""
    return _NON_DIGIT.sub("", value)


def same_tax_id(left: Optional[str], right: Optional[str]) -> bool:
    return digits_only(left) == digits_only(right)


def normalize_key(value: Optional[str]) -> str:
    """Lower-case and drop every non-alphanumeric character."""
    if not value:
        return ""
    return _NON_ALNUM.sub("", value).lower()


def within_tolerance(left: Decimal, right: Decimal, tolerance: Decimal) -> bool:
    # Boundary is exclusive: a difference equal to the tolerance is not a match.
    return abs(left - right) < tolerance


def format_date_br(value: Optional[date]) -> str:
    if value is None:
        return "N/A"
    return value.strftime("%d/%m/%Y")


def format_currency_br(value: Optional[Decimal]) -> str:
    if value is None:
        return "N/A"
    text = f"{Decimal(value):,.2f}"
    return "R$ " + text.replace(",", "_").replace(".", ",").replace("_", ".")


def format_quantity(value: Decimal) -> str:
    text = format(Decimal(value).normalize(), "f")
    return "0" if text in ("-0", "") else text
