from datetime import date
from decimal import Decimal

from fiscal_audit.rules_engine.normalize import (
    digits_only,
    format_currency_br,
    format_date_br,
    format_quantity,
    normalize_key,
    same_tax_id,
    within_tolerance,
)


def test_tax_ids_differing_only_by_punctuation_are_equal():
    assert digits_only("12.345.678/0001-99") == "12345678000199"
    assert same_tax_id("12.345.678/0001-99", "12345678000199")
    assert not same_tax_id("11.111.111/0001-11", "22.222.222/0001-22")


def test_digits_only_handles_missing_values():
    assert digits_only(None) == ""
    assert digits_only("") == ""
    assert digits_only("abc") == ""


def test_normalize_key_drops_punctuation_and_case():
    assert normalize_key("PN-123/A b") == "pn123ab"
    assert normalize_key(None) == ""


def test_tolerance_boundary_is_exclusive():
    tol = Decimal("0.05")
    assert within_tolerance(Decimal("1000.00"), Decimal("999.97"), tol)
    assert within_tolerance(Decimal("1000.000000"), Decimal("999.950001"), tol)
    assert not within_tolerance(Decimal("1000.00"), Decimal("999.95"), tol)


def test_presentation_formats():
    assert format_date_br(date(2024, 5, 10)) == "10/05/2024"
    assert format_date_br(None) == "N/A"
    assert format_currency_br(Decimal("1234.5")) == "R$ 1.234,50"
    assert format_currency_br(Decimal("1234567.891")) == "R$ 1.234.567,89"
    assert format_quantity(Decimal("10.00")) == "10"
    assert format_quantity(Decimal("2.50")) == "2.5"
