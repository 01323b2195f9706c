import json
from datetime import date
from decimal import Decimal

import pytest

from fiscal_audit.adapters.extraction import ExtractionPayloadError, bundle_from_extraction


def _load(cases_root, case_id):
    return json.loads((cases_root / case_id / "extraction.json").read_text(encoding="utf-8"))


def test_material_purchase_payload_maps_to_bundle(cases_root):
    bundle = bundle_from_extraction(_load(cases_root, "material_purchase"))

    assert bundle.certificate.found is True
    assert bundle.certificate.validity.trabalhista == date(2024, 5, 2)
    # dd/mm/yyyy dates are accepted too.
    assert bundle.certificate.validity.municipal == date(2025, 1, 15)

    assert bundle.receipt.signature_date == date(2024, 5, 10)
    assert bundle.receipt.total_value == Decimal("950.0")
    assert bundle.receipt.contract_start_year == 2024
    assert bundle.receipt.has_contract_reference is True

    invoice = bundle.invoice
    assert invoice.tax_id == "00.394.452/0001-03"
    assert invoice.possible_tax_ids[1] == "12.345.678/0001-99"
    assert invoice.gross_value == Decimal("1000.0")
    assert len(invoice.items) == 4
    assert invoice.items[3].part_number is None
    assert invoice.items[0].quantity == Decimal("3")

    report = bundle.billing_report
    assert report.commitments[0].commitment_id == "2024NE000456"
    assert report.commitments[0].expense_nature_code == "339039"
    assert report.due_date == date(2024, 6, 5)

    assert bundle.stock_entry.found is True
    assert bundle.administrative_note.found is False


def test_missing_sections_default_to_not_found(cases_root):
    bundle = bundle_from_extraction(_load(cases_root, "service_purchase"))
    assert bundle.administrative_note.found is False
    assert bundle.certificate.found is False
    assert bundle.certificate.validity.fgts is None
    # Brazilian formatted amount string.
    assert bundle.receipt.total_value == Decimal("2500.00")


def test_accepts_raw_json_text():
    bundle = bundle_from_extraction('{"notaFiscal": {"found": true, "cnpj": " 123 "}}')
    assert bundle.invoice.found is True
    assert bundle.invoice.tax_id == "123"


def test_unreadable_values_become_absent():
    bundle = bundle_from_extraction(
        {
            "termoRecebimento": {
                "found": True,
                "signatureDate": "ontem",
                "totalValue": "mil reais",
                "contractStartYear": "dois mil",
            }
        }
    )
    assert bundle.receipt.signature_date is None
    assert bundle.receipt.total_value is None
    assert bundle.receipt.contract_start_year is None


@pytest.mark.parametrize("amount", ["NaN", "Infinity", float("inf")])
def test_non_finite_amounts_become_absent(amount):
    bundle = bundle_from_extraction(
        {"notaFiscal": {"found": True, "grossValue": amount, "liquidValue": "950,00"}}
    )
    assert bundle.invoice.gross_value is None
    assert bundle.invoice.liquid_value == Decimal("950.00")


@pytest.mark.parametrize("payload", ["not json", "[1, 2]", {"sicaf": "yes"}, {"rmm": {"items": ["x"]}}])
def test_malformed_payload_raises(payload):
    with pytest.raises(ExtractionPayloadError):
        bundle_from_extraction(payload)
