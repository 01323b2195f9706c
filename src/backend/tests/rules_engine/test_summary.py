from decimal import Decimal

from fiscal_audit.rules_engine.summary import billing_reference_value, summarize_values


def test_billing_total_wins_over_commitments(make_bundle):
    bundle = make_bundle(
        billing_report={
            "found": True,
            "total_value": "1000.00",
            "commitments": [{"commitment_id": "NE1", "expense_nature_code": "339030", "value": "400.00"}],
        }
    )
    assert billing_reference_value(bundle) == Decimal("1000.00")


def test_commitments_summed_when_total_missing(make_bundle):
    bundle = make_bundle(
        invoice={"found": True, "gross_value": "1000.00"},
        receipt={"found": True, "total_value": "1000.10"},
        billing_report={
            "found": True,
            "commitments": [
                {"commitment_id": "NE1", "expense_nature_code": "339030", "value": "400.00"},
                {"commitment_id": "NE2", "expense_nature_code": "339030", "value": "500.00"},
            ],
        },
    )
    summary = summarize_values(bundle)
    assert summary.billing_reference_value == Decimal("900.00")
    assert summary.billing_mismatch is True
    assert summary.receipt_mismatch is True


def test_no_mismatch_without_gross_value(make_bundle):
    bundle = make_bundle(receipt={"found": True, "total_value": "10.00"})
    summary = summarize_values(bundle)
    assert summary.receipt_mismatch is False
    assert summary.billing_mismatch is False
    assert summary.billing_reference_value is None
