from __future__ import annotations

from decimal import Decimal
from typing import Optional

from .config import ValueSummaryConfig
from .models import DocumentBundle, ValueSummary


def billing_reference_value(bundle: DocumentBundle) -> Optional[Decimal]:
    # The explicit billed total wins; otherwise fall back to the sum of commitments.
    report = bundle.billing_report
    if report.total_value is not None:
        return report.total_value
    if not report.found:
        return None
    return sum((c.value for c in report.commitments), Decimal("0"))


def summarize_values(bundle: DocumentBundle, cfg: Optional[ValueSummaryConfig] = None) -> ValueSummary:
    cfg = cfg or ValueSummaryConfig()
    gross = bundle.invoice.gross_value
    receipt_total = bundle.receipt.total_value
    reference = billing_reference_value(bundle)

    summary = ValueSummary(
        invoice_gross=gross,
        receipt_total=receipt_total,
        billing_reference_value=reference,
    )
    if not gross:
        return summary

    report = bundle.billing_report
    has_billing_values = report.total_value is not None or len(report.commitments) > 0
    return summary.model_copy(
        update={
            "receipt_mismatch": receipt_total is not None and abs(gross - receipt_total) > cfg.amount_tolerance,
            "billing_mismatch": has_billing_values
            and abs(gross - (reference or Decimal("0"))) > cfg.amount_tolerance,
        }
    )
