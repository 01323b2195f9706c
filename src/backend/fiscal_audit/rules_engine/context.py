from __future__ import annotations

from dataclasses import dataclass, field

from .config import AuditRulesConfig
from .models import (
    AdministrativeNoteRecord,
    BillingReportRecord,
    CertificateRecord,
    DocumentBundle,
    InvoiceRecord,
    ReceiptRecord,
    StockEntryRecord,
)


@dataclass(frozen=True)
class RuleContext:
    bundle: DocumentBundle
    rules_config: AuditRulesConfig = field(default_factory=AuditRulesConfig)

    @property
    def certificate(self) -> CertificateRecord:
        return self.bundle.certificate

    @property
    def receipt(self) -> ReceiptRecord:
        return self.bundle.receipt

    @property
    def invoice(self) -> InvoiceRecord:
        return self.bundle.invoice

    @property
    def billing_report(self) -> BillingReportRecord:
        return self.bundle.billing_report

    @property
    def stock_entry(self) -> StockEntryRecord:
        return self.bundle.stock_entry

    @property
    def administrative_note(self) -> AdministrativeNoteRecord:
        return self.bundle.administrative_note
