from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime
from decimal import Decimal
from enum import Enum
from typing import Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field


class FindingStatus(str, Enum):
    PENDING = "PENDING"
    PASS = "PASS"
    WARNING = "WARNING"
    FAIL = "FAIL"


class CertificateKind(str, Enum):
    FEDERAL_PGFN = "federal_pgfn"
    FGTS = "fgts"
    TRABALHISTA = "trabalhista"
    ESTADUAL_DISTRITAL = "estadual_distrital"
    MUNICIPAL = "municipal"


# Fixed display order for certificate sub-findings.
CERTIFICATE_LABELS: Dict[CertificateKind, str] = {
    CertificateKind.FEDERAL_PGFN: "Receita Federal e PGFN",
    CertificateKind.FGTS: "FGTS",
    CertificateKind.TRABALHISTA: "Trabalhista",
    CertificateKind.ESTADUAL_DISTRITAL: "Estadual/Distrital",
    CertificateKind.MUNICIPAL: "Municipal",
}


class _Record(BaseModel):
    model_config = ConfigDict(frozen=True)


class LineItem(_Record):
    description: str = ""
    part_number: Optional[str] = None
    quantity: Decimal = Decimal("0")
    unit: Optional[str] = None


class CertificateValidity(_Record):
    federal_pgfn: Optional[date] = None
    fgts: Optional[date] = None
    trabalhista: Optional[date] = None
    estadual_distrital: Optional[date] = None
    municipal: Optional[date] = None

    def get(self, kind: CertificateKind) -> Optional[date]:
        return getattr(self, kind.value)


class CertificateRecord(_Record):
    found: bool = False
    tax_id: Optional[str] = None
    validity: CertificateValidity = Field(default_factory=CertificateValidity)


class ReceiptRecord(_Record):
    found: bool = False
    tax_id: Optional[str] = None
    signature_date: Optional[date] = None
    is_definitive: bool = False
    bulletin_date: Optional[date] = None
    has_contract_reference: bool = False
    contract_start_year: Optional[int] = None
    total_value: Optional[Decimal] = None
    contract_number: Optional[str] = None


class InvoiceRecord(_Record):
    found: bool = False
    number: Optional[str] = None
    supplier_name: Optional[str] = None
    tax_id: Optional[str] = None
    possible_tax_ids: List[str] = Field(default_factory=list)
    emission_date: Optional[date] = None
    gross_value: Optional[Decimal] = None
    liquid_value: Optional[Decimal] = None
    is_material: bool = False
    is_service: bool = False
    items: List[LineItem] = Field(default_factory=list)


class Commitment(_Record):
    commitment_id: str = ""
    expense_nature_code: str = ""
    value: Decimal = Decimal("0")


class BillingReportRecord(_Record):
    found: bool = False
    emission_date: Optional[date] = None
    arrival_date: Optional[date] = None
    due_date: Optional[date] = None
    total_value: Optional[Decimal] = None
    commitments: List[Commitment] = Field(default_factory=list)


class StockEntryRecord(_Record):
    found: bool = False
    items: List[LineItem] = Field(default_factory=list)


class AdministrativeNoteRecord(_Record):
    found: bool = False
    justification_text: Optional[str] = None
    substitutes_stock_entry: bool = False
    justifies_service_expense_code: bool = False
    # Set when the file expected to hold the note is actually an invoice.
    wrong_document_detected: bool = False

    @property
    def is_usable(self) -> bool:
        return self.found and not self.wrong_document_detected


class DocumentBundle(_Record):
    certificate: CertificateRecord = Field(default_factory=CertificateRecord)
    receipt: ReceiptRecord = Field(default_factory=ReceiptRecord)
    invoice: InvoiceRecord = Field(default_factory=InvoiceRecord)
    billing_report: BillingReportRecord = Field(default_factory=BillingReportRecord)
    stock_entry: StockEntryRecord = Field(default_factory=StockEntryRecord)
    administrative_note: AdministrativeNoteRecord = Field(default_factory=AdministrativeNoteRecord)


class SubFinding(_Record):
    label: str
    status: FindingStatus
    details: str = ""


class Finding(_Record):
    id: str
    title: str
    description: str = ""
    status: FindingStatus
    details: str = ""
    recommendation: Optional[str] = None
    sub_findings: Optional[List[SubFinding]] = None


class ValueSummary(BaseModel):
    invoice_gross: Optional[Decimal] = None
    receipt_total: Optional[Decimal] = None
    billing_reference_value: Optional[Decimal] = None
    receipt_mismatch: bool = False
    billing_mismatch: bool = False


class AuditReport(BaseModel):
    run_id: str
    generated_at: datetime

    findings: List[Finding] = Field(default_factory=list)
    totals: Dict[FindingStatus, int] = Field(default_factory=dict)
    value_summary: ValueSummary = Field(default_factory=ValueSummary)
    corrected_tax_id: Optional[str] = None


@dataclass(frozen=True)
class StatusOrdering:
    order: Dict[FindingStatus, int]

    @classmethod
    def default(cls) -> "StatusOrdering":
        # Higher wins.
        return cls(
            order={
                FindingStatus.FAIL: 30,
                FindingStatus.WARNING: 20,
                FindingStatus.PASS: 10,
                FindingStatus.PENDING: 0,
            }
        )

    def worst(self, statuses: List[FindingStatus], *, start: FindingStatus = FindingStatus.PASS) -> FindingStatus:
        result = start
        for status in statuses:
            if self.order.get(status, 0) > self.order.get(result, 0):
                result = status
        return result
