from __future__ import annotations

import json
import logging
import re
from datetime import date, datetime
from decimal import Decimal, InvalidOperation
from typing import Any, Iterable

from pydantic import ValidationError

from fiscal_audit.rules_engine.models import (
    AdministrativeNoteRecord,
    BillingReportRecord,
    CertificateRecord,
    CertificateValidity,
    Commitment,
    DocumentBundle,
    InvoiceRecord,
    LineItem,
    ReceiptRecord,
    StockEntryRecord,
)

logger = logging.getLogger(__name__)

_BR_DATE = re.compile(r"^(\d{2})/(\d{2})/(\d{4})$")


class ExtractionPayloadError(ValueError):
    """The extractor returned something that cannot be read as a document bundle."""


def bundle_from_extraction(payload: dict[str, Any] | str | bytes) -> DocumentBundle:
    """
    Build a DocumentBundle from the extractor's JSON output.

    Expected shape (every section optional; a missing section means "not found"):
      {
        "sicaf": {"found": true, "cnpj": "...", "validityDates": {"federal_pgfn": "YYYY-MM-DD", ...}},
        "termoRecebimento": {"found": true, "cnpj": "...", "signatureDate": "YYYY-MM-DD", ...},
        "notaFiscal": {"found": true, "cnpj": "...", "possibleCnpjs": [...], "items": [...], ...},
        "relatorioFatura": {"found": true, "totalValue": 123.45, "empenhos": [{"ne", "nd", "value"}]},
        "rmm": {"found": true, "items": [...]},
        "informacaoAdministrativa": {"found": true, "substitutesRmm": false, ...}
      }

    Notes:
    - dates are ISO (YYYY-MM-DD); dd/mm/yyyy is also accepted
    - unreadable dates and amounts are treated as absent
    """
    if isinstance(payload, (str, bytes)):
        try:
            payload = json.loads(payload)
        except json.JSONDecodeError as exc:
            raise ExtractionPayloadError(f"Extractor output is not valid JSON: {exc}") from exc
    if not isinstance(payload, dict):
        raise ExtractionPayloadError("Extractor output must be a JSON object.")

    try:
        return DocumentBundle(
            certificate=_certificate(_section(payload, "sicaf")),
            receipt=_receipt(_section(payload, "termoRecebimento")),
            invoice=_invoice(_section(payload, "notaFiscal")),
            billing_report=_billing_report(_section(payload, "relatorioFatura")),
            stock_entry=_stock_entry(_section(payload, "rmm")),
            administrative_note=_administrative_note(_section(payload, "informacaoAdministrativa")),
        )
    except ValidationError as exc:
        raise ExtractionPayloadError(f"Extractor output failed validation: {exc}") from exc


def _section(payload: dict[str, Any], name: str) -> dict[str, Any]:
    raw = payload.get(name)
    if raw is None:
        return {}
    if not isinstance(raw, dict):
        raise ExtractionPayloadError(f"Section '{name}' must be an object.")
    return raw


def _certificate(raw: dict[str, Any]) -> CertificateRecord:
    dates = raw.get("validityDates") or {}
    if not isinstance(dates, dict):
        raise ExtractionPayloadError("Section 'sicaf.validityDates' must be an object.")
    return CertificateRecord(
        found=bool(raw.get("found")),
        tax_id=_text(raw.get("cnpj")),
        validity=CertificateValidity(
            federal_pgfn=_parse_date(dates.get("federal_pgfn")),
            fgts=_parse_date(dates.get("fgts")),
            trabalhista=_parse_date(dates.get("trabalhista")),
            estadual_distrital=_parse_date(dates.get("estadual_distrital")),
            municipal=_parse_date(dates.get("municipal")),
        ),
    )


def _receipt(raw: dict[str, Any]) -> ReceiptRecord:
    return ReceiptRecord(
        found=bool(raw.get("found")),
        tax_id=_text(raw.get("cnpj")),
        signature_date=_parse_date(raw.get("signatureDate")),
        is_definitive=bool(raw.get("isDefinitive")),
        bulletin_date=_parse_date(raw.get("bulletinDate")),
        has_contract_reference=bool(raw.get("hasContractReference")),
        contract_start_year=_parse_int(raw.get("contractStartYear")),
        total_value=_parse_decimal(raw.get("totalValue")),
        contract_number=_text(raw.get("contractNumber")),
    )


def _invoice(raw: dict[str, Any]) -> InvoiceRecord:
    return InvoiceRecord(
        found=bool(raw.get("found")),
        number=_text(raw.get("number")),
        supplier_name=_text(raw.get("supplierName")),
        tax_id=_text(raw.get("cnpj")),
        possible_tax_ids=[str(c) for c in (raw.get("possibleCnpjs") or []) if c],
        emission_date=_parse_date(raw.get("emissionDate")),
        gross_value=_parse_decimal(raw.get("grossValue")),
        liquid_value=_parse_decimal(raw.get("liquidValue")),
        is_material=bool(raw.get("isMaterial")),
        is_service=bool(raw.get("isService")),
        items=_line_items(raw.get("items")),
    )


def _billing_report(raw: dict[str, Any]) -> BillingReportRecord:
    commitments: list[Commitment] = []
    for entry in raw.get("empenhos") or []:
        if not isinstance(entry, dict):
            raise ExtractionPayloadError("Commitment entries must be objects.")
        commitments.append(
            Commitment(
                commitment_id=str(entry.get("ne") or ""),
                expense_nature_code=str(entry.get("nd") or ""),
                value=_parse_decimal(entry.get("value")) or Decimal("0"),
            )
        )
    return BillingReportRecord(
        found=bool(raw.get("found")),
        emission_date=_parse_date(raw.get("emissionDate")),
        arrival_date=_parse_date(raw.get("arrivalDate")),
        due_date=_parse_date(raw.get("dueDate")),
        total_value=_parse_decimal(raw.get("totalValue")),
        commitments=commitments,
    )


def _stock_entry(raw: dict[str, Any]) -> StockEntryRecord:
    return StockEntryRecord(found=bool(raw.get("found")), items=_line_items(raw.get("items")))


def _administrative_note(raw: dict[str, Any]) -> AdministrativeNoteRecord:
    return AdministrativeNoteRecord(
        found=bool(raw.get("found")),
        justification_text=_text(raw.get("justification")),
        substitutes_stock_entry=bool(raw.get("substitutesRmm")),
        justifies_service_expense_code=bool(raw.get("justifiesServiceND")),
        wrong_document_detected=bool(raw.get("wrongDocumentDetected")),
    )


def _line_items(raw: Iterable[Any] | None) -> list[LineItem]:
    items: list[LineItem] = []
    for entry in raw or []:
        if not isinstance(entry, dict):
            raise ExtractionPayloadError("Line item entries must be objects.")
        items.append(
            LineItem(
                description=str(entry.get("description") or ""),
                part_number=_text(entry.get("partNumber")),
                quantity=_parse_decimal(entry.get("quantity")) or Decimal("0"),
                unit=_text(entry.get("unit")),
            )
        )
    return items


def _text(value: Any) -> str | None:
    if value is None:
        return None
    text = str(value).strip()
    return text or None


def _parse_date(value: Any) -> date | None:
    if value in (None, ""):
        return None
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    text = str(value).strip()
    match = _BR_DATE.match(text)
    if match:
        day, month, year = match.groups()
        text = f"{year}-{month}-{day}"
    try:
        return date.fromisoformat(text[:10])
    except ValueError:
        logger.warning("Ignoring unreadable date from extractor: %r", value)
        return None


def _parse_decimal(value: Any) -> Decimal | None:
    if value in (None, ""):
        return None
    if isinstance(value, bool):
        return None
    if isinstance(value, (int, float, Decimal)):
        text = str(value)
    else:
        text = str(value).strip().replace("R$", "").strip()
        # Brazilian notation: "1.234,56"
        if "," in text:
            text = text.replace(".", "").replace(",", ".")
    try:
        result = Decimal(text)
    except InvalidOperation:
        logger.warning("Ignoring unreadable amount from extractor: %r", value)
        return None
    if not result.is_finite():
        logger.warning("Ignoring non-finite amount from extractor: %r", value)
        return None
    return result


def _parse_int(value: Any) -> int | None:
    if value in (None, ""):
        return None
    try:
        return int(value)
    except (TypeError, ValueError):
        logger.warning("Ignoring unreadable year from extractor: %r", value)
        return None
