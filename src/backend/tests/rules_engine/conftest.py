import os
import sys


# Ensure `src/backend` is on sys.path so imports like `import fiscal_audit...` work.
BACKEND_DIR = os.path.abspath(os.path.join(os.path.dirname(__file__), "../.."))
if BACKEND_DIR not in sys.path:
    sys.path.insert(0, BACKEND_DIR)

from datetime import date

import pytest

from fiscal_audit.rules_engine.config import AuditRulesConfig
from fiscal_audit.rules_engine.context import RuleContext
from fiscal_audit.rules_engine.models import DocumentBundle


@pytest.fixture
def signature_date() -> date:
    return date(2024, 5, 10)


@pytest.fixture
def valid_certificate(signature_date):
    return {
        "found": True,
        "tax_id": "12.345.678/0001-99",
        "validity": {
            "federal_pgfn": date(2024, 9, 1),
            "fgts": date(2024, 6, 1),
            "trabalhista": date(2024, 11, 20),
            "estadual_distrital": signature_date,
            "municipal": date(2025, 1, 15),
        },
    }


@pytest.fixture
def signed_receipt(signature_date):
    return {
        "found": True,
        "tax_id": "12.345.678/0001-99",
        "signature_date": signature_date,
        "is_definitive": True,
        "total_value": "1000.00",
    }


@pytest.fixture
def material_invoice():
    return {
        "found": True,
        "number": "4521",
        "supplier_name": "Fornecedor Exemplo LTDA",
        "tax_id": "12345678000199",
        "gross_value": "1000.00",
        "liquid_value": "950.00",
        "is_material": True,
        "items": [],
    }


@pytest.fixture
def make_bundle():
    def _make(**sections) -> DocumentBundle:
        return DocumentBundle.model_validate(sections)

    return _make


@pytest.fixture
def make_ctx(make_bundle):
    def _make(*, bundle: DocumentBundle | None = None, client_rules: dict | None = None, **sections) -> RuleContext:
        if bundle is None:
            bundle = make_bundle(**sections)
        return RuleContext(bundle=bundle, rules_config=AuditRulesConfig(rules=client_rules or {}))

    return _make
