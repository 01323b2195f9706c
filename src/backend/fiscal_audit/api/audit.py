from __future__ import annotations

import logging
from typing import Any

from fastapi import APIRouter, Body, HTTPException

from fiscal_audit.adapters.extraction import ExtractionPayloadError, bundle_from_extraction
from fiscal_audit.rules_engine import RulesRunner
from fiscal_audit.rules_engine.catalog import RuleCatalogEntry, build_catalog
from fiscal_audit.rules_engine.config import AuditRulesConfig
from fiscal_audit.rules_engine.models import AuditReport, DocumentBundle
from fiscal_audit.settings import get_settings, load_rules_config

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/audit", tags=["audit"])


def _rules_config() -> AuditRulesConfig:
    try:
        return load_rules_config(get_settings().rules_config_path)
    except ValueError as exc:
        raise HTTPException(status_code=500, detail=str(exc)) from exc


@router.get("/rules", response_model=list[RuleCatalogEntry])
def list_rules():
    return build_catalog()


@router.post("/bundle", response_model=AuditReport)
def audit_bundle(bundle: DocumentBundle):
    return RulesRunner().run(bundle, rules_config=_rules_config())


@router.post("/extraction", response_model=AuditReport)
def audit_extraction(payload: dict[str, Any] = Body(...)):
    try:
        bundle = bundle_from_extraction(payload)
    except ExtractionPayloadError as exc:
        logger.warning("Rejected extractor payload: %s", exc)
        raise HTTPException(status_code=422, detail=str(exc)) from exc
    return RulesRunner().run(bundle, rules_config=_rules_config())
