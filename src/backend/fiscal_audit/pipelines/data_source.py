from __future__ import annotations

import json
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Protocol

from fiscal_audit.adapters.extraction import bundle_from_extraction
from fiscal_audit.rules_engine.config import AuditRulesConfig
from fiscal_audit.rules_engine.models import DocumentBundle


@dataclass(frozen=True)
class AuditInputs:
    case_id: str
    bundle: DocumentBundle
    rules_config: AuditRulesConfig = field(default_factory=AuditRulesConfig)
    raw_payload: dict[str, Any] = field(default_factory=dict)


class BundleSource(Protocol):
    def build_audit_inputs(self, *, case_id: str) -> AuditInputs:
        """Return the extracted bundle for one audit case."""
        ...


def get_bundle_source(name: str, *, root: Path | None = None) -> BundleSource:
    """Resolve a bundle source implementation by name (fixtures)."""
    source = (name or "").strip().lower()
    if source in ("fixtures", ""):
        return FixturesBundleSource(fixtures_root=root)
    raise ValueError(f"Unknown bundle source '{name}' (expected 'fixtures').")


class FixturesBundleSource:
    """Reads extractor output saved as `<root>/<case_id>/extraction.json`."""

    def __init__(self, *, fixtures_root: Path | None = None) -> None:
        self._fixtures_root = fixtures_root or _default_fixtures_root()

    def build_audit_inputs(self, *, case_id: str) -> AuditInputs:
        case_dir = self._fixtures_root / case_id
        payload = load_json(case_dir / "extraction.json")
        rules_path = case_dir / "rules.json"
        rules_config = AuditRulesConfig()
        if rules_path.exists():
            rules_config = AuditRulesConfig.model_validate(load_json(rules_path))
        return AuditInputs(
            case_id=case_id,
            bundle=bundle_from_extraction(payload),
            rules_config=rules_config,
            raw_payload=payload,
        )


def load_json(path: Path) -> Any:
    with path.open(encoding="utf-8") as handle:
        return json.load(handle)


def _default_fixtures_root() -> Path:
    return Path(__file__).resolve().parents[2] / "tests" / "fixtures" / "cases"
