from __future__ import annotations

import json
import os
from dataclasses import dataclass
from pathlib import Path

from dotenv import load_dotenv

from fiscal_audit.rules_engine.config import AuditRulesConfig


load_dotenv()


@dataclass(frozen=True)
class AuditSettings:
    rules_config_path: Path | None
    log_level: str


def get_settings() -> AuditSettings:
    """
    Load audit settings from environment variables.

    Reads:
      FISCAL_AUDIT_RULES_CONFIG (optional path to a JSON/YAML rules file),
      FISCAL_AUDIT_LOG_LEVEL (default INFO)
    """
    raw_path = os.getenv("FISCAL_AUDIT_RULES_CONFIG", "").strip()
    return AuditSettings(
        rules_config_path=Path(raw_path) if raw_path else None,
        log_level=os.getenv("FISCAL_AUDIT_LOG_LEVEL", "INFO").strip().upper() or "INFO",
    )


def load_rules_config(path: Path | None) -> AuditRulesConfig:
    if path is None:
        return AuditRulesConfig()
    if not path.exists():
        raise ValueError(f"Rules config file not found: {path}")

    text = path.read_text(encoding="utf-8")
    if path.suffix.lower() in (".yaml", ".yml"):
        import yaml

        raw = yaml.safe_load(text) or {}
    else:
        raw = json.loads(text)
    if not isinstance(raw, dict):
        raise ValueError(f"Rules config must be a mapping: {path}")
    return AuditRulesConfig.model_validate(raw)
