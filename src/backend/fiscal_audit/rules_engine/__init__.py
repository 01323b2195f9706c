"""Source-agnostic rules engine for procurement payment audits.

This package intentionally contains only domain logic:
- Rule inputs are the extracted document bundle + rules config.
- No extraction, file handling, or network calls live here.
"""

from .config import AuditRulesConfig
from .context import RuleContext
from .corrections import apply_tax_id_correction
from .models import (
    AuditReport,
    DocumentBundle,
    Finding,
    FindingStatus,
    SubFinding,
)
from .runner import RulesRunner, evaluate

# Import built-in rules so they self-register with the global registry.
from . import rules as _builtin_rules  # noqa: F401
