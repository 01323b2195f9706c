from __future__ import annotations

import logging
import uuid
from datetime import datetime, timezone
from typing import Iterable, List, Optional

from .config import AuditRulesConfig
from .context import RuleContext
from .corrections import apply_tax_id_correction, find_tax_id_correction
from .models import AuditReport, DocumentBundle, Finding, FindingStatus
from .registry import registry
from .rule import Rule
from .summary import summarize_values

logger = logging.getLogger(__name__)


class RulesRunner:
    def __init__(self, rules: Optional[Iterable[Rule]] = None):
        self._rules = list(rules) if rules is not None else registry.create_all()

    @property
    def rules(self) -> List[Rule]:
        return list(self._rules)

    def evaluate(self, ctx: RuleContext, *, rule_ids: Optional[set[str]] = None) -> List[Finding]:
        findings: List[Finding] = []
        for rule in self._rules:
            if rule_ids is not None and rule.rule_id not in rule_ids:
                continue
            finding = self._evaluate_rule(rule, ctx)
            if finding is not None:
                findings.append(finding)
        return findings

    def run(
        self,
        bundle: DocumentBundle,
        *,
        rules_config: Optional[AuditRulesConfig] = None,
        rule_ids: Optional[set[str]] = None,
    ) -> AuditReport:
        rules_config = rules_config or AuditRulesConfig()
        corrected_tax_id = find_tax_id_correction(bundle)
        bundle = apply_tax_id_correction(bundle)

        ctx = RuleContext(bundle=bundle, rules_config=rules_config)
        findings = self.evaluate(ctx, rule_ids=rule_ids)

        totals: dict[FindingStatus, int] = {}
        for finding in findings:
            totals[finding.status] = totals.get(finding.status, 0) + 1

        return AuditReport(
            run_id=str(uuid.uuid4()),
            generated_at=datetime.now(timezone.utc),
            findings=findings,
            totals=totals,
            value_summary=summarize_values(bundle, rules_config.value_summary),
            corrected_tax_id=corrected_tax_id,
        )

    @staticmethod
    def _evaluate_rule(rule: Rule, ctx: RuleContext) -> Optional[Finding]:
        try:
            return rule.evaluate(ctx)
        except Exception:
            # One broken rule must not hide the findings of the others.
            logger.exception("Rule %s failed while evaluating the bundle", rule.rule_id)
            finding_ids = getattr(rule, "finding_ids", None) or [rule.rule_id]
            return Finding(
                id=finding_ids[0],
                title=getattr(rule, "rule_title", rule.rule_id),
                status=FindingStatus.PENDING,
                details="Não foi possível avaliar esta regra com os dados extraídos.",
                recommendation="Conferir manualmente os documentos desta verificação.",
            )


def evaluate(bundle: DocumentBundle, rules_config: Optional[AuditRulesConfig] = None) -> List[Finding]:
    """Audit a bundle and return its findings in rule order.

    Pure: the identifier correction is applied to a copy, and the same bundle
    always yields the same findings.
    """
    ctx = RuleContext(
        bundle=apply_tax_id_correction(bundle),
        rules_config=rules_config or AuditRulesConfig(),
    )
    return RulesRunner().evaluate(ctx)
