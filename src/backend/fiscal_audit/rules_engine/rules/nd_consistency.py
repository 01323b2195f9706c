from __future__ import annotations

from typing import Optional

from ..config import ExpenseNatureRuleConfig
from ..context import RuleContext
from ..models import Finding, FindingStatus
from ..registry import register_rule
from ..rule import Rule


@register_rule
class ND_CONSISTENCY(Rule):
    rule_id = "nd-consistency"
    rule_title = "Natureza de Despesa (ND)"
    finding_ids = ["nd-consistency"]
    order = 80
    config_model = ExpenseNatureRuleConfig

    def evaluate(self, ctx: RuleContext) -> Optional[Finding]:
        cfg = ctx.rules_config.get_rule_config(self.rule_id, ExpenseNatureRuleConfig)
        if not cfg.enabled:
            return None

        report = ctx.billing_report
        if not report.found or not report.commitments:
            return None

        service_commitments = [
            c for c in report.commitments if cfg.service_expense_code in c.expense_nature_code
        ]
        if not service_commitments or not ctx.invoice.is_material:
            return None

        code = cfg.service_expense_code
        note = ctx.administrative_note
        if note.is_usable and note.justifies_service_expense_code:
            return Finding(
                id=self.rule_id,
                title=self.rule_title,
                description="Compatibilidade da ND com o objeto da NF.",
                status=FindingStatus.PASS,
                details=f"Uso de ND de Serviço ({code}) para materiais devidamente justificado pela Informação Administrativa.",
            )

        # Any valid note is accepted as justification even without the explicit flag.
        if note.is_usable:
            return Finding(
                id=self.rule_id,
                title=self.rule_title,
                description="Compatibilidade da ND com o objeto da NF.",
                status=FindingStatus.PASS,
                details="Nota com materiais usando ND de Serviço. Informação Administrativa presente (presume-se justificativa).",
            )

        commitment_ids = ", ".join(c.commitment_id for c in service_commitments if c.commitment_id)
        details = (
            f"Identificado empenho com ND de Serviço ({code}) para uma Nota Fiscal que contém materiais, "
            "sem Informação Administrativa justificando (ex: material aplicado em serviço)."
        )
        if commitment_ids:
            details += f"\nEmpenhos: {commitment_ids}"
        return Finding(
            id=self.rule_id,
            title=self.rule_title,
            description="Verificar compatibilidade da ND com o objeto da NF.",
            status=FindingStatus.WARNING,
            details=details,
            recommendation="Verificar necessidade de Informação Administrativa para justificar o uso do empenho.",
        )
