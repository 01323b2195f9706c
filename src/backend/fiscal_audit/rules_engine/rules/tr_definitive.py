from __future__ import annotations

from typing import Optional

from ..config import RuleConfigBase
from ..context import RuleContext
from ..models import Finding, FindingStatus
from ..registry import register_rule
from ..rule import Rule


@register_rule
class TR_DEFINITIVE(Rule):
    rule_id = "tr-definitive"
    rule_title = "Termo de Recebimento"
    finding_ids = ["tr-definitive"]
    order = 40
    config_model = RuleConfigBase

    def evaluate(self, ctx: RuleContext) -> Optional[Finding]:
        cfg = ctx.rules_config.get_rule_config(self.rule_id, RuleConfigBase)
        if not cfg.enabled or not ctx.receipt.found:
            return None

        if ctx.receipt.is_definitive:
            return Finding(
                id=self.rule_id,
                title=self.rule_title,
                description="Verificação do aceite definitivo.",
                status=FindingStatus.PASS,
                details='Consta "recebido e aceito definitivamente".',
            )

        return Finding(
            id=self.rule_id,
            title=self.rule_title,
            description="Verificação do aceite definitivo.",
            status=FindingStatus.FAIL,
            details=(
                'A expressão "recebido e aceito definitivamente" não foi encontrada. '
                "Pode ser um recebimento provisório ou parcial."
            ),
            recommendation="Devolver para correção do Termo de Recebimento.",
        )
