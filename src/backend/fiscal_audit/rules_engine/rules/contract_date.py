from __future__ import annotations

from typing import Optional

from ..config import RuleConfigBase
from ..context import RuleContext
from ..models import Finding, FindingStatus
from ..registry import register_rule
from ..rule import Rule


@register_rule
class CONTRACT_DATE(Rule):
    rule_id = "contract-date"
    rule_title = "Comissão vs Contrato"
    finding_ids = ["contract-date"]
    order = 60
    config_model = RuleConfigBase

    def evaluate(self, ctx: RuleContext) -> Optional[Finding]:
        cfg = ctx.rules_config.get_rule_config(self.rule_id, RuleConfigBase)
        if not cfg.enabled:
            return None

        receipt = ctx.receipt
        if not receipt.found or receipt.bulletin_date is None or not receipt.contract_start_year:
            return None

        bulletin_year = receipt.bulletin_date.year
        # A commission designated on or after the contract start is fine; nothing is reported.
        if bulletin_year >= receipt.contract_start_year:
            return None

        return Finding(
            id=self.rule_id,
            title=self.rule_title,
            description="Validade da comissão de recebimento.",
            status=FindingStatus.FAIL,
            details=(
                f"A comissão (Boletim de {bulletin_year}) é anterior ao início do contrato "
                f"({receipt.contract_start_year})."
            ),
            recommendation="Verificar designação da comissão.",
        )
