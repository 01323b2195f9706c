from __future__ import annotations

from typing import Optional

from ..config import ValueReconciliationRuleConfig
from ..context import RuleContext
from ..models import Finding, FindingStatus
from ..normalize import format_currency_br, within_tolerance
from ..registry import register_rule
from ..rule import Rule


@register_rule
class VALUE_CHECK_GROSS(Rule):
    rule_id = "value-check-gross"
    rule_title = "Conferência de Valores"
    finding_ids = ["value-check-gross"]
    order = 50
    config_model = ValueReconciliationRuleConfig

    def evaluate(self, ctx: RuleContext) -> Optional[Finding]:
        cfg = ctx.rules_config.get_rule_config(self.rule_id, ValueReconciliationRuleConfig)
        if not cfg.enabled:
            return None

        invoice = ctx.invoice
        receipt = ctx.receipt
        if not (invoice.found and receipt.found):
            return None
        if invoice.gross_value is None or receipt.total_value is None:
            return None

        gross = invoice.gross_value
        liquid = invoice.liquid_value
        total = receipt.total_value

        if within_tolerance(gross, total, cfg.amount_tolerance):
            return Finding(
                id=self.rule_id,
                title=self.rule_title,
                description="Comparação do Valor Bruto da NF com o Termo de Recebimento.",
                status=FindingStatus.PASS,
                details=(
                    f"Valor Bruto NF ({format_currency_br(gross)}) confere com o Termo de "
                    f"Recebimento ({format_currency_br(total)})."
                ),
            )

        # Receipt filled with the net (after retentions) amount instead of the invoice total.
        if liquid is not None and within_tolerance(liquid, total, cfg.amount_tolerance):
            return Finding(
                id=self.rule_id,
                title=self.rule_title,
                description="O Termo de Recebimento deve utilizar o Valor Bruto (Total) da Nota Fiscal.",
                status=FindingStatus.FAIL,
                details=(
                    "ERRO CRÍTICO: O Termo de Recebimento está preenchido com o Valor Líquido "
                    f"({format_currency_br(total)}). Deveria ser o Valor Bruto ({format_currency_br(gross)})."
                ),
                recommendation="Corrigir Termo de Recebimento para constar o Valor Total da Nota.",
            )

        return Finding(
            id=self.rule_id,
            title=self.rule_title,
            description="Comparação do Valor Bruto da NF com o Termo de Recebimento.",
            status=FindingStatus.WARNING,
            details=(
                f"Divergência de valores. NF Bruto: {format_currency_br(gross)} | "
                f"TR Total: {format_currency_br(total)}."
            ),
            recommendation="Verificar se há erro de digitação ou faturamento parcial.",
        )
