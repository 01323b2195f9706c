from __future__ import annotations

from typing import Optional

from ..config import StockEntryReconciliationRuleConfig
from ..context import RuleContext
from ..matching import reconcile_items
from ..models import Finding, FindingStatus
from ..registry import register_rule
from ..rule import Rule

_DETAILS_BY_STATUS = {
    FindingStatus.FAIL: "Alguns itens da Nota Fiscal não foram encontrados no RMM.",
    FindingStatus.WARNING: "Itens encontrados, mas com divergência de quantidade acumulada.",
    FindingStatus.PASS: "Todos os itens da Nota Fiscal foram conferidos no RMM com sucesso.",
}


@register_rule
class RMM_CHECK(Rule):
    rule_id = "rmm-check"
    rule_title = "Entrada em Estoque (RMM)"
    finding_ids = ["rmm-check", "rmm-check-detailed"]
    order = 70
    config_model = StockEntryReconciliationRuleConfig

    def evaluate(self, ctx: RuleContext) -> Optional[Finding]:
        cfg = ctx.rules_config.get_rule_config(self.rule_id, StockEntryReconciliationRuleConfig)
        if not cfg.enabled:
            return None

        invoice = ctx.invoice
        if not invoice.found:
            return None

        if not invoice.is_material:
            if invoice.is_service:
                return Finding(
                    id=self.rule_id,
                    title="Entrada em Estoque",
                    description="Verificação de necessidade de RMM.",
                    status=FindingStatus.PASS,
                    details="Nota Fiscal identificada como Serviço. RMM não é obrigatório.",
                )
            return None

        if ctx.stock_entry.found:
            return self._reconcile(ctx, cfg)

        note = ctx.administrative_note
        if note.is_usable and note.substitutes_stock_entry:
            return Finding(
                id=self.rule_id,
                title=self.rule_title,
                description="Conferência de entrada de material em estoque.",
                status=FindingStatus.PASS,
                details=(
                    "Não há RMM, mas foi encontrada Informação Administrativa justificando a não entrada "
                    "em estoque (consumo imediato ou substituição RMM)."
                ),
            )

        return Finding(
            id=self.rule_id,
            title=self.rule_title,
            description="Materiais devem ter comprovante de entrada em estoque.",
            status=FindingStatus.FAIL,
            details=(
                "A Nota Fiscal contém itens de material/consumo, mas não foi encontrado RMM nem "
                "Informação Administrativa justificando a ausência."
            ),
            recommendation="Solicitar RMM ou Informação Administrativa justificando.",
        )

    def _reconcile(self, ctx: RuleContext, cfg: StockEntryReconciliationRuleConfig) -> Finding:
        title = "Conferência Detalhada: NF vs RMM"
        description = "Comparação item a item (agrupada por PN) entre Nota Fiscal e Relação de Materiais."

        if not ctx.invoice.items:
            return Finding(
                id="rmm-check-detailed",
                title=title,
                description=description,
                status=FindingStatus.WARNING,
                details="RMM encontrado, mas não foi possível extrair a lista de itens da NF para cruzamento.",
                recommendation="Conferir manualmente os itens da Nota Fiscal com o RMM.",
            )

        result = reconcile_items(ctx.invoice.items, ctx.stock_entry.items, cfg)
        recommendation = None
        if result.status == FindingStatus.FAIL:
            recommendation = "Verificar se todos os itens da Nota Fiscal deram entrada em estoque."
        elif result.status == FindingStatus.WARNING:
            recommendation = "Verificar as quantidades divergentes entre a Nota Fiscal e o RMM."

        return Finding(
            id="rmm-check-detailed",
            title=title,
            description=description,
            status=result.status,
            details=_DETAILS_BY_STATUS[result.status],
            recommendation=recommendation,
            sub_findings=result.sub_findings,
        )
