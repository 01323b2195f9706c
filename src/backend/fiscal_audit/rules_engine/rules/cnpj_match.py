from __future__ import annotations

from typing import List, Optional, Set

from ..config import RuleConfigBase
from ..context import RuleContext
from ..models import Finding, FindingStatus
from ..normalize import digits_only
from ..registry import register_rule
from ..rule import Rule


@register_rule
class CNPJ_MATCH(Rule):
    rule_id = "cnpj-match"
    rule_title = "Consistência de CNPJ"
    finding_ids = ["cnpj-match"]
    order = 30
    config_model = RuleConfigBase

    def evaluate(self, ctx: RuleContext) -> Optional[Finding]:
        cfg = ctx.rules_config.get_rule_config(self.rule_id, RuleConfigBase)
        if not cfg.enabled:
            return None

        distinct: Set[str] = set()
        sources: List[str] = []
        shared: Optional[str] = None
        for label, raw in (
            ("NF", ctx.invoice.tax_id),
            ("Termo", ctx.receipt.tax_id),
            ("SICAF", ctx.certificate.tax_id),
        ):
            if not raw:
                continue
            normalized = digits_only(raw)
            if normalized:
                distinct.add(normalized)
                shared = shared or raw
            sources.append(f"{label}: {raw}")

        # No identifiers at all is reported by the document-specific checks.
        if not distinct:
            return None

        if len(distinct) > 1:
            return Finding(
                id=self.rule_id,
                title=self.rule_title,
                description="O CNPJ deve ser o mesmo em todos os documentos.",
                status=FindingStatus.FAIL,
                details="Divergência encontrada:\n" + "\n".join(sources),
                recommendation="Verificar se os documentos pertencem ao mesmo processo.",
            )

        return Finding(
            id=self.rule_id,
            title=self.rule_title,
            description="Verificação do fornecedor nos documentos.",
            status=FindingStatus.PASS,
            details=f"CNPJ {shared} consistente em todos os documentos.",
        )
