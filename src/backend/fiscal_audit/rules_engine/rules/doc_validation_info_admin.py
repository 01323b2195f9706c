from __future__ import annotations

from typing import Optional

from ..config import RuleConfigBase
from ..context import RuleContext
from ..models import Finding, FindingStatus
from ..registry import register_rule
from ..rule import Rule


@register_rule
class DOC_VALIDATION_INFO_ADMIN(Rule):
    rule_id = "doc-validation-info-admin"
    rule_title = "Validação de Documentos"
    finding_ids = ["doc-validation-info-admin"]
    order = 10
    config_model = RuleConfigBase

    def evaluate(self, ctx: RuleContext) -> Optional[Finding]:
        cfg = ctx.rules_config.get_rule_config(self.rule_id, RuleConfigBase)
        if not cfg.enabled:
            return None

        if not ctx.administrative_note.wrong_document_detected:
            return None

        return Finding(
            id=self.rule_id,
            title=self.rule_title,
            description="Verificação da integridade e tipologia dos documentos apresentados.",
            status=FindingStatus.FAIL,
            details=(
                "ERRO DE DOCUMENTAÇÃO: o arquivo enviado como \"Informação Administrativa\" "
                "contém na verdade uma Nota Fiscal (DANFE).\n\n"
                "O documento de justificativa correto não foi anexado ou houve troca de arquivos."
            ),
            recommendation=(
                "Verifique os nomes dos arquivos. Remova a Nota Fiscal duplicada e anexe a "
                "Informação Administrativa correta."
            ),
        )
