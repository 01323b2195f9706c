from __future__ import annotations

from typing import List, Optional

from ..config import CertificateValidityRuleConfig
from ..context import RuleContext
from ..models import (
    CERTIFICATE_LABELS,
    Finding,
    FindingStatus,
    StatusOrdering,
    SubFinding,
)
from ..normalize import format_date_br
from ..registry import register_rule
from ..rule import Rule


@register_rule
class SICAF_DETAILED(Rule):
    rule_id = "sicaf-detailed"
    rule_title = "Regularidade SICAF"
    finding_ids = ["sicaf-detailed", "sicaf-missing"]
    order = 20
    config_model = CertificateValidityRuleConfig

    def evaluate(self, ctx: RuleContext) -> Optional[Finding]:
        cfg = ctx.rules_config.get_rule_config(self.rule_id, CertificateValidityRuleConfig)
        if not cfg.enabled:
            return None

        certificate = ctx.certificate
        receipt = ctx.receipt
        signature_date = receipt.signature_date
        if not (certificate.found and receipt.found and signature_date is not None):
            return Finding(
                id="sicaf-missing",
                title="Validação SICAF",
                description="Verificação da existência do SICAF e Termo de Recebimento.",
                status=FindingStatus.WARNING,
                details=(
                    "Não foi possível realizar o cruzamento de datas. Verifique se o SICAF e o "
                    "Termo de Recebimento (com data de assinatura) foram enviados."
                ),
            )

        sub_findings: List[SubFinding] = []
        for kind, label in CERTIFICATE_LABELS.items():
            valid_until = certificate.validity.get(kind)
            if valid_until is None:
                sub_findings.append(
                    SubFinding(label=label, status=FindingStatus.FAIL, details="Data não encontrada")
                )
                continue

            if cfg.allow_same_day_expiry:
                is_valid = valid_until >= signature_date
            else:
                is_valid = valid_until > signature_date
            if is_valid:
                sub_findings.append(
                    SubFinding(label=label, status=FindingStatus.PASS, details=format_date_br(valid_until))
                )
            else:
                sub_findings.append(
                    SubFinding(
                        label=label,
                        status=FindingStatus.FAIL,
                        details=f"{format_date_br(valid_until)} (Vencido)",
                    )
                )

        status = StatusOrdering.default().worst([s.status for s in sub_findings])
        failed = status == FindingStatus.FAIL
        return Finding(
            id=self.rule_id,
            title=self.rule_title,
            description=(
                "Conferência das validades em relação à data de assinatura do Termo "
                f"({format_date_br(signature_date)})."
            ),
            status=status,
            details=(
                "Uma ou mais certidões estavam vencidas ou não foram encontradas na data da assinatura."
                if failed
                else "Todas as certidões estavam vigentes na data da assinatura."
            ),
            recommendation="Solicitar SICAF atualizado ou devolver Nota Fiscal." if failed else None,
            sub_findings=sub_findings,
        )
