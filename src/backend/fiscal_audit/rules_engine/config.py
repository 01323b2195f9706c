from __future__ import annotations

from decimal import Decimal
from typing import Any, Dict, Optional, Type, TypeVar

from pydantic import BaseModel, Field

T = TypeVar("T", bound=BaseModel)


class RuleConfigBase(BaseModel):
    enabled: bool = True


class CertificateValidityRuleConfig(RuleConfigBase):
    # A certificate valid on the signature date itself counts as valid.
    allow_same_day_expiry: bool = True


class ValueReconciliationRuleConfig(RuleConfigBase):
    # Absolute tolerance in currency units; comparisons are strictly less-than.
    amount_tolerance: Decimal = Decimal("0.05")


class StockEntryReconciliationRuleConfig(RuleConfigBase):
    quantity_tolerance: Decimal = Decimal("0.01")
    # Part numbers shorter than this are treated as noise and the description is used instead.
    part_number_min_length: int = 3
    description_key_length: int = 30
    # Words shorter than this never drive the fuzzy description fallback.
    fuzzy_token_min_length: int = 4
    label_description_length: int = 30


class ExpenseNatureRuleConfig(RuleConfigBase):
    # Budget classification code for "services" (Outros Serviços de Terceiros - PJ).
    service_expense_code: str = "339039"


class ValueSummaryConfig(BaseModel):
    amount_tolerance: Decimal = Decimal("0.05")


class AuditRulesConfig(BaseModel):
    """Per-deployment configuration for all rules.

    Rules pull their typed config via `get_rule_config`.
    """

    rules: Dict[str, Dict[str, Any]] = Field(default_factory=dict)
    value_summary: ValueSummaryConfig = Field(default_factory=ValueSummaryConfig)

    def get_rule_config(
        self,
        rule_id: str,
        model: Type[T],
        default: Optional[T] = None,
    ) -> T:
        if rule_id not in self.rules:
            if default is not None:
                return default
            return model()  # type: ignore[call-arg]
        raw = self.rules.get(rule_id, {})
        return model.model_validate(raw)
