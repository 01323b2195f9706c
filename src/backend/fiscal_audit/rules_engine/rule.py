from __future__ import annotations

from abc import ABC, abstractmethod
from typing import List, Optional, Type

from pydantic import BaseModel

from .context import RuleContext
from .models import Finding


class Rule(ABC):
    rule_id: str
    rule_title: str
    # Every finding id this rule may emit; the first one is used when the rule itself breaks.
    finding_ids: List[str]
    # Position in the emitted finding list.
    order: int
    config_model: Type[BaseModel]

    def __init__(self):
        if not getattr(self, "rule_id", None):
            raise ValueError("Rule must define rule_id")

    @abstractmethod
    def evaluate(self, ctx: RuleContext) -> Optional[Finding]:  # pragma: no cover
        raise NotImplementedError
