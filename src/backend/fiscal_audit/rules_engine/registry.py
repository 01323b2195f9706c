from __future__ import annotations

from typing import Dict, Iterable, List, Type

from .rule import Rule


class RuleRegistry:
    """Rule classes keyed by rule id, plus the finding ids each one emits.

    A finding id belongs to exactly one rule so a report line can always be
    traced back to the check that produced it.
    """

    def __init__(self):
        self._rules: Dict[str, Type[Rule]] = {}
        self._finding_owners: Dict[str, str] = {}

    def register(self, rule_cls: Type[Rule]) -> None:
        rule_id = getattr(rule_cls, "rule_id", None)
        if not rule_id:
            raise ValueError("Rule class missing rule_id")
        if rule_id in self._rules:
            raise ValueError(f"Duplicate rule_id registered: {rule_id}")

        finding_ids = list(getattr(rule_cls, "finding_ids", None) or [rule_id])
        for finding_id in finding_ids:
            owner = self._finding_owners.get(finding_id)
            if owner is not None:
                raise ValueError(f"Finding id {finding_id} already emitted by {owner}")

        self._rules[rule_id] = rule_cls
        for finding_id in finding_ids:
            self._finding_owners[finding_id] = rule_id

    def ordered(self) -> List[Type[Rule]]:
        return sorted(self._rules.values(), key=lambda cls: getattr(cls, "order", 0))

    def create_all(self) -> List[Rule]:
        return [cls() for cls in self.ordered()]

    def get(self, rule_id: str) -> Type[Rule]:
        return self._rules[rule_id]

    def owner_of(self, finding_id: str) -> Type[Rule]:
        return self._rules[self._finding_owners[finding_id]]

    def ids(self) -> Iterable[str]:
        return self._rules.keys()


registry = RuleRegistry()


def register_rule(rule_cls: Type[Rule]) -> Type[Rule]:
    registry.register(rule_cls)
    return rule_cls
