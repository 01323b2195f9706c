from __future__ import annotations

import argparse
import json
from typing import Any, Dict, List

from pydantic import BaseModel, Field

from .registry import registry

# Ensure built-in rules are imported/registered when generating a catalog.
from . import rules as _builtin_rules  # noqa: F401


class RuleCatalogEntry(BaseModel):
    rule_id: str
    rule_title: str
    finding_ids: List[str] = Field(default_factory=list)
    order: int = 0

    module: str
    class_name: str

    config_model: str
    config_schema: Dict[str, Any]
    # Tolerances and codes the rule applies when no rules config overrides them.
    default_config: Dict[str, Any] = Field(default_factory=dict)


def build_catalog() -> List[RuleCatalogEntry]:
    entries: List[RuleCatalogEntry] = []
    for rule_cls in registry.ordered():
        cfg_model = getattr(rule_cls, "config_model", None)
        cfg_schema: Dict[str, Any] = {}
        cfg_defaults: Dict[str, Any] = {}
        cfg_model_name = ""
        if cfg_model is not None:
            cfg_model_name = getattr(cfg_model, "__name__", str(cfg_model))
            cfg_schema = cfg_model.model_json_schema()
            cfg_defaults = cfg_model().model_dump(mode="json")

        entries.append(
            RuleCatalogEntry(
                rule_id=rule_cls.rule_id,
                rule_title=getattr(rule_cls, "rule_title", ""),
                finding_ids=list(getattr(rule_cls, "finding_ids", []) or []),
                order=getattr(rule_cls, "order", 0),
                module=getattr(rule_cls, "__module__", ""),
                class_name=getattr(rule_cls, "__name__", ""),
                config_model=cfg_model_name,
                config_schema=cfg_schema,
                default_config=cfg_defaults,
            )
        )

    return entries


def _dump_json(catalog: list[dict[str, Any]]) -> str:
    return json.dumps(catalog, indent=2, sort_keys=True, ensure_ascii=False)


def _dump_yaml(catalog: list[dict[str, Any]]) -> str:
    import yaml

    return yaml.safe_dump(catalog, sort_keys=True, allow_unicode=True)


def main(argv: list[str] | None = None) -> None:
    parser = argparse.ArgumentParser(description="Generate a rules catalog from the registry.")
    parser.add_argument(
        "--format",
        choices=("yaml", "json"),
        default="yaml",
        help="Output format (default: yaml).",
    )
    args = parser.parse_args(argv)

    catalog = [e.model_dump(mode="json") for e in build_catalog()]
    if args.format == "json":
        print(_dump_json(catalog))
    else:
        print(_dump_yaml(catalog))


if __name__ == "__main__":
    main()
