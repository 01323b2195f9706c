from __future__ import annotations

import argparse
import json
import logging
from dataclasses import replace
from pathlib import Path

from fiscal_audit.adapters.extraction import ExtractionPayloadError, bundle_from_extraction
from fiscal_audit.pipelines.data_source import AuditInputs, get_bundle_source, load_json
from fiscal_audit.rules_engine import RulesRunner
from fiscal_audit.rules_engine.models import AuditReport, FindingStatus
from fiscal_audit.rules_engine.normalize import format_currency_br
from fiscal_audit.settings import get_settings, load_rules_config

logger = logging.getLogger(__name__)

_STATUS_ICONS = {
    FindingStatus.PASS: "OK",
    FindingStatus.WARNING: "ATENÇÃO",
    FindingStatus.FAIL: "ERRO",
    FindingStatus.PENDING: "PENDENTE",
}


def run_audit_from_inputs(inputs: AuditInputs) -> AuditReport:
    return RulesRunner().run(inputs.bundle, rules_config=inputs.rules_config)


def render_markdown(report: AuditReport, *, case_id: str = "") -> str:
    heading = f"# Auditoria {case_id}".rstrip()
    lines = [
        heading,
        "",
        f"Generated at: {report.generated_at.isoformat()}",
        "",
        "## Totals",
    ]
    for status, count in report.totals.items():
        lines.append(f"- {status.value}: {count}")

    summary = report.value_summary
    lines.append("")
    lines.append("## Valores")
    lines.append(f"- NF Bruto: {format_currency_br(summary.invoice_gross)}")
    lines.append(
        f"- Termo de Recebimento: {format_currency_br(summary.receipt_total)}"
        + (" (divergente)" if summary.receipt_mismatch else "")
    )
    lines.append(
        f"- Relatório Fatura: {format_currency_br(summary.billing_reference_value)}"
        + (" (divergente)" if summary.billing_mismatch else "")
    )
    if report.corrected_tax_id:
        lines.append(f"- CNPJ da NF corrigido para {report.corrected_tax_id}")

    lines.append("")
    lines.append("## Findings")
    for index, finding in enumerate(report.findings, start=1):
        lines.append("")
        lines.append(f"### {index}. {finding.title} [{_STATUS_ICONS[finding.status]}]")
        lines.append(f"`{finding.id}` - {finding.description}")
        if finding.details:
            lines.append("")
            lines.append(finding.details)
        if finding.recommendation:
            lines.append("")
            lines.append(f"- Recomendação: {finding.recommendation}")
        if finding.sub_findings:
            lines.append("")
            lines.append("| Item | Status | Detalhes |")
            lines.append("| --- | --- | --- |")
            for sub in finding.sub_findings:
                lines.append(f"| {sub.label} | {sub.status.value} | {sub.details} |")
    return "\n".join(lines) + "\n"


def _load_inputs(args) -> tuple[AuditInputs, Path]:
    if args.input:
        input_path = Path(args.input).resolve()
        payload = load_json(input_path)
        inputs = AuditInputs(
            case_id=input_path.stem,
            bundle=bundle_from_extraction(payload),
            raw_payload=payload,
        )
        return inputs, input_path.parent
    if args.case_id:
        fixtures_root = Path(args.fixtures_root).resolve() if args.fixtures_root else None
        source = get_bundle_source("fixtures", root=fixtures_root)
        return source.build_audit_inputs(case_id=args.case_id), Path(".").resolve()
    raise SystemExit("Provide --input or --case-id.")


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(
        description="Audit an extracted document bundle and write JSON/MD outputs."
    )
    parser.add_argument(
        "--input",
        default=None,
        help="Path to an extractor output JSON file.",
    )
    parser.add_argument(
        "--case-id",
        default=None,
        help="Case directory name under the fixtures root (alternative to --input).",
    )
    parser.add_argument(
        "--fixtures-root",
        default=None,
        help="Root directory holding <case-id>/extraction.json fixtures.",
    )
    parser.add_argument(
        "--rules-config",
        default=None,
        help="JSON/YAML rules config (defaults to FISCAL_AUDIT_RULES_CONFIG).",
    )
    parser.add_argument(
        "--output-dir",
        default=None,
        help="Output directory for report files (defaults to the input's directory).",
    )
    args = parser.parse_args(argv)

    settings = get_settings()
    logging.basicConfig(level=settings.log_level, format="%(asctime)s %(levelname)s %(name)s: %(message)s")

    try:
        inputs, default_output_dir = _load_inputs(args)
    except (ExtractionPayloadError, OSError, json.JSONDecodeError) as exc:
        logger.error("Could not read the extracted documents: %s", exc)
        return 1

    rules_path = Path(args.rules_config).resolve() if args.rules_config else settings.rules_config_path
    if rules_path is not None:
        try:
            inputs = replace(inputs, rules_config=load_rules_config(rules_path))
        except ValueError as exc:
            raise SystemExit(str(exc)) from exc

    report = run_audit_from_inputs(inputs)

    output_dir = Path(args.output_dir).resolve() if args.output_dir else default_output_dir
    output_dir.mkdir(parents=True, exist_ok=True)

    base_name = f"audit_{inputs.case_id}"
    out_json = output_dir / f"{base_name}.json"
    out_md = output_dir / f"{base_name}.md"
    out_json.write_text(json.dumps(report.model_dump(mode="json"), indent=2, ensure_ascii=False), encoding="utf-8")
    out_md.write_text(render_markdown(report, case_id=inputs.case_id), encoding="utf-8")

    print(f"Wrote {out_json}")
    print(f"Wrote {out_md}")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
