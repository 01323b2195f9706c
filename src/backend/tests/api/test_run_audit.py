import json

from fiscal_audit.scripts.run_audit import main


def test_cli_writes_reports_for_fixture_case(tmp_path, monkeypatch):
    monkeypatch.delenv("FISCAL_AUDIT_RULES_CONFIG", raising=False)
    exit_code = main(["--case-id", "service_purchase", "--output-dir", str(tmp_path)])
    assert exit_code == 0

    report = json.loads((tmp_path / "audit_service_purchase.json").read_text(encoding="utf-8"))
    assert [f["id"] for f in report["findings"]] == [
        "sicaf-missing",
        "cnpj-match",
        "value-check-gross",
        "rmm-check",
    ]
    markdown = (tmp_path / "audit_service_purchase.md").read_text(encoding="utf-8")
    assert "# Auditoria service_purchase" in markdown
    assert "`rmm-check`" in markdown


def test_cli_rejects_unreadable_payload(tmp_path, monkeypatch):
    monkeypatch.delenv("FISCAL_AUDIT_RULES_CONFIG", raising=False)
    bad = tmp_path / "broken.json"
    bad.write_text("[]", encoding="utf-8")
    assert main(["--input", str(bad), "--output-dir", str(tmp_path)]) == 1


def test_cli_applies_yaml_rules_config(tmp_path, monkeypatch, material_payload):
    monkeypatch.delenv("FISCAL_AUDIT_RULES_CONFIG", raising=False)
    payload_path = tmp_path / "case.json"
    payload_path.write_text(json.dumps(material_payload), encoding="utf-8")
    rules_path = tmp_path / "rules.yaml"
    rules_path.write_text("rules:\n  nd-consistency:\n    enabled: false\n", encoding="utf-8")

    assert main(["--input", str(payload_path), "--rules-config", str(rules_path)]) == 0
    report = json.loads((tmp_path / "audit_case.json").read_text(encoding="utf-8"))
    assert "nd-consistency" not in [f["id"] for f in report["findings"]]
