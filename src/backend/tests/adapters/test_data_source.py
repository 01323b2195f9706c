import pytest

from fiscal_audit.pipelines.data_source import FixturesBundleSource, get_bundle_source


def test_fixtures_source_loads_case_and_rules(cases_root):
    inputs = FixturesBundleSource(fixtures_root=cases_root).build_audit_inputs(case_id="service_purchase")
    assert inputs.case_id == "service_purchase"
    assert inputs.bundle.invoice.is_service is True
    assert inputs.rules_config.rules["tr-definitive"] == {"enabled": False}
    assert inputs.raw_payload["notaFiscal"]["number"] == "77"


def test_default_rules_config_when_case_has_none(cases_root):
    inputs = get_bundle_source("fixtures", root=cases_root).build_audit_inputs(case_id="material_purchase")
    assert inputs.rules_config.rules == {}


def test_unknown_source_rejected():
    with pytest.raises(ValueError):
        get_bundle_source("gemini")
