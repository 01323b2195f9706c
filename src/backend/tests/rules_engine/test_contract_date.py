from datetime import date

from fiscal_audit.rules_engine.models import FindingStatus
from fiscal_audit.rules_engine.rules.contract_date import CONTRACT_DATE


def test_commission_older_than_contract_fails(make_ctx):
    res = CONTRACT_DATE().evaluate(
        make_ctx(receipt={"found": True, "bulletin_date": date(2022, 12, 1), "contract_start_year": 2023})
    )
    assert res.id == "contract-date"
    assert res.status == FindingStatus.FAIL
    assert "2022" in res.details and "2023" in res.details


def test_commission_from_contract_year_is_silent(make_ctx):
    res = CONTRACT_DATE().evaluate(
        make_ctx(receipt={"found": True, "bulletin_date": date(2023, 1, 5), "contract_start_year": 2023})
    )
    assert res is None


def test_skipped_without_dates(make_ctx):
    assert CONTRACT_DATE().evaluate(make_ctx(receipt={"found": True, "contract_start_year": 2023})) is None
