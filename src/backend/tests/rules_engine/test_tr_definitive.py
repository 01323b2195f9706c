from fiscal_audit.rules_engine.models import FindingStatus
from fiscal_audit.rules_engine.rules.tr_definitive import TR_DEFINITIVE


def test_definitive_acceptance_passes(make_ctx):
    res = TR_DEFINITIVE().evaluate(make_ctx(receipt={"found": True, "is_definitive": True}))
    assert res.id == "tr-definitive"
    assert res.status == FindingStatus.PASS


def test_provisional_acceptance_fails(make_ctx):
    res = TR_DEFINITIVE().evaluate(make_ctx(receipt={"found": True, "is_definitive": False}))
    assert res.status == FindingStatus.FAIL
    assert res.recommendation == "Devolver para correção do Termo de Recebimento."


def test_skipped_without_receipt(make_ctx):
    assert TR_DEFINITIVE().evaluate(make_ctx()) is None
