from .doc_validation_info_admin import DOC_VALIDATION_INFO_ADMIN
from .sicaf_detailed import SICAF_DETAILED
from .cnpj_match import CNPJ_MATCH
from .tr_definitive import TR_DEFINITIVE
from .value_check_gross import VALUE_CHECK_GROSS
from .contract_date import CONTRACT_DATE
from .rmm_check import RMM_CHECK
from .nd_consistency import ND_CONSISTENCY

__all__ = [
    "DOC_VALIDATION_INFO_ADMIN",
    "SICAF_DETAILED",
    "CNPJ_MATCH",
    "TR_DEFINITIVE",
    "VALUE_CHECK_GROSS",
    "CONTRACT_DATE",
    "RMM_CHECK",
    "ND_CONSISTENCY",
]
