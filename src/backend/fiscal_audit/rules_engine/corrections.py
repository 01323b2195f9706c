from __future__ import annotations

import logging
from typing import Optional

from .models import DocumentBundle
from .normalize import digits_only

logger = logging.getLogger(__name__)


def find_tax_id_correction(bundle: DocumentBundle) -> Optional[str]:
    """Return the invoice tax id that should replace the extracted one, if any.

    The extractor sometimes picks the recipient's tax id off the invoice. When
    the receipt's tax id appears among the other ids printed on the invoice,
    that one is the issuer's.
    """
    invoice = bundle.invoice
    receipt = bundle.receipt
    if not (invoice.found and receipt.found and receipt.tax_id):
        return None

    receipt_digits = digits_only(receipt.tax_id)
    if digits_only(invoice.tax_id) == receipt_digits:
        return None

    for candidate in invoice.possible_tax_ids:
        if digits_only(candidate) == receipt_digits:
            return candidate
    return None


def apply_tax_id_correction(bundle: DocumentBundle) -> DocumentBundle:
    """Return a bundle whose invoice tax id has been corrected; idempotent."""
    replacement = find_tax_id_correction(bundle)
    if replacement is None:
        return bundle

    logger.info(
        "Replacing invoice tax id %s with %s matched from the receipt",
        bundle.invoice.tax_id,
        replacement,
    )
    invoice = bundle.invoice.model_copy(update={"tax_id": replacement})
    return bundle.model_copy(update={"invoice": invoice})
