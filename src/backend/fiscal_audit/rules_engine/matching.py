"""Line-item aggregation and invoice-to-stock-entry matching.

Items from each document are grouped under a derived key (normalized part
number when one is usable, otherwise the first characters of the normalized
description) and their quantities summed. Invoice groups are then looked up
by key on the stock-entry side; when the key is missing, a loose description
match is attempted before the group is reported as absent.
"""

from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal
from typing import Dict, Iterable, List, Optional

from .config import StockEntryReconciliationRuleConfig
from .models import FindingStatus, LineItem, StatusOrdering, SubFinding
from .normalize import format_quantity, normalize_key, within_tolerance


@dataclass
class AggregatedItem:
    key: str
    description: str
    part_number: Optional[str]
    total_quantity: Decimal = Decimal("0")
    line_count: int = 0


@dataclass(frozen=True)
class ItemMatch:
    invoice_item: AggregatedItem
    stock_item: Optional[AggregatedItem]
    by_fallback: bool
    status: FindingStatus
    label: str
    details: str

    def to_sub_finding(self) -> SubFinding:
        return SubFinding(label=self.label, status=self.status, details=self.details)


@dataclass(frozen=True)
class ItemReconciliation:
    matches: List[ItemMatch]
    status: FindingStatus

    @property
    def sub_findings(self) -> List[SubFinding]:
        return [m.to_sub_finding() for m in self.matches]


def aggregation_key(item: LineItem, cfg: StockEntryReconciliationRuleConfig) -> str:
    if item.part_number and len(item.part_number) >= cfg.part_number_min_length:
        return normalize_key(item.part_number)
    return normalize_key(item.description)[: cfg.description_key_length]


def aggregate_items(
    items: Iterable[LineItem],
    cfg: StockEntryReconciliationRuleConfig,
) -> Dict[str, AggregatedItem]:
    groups: Dict[str, AggregatedItem] = {}
    for item in items:
        key = aggregation_key(item, cfg)
        group = groups.get(key)
        if group is None:
            group = AggregatedItem(key=key, description=item.description, part_number=item.part_number)
            groups[key] = group
        group.total_quantity += item.quantity
        group.line_count += 1
        # Keep the most descriptive text seen for the group.
        if len(item.description) > len(group.description):
            group.description = item.description
    return groups


def description_tokens(description: str, min_length: int) -> List[str]:
    return [word for word in description.lower().split() if len(word) >= min_length]


def find_fallback_match(
    invoice_item: AggregatedItem,
    stock_groups: Dict[str, AggregatedItem],
    cfg: StockEntryReconciliationRuleConfig,
) -> Optional[AggregatedItem]:
    tokens = description_tokens(invoice_item.description, cfg.fuzzy_token_min_length)
    if not tokens:
        return None
    for candidate in stock_groups.values():
        candidate_desc = candidate.description.lower()
        if any(token in candidate_desc for token in tokens):
            return candidate
    return None


def item_label(item: AggregatedItem, cfg: StockEntryReconciliationRuleConfig) -> str:
    return f"{item.part_number or 'S/N'} - {item.description[: cfg.label_description_length]}..."


def reconcile_items(
    invoice_items: Iterable[LineItem],
    stock_items: Iterable[LineItem],
    cfg: StockEntryReconciliationRuleConfig,
    *,
    ordering: Optional[StatusOrdering] = None,
) -> ItemReconciliation:
    ordering = ordering or StatusOrdering.default()
    invoice_groups = aggregate_items(invoice_items, cfg)
    stock_groups = aggregate_items(stock_items, cfg)

    matches: List[ItemMatch] = []
    for key, invoice_item in invoice_groups.items():
        stock_item = stock_groups.get(key)
        by_fallback = False
        if stock_item is None:
            stock_item = find_fallback_match(invoice_item, stock_groups, cfg)
            by_fallback = stock_item is not None

        label = item_label(invoice_item, cfg)
        invoice_qty = format_quantity(invoice_item.total_quantity)
        if stock_item is None:
            status = FindingStatus.FAIL
            details = "Item não encontrado no RMM"
        else:
            stock_qty = format_quantity(stock_item.total_quantity)
            if within_tolerance(invoice_item.total_quantity, stock_item.total_quantity, cfg.quantity_tolerance):
                status = FindingStatus.PASS
                details = f"Qtd Total NF: {invoice_qty} = Qtd Total RMM: {stock_qty}"
            else:
                status = FindingStatus.WARNING
                details = f"Divergência de quantidade (NF vs RMM): {invoice_qty} vs {stock_qty}"

        matches.append(
            ItemMatch(
                invoice_item=invoice_item,
                stock_item=stock_item,
                by_fallback=by_fallback,
                status=status,
                label=label,
                details=details,
            )
        )

    overall = ordering.worst([m.status for m in matches])
    return ItemReconciliation(matches=matches, status=overall)
