#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""Godown-wise stock summary with weighted-average costing."""

from __future__ import annotations

from dataclasses import asdict, dataclass, field
from enum import Enum
from typing import Any, Dict, Iterable, List, Mapping, Optional, Sequence

from bookkeeping.config import get_logger
from bookkeeping.models import EntryType, Godown, InventoryAllocation, StockItem, Voucher, VoucherType
from bookkeeping.periods import DateLike, DateRange

logger = get_logger(__name__)

UNASSIGNED_GODOWN = "none"


class StockDirection(str, Enum):
    INWARD = "inward"
    OUTWARD = "outward"
    BY_ENTRY = "by_entry"
    NONE = "none"


# Every voucher type must appear here; a missing type is a KeyError, not a silent skip.
STOCK_DIRECTIONS: Mapping[VoucherType, StockDirection] = {
    VoucherType.PURCHASE: StockDirection.INWARD,
    VoucherType.CREDIT_NOTE: StockDirection.INWARD,
    VoucherType.SALE: StockDirection.OUTWARD,
    VoucherType.DEBIT_NOTE: StockDirection.OUTWARD,
    VoucherType.STOCK_JOURNAL: StockDirection.BY_ENTRY,
    VoucherType.PAYMENT: StockDirection.NONE,
    VoucherType.RECEIPT: StockDirection.NONE,
    VoucherType.JOURNAL: StockDirection.NONE,
    VoucherType.SALE_ORDER: StockDirection.NONE,
    VoucherType.PURCHASE_ORDER: StockDirection.NONE,
    VoucherType.DELIVERY_NOTE: StockDirection.NONE,
    VoucherType.RECEIPT_NOTE: StockDirection.NONE,
}


def stock_direction(voucher_type: VoucherType, entry_type: EntryType) -> StockDirection:
    direction = STOCK_DIRECTIONS[voucher_type]
    if direction is StockDirection.BY_ENTRY:
        return StockDirection.INWARD if entry_type is EntryType.DR else StockDirection.OUTWARD
    return direction


@dataclass
class SummaryState:
    opening_qty: float = 0.0
    opening_value: float = 0.0
    inward_qty: float = 0.0
    inward_value: float = 0.0
    outward_qty: float = 0.0
    outward_value: float = 0.0
    closing_qty: float = 0.0
    closing_value: float = 0.0

    @property
    def average_cost(self) -> float:
        available_qty = self.opening_qty + self.inward_qty
        if available_qty <= 0:
            return 0.0
        return (self.opening_value + self.inward_value) / available_qty

    def close(self) -> None:
        """Derive closing figures. Outward stock leaves at average cost."""
        self.closing_qty = self.opening_qty + self.inward_qty - self.outward_qty
        self.closing_value = (
            self.opening_value + self.inward_value - self.outward_qty * self.average_cost
        )

    def absorb(self, other: "SummaryState") -> None:
        self.opening_qty += other.opening_qty
        self.opening_value += other.opening_value
        self.inward_qty += other.inward_qty
        self.inward_value += other.inward_value
        self.outward_qty += other.outward_qty
        self.outward_value += other.outward_value


@dataclass
class ItemSummary:
    total: SummaryState = field(default_factory=SummaryState)
    godowns: Dict[str, SummaryState] = field(default_factory=dict)

    def godown(self, godown_id: str) -> SummaryState:
        return self.godowns.setdefault(godown_id, SummaryState())

    def to_dict(self) -> Dict[str, Any]:
        return {
            "total": asdict(self.total),
            "godowns": {gid: asdict(state) for gid, state in self.godowns.items()},
        }


def _apply(state: SummaryState, alloc: InventoryAllocation, direction: StockDirection, opening: bool) -> None:
    value = alloc.value
    if direction is StockDirection.INWARD:
        if opening:
            state.opening_qty += alloc.quantity
            state.opening_value += value
        else:
            state.inward_qty += alloc.quantity
            state.inward_value += value
    elif direction is StockDirection.OUTWARD:
        if opening:
            state.opening_qty -= alloc.quantity
            state.opening_value -= value
        else:
            state.outward_qty += alloc.quantity
            state.outward_value += value


def stock_summary(
    stock_items: Sequence[StockItem],
    vouchers: Iterable[Voucher],
    godowns: Sequence[Godown],
    start: DateLike,
    end: DateLike,
) -> Dict[str, ItemSummary]:
    period = DateRange.of(start, end)
    summary: Dict[str, ItemSummary] = {}
    for item in stock_items:
        item_summary = ItemSummary()
        for row in item.opening_stock:
            state = item_summary.godown(row.godown_id or UNASSIGNED_GODOWN)
            state.opening_qty += row.quantity
            state.opening_value += row.quantity * row.rate
        summary[item.id] = item_summary

    for voucher in vouchers:
        opening = period.before_start(voucher.date)
        if not opening and not period.contains(voucher.date):
            continue
        for entry in voucher.entries:
            if not entry.inventory_allocations:
                continue
            direction = stock_direction(voucher.type, entry.type)
            if direction is StockDirection.NONE:
                continue
            for alloc in entry.inventory_allocations:
                item_summary = summary.get(alloc.stock_item_id)
                if item_summary is None:
                    continue
                state = item_summary.godown(alloc.godown_id or UNASSIGNED_GODOWN)
                _apply(state, alloc, direction, opening)

    rank = {godown.id: index for index, godown in enumerate(godowns)}
    for item_summary in summary.values():
        item_summary.godowns = dict(
            sorted(item_summary.godowns.items(), key=lambda kv: rank.get(kv[0], len(rank)))
        )
        for state in item_summary.godowns.values():
            state.close()
            item_summary.total.absorb(state)
        # recomputed from the item aggregates, not summed from godown closings
        item_summary.total.close()

    logger.debug("stock_summary_built", items=len(summary), start=period.start.isoformat())
    return summary


def reorder_alerts(
    stock_items: Sequence[StockItem],
    summary: Mapping[str, ItemSummary],
    godown_id: Optional[str] = None,
) -> List[Dict[str, Any]]:
    """Items whose closing quantity fell below their re-order level."""
    alerts: List[Dict[str, Any]] = []
    for item in stock_items:
        if not item.reorder_level or item.reorder_level <= 0:
            continue
        item_summary = summary.get(item.id)
        if item_summary is None:
            continue
        if godown_id is None:
            state = item_summary.total
        else:
            state = item_summary.godowns.get(godown_id)
            if state is None:
                continue
        if state.closing_qty < item.reorder_level:
            alerts.append(
                {
                    "stock_item_id": item.id,
                    "name": item.name,
                    "godown_id": godown_id,
                    "closing_qty": state.closing_qty,
                    "reorder_level": item.reorder_level,
                }
            )
    return alerts
