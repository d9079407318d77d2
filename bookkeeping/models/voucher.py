#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""Voucher models."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date
from enum import Enum
from typing import List, Optional

from bookkeeping.periods import parse_date


class EntryType(str, Enum):
    DR = "Dr"
    CR = "Cr"

    def signed(self, amount: float) -> float:
        return amount if self is EntryType.DR else -amount


class VoucherType(str, Enum):
    SALE = "Sale"
    PURCHASE = "Purchase"
    PAYMENT = "Payment"
    RECEIPT = "Receipt"
    JOURNAL = "Journal"
    CREDIT_NOTE = "Credit Note"
    DEBIT_NOTE = "Debit Note"
    STOCK_JOURNAL = "Stock Journal"
    SALE_ORDER = "Sale Order"
    PURCHASE_ORDER = "Purchase Order"
    DELIVERY_NOTE = "Delivery Note"
    RECEIPT_NOTE = "Receipt Note"


BILL_TYPES = frozenset({VoucherType.SALE, VoucherType.PURCHASE})

SETTLEMENT_TYPES = frozenset(
    {
        VoucherType.PAYMENT,
        VoucherType.RECEIPT,
        VoucherType.CREDIT_NOTE,
        VoucherType.DEBIT_NOTE,
    }
)


@dataclass
class InventoryAllocation:
    stock_item_id: str
    quantity: float
    rate: float
    godown_id: str | None = None
    batches: List[dict] = field(default_factory=list)
    serial_numbers: List[str] = field(default_factory=list)

    @property
    def value(self) -> float:
        return self.quantity * self.rate


@dataclass
class BillAllocation:
    invoice_id: str
    amount: float


@dataclass
class VoucherEntry:
    id: str
    type: EntryType
    ledger_id: str
    amount: float
    inventory_allocations: List[InventoryAllocation] = field(default_factory=list)
    bill_allocations: List[BillAllocation] = field(default_factory=list)
    reconciliation_date: date | None = None

    def __post_init__(self) -> None:
        self.type = EntryType(self.type)
        if self.reconciliation_date is not None:
            self.reconciliation_date = parse_date(self.reconciliation_date)

    @property
    def signed_amount(self) -> float:
        return self.type.signed(float(self.amount or 0))


@dataclass
class Voucher:
    id: str
    date: date
    type: VoucherType
    entries: List[VoucherEntry] = field(default_factory=list)
    voucher_no: int | None = None
    narration: str = ""
    salesman_id: Optional[str] = None

    def __post_init__(self) -> None:
        self.date = parse_date(self.date)
        self.type = VoucherType(self.type)

    def total(self, entry_type: EntryType) -> float:
        return sum(e.amount for e in self.entries if e.type is entry_type)

    def is_balanced(self, tolerance: float = 0.01) -> bool:
        return abs(self.total(EntryType.DR) - self.total(EntryType.CR)) < tolerance

    def entries_for(self, ledger_id: str) -> List[VoucherEntry]:
        return [e for e in self.entries if e.ledger_id == ledger_id]
