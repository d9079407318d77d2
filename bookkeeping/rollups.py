#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""Monthly and per-party sales rollups."""

from __future__ import annotations

from dataclasses import asdict, dataclass
from typing import Any, Dict, List, Sequence

from bookkeeping.balances import calculate_balances
from bookkeeping.models import EntryType, Ledger, Salesman, Voucher, VoucherType
from bookkeeping.periods import DateLike, DateRange, month_key
from bookkeeping.statements import profit_and_loss
from bookkeeping.taxonomy import DEBTORS_GROUP, SALES_GROUP


@dataclass
class MonthlyFigure:
    month: str
    label: str
    sales: float
    profit: float

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


def _monthly_sales(vouchers: Sequence[Voucher], sales_ids: set[str]) -> float:
    sales = 0.0
    for voucher in vouchers:
        for entry in voucher.entries:
            if entry.ledger_id not in sales_ids:
                continue
            if voucher.type in (VoucherType.SALE, VoucherType.DEBIT_NOTE):
                if entry.type is EntryType.CR:
                    sales += entry.amount
            elif voucher.type is VoucherType.CREDIT_NOTE:
                if entry.type is EntryType.DR:
                    sales -= entry.amount
    return sales


def monthly_rollup(
    ledgers: Sequence[Ledger],
    vouchers: Sequence[Voucher],
    start: DateLike,
    end: DateLike,
) -> List[MonthlyFigure]:
    """One figure per calendar month touched by the range.

    Each month covers the whole calendar month, even when the range starts
    or ends part-way through it.
    """
    period = DateRange.of(start, end)
    sales_ids = {ledger.id for ledger in ledgers if ledger.group == SALES_GROUP}
    figures: List[MonthlyFigure] = []
    for month in period.months():
        month_vouchers = [v for v in vouchers if month.contains(v.date)]
        movement = calculate_balances(ledgers, month_vouchers, month.start, month.end).movement
        figures.append(
            MonthlyFigure(
                month=month_key(month.start),
                label=month.start.strftime("%b"),
                sales=_monthly_sales(month_vouchers, sales_ids),
                profit=profit_and_loss(ledgers, movement).net_profit,
            )
        )
    return figures


def sales_by_customer(
    ledgers: Sequence[Ledger],
    vouchers: Sequence[Voucher],
    start: DateLike,
    end: DateLike,
) -> List[Dict[str, Any]]:
    period = DateRange.of(start, end)
    names = {ledger.id: ledger.name for ledger in ledgers}
    customer_ids = {ledger.id for ledger in ledgers if ledger.group == DEBTORS_GROUP}
    sales_ids = {ledger.id for ledger in ledgers if ledger.group == SALES_GROUP}

    totals: Dict[str, Dict[str, float]] = {}
    for voucher in vouchers:
        if voucher.type is not VoucherType.SALE or not period.contains(voucher.date):
            continue
        customer = next((e for e in voucher.entries if e.ledger_id in customer_ids), None)
        sales_entry = next((e for e in voucher.entries if e.ledger_id in sales_ids), None)
        if customer is None or sales_entry is None or not sales_entry.inventory_allocations:
            continue
        data = totals.setdefault(customer.ledger_id, {"quantity": 0.0, "value": 0.0})
        for alloc in sales_entry.inventory_allocations:
            data["quantity"] += alloc.quantity
            data["value"] += alloc.value

    rows = [
        {
            "customer_id": customer_id,
            "customer_name": names.get(customer_id, "Unknown"),
            "total_quantity": data["quantity"],
            "total_value": data["value"],
            "average_price": data["value"] / data["quantity"] if data["quantity"] > 0 else 0.0,
        }
        for customer_id, data in totals.items()
    ]
    return sorted(rows, key=lambda row: row["total_value"], reverse=True)


def sales_by_salesman(
    salesmen: Sequence[Salesman],
    vouchers: Sequence[Voucher],
    start: DateLike,
    end: DateLike,
) -> List[Dict[str, Any]]:
    period = DateRange.of(start, end)
    names = {salesman.id: salesman.name for salesman in salesmen}
    totals: Dict[str, Dict[str, float]] = {}
    for voucher in vouchers:
        if voucher.type is not VoucherType.SALE or not voucher.salesman_id:
            continue
        if not period.contains(voucher.date):
            continue
        data = totals.setdefault(voucher.salesman_id, {"total_value": 0.0, "invoice_count": 0})
        data["total_value"] += voucher.total(EntryType.DR)
        data["invoice_count"] += 1

    rows = [
        {"salesman_id": salesman_id, "salesman_name": names.get(salesman_id, "Unknown"), **data}
        for salesman_id, data in totals.items()
    ]
    return sorted(rows, key=lambda row: row["total_value"], reverse=True)
