#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""Bill-wise outstanding tracking and party aging."""

from __future__ import annotations

from dataclasses import asdict, dataclass, field
from datetime import date, timedelta
from typing import Any, Dict, Iterable, List, Optional, Sequence

from bookkeeping.config import get_logger
from bookkeeping.models import BILL_TYPES, SETTLEMENT_TYPES, Ledger, Voucher
from bookkeeping.periods import DateLike, parse_date
from bookkeeping.taxonomy import CREDITORS_GROUP, DEBTORS_GROUP
from bookkeeping.utils import LedgerError

logger = get_logger(__name__)

DEFAULT_AGING_BUCKETS = (30, 60, 90)
AGING_SIDES = {"receivables": DEBTORS_GROUP, "payables": CREDITORS_GROUP}


def allocated_amounts(
    vouchers: Iterable[Voucher], as_of: Optional[date] = None
) -> Dict[str, float]:
    """Total settled per bill id across settlement vouchers."""
    paid: Dict[str, float] = {}
    for voucher in vouchers:
        if voucher.type not in SETTLEMENT_TYPES:
            continue
        if as_of is not None and voucher.date > as_of:
            continue
        for entry in voucher.entries:
            for alloc in entry.bill_allocations:
                paid[alloc.invoice_id] = paid.get(alloc.invoice_id, 0.0) + alloc.amount
    return paid


def bill_amount(bill: Voucher, party_ledger_id: str) -> float:
    return sum(entry.amount for entry in bill.entries_for(party_ledger_id))


def bill_outstanding(
    bill: Voucher,
    party_ledger_id: str,
    vouchers: Iterable[Voucher],
    as_of: Optional[DateLike] = None,
) -> float:
    """Amount still due on a Sale/Purchase bill.

    Callers creating settlements are expected to keep the allocations within
    the bill amount; an over-allocated bill comes back negative.
    """
    cutoff = parse_date(as_of) if as_of is not None else None
    paid = allocated_amounts(vouchers, cutoff).get(bill.id, 0.0)
    return bill_amount(bill, party_ledger_id) - paid


@dataclass
class OutstandingBill:
    id: str
    date: date
    voucher_no: Optional[int]
    amount: float
    paid: float
    balance: float
    due_date: date
    overdue_days: int
    interest: float

    def to_dict(self) -> Dict[str, Any]:
        data = asdict(self)
        data["date"] = self.date.isoformat()
        data["due_date"] = self.due_date.isoformat()
        return data


def outstanding_bills(
    ledgers: Sequence[Ledger],
    vouchers: Sequence[Voucher],
    party_ledger_id: str,
    as_of: DateLike,
) -> List[OutstandingBill]:
    party = next((ledger for ledger in ledgers if ledger.id == party_ledger_id), None)
    if party is None:
        raise LedgerError("LEDGER_NOT_FOUND", f"Ledger not found: {party_ledger_id}")
    report_date = parse_date(as_of)
    paid = allocated_amounts(vouchers, report_date)

    bills: List[OutstandingBill] = []
    for voucher in vouchers:
        if voucher.type not in BILL_TYPES or voucher.date > report_date:
            continue
        if not voucher.entries_for(party_ledger_id):
            continue
        amount = bill_amount(voucher, party_ledger_id)
        settled = paid.get(voucher.id, 0.0)
        balance = amount - settled
        if balance <= 0.01:
            continue
        due_date = voucher.date + timedelta(days=party.credit_period or 0)
        overdue_days = max((report_date - due_date).days, 0)
        interest = balance * (party.interest_rate or 0.0) / 100 * overdue_days / 365
        bills.append(
            OutstandingBill(
                id=voucher.id,
                date=voucher.date,
                voucher_no=voucher.voucher_no,
                amount=amount,
                paid=settled,
                balance=balance,
                due_date=due_date,
                overdue_days=overdue_days,
                interest=interest,
            )
        )
    return sorted(bills, key=lambda bill: bill.date)


def bill_wise_report(
    ledgers: Sequence[Ledger],
    vouchers: Sequence[Voucher],
    as_of: DateLike,
) -> List[Dict[str, Any]]:
    """Open bills of every party ledger kept bill-wise."""
    report: List[Dict[str, Any]] = []
    for ledger in ledgers:
        if not ledger.is_bill_wise:
            continue
        bills = outstanding_bills(ledgers, vouchers, ledger.id, as_of)
        if not bills:
            continue
        report.append(
            {
                "party": ledger.id,
                "name": ledger.name,
                "bills": [bill.to_dict() for bill in bills],
                "total": sum(bill.balance for bill in bills),
            }
        )
    return report


def bucket_labels(bounds: Sequence[int]) -> List[str]:
    labels = [f"0-{bounds[0]}"]
    for lower, upper in zip(bounds, bounds[1:]):
        labels.append(f"{lower + 1}-{upper}")
    labels.append(f">{bounds[-1]}")
    return labels


def _bucket_index(days_old: int, bounds: Sequence[int]) -> int:
    for index, bound in enumerate(bounds):
        if days_old <= bound:
            return index
    return len(bounds)


@dataclass
class AgingRow:
    ledger_id: str
    name: str
    balance: float
    buckets: Dict[str, float] = field(default_factory=dict)

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


def aging(
    ledger: Ledger,
    vouchers: Iterable[Voucher],
    as_of: DateLike,
    buckets: Sequence[int] = DEFAULT_AGING_BUCKETS,
) -> AgingRow:
    """Age a party balance by walking its transactions newest first.

    Each transaction absorbs as much of the outstanding balance as its own
    amount, whatever its direction. Whatever is left after the walk dates
    from the opening balance and lands in the oldest bucket.
    """
    report_date = parse_date(as_of)
    labels = bucket_labels(buckets)
    amounts = [0.0] * len(labels)

    balance = ledger.signed_opening()
    transactions: List[tuple[date, float]] = []
    for voucher in vouchers:
        if voucher.date > report_date:
            continue
        entries = voucher.entries_for(ledger.id)
        if not entries:
            continue
        net = sum(entry.signed_amount for entry in entries)
        balance += net
        if net:
            transactions.append((voucher.date, net))

    sign = 1.0 if balance >= 0 else -1.0
    remaining = abs(balance)
    for tx_date, amount in sorted(transactions, key=lambda tx: tx[0], reverse=True):
        if remaining <= 1e-9:
            break
        consumed = min(remaining, abs(amount))
        amounts[_bucket_index((report_date - tx_date).days, buckets)] += sign * consumed
        remaining -= consumed
    if remaining > 1e-9:
        amounts[-1] += sign * remaining

    return AgingRow(
        ledger_id=ledger.id,
        name=ledger.name,
        balance=balance,
        buckets=dict(zip(labels, amounts)),
    )


def aging_report(
    ledgers: Sequence[Ledger],
    vouchers: Sequence[Voucher],
    as_of: DateLike,
    side: str = "receivables",
    buckets: Sequence[int] = DEFAULT_AGING_BUCKETS,
) -> List[AgingRow]:
    group = AGING_SIDES.get(side)
    if group is None:
        raise LedgerError("INVALID_AGING_SIDE", f"Unknown aging side: {side}")
    rows = [aging(ledger, vouchers, as_of, buckets) for ledger in ledgers if ledger.group == group]
    rows = [row for row in rows if abs(row.balance) > 0.01]
    logger.debug("aging_report_built", side=side, parties=len(rows))
    return rows
