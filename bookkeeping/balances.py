#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""Ledger balance engine.

Balances are signed: debit balances are positive, credit balances negative.
"""

from __future__ import annotations

from dataclasses import asdict, dataclass, field
from datetime import date
from typing import Any, Dict, Iterable, List, Optional, Sequence

from bookkeeping.config import get_logger
from bookkeeping.models import EntryType, Ledger, Voucher
from bookkeeping.periods import DateLike, DateRange
from bookkeeping.utils import LedgerError

logger = get_logger(__name__)


@dataclass
class BalanceResult:
    period: DateRange
    opening: Dict[str, float]
    movement: Dict[str, float]
    closing: Dict[str, float]

    def to_dict(self) -> Dict[str, Any]:
        return {
            "period": self.period.to_dict(),
            "balances": [
                {
                    "ledger_id": ledger_id,
                    "opening": self.opening[ledger_id],
                    "movement": self.movement[ledger_id],
                    "closing": self.closing[ledger_id],
                }
                for ledger_id in self.closing
            ],
        }


def calculate_balances(
    ledgers: Sequence[Ledger],
    vouchers: Iterable[Voucher],
    start: DateLike,
    end: DateLike,
) -> BalanceResult:
    period = DateRange.of(start, end)
    opening = {ledger.id: ledger.signed_opening() for ledger in ledgers}
    movement = {ledger.id: 0.0 for ledger in ledgers}

    folded = 0
    for voucher in vouchers:
        if period.before_start(voucher.date):
            target = opening
        elif period.contains(voucher.date):
            target = movement
        else:
            continue
        folded += 1
        for entry in voucher.entries:
            # entries on ledgers outside the dataset are not part of any balance
            if entry.ledger_id in target:
                target[entry.ledger_id] += entry.signed_amount

    closing = {ledger_id: opening[ledger_id] + movement[ledger_id] for ledger_id in opening}
    logger.debug(
        "balances_calculated",
        ledgers=len(opening),
        vouchers=folded,
        start=period.start.isoformat(),
        end=period.end.isoformat(),
    )
    return BalanceResult(period=period, opening=opening, movement=movement, closing=closing)


@dataclass
class TrialBalanceRow:
    ledger_id: str
    name: str
    debit: float
    credit: float


@dataclass
class TrialBalance:
    rows: List[TrialBalanceRow]
    debit_total: float
    credit_total: float

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


def trial_balance(
    ledgers: Sequence[Ledger],
    vouchers: Iterable[Voucher],
    start: DateLike,
    end: DateLike,
) -> TrialBalance:
    closing = calculate_balances(ledgers, vouchers, start, end).closing
    rows: List[TrialBalanceRow] = []
    debit_total = 0.0
    credit_total = 0.0
    for ledger in ledgers:
        balance = closing[ledger.id]
        if abs(balance) <= 0.001:
            continue
        if balance > 0:
            rows.append(TrialBalanceRow(ledger.id, ledger.name, balance, 0.0))
            debit_total += balance
        else:
            rows.append(TrialBalanceRow(ledger.id, ledger.name, 0.0, -balance))
            credit_total += -balance
    return TrialBalance(rows=rows, debit_total=debit_total, credit_total=credit_total)


@dataclass
class StatementRow:
    date: date
    voucher_id: str
    voucher_no: Optional[int]
    voucher_type: str
    particulars: str
    debit: float
    credit: float
    balance: float


@dataclass
class LedgerStatement:
    ledger_id: str
    name: str
    opening_balance: float
    closing_balance: float
    rows: List[StatementRow] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        data = asdict(self)
        for row in data["rows"]:
            row["date"] = row["date"].isoformat()
        return data


def ledger_statement(
    ledgers: Sequence[Ledger],
    vouchers: Sequence[Voucher],
    ledger_id: str,
    start: DateLike,
    end: DateLike,
) -> LedgerStatement:
    """Chronological movements of one ledger with a running balance."""
    ledger_map = {ledger.id: ledger for ledger in ledgers}
    ledger = ledger_map.get(ledger_id)
    if ledger is None:
        raise LedgerError("LEDGER_NOT_FOUND", f"Ledger not found: {ledger_id}")

    result = calculate_balances(ledgers, vouchers, start, end)
    running = result.opening[ledger_id]
    rows: List[StatementRow] = []
    in_range = sorted(
        (v for v in vouchers if result.period.contains(v.date) and v.entries_for(ledger_id)),
        key=lambda v: v.date,
    )
    for voucher in in_range:
        for entry in voucher.entries_for(ledger_id):
            debit = entry.amount if entry.type is EntryType.DR else 0.0
            credit = entry.amount if entry.type is EntryType.CR else 0.0
            running += debit - credit
            rows.append(
                StatementRow(
                    date=voucher.date,
                    voucher_id=voucher.id,
                    voucher_no=voucher.voucher_no,
                    voucher_type=voucher.type.value,
                    particulars=_particulars(voucher, ledger_id, ledger_map),
                    debit=debit,
                    credit=credit,
                    balance=running,
                )
            )
    return LedgerStatement(
        ledger_id=ledger_id,
        name=ledger.name,
        opening_balance=result.opening[ledger_id],
        closing_balance=result.closing[ledger_id],
        rows=rows,
    )


def _particulars(voucher: Voucher, ledger_id: str, ledger_map: Dict[str, Ledger]) -> str:
    for other in voucher.entries:
        if other.ledger_id != ledger_id and other.ledger_id in ledger_map:
            return ledger_map[other.ledger_id].name
    return voucher.narration or voucher.type.value


def top_parties(
    ledgers: Sequence[Ledger],
    vouchers: Iterable[Voucher],
    start: DateLike,
    end: DateLike,
    group: str,
    limit: int = 5,
) -> List[Dict[str, Any]]:
    closing = calculate_balances(ledgers, vouchers, start, end).closing
    parties = [
        {"ledger_id": ledger.id, "name": ledger.name, "balance": closing[ledger.id]}
        for ledger in ledgers
        if ledger.group == group and abs(closing[ledger.id]) > 0.01
    ]
    parties.sort(key=lambda p: abs(p["balance"]), reverse=True)
    return parties[:limit]
