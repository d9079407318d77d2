#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""Cash-flow classification by ledger group.

A heuristic direct-method statement: every in-period voucher that moves a
cash or bank ledger is split over its non-cash legs, and each leg is filed
under Operating, Investing or Financing by the group of its ledger.
A multi-leg voucher is split per leg: each non-cash leg contributes only its
own amount, so the sections sum to the net change in cash.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, Sequence

from bookkeeping.balances import calculate_balances
from bookkeeping.config import get_logger
from bookkeeping.models import Ledger, Voucher
from bookkeeping.periods import DateLike
from bookkeeping.taxonomy import CASH_GROUPS, FINANCING_GROUPS, INVESTING_GROUPS

logger = get_logger(__name__)


@dataclass
class CashFlowSection:
    total: float = 0.0
    activities: Dict[str, float] = field(default_factory=dict)

    def add(self, name: str, amount: float) -> None:
        self.activities[name] = self.activities.get(name, 0.0) + amount

    def to_dict(self) -> Dict[str, Any]:
        return {
            "total": self.total,
            "activities": [
                {"name": name, "amount": amount} for name, amount in self.activities.items()
            ],
        }


@dataclass
class CashFlow:
    operating: CashFlowSection
    investing: CashFlowSection
    financing: CashFlowSection
    opening_balance: float
    closing_balance: float
    net_change: float

    @property
    def classified_total(self) -> float:
        return self.operating.total + self.investing.total + self.financing.total

    def to_dict(self) -> Dict[str, Any]:
        return {
            "operating": self.operating.to_dict(),
            "investing": self.investing.to_dict(),
            "financing": self.financing.to_dict(),
            "opening_balance": self.opening_balance,
            "closing_balance": self.closing_balance,
            "net_change": self.net_change,
        }


def cash_ledger_ids(ledgers: Sequence[Ledger]) -> set[str]:
    return {ledger.id for ledger in ledgers if ledger.group in CASH_GROUPS}


def cash_flow(
    ledgers: Sequence[Ledger],
    vouchers: Sequence[Voucher],
    start: DateLike,
    end: DateLike,
) -> CashFlow:
    cash_ids = cash_ledger_ids(ledgers)
    ledger_map = {ledger.id: ledger for ledger in ledgers}
    result = calculate_balances(ledgers, vouchers, start, end)

    opening_balance = sum(result.opening[ledger_id] for ledger_id in cash_ids)
    closing_balance = sum(result.closing[ledger_id] for ledger_id in cash_ids)

    operating = CashFlowSection()
    investing = CashFlowSection()
    financing = CashFlowSection()
    contra = 0

    for voucher in vouchers:
        if not result.period.contains(voucher.date):
            continue
        if not any(e.ledger_id in cash_ids for e in voucher.entries):
            continue
        if all(e.ledger_id in cash_ids for e in voucher.entries):
            contra += 1
            continue
        for entry in voucher.entries:
            if entry.ledger_id in cash_ids:
                continue
            ledger = ledger_map.get(entry.ledger_id)
            if ledger is None:
                continue
            # a credit on the counter leg is cash received, a debit is cash paid
            cash_effect = -entry.signed_amount
            if ledger.group in INVESTING_GROUPS:
                investing.add(ledger.group, cash_effect)
            elif ledger.group in FINANCING_GROUPS:
                financing.add(ledger.group, cash_effect)
            else:
                operating.add(ledger.group, cash_effect)

    for section in (operating, investing, financing):
        section.total = sum(section.activities.values())

    logger.debug("cash_flow_classified", contra_vouchers=contra, cash_ledgers=len(cash_ids))
    return CashFlow(
        operating=operating,
        investing=investing,
        financing=financing,
        opening_balance=opening_balance,
        closing_balance=closing_balance,
        net_change=closing_balance - opening_balance,
    )
