#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""Bank reconciliation summary."""

from __future__ import annotations

from dataclasses import asdict, dataclass, field
from typing import Any, Dict, List, Optional, Sequence

from bookkeeping.balances import calculate_balances
from bookkeeping.models import EntryType, Ledger, Voucher
from bookkeeping.periods import DateLike, parse_date
from bookkeeping.taxonomy import BANK_GROUPS
from bookkeeping.utils import LedgerError


@dataclass
class BankReconciliation:
    ledger_id: str
    as_of: str
    balance_as_per_books: float
    uncleared_deposits: float
    uncleared_withdrawals: float
    balance_as_per_bank: float
    difference: float
    uncleared_entry_ids: List[str] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


def bank_reconciliation(
    ledgers: Sequence[Ledger],
    vouchers: Sequence[Voucher],
    bank_ledger_id: str,
    as_of: DateLike,
    statement_balance: Optional[float] = None,
) -> BankReconciliation:
    bank = next((ledger for ledger in ledgers if ledger.id == bank_ledger_id), None)
    if bank is None:
        raise LedgerError("LEDGER_NOT_FOUND", f"Ledger not found: {bank_ledger_id}")
    if bank.group not in BANK_GROUPS:
        raise LedgerError("NOT_A_BANK_LEDGER", f"Ledger {bank.name} is not a bank ledger")

    report_date = parse_date(as_of)
    books = calculate_balances(ledgers, vouchers, report_date, report_date)
    balance_as_per_books = books.closing[bank_ledger_id]

    deposits = 0.0
    withdrawals = 0.0
    uncleared: List[str] = []
    for voucher in vouchers:
        if voucher.date > report_date:
            continue
        for entry in voucher.entries_for(bank_ledger_id):
            cleared = entry.reconciliation_date
            if cleared is not None and cleared <= report_date:
                continue
            uncleared.append(entry.id)
            if entry.type is EntryType.DR:
                deposits += entry.amount
            else:
                withdrawals += entry.amount

    # the bank has not yet credited deposits nor paid out issued cheques
    balance_as_per_bank = balance_as_per_books - deposits + withdrawals
    difference = 0.0
    if statement_balance is not None:
        difference = statement_balance - balance_as_per_bank
    return BankReconciliation(
        ledger_id=bank_ledger_id,
        as_of=report_date.isoformat(),
        balance_as_per_books=balance_as_per_books,
        uncleared_deposits=deposits,
        uncleared_withdrawals=withdrawals,
        balance_as_per_bank=balance_as_per_bank,
        difference=difference,
        uncleared_entry_ids=uncleared,
    )
