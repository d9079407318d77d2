#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""Optional ingestion checks for a company dataset.

The calculation functions accept imperfect data as-is; this pass is for
callers that want to reject it at the boundary instead.
"""

from __future__ import annotations

from typing import Any, Dict, List

from bookkeeping.bills import allocated_amounts, bill_amount
from bookkeeping.config import get_logger
from bookkeeping.models import BILL_TYPES, Company
from bookkeeping.taxonomy import GroupType, classify
from bookkeeping.utils import LedgerError

logger = get_logger(__name__)


def _issue(code: str, message: str, **ids: Any) -> Dict[str, Any]:
    return {"code": code, "message": message, **ids}


def validate_company(company: Company, tolerance: float = 0.01) -> List[Dict[str, Any]]:
    issues: List[Dict[str, Any]] = []
    ledger_ids = {ledger.id for ledger in company.ledgers}
    item_ids = {item.id for item in company.stock_items}

    for ledger in company.ledgers:
        if classify(ledger.group) is GroupType.UNKNOWN:
            issues.append(
                _issue("UNKNOWN_GROUP", f"Ledger {ledger.name} has unknown group {ledger.group!r}", ledger_id=ledger.id)
            )

    for voucher in company.vouchers:
        if not voucher.is_balanced(tolerance):
            issues.append(
                _issue("VOUCHER_UNBALANCED", f"Voucher {voucher.id} debits and credits differ", voucher_id=voucher.id)
            )
        for entry in voucher.entries:
            if entry.ledger_id not in ledger_ids:
                issues.append(
                    _issue(
                        "UNKNOWN_LEDGER",
                        f"Voucher {voucher.id} references unknown ledger {entry.ledger_id}",
                        voucher_id=voucher.id,
                        ledger_id=entry.ledger_id,
                    )
                )
            if entry.amount < 0:
                issues.append(
                    _issue("NEGATIVE_AMOUNT", f"Voucher {voucher.id} has a negative amount", voucher_id=voucher.id)
                )
            for alloc in entry.inventory_allocations:
                if alloc.stock_item_id not in item_ids:
                    issues.append(
                        _issue(
                            "UNKNOWN_STOCK_ITEM",
                            f"Voucher {voucher.id} references unknown stock item {alloc.stock_item_id}",
                            voucher_id=voucher.id,
                            stock_item_id=alloc.stock_item_id,
                        )
                    )

    paid = allocated_amounts(company.vouchers)
    for voucher in company.vouchers:
        if voucher.type not in BILL_TYPES or voucher.id not in paid:
            continue
        # the bill amount is the largest single-ledger leg, i.e. the party leg
        amount = max((bill_amount(voucher, e.ledger_id) for e in voucher.entries), default=0.0)
        if paid[voucher.id] - amount > tolerance:
            issues.append(
                _issue(
                    "BILL_OVER_ALLOCATED",
                    f"Bill {voucher.id} is settled beyond its amount",
                    voucher_id=voucher.id,
                )
            )

    for issue in issues:
        logger.warning("dataset_issue", **issue)
    return issues


def assert_valid(company: Company, tolerance: float = 0.01) -> None:
    issues = validate_company(company, tolerance)
    if issues:
        raise LedgerError(
            "DATASET_INVALID",
            f"Dataset has {len(issues)} issue(s)",
            {"issues": issues},
        )
