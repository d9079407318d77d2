#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""Build typed models from a JSON company dataset.

The dataset uses the camelCase keys of the bookkeeping front end
(``openingBalanceType``, ``inventoryAllocations`` ...). Shape errors are
rejected here, before any calculation runs.
"""

from __future__ import annotations

from typing import Any, Callable, Dict, List, TypeVar

from bookkeeping.models import (
    BillAllocation,
    Company,
    EntryType,
    Godown,
    InventoryAllocation,
    Ledger,
    OpeningStock,
    Salesman,
    StockItem,
    Voucher,
    VoucherEntry,
    VoucherType,
)
from bookkeeping.utils import LedgerError

T = TypeVar("T")


def _require(record: Dict[str, Any], key: str, where: str) -> Any:
    if key not in record or record[key] is None:
        raise LedgerError(
            "INVALID_DATASET",
            f"{where} is missing '{key}'",
            {"record": record.get("id")},
        )
    return record[key]


def _number(value: Any, key: str, where: str) -> float:
    if value is None or value == "":
        return 0.0
    if isinstance(value, bool):
        raise LedgerError("INVALID_DATASET", f"{where}.{key} must be a number")
    try:
        return float(value)
    except (TypeError, ValueError) as exc:
        raise LedgerError("INVALID_DATASET", f"{where}.{key} must be a number") from exc


def _records(data: Dict[str, Any], key: str) -> List[Dict[str, Any]]:
    records = data.get(key) or []
    if not isinstance(records, list) or not all(isinstance(r, dict) for r in records):
        raise LedgerError("INVALID_DATASET", f"'{key}' must be a list of objects")
    return records


def _build(kind: str, record: Dict[str, Any], factory: Callable[[], T]) -> T:
    try:
        return factory()
    except LedgerError:
        raise
    except ValueError as exc:
        code = "INVALID_DATASET"
        if kind == "voucher" and "VoucherType" in str(exc):
            code = "INVALID_VOUCHER_TYPE"
        elif "EntryType" in str(exc):
            code = "INVALID_ENTRY_TYPE"
        raise LedgerError(code, f"Invalid {kind}: {exc}", {"record": record.get("id")}) from exc


def load_ledger(record: Dict[str, Any]) -> Ledger:
    return _build(
        "ledger",
        record,
        lambda: Ledger(
            id=str(_require(record, "id", "ledger")),
            name=_require(record, "name", "ledger"),
            group=_require(record, "group", "ledger"),
            opening_balance=_number(record.get("openingBalance"), "openingBalance", "ledger"),
            opening_balance_type=record.get("openingBalanceType") or None,
            is_bill_wise=bool(record.get("isBillWise", False)),
            credit_period=int(_number(record.get("creditPeriod"), "creditPeriod", "ledger")),
            interest_rate=_number(record.get("interestRate"), "interestRate", "ledger"),
        ),
    )


def load_entry(record: Dict[str, Any]) -> VoucherEntry:
    inventory = [
        InventoryAllocation(
            stock_item_id=str(_require(alloc, "stockItemId", "inventory allocation")),
            quantity=_number(alloc.get("quantity"), "quantity", "inventory allocation"),
            rate=_number(alloc.get("rate"), "rate", "inventory allocation"),
            godown_id=alloc.get("godownId") or None,
            batches=list(alloc.get("batches") or []),
            serial_numbers=list(alloc.get("serialNumbers") or []),
        )
        for alloc in record.get("inventoryAllocations") or []
    ]
    bills = [
        BillAllocation(
            invoice_id=str(_require(alloc, "invoiceId", "bill allocation")),
            amount=_number(alloc.get("amount"), "amount", "bill allocation"),
        )
        for alloc in record.get("billAllocations") or []
    ]
    return _build(
        "entry",
        record,
        lambda: VoucherEntry(
            id=str(record.get("id") or ""),
            type=EntryType(_require(record, "type", "entry")),
            ledger_id=str(_require(record, "ledgerId", "entry")),
            amount=_number(record.get("amount"), "amount", "entry"),
            inventory_allocations=inventory,
            bill_allocations=bills,
            reconciliation_date=record.get("reconciliationDate") or None,
        ),
    )


def load_voucher(record: Dict[str, Any]) -> Voucher:
    entries = record.get("entries") or []
    if not isinstance(entries, list):
        raise LedgerError("INVALID_DATASET", "voucher.entries must be a list", {"record": record.get("id")})
    return _build(
        "voucher",
        record,
        lambda: Voucher(
            id=str(_require(record, "id", "voucher")),
            date=_require(record, "date", "voucher"),
            type=VoucherType(_require(record, "type", "voucher")),
            entries=[load_entry(entry) for entry in entries],
            voucher_no=record.get("voucherNo"),
            narration=record.get("narration") or "",
            salesman_id=record.get("salesmanId") or None,
        ),
    )


def load_stock_item(record: Dict[str, Any]) -> StockItem:
    return StockItem(
        id=str(_require(record, "id", "stock item")),
        name=_require(record, "name", "stock item"),
        unit=record.get("unit") or "Nos",
        reorder_level=_number(record.get("reorderLevel"), "reorderLevel", "stock item"),
        opening_stock=[
            OpeningStock(
                godown_id=row.get("godownId") or "",
                quantity=_number(row.get("quantity"), "quantity", "opening stock"),
                rate=_number(row.get("rate"), "rate", "opening stock"),
            )
            for row in record.get("openingStock") or []
        ],
    )


def load_company(data: Dict[str, Any]) -> Company:
    details = data.get("details") or {}
    return Company(
        name=details.get("name", "") if isinstance(details, dict) else "",
        ledgers=[load_ledger(r) for r in _records(data, "ledgers")],
        vouchers=[load_voucher(r) for r in _records(data, "vouchers")],
        stock_items=[load_stock_item(r) for r in _records(data, "stockItems")],
        godowns=[
            Godown(
                id=str(_require(r, "id", "godown")),
                name=_require(r, "name", "godown"),
                location=r.get("location"),
            )
            for r in _records(data, "godowns")
        ],
        salesmen=[
            Salesman(id=str(_require(r, "id", "salesman")), name=_require(r, "name", "salesman"))
            for r in _records(data, "salesmen")
        ],
    )
