from .voucher import (
    BILL_TYPES,
    SETTLEMENT_TYPES,
    BillAllocation,
    EntryType,
    InventoryAllocation,
    Voucher,
    VoucherEntry,
    VoucherType,
)
from .ledger import Ledger
from .inventory import Godown, OpeningStock, Salesman, StockItem
from .company import Company

__all__ = [
    "BILL_TYPES",
    "SETTLEMENT_TYPES",
    "BillAllocation",
    "Company",
    "EntryType",
    "Godown",
    "InventoryAllocation",
    "Ledger",
    "OpeningStock",
    "Salesman",
    "StockItem",
    "Voucher",
    "VoucherEntry",
    "VoucherType",
]
