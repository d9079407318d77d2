#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""Company dataset model."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, List

from bookkeeping.models.inventory import Godown, Salesman, StockItem
from bookkeeping.models.ledger import Ledger
from bookkeeping.models.voucher import Voucher


@dataclass
class Company:
    name: str = ""
    ledgers: List[Ledger] = field(default_factory=list)
    vouchers: List[Voucher] = field(default_factory=list)
    stock_items: List[StockItem] = field(default_factory=list)
    godowns: List[Godown] = field(default_factory=list)
    salesmen: List[Salesman] = field(default_factory=list)

    def ledger_map(self) -> Dict[str, Ledger]:
        return {ledger.id: ledger for ledger in self.ledgers}

    def voucher_map(self) -> Dict[str, Voucher]:
        return {voucher.id: voucher for voucher in self.vouchers}
