#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""Ledger model."""

from __future__ import annotations

from dataclasses import dataclass

from bookkeeping.models.voucher import EntryType


@dataclass
class Ledger:
    id: str
    name: str
    group: str
    opening_balance: float = 0.0
    opening_balance_type: EntryType | None = None
    is_bill_wise: bool = False
    credit_period: int = 0
    interest_rate: float = 0.0

    def __post_init__(self) -> None:
        if self.opening_balance_type is not None:
            self.opening_balance_type = EntryType(self.opening_balance_type)

    def signed_opening(self) -> float:
        if not self.opening_balance or self.opening_balance_type is None:
            return 0.0
        return self.opening_balance_type.signed(float(self.opening_balance))
