#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""Stock item, godown and salesman reference models."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import List


@dataclass
class OpeningStock:
    godown_id: str
    quantity: float
    rate: float


@dataclass
class StockItem:
    id: str
    name: str
    unit: str = "Nos"
    reorder_level: float = 0.0
    opening_stock: List[OpeningStock] = field(default_factory=list)


@dataclass
class Godown:
    id: str
    name: str
    location: str | None = None


@dataclass
class Salesman:
    id: str
    name: str
