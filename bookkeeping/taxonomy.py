#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""Ledger group classification tables.

Two fixed tables drive every report. ``GROUP_TYPES`` partitions the known
group names into coarse categories, and ``STATEMENT_STRUCTURE`` partitions
them again into the named heads of the Balance Sheet and Profit & Loss.
"""

from __future__ import annotations

from enum import Enum
from types import MappingProxyType
from typing import Dict, List, Mapping, Optional, Tuple


class GroupType(str, Enum):
    ASSET = "ASSET"
    LIABILITY = "LIABILITY"
    EQUITY = "EQUITY"
    INCOME = "INCOME"
    EXPENSE = "EXPENSE"
    UNKNOWN = "UNKNOWN"


class StatementSide(str, Enum):
    LIABILITIES = "LIABILITIES"
    ASSETS = "ASSETS"
    INCOME = "INCOME"
    EXPENSE = "EXPENSE"


GROUP_TYPES: Mapping[GroupType, Tuple[str, ...]] = MappingProxyType(
    {
        GroupType.ASSET: (
            "Current Assets",
            "Bank Accounts",
            "Cash-in-hand",
            "Deposits (Asset)",
            "Loans & Advances (Asset)",
            "Stock-in-hand",
            "Sundry Debtors",
            "Fixed Assets",
            "Investments",
            "Suspense A/c",
        ),
        GroupType.LIABILITY: (
            "Current Liabilities",
            "Duties & Taxes",
            "Provisions",
            "Sundry Creditors",
            "Bank OD A/c",
            "Loans (Liability)",
            "Secured Loans",
            "Unsecured Loans",
        ),
        GroupType.EQUITY: ("Capital Account", "Reserves & Surplus"),
        GroupType.INCOME: ("Sales Accounts", "Direct Incomes", "Indirect Incomes"),
        GroupType.EXPENSE: ("Purchase Accounts", "Direct Expenses", "Indirect Expenses"),
    }
)

BALANCE_SHEET_STRUCTURE: Mapping[StatementSide, Mapping[str, Tuple[str, ...]]] = MappingProxyType(
    {
        StatementSide.LIABILITIES: MappingProxyType(
            {
                "Capital Account": ("Capital Account",),
                "Loans (Liability)": (
                    "Loans (Liability)",
                    "Secured Loans",
                    "Unsecured Loans",
                    "Bank OD A/c",
                ),
                "Current Liabilities": (
                    "Current Liabilities",
                    "Duties & Taxes",
                    "Provisions",
                    "Sundry Creditors",
                ),
                "Reserves & Surplus": ("Reserves & Surplus",),
            }
        ),
        StatementSide.ASSETS: MappingProxyType(
            {
                "Fixed Assets": ("Fixed Assets",),
                "Investments": ("Investments",),
                "Current Assets": (
                    "Current Assets",
                    "Bank Accounts",
                    "Cash-in-hand",
                    "Deposits (Asset)",
                    "Loans & Advances (Asset)",
                    "Stock-in-hand",
                    "Sundry Debtors",
                ),
                "Suspense A/c": ("Suspense A/c",),
            }
        ),
    }
)

PL_STRUCTURE: Mapping[StatementSide, Mapping[str, Tuple[str, ...]]] = MappingProxyType(
    {
        StatementSide.INCOME: MappingProxyType(
            {
                "Revenue from Operations": ("Sales Accounts", "Direct Incomes"),
                "Other Income": ("Indirect Incomes",),
            }
        ),
        StatementSide.EXPENSE: MappingProxyType(
            {
                "Cost of Materials Consumed": ("Purchase Accounts",),
                "Other Expenses": ("Direct Expenses", "Indirect Expenses"),
            }
        ),
    }
)

STATEMENT_STRUCTURE: Mapping[StatementSide, Mapping[str, Tuple[str, ...]]] = MappingProxyType(
    {**BALANCE_SHEET_STRUCTURE, **PL_STRUCTURE}
)

RESERVES_BUCKET = "Reserves & Surplus"
SALES_GROUP = "Sales Accounts"
DEBTORS_GROUP = "Sundry Debtors"
CREDITORS_GROUP = "Sundry Creditors"

CASH_GROUPS = frozenset({"Cash-in-hand", "Bank Accounts", "Bank OD A/c"})
BANK_GROUPS = frozenset({"Bank Accounts", "Bank OD A/c"})
INVESTING_GROUPS = frozenset({"Fixed Assets", "Investments"})
FINANCING_GROUPS = frozenset(
    {"Capital Account", "Loans (Liability)", "Secured Loans", "Unsecured Loans"}
)


def _invert(table: Mapping) -> Dict[str, object]:
    index: Dict[str, object] = {}
    for key, groups in table.items():
        for group in groups:
            index.setdefault(group, key)
    return index


_GROUP_INDEX = MappingProxyType(_invert(GROUP_TYPES))
_BUCKET_INDEX = MappingProxyType(
    {
        group: (side, bucket)
        for side, buckets in STATEMENT_STRUCTURE.items()
        for bucket, groups in buckets.items()
        for group in groups
    }
)


def classify(group: str) -> GroupType:
    return _GROUP_INDEX.get(group, GroupType.UNKNOWN)


def statement_bucket(group: str) -> Optional[Tuple[StatementSide, str]]:
    """Return the (side, head) a group is reported under, or None."""
    return _BUCKET_INDEX.get(group)


def known_groups() -> Tuple[str, ...]:
    return tuple(_GROUP_INDEX)


def check_partition() -> List[str]:
    """List every way the tables fail to partition the known groups.

    A group must sit in exactly one category and in exactly one statement
    head, and statement heads may only use groups that have a category.
    """
    problems: List[str] = []
    seen: Dict[str, GroupType] = {}
    for group_type, groups in GROUP_TYPES.items():
        for group in groups:
            if group in seen:
                problems.append(
                    f"{group!r} is in both {seen[group].value} and {group_type.value}"
                )
            seen[group] = group_type

    placed: Dict[str, str] = {}
    for side, buckets in STATEMENT_STRUCTURE.items():
        for bucket, groups in buckets.items():
            for group in groups:
                where = f"{side.value}/{bucket}"
                if group in placed:
                    problems.append(f"{group!r} is in both {placed[group]} and {where}")
                placed[group] = where
                if group not in seen:
                    problems.append(f"{group!r} in {where} has no category")

    for group in seen:
        if group not in placed:
            problems.append(f"{group!r} has no statement head")
    return problems
