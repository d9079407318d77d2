#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""Profit & Loss and Balance Sheet builders.

Both statements are two-level trees: a side node (e.g. "ASSETS") holding
statement heads from the taxonomy, each holding individual ledger lines.
Every node total is the sum of its children.
"""

from __future__ import annotations

from dataclasses import asdict, dataclass, field
from enum import Enum
from typing import Any, Dict, Iterable, List, Mapping, Optional, Sequence, Tuple

from bookkeeping.balances import calculate_balances
from bookkeeping.models import Ledger, Voucher
from bookkeeping.periods import DateLike
from bookkeeping.taxonomy import (
    BALANCE_SHEET_STRUCTURE,
    PL_STRUCTURE,
    RESERVES_BUCKET,
    GroupType,
    StatementSide,
    classify,
    statement_bucket,
)

PERIOD_PROFIT_LINE = "Profit & Loss A/c (Period)"
OPENING_PROFIT_LINE = "Profit & Loss A/c (Opening)"

# float noise below this is treated as a zero balance
ZERO_TOLERANCE = 1e-9


class Statement(str, Enum):
    BALANCE_SHEET = "balance_sheet"
    PROFIT_AND_LOSS = "profit_and_loss"


_SIDE_TITLES = {
    StatementSide.LIABILITIES: ("liabilities", "EQUITY AND LIABILITIES"),
    StatementSide.ASSETS: ("assets", "ASSETS"),
    StatementSide.INCOME: ("income", "I. Revenue"),
    StatementSide.EXPENSE: ("expense", "II. Expenses"),
}


@dataclass
class PLLine:
    ledger_id: str
    name: str
    amount: float


@dataclass
class ProfitAndLoss:
    income_lines: List[PLLine]
    expense_lines: List[PLLine]
    total_income: float
    total_expense: float
    net_profit: float

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


def profit_and_loss(ledgers: Sequence[Ledger], movement: Mapping[str, float]) -> ProfitAndLoss:
    income_lines: List[PLLine] = []
    expense_lines: List[PLLine] = []
    total_income = 0.0
    total_expense = 0.0
    for ledger in ledgers:
        group_type = classify(ledger.group)
        amount = movement.get(ledger.id, 0.0)
        if group_type is GroupType.INCOME:
            income = -amount
            if income != 0:
                total_income += income
                income_lines.append(PLLine(ledger.id, ledger.name, income))
        elif group_type is GroupType.EXPENSE:
            if amount != 0:
                total_expense += amount
                expense_lines.append(PLLine(ledger.id, ledger.name, amount))
    return ProfitAndLoss(
        income_lines=income_lines,
        expense_lines=expense_lines,
        total_income=total_income,
        total_expense=total_expense,
        net_profit=total_income - total_expense,
    )


@dataclass
class ReportLine:
    id: str
    name: str
    balance: float


@dataclass
class ReportNode:
    id: str
    title: str
    total: float = 0.0
    children: List["ReportNode"] = field(default_factory=list)
    ledgers: List[ReportLine] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        data: Dict[str, Any] = {"id": self.id, "title": self.title, "total": self.total}
        if self.children:
            data["children"] = [child.to_dict() for child in self.children]
        if self.ledgers:
            data["ledgers"] = [asdict(line) for line in self.ledgers]
        return data

    def find(self, title: str) -> Optional["ReportNode"]:
        for child in self.children:
            if child.title == title:
                return child
        return None


def _head_id(side_id: str, head: str) -> str:
    return f"{side_id}-{head.replace(' ', '-')}"


def _side_node(
    side: StatementSide,
    heads: Mapping[str, Tuple[str, ...]],
    lines: Dict[str, List[ReportLine]],
) -> ReportNode:
    side_id, title = _SIDE_TITLES[side]
    node = ReportNode(id=side_id, title=title)
    for head in heads:
        head_lines = lines.get(head) or []
        if not head_lines:
            continue
        node.children.append(
            ReportNode(
                id=_head_id(side_id, head),
                title=head,
                total=sum(line.balance for line in head_lines),
                ledgers=list(head_lines),
            )
        )
    node.total = sum(child.total for child in node.children)
    return node


def build_statement_tree(
    ledgers: Sequence[Ledger],
    balances: Mapping[str, float],
    statement: Statement | str = Statement.BALANCE_SHEET,
    synthetic_net_profit: Optional[float] = None,
    opening_profit: float = 0.0,
) -> List[ReportNode]:
    """Build the statement tree.

    ``balances`` is the closing map for a Balance Sheet and the movement map
    for a Profit & Loss. For a Balance Sheet, ``synthetic_net_profit`` is
    injected under Reserves & Surplus so the two sides agree; the
    optional ``opening_profit`` carries income and expense activity that
    precedes the period.
    """
    statement = Statement(statement)
    structure = (
        BALANCE_SHEET_STRUCTURE if statement is Statement.BALANCE_SHEET else PL_STRUCTURE
    )
    lines: Dict[StatementSide, Dict[str, List[ReportLine]]] = {side: {} for side in structure}

    for ledger in ledgers:
        placement = statement_bucket(ledger.group)
        if placement is None or placement[0] not in structure:
            continue
        side, head = placement
        group_type = classify(ledger.group)
        balance = balances.get(ledger.id, 0.0)
        if abs(balance) < ZERO_TOLERANCE and group_type is not GroupType.EQUITY:
            continue
        if side in (StatementSide.ASSETS, StatementSide.EXPENSE):
            shown = balance
        else:
            shown = -balance
        lines[side].setdefault(head, []).append(ReportLine(ledger.id, ledger.name, shown))

    if statement is Statement.PROFIT_AND_LOSS:
        income = _side_node(StatementSide.INCOME, structure[StatementSide.INCOME], lines[StatementSide.INCOME])
        expense = _side_node(StatementSide.EXPENSE, structure[StatementSide.EXPENSE], lines[StatementSide.EXPENSE])
        net_profit = income.total - expense.total
        profit = ReportNode(
            id="profit",
            title="III. Profit for the period" if net_profit >= 0 else "III. Loss for the period",
            total=net_profit,
        )
        return [income, expense, profit]

    reserves = lines[StatementSide.LIABILITIES].setdefault(RESERVES_BUCKET, [])
    if opening_profit:
        reserves.append(ReportLine(OPENING_PROFIT_LINE, OPENING_PROFIT_LINE, opening_profit))
    if synthetic_net_profit:
        reserves.append(ReportLine(PERIOD_PROFIT_LINE, PERIOD_PROFIT_LINE, synthetic_net_profit))
    return [
        _side_node(
            StatementSide.LIABILITIES,
            structure[StatementSide.LIABILITIES],
            lines[StatementSide.LIABILITIES],
        ),
        _side_node(StatementSide.ASSETS, structure[StatementSide.ASSETS], lines[StatementSide.ASSETS]),
    ]


def retained_profit(ledgers: Sequence[Ledger], opening: Mapping[str, float]) -> float:
    """Profit carried in income and expense ledgers at the period start."""
    return -sum(
        opening.get(ledger.id, 0.0)
        for ledger in ledgers
        if classify(ledger.group) in (GroupType.INCOME, GroupType.EXPENSE)
    )


def balance_sheet(
    ledgers: Sequence[Ledger],
    vouchers: Iterable[Voucher],
    start: DateLike,
    end: DateLike,
) -> List[ReportNode]:
    result = calculate_balances(ledgers, vouchers, start, end)
    pnl = profit_and_loss(ledgers, result.movement)
    return build_statement_tree(
        ledgers,
        result.closing,
        Statement.BALANCE_SHEET,
        synthetic_net_profit=pnl.net_profit,
        opening_profit=retained_profit(ledgers, result.opening),
    )


def profit_and_loss_statement(
    ledgers: Sequence[Ledger],
    vouchers: Iterable[Voucher],
    start: DateLike,
    end: DateLike,
) -> List[ReportNode]:
    result = calculate_balances(ledgers, vouchers, start, end)
    return build_statement_tree(ledgers, result.movement, Statement.PROFIT_AND_LOSS)
