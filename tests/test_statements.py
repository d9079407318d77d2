import pytest

from bookkeeping.balances import calculate_balances
from bookkeeping.models import Ledger, Voucher, VoucherEntry
from bookkeeping.statements import (
    OPENING_PROFIT_LINE,
    PERIOD_PROFIT_LINE,
    Statement,
    balance_sheet,
    build_statement_tree,
    profit_and_loss,
    profit_and_loss_statement,
)


def _ledgers():
    return [
        Ledger("cash", "Cash", "Cash-in-hand", 500, "Dr"),
        Ledger("capital", "Owner Capital", "Capital Account", 500, "Cr"),
        Ledger("sales", "Sales A/c", "Sales Accounts"),
        Ledger("cgst", "CGST", "Duties & Taxes"),
        Ledger("sgst", "SGST", "Duties & Taxes"),
        Ledger("purchase", "Purchases", "Purchase Accounts"),
        Ledger("misc", "Mystery", "Unmapped Group"),
    ]


def _vouchers():
    return [
        Voucher(
            id="march-sale",
            date="2024-03-12",
            type="Sale",
            entries=[VoucherEntry("m1", "Dr", "cash", 200), VoucherEntry("m2", "Cr", "sales", 200)],
        ),
        Voucher(
            id="april-sale",
            date="2024-04-10",
            type="Sale",
            entries=[
                VoucherEntry("a1", "Dr", "cash", 1180),
                VoucherEntry("a2", "Cr", "sales", 1000),
                VoucherEntry("a3", "Cr", "cgst", 90),
                VoucherEntry("a4", "Cr", "sgst", 90),
            ],
        ),
        Voucher(
            id="april-purchase",
            date="2024-04-18",
            type="Purchase",
            entries=[VoucherEntry("b1", "Dr", "purchase", 400), VoucherEntry("b2", "Cr", "cash", 400)],
        ),
    ]


def test_profit_and_loss_cash_sale():
    ledgers = _ledgers()
    movement = calculate_balances(ledgers, _vouchers()[1:2], "2024-04-01", "2024-04-30").movement
    pnl = profit_and_loss(ledgers, movement)
    assert pnl.total_income == pytest.approx(1000)
    assert pnl.total_expense == 0
    assert pnl.net_profit == pytest.approx(1000)
    assert [line.ledger_id for line in pnl.income_lines] == ["sales"]
    assert pnl.expense_lines == []


def test_profit_and_loss_with_expense():
    ledgers = _ledgers()
    movement = calculate_balances(ledgers, _vouchers(), "2024-04-01", "2024-04-30").movement
    pnl = profit_and_loss(ledgers, movement)
    assert pnl.total_expense == pytest.approx(400)
    assert pnl.net_profit == pytest.approx(600)


def test_balance_sheet_sides_agree():
    liabilities, assets = balance_sheet(_ledgers(), _vouchers(), "2024-04-01", "2024-04-30")
    assert assets.total == pytest.approx(1480)
    assert liabilities.total == pytest.approx(assets.total, abs=1e-6)


def test_balance_sheet_profit_lines():
    liabilities, _ = balance_sheet(_ledgers(), _vouchers(), "2024-04-01", "2024-04-30")
    reserves = liabilities.find("Reserves & Surplus")
    lines = {line.id: line.balance for line in reserves.ledgers}
    assert lines[OPENING_PROFIT_LINE] == pytest.approx(200)
    assert lines[PERIOD_PROFIT_LINE] == pytest.approx(600)
    assert reserves.total == pytest.approx(800)

    current = liabilities.find("Current Liabilities")
    assert current.total == pytest.approx(180)
    assert {line.id for line in current.ledgers} == {"cgst", "sgst"}


def test_balance_sheet_shows_equity_at_zero_and_skips_unknown_groups():
    ledgers = [
        Ledger("cash", "Cash", "Cash-in-hand"),
        Ledger("capital", "Owner Capital", "Capital Account"),
        Ledger("misc", "Mystery", "Unmapped Group", 50, "Dr"),
    ]
    liabilities, assets = balance_sheet(ledgers, [], "2024-04-01", "2024-04-30")
    capital = liabilities.find("Capital Account")
    assert capital is not None
    assert capital.ledgers[0].balance == 0
    assert assets.children == []


def test_node_totals_sum_children():
    for side in balance_sheet(_ledgers(), _vouchers(), "2024-04-01", "2024-04-30"):
        assert side.total == pytest.approx(sum(child.total for child in side.children))
        for head in side.children:
            assert head.total == pytest.approx(sum(line.balance for line in head.ledgers))


def test_profit_and_loss_tree():
    income, expense, profit = profit_and_loss_statement(
        _ledgers(), _vouchers(), "2024-04-01", "2024-04-30"
    )
    assert income.id == "income"
    assert income.find("Revenue from Operations").total == pytest.approx(1000)
    assert expense.find("Cost of Materials Consumed").total == pytest.approx(400)
    assert profit.id == "profit"
    assert profit.title == "III. Profit for the period"
    assert profit.total == pytest.approx(600)


def test_loss_is_titled_as_loss():
    ledgers = _ledgers()
    tree = build_statement_tree(ledgers, {"purchase": 250.0}, "profit_and_loss")
    assert tree[2].title == "III. Loss for the period"
    assert tree[2].total == pytest.approx(-250)


def test_tree_serialises():
    tree = build_statement_tree(_ledgers(), {"cash": 10.0, "capital": -10.0}, Statement.BALANCE_SHEET)
    data = [node.to_dict() for node in tree]
    assert data[0]["id"] == "liabilities"
    assert data[1]["children"][0]["ledgers"][0] == {"id": "cash", "name": "Cash", "balance": 10.0}
