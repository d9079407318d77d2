import pytest

from bookkeeping.models import InventoryAllocation, Ledger, Salesman, Voucher, VoucherEntry
from bookkeeping.rollups import monthly_rollup, sales_by_customer, sales_by_salesman


def _ledgers():
    return [
        Ledger("acme", "Acme Traders", "Sundry Debtors"),
        Ledger("zen", "Zen Stores", "Sundry Debtors"),
        Ledger("sales", "Sales A/c", "Sales Accounts"),
        Ledger("rent", "Rent", "Indirect Expenses"),
        Ledger("cash", "Cash", "Cash-in-hand"),
    ]


def _sale(voucher_id, day, party, qty, rate, salesman_id=None):
    amount = qty * rate
    return Voucher(
        id=voucher_id,
        date=day,
        type="Sale",
        salesman_id=salesman_id,
        entries=[
            VoucherEntry(f"{voucher_id}-dr", "Dr", party, amount),
            VoucherEntry(
                f"{voucher_id}-cr",
                "Cr",
                "sales",
                amount,
                inventory_allocations=[InventoryAllocation("widget", qty, rate, "A")],
            ),
        ],
    )


def test_monthly_rollup_covers_whole_months():
    vouchers = [
        _sale("s1", "2024-04-05", "acme", 10, 100),
        Voucher(
            id="cn1",
            date="2024-05-12",
            type="Credit Note",
            entries=[VoucherEntry("c1", "Dr", "sales", 200), VoucherEntry("c2", "Cr", "acme", 200)],
        ),
        Voucher(
            id="rent",
            date="2024-05-31",
            type="Payment",
            entries=[VoucherEntry("r1", "Dr", "rent", 50), VoucherEntry("r2", "Cr", "cash", 50)],
        ),
    ]
    figures = monthly_rollup(_ledgers(), vouchers, "2024-04-15", "2024-06-10")
    assert [f.month for f in figures] == ["2024-04", "2024-05", "2024-06"]
    assert [f.label for f in figures] == ["Apr", "May", "Jun"]
    assert figures[0].sales == pytest.approx(1000)
    assert figures[0].profit == pytest.approx(1000)
    assert figures[1].sales == pytest.approx(-200)
    assert figures[1].profit == pytest.approx(-250)
    assert figures[2].to_dict() == {"month": "2024-06", "label": "Jun", "sales": 0.0, "profit": 0.0}


def test_sales_by_customer():
    vouchers = [
        _sale("s1", "2024-04-05", "acme", 10, 100),
        _sale("s2", "2024-04-06", "zen", 5, 300),
        _sale("s3", "2024-04-07", "acme", 10, 80),
        _sale("s4", "2024-05-01", "zen", 1, 1),
    ]
    rows = sales_by_customer(_ledgers(), vouchers, "2024-04-01", "2024-04-30")
    assert [row["customer_id"] for row in rows] == ["acme", "zen"]
    assert rows[0]["total_quantity"] == 20
    assert rows[0]["total_value"] == pytest.approx(1800)
    assert rows[0]["average_price"] == pytest.approx(90)
    assert rows[1]["customer_name"] == "Zen Stores"


def test_sales_by_salesman():
    vouchers = [
        _sale("s1", "2024-04-05", "acme", 10, 100, salesman_id="sm1"),
        _sale("s2", "2024-04-06", "zen", 5, 300, salesman_id="sm2"),
        _sale("s3", "2024-04-07", "acme", 1, 100, salesman_id="sm1"),
        _sale("s4", "2024-04-08", "acme", 1, 100),
    ]
    rows = sales_by_salesman([Salesman("sm1", "Ravi")], vouchers, "2024-04-01", "2024-04-30")
    assert rows == [
        {"salesman_id": "sm2", "salesman_name": "Unknown", "total_value": 1500, "invoice_count": 1},
        {"salesman_id": "sm1", "salesman_name": "Ravi", "total_value": 1100, "invoice_count": 2},
    ]
