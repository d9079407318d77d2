from datetime import date

import pytest

from bookkeeping.loader import load_company
from bookkeeping.models import EntryType, VoucherType
from bookkeeping.utils import LedgerError
from bookkeeping.validation import assert_valid, validate_company


def _dataset():
    return {
        "details": {"name": "Demo Traders"},
        "ledgers": [
            {"id": "cash", "name": "Cash", "group": "Cash-in-hand", "openingBalance": 500, "openingBalanceType": "Dr"},
            {"id": "acme", "name": "Acme", "group": "Sundry Debtors", "isBillWise": True, "creditPeriod": 30},
            {"id": "sales", "name": "Sales A/c", "group": "Sales Accounts"},
        ],
        "stockItems": [
            {"id": "widget", "name": "Widget", "reorderLevel": 5, "openingStock": [{"godownId": "A", "quantity": 3, "rate": 10}]}
        ],
        "godowns": [{"id": "A", "name": "Main"}],
        "salesmen": [{"id": "sm1", "name": "Ravi"}],
        "vouchers": [
            {
                "id": "s1",
                "date": "2024-04-10T00:00:00.000Z",
                "type": "Sale",
                "voucherNo": 1,
                "salesmanId": "sm1",
                "entries": [
                    {"id": "e1", "type": "Dr", "ledgerId": "acme", "amount": 1000},
                    {
                        "id": "e2",
                        "type": "Cr",
                        "ledgerId": "sales",
                        "amount": 1000,
                        "inventoryAllocations": [{"stockItemId": "widget", "quantity": 2, "rate": 500, "godownId": "A"}],
                    },
                ],
            },
            {
                "id": "r1",
                "date": "2024-04-20",
                "type": "Receipt",
                "entries": [
                    {"id": "e3", "type": "Dr", "ledgerId": "cash", "amount": 400},
                    {
                        "id": "e4",
                        "type": "Cr",
                        "ledgerId": "acme",
                        "amount": 400,
                        "billAllocations": [{"invoiceId": "s1", "amount": 400}],
                    },
                ],
            },
        ],
    }


def test_load_company_builds_typed_models():
    company = load_company(_dataset())
    assert company.name == "Demo Traders"
    cash = company.ledger_map()["cash"]
    assert cash.opening_balance_type is EntryType.DR
    assert cash.signed_opening() == 500
    assert company.ledger_map()["acme"].credit_period == 30
    assert company.ledger_map()["acme"].is_bill_wise is True
    assert cash.is_bill_wise is False

    sale = company.voucher_map()["s1"]
    assert sale.date == date(2024, 4, 10)
    assert sale.type is VoucherType.SALE
    assert sale.entries[1].inventory_allocations[0].value == 1000
    assert company.voucher_map()["r1"].entries[1].bill_allocations[0].invoice_id == "s1"
    assert company.stock_items[0].opening_stock[0].quantity == 3


@pytest.mark.parametrize(
    "mutate, code",
    [
        (lambda d: d["vouchers"][0].update(type="Barter"), "INVALID_VOUCHER_TYPE"),
        (lambda d: d["vouchers"][0]["entries"][0].update(type="Debit"), "INVALID_ENTRY_TYPE"),
        (lambda d: d["vouchers"][0].update(date="10/04/2024"), "INVALID_DATE"),
        (lambda d: d["ledgers"][0].pop("name"), "INVALID_DATASET"),
        (lambda d: d.update(ledgers={"cash": {}}), "INVALID_DATASET"),
        (lambda d: d["ledgers"][0].update(openingBalance="lots"), "INVALID_DATASET"),
    ],
)
def test_load_company_rejects_malformed_records(mutate, code):
    data = _dataset()
    mutate(data)
    with pytest.raises(LedgerError) as exc:
        load_company(data)
    assert exc.value.code == code


def test_clean_dataset_has_no_issues():
    company = load_company(_dataset())
    assert validate_company(company) == []
    assert_valid(company)


def test_validation_reports_issues():
    data = _dataset()
    data["ledgers"].append({"id": "odd", "name": "Odd", "group": "Misc Group"})
    data["vouchers"][0]["entries"][1]["amount"] = 900
    data["vouchers"][0]["entries"][1]["inventoryAllocations"][0]["stockItemId"] = "gadget"
    data["vouchers"][1]["entries"].append({"id": "e5", "type": "Dr", "ledgerId": "ghost", "amount": 0})
    data["vouchers"][1]["entries"][1]["billAllocations"][0]["amount"] = 1500

    issues = validate_company(load_company(data))
    codes = {issue["code"] for issue in issues}
    assert codes == {
        "UNKNOWN_GROUP",
        "VOUCHER_UNBALANCED",
        "UNKNOWN_STOCK_ITEM",
        "UNKNOWN_LEDGER",
        "BILL_OVER_ALLOCATED",
    }


def test_assert_valid_raises_with_issue_list():
    data = _dataset()
    data["vouchers"][1]["entries"][0]["amount"] = -400
    with pytest.raises(LedgerError) as exc:
        assert_valid(load_company(data))
    assert exc.value.code == "DATASET_INVALID"
    codes = [issue["code"] for issue in exc.value.details["issues"]]
    assert "NEGATIVE_AMOUNT" in codes
