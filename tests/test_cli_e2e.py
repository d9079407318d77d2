import json
import subprocess
import sys
from pathlib import Path

import pytest

ROOT = Path(__file__).resolve().parents[1]

DATASET = {
    "details": {"name": "Demo Traders"},
    "ledgers": [
        {"id": "cash", "name": "Cash", "group": "Cash-in-hand", "openingBalance": 500, "openingBalanceType": "Dr"},
        {"id": "bank", "name": "HDFC", "group": "Bank Accounts"},
        {"id": "capital", "name": "Owner Capital", "group": "Capital Account", "openingBalance": 500, "openingBalanceType": "Cr"},
        {"id": "acme", "name": "Acme", "group": "Sundry Debtors", "creditPeriod": 15},
        {"id": "sales", "name": "Sales A/c", "group": "Sales Accounts"},
    ],
    "stockItems": [{"id": "widget", "name": "Widget", "reorderLevel": 5}],
    "godowns": [{"id": "A", "name": "Main"}],
    "salesmen": [],
    "vouchers": [
        {
            "id": "s1",
            "date": "2024-04-02",
            "type": "Sale",
            "entries": [
                {"id": "e1", "type": "Dr", "ledgerId": "acme", "amount": 5000},
                {
                    "id": "e2",
                    "type": "Cr",
                    "ledgerId": "sales",
                    "amount": 5000,
                    "inventoryAllocations": [{"stockItemId": "widget", "quantity": 2, "rate": 2500, "godownId": "A"}],
                },
            ],
        },
        {
            "id": "r1",
            "date": "2024-04-12",
            "type": "Receipt",
            "entries": [
                {"id": "e3", "type": "Dr", "ledgerId": "bank", "amount": 3000},
                {
                    "id": "e4",
                    "type": "Cr",
                    "ledgerId": "acme",
                    "amount": 3000,
                    "billAllocations": [{"invoiceId": "s1", "amount": 3000}],
                },
            ],
        },
    ],
}


def run_cli(args, data_path=None, input_data=None, expect_ok=True):
    cmd = [sys.executable, "-m", "bookkeeping.cli", *args]
    if data_path is not None:
        cmd += ["--data", str(data_path)]
    payload = json.dumps(input_data) if input_data is not None else None
    result = subprocess.run(
        cmd,
        input=payload,
        text=True,
        capture_output=True,
        cwd=ROOT,
    )
    if expect_ok:
        assert result.returncode == 0, result.stdout + result.stderr
    else:
        assert result.returncode != 0, result.stdout + result.stderr
    output = result.stdout.strip()
    return json.loads(output) if output else {}


@pytest.fixture
def data_path(tmp_path):
    path = tmp_path / "company.json"
    path.write_text(json.dumps(DATASET), encoding="utf-8")
    return path


def test_cli_trial_balance(data_path):
    tb = run_cli(["balances", "trial", "--start", "2024-04-01", "--end", "2024-04-30"], data_path)
    assert tb["debit_total"] == pytest.approx(tb["credit_total"])
    assert tb["debit_total"] == pytest.approx(5500)


def test_cli_balances_from_stdin():
    result = run_cli(
        ["balances", "all", "--start", "2024-04-01", "--end", "2024-04-30"],
        input_data=DATASET,
    )
    closing = {row["ledger_id"]: row["closing"] for row in result["balances"]}
    assert closing["acme"] == pytest.approx(2000)
    assert closing["bank"] == pytest.approx(3000)


def test_cli_balance_sheet_sides_agree(data_path):
    report = run_cli(["report", "--statement", "bs", "--start", "2024-04-01", "--end", "2024-04-30"], data_path)
    liabilities, assets = report["tree"]
    assert liabilities["total"] == pytest.approx(assets["total"])


def test_cli_report_to_file(data_path, tmp_path):
    out_path = tmp_path / "pl.json"
    status = run_cli(
        ["report", "--statement", "pl", "--start", "2024-04-01", "--end", "2024-04-30", "--output", str(out_path)],
        data_path,
    )
    assert status["status"] == "success"
    report = json.loads(out_path.read_text(encoding="utf-8"))
    assert report["summary"]["net_profit"] == pytest.approx(5000)


def test_cli_bills_and_aging(data_path):
    bills = run_cli(["bills", "outstanding", "--party", "acme", "--as-of", "2024-04-30"], data_path)
    assert bills["total"] == pytest.approx(2000)
    assert bills["bills"][0]["overdue_days"] == 13

    aged = run_cli(["bills", "aging", "--side", "receivables", "--as-of", "2024-04-30"], data_path)
    assert aged["buckets"] == ["0-30", "31-60", "61-90", ">90"]
    assert aged["parties"][0]["buckets"]["0-30"] == pytest.approx(2000)


def test_cli_stock_alerts(data_path):
    stock = run_cli(["stock", "--start", "2024-04-01", "--end", "2024-04-30", "--alerts"], data_path)
    assert stock["items"][0]["total"]["closing_qty"] == -2
    assert stock["alerts"][0]["stock_item_id"] == "widget"


def test_cli_reconcile_and_validate(data_path):
    rec = run_cli(["reconcile", "--bank", "bank", "--as-of", "2024-04-30", "--statement-balance", "0"], data_path)
    assert rec["balance_as_per_bank"] == pytest.approx(0)
    assert rec["difference"] == pytest.approx(0)

    check = run_cli(["validate", "--strict"], data_path)
    assert check["valid"] is True
    assert check["taxonomy_problems"] == []


def test_cli_reports_errors_as_json(data_path):
    err = run_cli(
        ["balances", "ledger", "--ledger-id", "missing", "--start", "2024-04-01", "--end", "2024-04-30"],
        data_path,
        expect_ok=False,
    )
    assert err["error"] is True
    assert err["code"] == "LEDGER_NOT_FOUND"


def test_cli_rejects_reversed_period(data_path):
    err = run_cli(
        ["balances", "trial", "--start", "2024-04-30", "--end", "2024-04-01"],
        data_path,
        expect_ok=False,
    )
    assert err["code"] == "INVALID_DATE_RANGE"
