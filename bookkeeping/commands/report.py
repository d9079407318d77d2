#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""bookkeeping report command."""

from __future__ import annotations

from pathlib import Path

from bookkeeping.balances import calculate_balances
from bookkeeping.cash_flow import cash_flow
from bookkeeping.loader import load_company
from bookkeeping.rollups import monthly_rollup, sales_by_customer, sales_by_salesman
from bookkeeping.statements import balance_sheet, profit_and_loss, profit_and_loss_statement
from bookkeeping.utils import load_json_input, print_json, dump_json


STATEMENTS = ["pl", "bs", "cash-flow", "monthly", "sales-customer", "sales-salesman"]


def add_parser(subparsers, parents):
    parser = subparsers.add_parser("report", help="Financial statements", parents=parents)
    parser.add_argument("--statement", choices=STATEMENTS, default="pl", help="Statement")
    parser.add_argument("--start", required=True, help="Period start (YYYY-MM-DD)")
    parser.add_argument("--end", required=True, help="Period end, inclusive (YYYY-MM-DD)")
    parser.add_argument("--output", help="Write the report to this path")
    parser.set_defaults(func=run)
    return parser


def build_report(company, statement: str, start: str, end: str):
    ledgers, vouchers = company.ledgers, company.vouchers
    if statement == "pl":
        result = calculate_balances(ledgers, vouchers, start, end)
        return {
            "summary": profit_and_loss(ledgers, result.movement).to_dict(),
            "tree": [node.to_dict() for node in profit_and_loss_statement(ledgers, vouchers, start, end)],
        }
    if statement == "bs":
        return {"tree": [node.to_dict() for node in balance_sheet(ledgers, vouchers, start, end)]}
    if statement == "cash-flow":
        return cash_flow(ledgers, vouchers, start, end).to_dict()
    if statement == "monthly":
        return {"months": [m.to_dict() for m in monthly_rollup(ledgers, vouchers, start, end)]}
    if statement == "sales-customer":
        return {"customers": sales_by_customer(ledgers, vouchers, start, end)}
    return {"salesmen": sales_by_salesman(company.salesmen, vouchers, start, end)}


def run(args):
    company = load_company(load_json_input(args.data))
    report = {
        "statement": args.statement,
        "period": {"start": args.start, "end": args.end},
        **build_report(company, args.statement, args.start, args.end),
    }

    if args.output:
        out_path = Path(args.output)
        out_path.write_text(dump_json(report), encoding="utf-8")
        print_json({"status": "success", "output": str(out_path)})
        return

    print_json(report)
