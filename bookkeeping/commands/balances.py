#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""bookkeeping balances command."""

from __future__ import annotations

from bookkeeping.balances import calculate_balances, ledger_statement, top_parties, trial_balance
from bookkeeping.config import load_engine_config
from bookkeeping.loader import load_company
from bookkeeping.utils import load_json_input, print_json


def _add_period(cmd) -> None:
    cmd.add_argument("--start", required=True, help="Period start (YYYY-MM-DD)")
    cmd.add_argument("--end", required=True, help="Period end, inclusive (YYYY-MM-DD)")


def add_parser(subparsers, parents):
    parser = subparsers.add_parser("balances", help="Ledger balances", parents=parents)
    sub = parser.add_subparsers(dest="balances_cmd")

    all_cmd = sub.add_parser("all", help="Opening, movement and closing per ledger", parents=parents)
    _add_period(all_cmd)
    all_cmd.set_defaults(func=run_all)

    trial_cmd = sub.add_parser("trial", help="Trial balance", parents=parents)
    _add_period(trial_cmd)
    trial_cmd.set_defaults(func=run_trial)

    ledger_cmd = sub.add_parser("ledger", help="Ledger statement", parents=parents)
    ledger_cmd.add_argument("--ledger-id", required=True, help="Ledger id")
    _add_period(ledger_cmd)
    ledger_cmd.set_defaults(func=run_ledger)

    top_cmd = sub.add_parser("top", help="Largest party balances", parents=parents)
    top_cmd.add_argument("--group", default="Sundry Debtors", help="Party group")
    top_cmd.add_argument("--limit", type=int, help="Number of parties")
    _add_period(top_cmd)
    top_cmd.set_defaults(func=run_top)

    return parser


def run_all(args):
    company = load_company(load_json_input(args.data))
    result = calculate_balances(company.ledgers, company.vouchers, args.start, args.end)
    print_json(result.to_dict())


def run_trial(args):
    company = load_company(load_json_input(args.data))
    result = trial_balance(company.ledgers, company.vouchers, args.start, args.end)
    print_json(result.to_dict())


def run_ledger(args):
    company = load_company(load_json_input(args.data))
    statement = ledger_statement(
        company.ledgers, company.vouchers, args.ledger_id, args.start, args.end
    )
    print_json(statement.to_dict())


def run_top(args):
    company = load_company(load_json_input(args.data))
    limit = args.limit or load_engine_config()["top_parties_limit"]
    parties = top_parties(
        company.ledgers, company.vouchers, args.start, args.end, args.group, limit
    )
    print_json({"group": args.group, "parties": parties})
