#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""bookkeeping bills command."""

from __future__ import annotations

from datetime import datetime

from bookkeeping.bills import aging_report, bill_wise_report, bucket_labels, outstanding_bills
from bookkeeping.config import load_engine_config
from bookkeeping.loader import load_company
from bookkeeping.utils import load_json_input, print_json


def _default_date() -> str:
    return datetime.now().strftime("%Y-%m-%d")


def add_parser(subparsers, parents):
    parser = subparsers.add_parser("bills", help="Bill-wise outstanding and aging", parents=parents)
    sub = parser.add_subparsers(dest="bills_cmd")

    outstanding_cmd = sub.add_parser("outstanding", help="Open bills of a party", parents=parents)
    outstanding_cmd.add_argument("--party", help="Party ledger id (all bill-wise parties when omitted)")
    outstanding_cmd.add_argument("--as-of", default=_default_date(), help="Report date")
    outstanding_cmd.set_defaults(func=run_outstanding)

    aging_cmd = sub.add_parser("aging", help="Aging of party balances", parents=parents)
    aging_cmd.add_argument("--side", choices=["receivables", "payables"], default="receivables")
    aging_cmd.add_argument("--as-of", default=_default_date(), help="Report date")
    aging_cmd.set_defaults(func=run_aging)

    return parser


def run_outstanding(args):
    company = load_company(load_json_input(args.data))
    if not args.party:
        parties = bill_wise_report(company.ledgers, company.vouchers, args.as_of)
        print_json({"as_of": args.as_of, "parties": parties})
        return
    bills = outstanding_bills(company.ledgers, company.vouchers, args.party, args.as_of)
    print_json(
        {
            "party": args.party,
            "as_of": args.as_of,
            "bills": [bill.to_dict() for bill in bills],
            "total": sum(bill.balance for bill in bills),
        }
    )


def run_aging(args):
    company = load_company(load_json_input(args.data))
    buckets = load_engine_config()["aging_buckets"]
    rows = aging_report(company.ledgers, company.vouchers, args.as_of, args.side, buckets)
    print_json(
        {
            "side": args.side,
            "as_of": args.as_of,
            "buckets": bucket_labels(buckets),
            "parties": [row.to_dict() for row in rows],
        }
    )
