#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""bookkeeping stock command."""

from __future__ import annotations

from bookkeeping.inventory import reorder_alerts, stock_summary
from bookkeeping.loader import load_company
from bookkeeping.utils import load_json_input, print_json


def add_parser(subparsers, parents):
    parser = subparsers.add_parser("stock", help="Stock summary", parents=parents)
    parser.add_argument("--start", required=True, help="Period start (YYYY-MM-DD)")
    parser.add_argument("--end", required=True, help="Period end, inclusive (YYYY-MM-DD)")
    parser.add_argument("--godown", help="Only report this godown")
    parser.add_argument("--alerts", action="store_true", help="Include re-order alerts")
    parser.set_defaults(func=run)
    return parser


def run(args):
    company = load_company(load_json_input(args.data))
    summary = stock_summary(
        company.stock_items, company.vouchers, company.godowns, args.start, args.end
    )
    names = {item.id: item.name for item in company.stock_items}
    items = []
    for item_id, item_summary in summary.items():
        data = item_summary.to_dict()
        if args.godown:
            data["godowns"] = {
                gid: state for gid, state in data["godowns"].items() if gid == args.godown
            }
        items.append({"stock_item_id": item_id, "name": names.get(item_id), **data})

    output = {"period": {"start": args.start, "end": args.end}, "items": items}
    if args.alerts:
        output["alerts"] = reorder_alerts(company.stock_items, summary, args.godown)
    print_json(output)
