#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""bookkeeping reconcile command."""

from __future__ import annotations

from bookkeeping.loader import load_company
from bookkeeping.reconciliation import bank_reconciliation
from bookkeeping.utils import load_json_input, print_json


def add_parser(subparsers, parents):
    parser = subparsers.add_parser("reconcile", help="Bank reconciliation", parents=parents)
    parser.add_argument("--bank", required=True, help="Bank ledger id")
    parser.add_argument("--as-of", required=True, help="Reconciliation date")
    parser.add_argument("--statement-balance", type=float, help="Balance as per bank statement")
    parser.set_defaults(func=run)
    return parser


def run(args):
    company = load_company(load_json_input(args.data))
    result = bank_reconciliation(
        company.ledgers,
        company.vouchers,
        args.bank,
        args.as_of,
        args.statement_balance,
    )
    print_json(result.to_dict())
