#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""bookkeeping validate command."""

from __future__ import annotations

from bookkeeping.config import load_engine_config
from bookkeeping.loader import load_company
from bookkeeping.taxonomy import check_partition
from bookkeeping.utils import load_json_input, print_json
from bookkeeping.validation import assert_valid, validate_company


def add_parser(subparsers, parents):
    parser = subparsers.add_parser("validate", help="Check a dataset", parents=parents)
    parser.add_argument("--strict", action="store_true", help="Exit non-zero on any issue")
    parser.set_defaults(func=run)
    return parser


def run(args):
    company = load_company(load_json_input(args.data))
    tolerance = load_engine_config()["balance_tolerance"]
    if args.strict:
        assert_valid(company, tolerance)
    issues = validate_company(company, tolerance)
    print_json(
        {
            "valid": not issues,
            "issues": issues,
            "taxonomy_problems": check_partition(),
        }
    )
