#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""Main CLI for the bookkeeping engine."""

from __future__ import annotations

import argparse

from bookkeeping import commands
from bookkeeping.config import configure_logging
from bookkeeping.periods import require_range
from bookkeeping.utils import LedgerError, handle_error


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="bookkeeping",
        description="Bookkeeping reports over a JSON company dataset",
    )
    common = argparse.ArgumentParser(add_help=False)
    common.add_argument("--data", help="Dataset JSON path (stdin when omitted)")
    common.add_argument(
        "--log-level",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Log level (defaults to engine config)",
    )

    subparsers = parser.add_subparsers(dest="command")

    commands.add_balances_parser(subparsers, [common])
    commands.add_report_parser(subparsers, [common])
    commands.add_stock_parser(subparsers, [common])
    commands.add_bills_parser(subparsers, [common])
    commands.add_reconcile_parser(subparsers, [common])
    commands.add_validate_parser(subparsers, [common])

    return parser


def main(argv=None):
    parser = build_parser()
    args = parser.parse_args(argv)
    if not hasattr(args, "func"):
        parser.print_help()
        return
    try:
        configure_logging(level=args.log_level)
        if getattr(args, "start", None) and getattr(args, "end", None):
            require_range(args.start, args.end)
        args.func(args)
    except LedgerError as exc:
        handle_error(exc)


if __name__ == "__main__":
    main()
