from .balances import add_parser as add_balances_parser
from .report import add_parser as add_report_parser
from .stock import add_parser as add_stock_parser
from .bills import add_parser as add_bills_parser
from .reconcile import add_parser as add_reconcile_parser
from .validate import add_parser as add_validate_parser

__all__ = [
    "add_balances_parser",
    "add_report_parser",
    "add_stock_parser",
    "add_bills_parser",
    "add_reconcile_parser",
    "add_validate_parser",
]
