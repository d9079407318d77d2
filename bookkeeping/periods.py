#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""Calendar-day period helpers.

Vouchers carry calendar days only, so every comparison here is done on
``datetime.date`` values. A period end is inclusive through the whole day.
"""

from __future__ import annotations

import calendar
from dataclasses import dataclass
from datetime import date, datetime
from typing import Iterator, Tuple, Union

from bookkeeping.utils import LedgerError

DateLike = Union[str, date]


def parse_date(value: DateLike) -> date:
    """Parse ``YYYY-MM-DD`` (an ISO timestamp is cut to its day part)."""
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if not isinstance(value, str):
        raise LedgerError("INVALID_DATE", f"Unsupported date value: {value!r}")
    try:
        return datetime.strptime(value.strip()[:10], "%Y-%m-%d").date()
    except ValueError as exc:
        raise LedgerError("INVALID_DATE", f"Invalid date: {value!r}") from exc


def month_key(day: date) -> str:
    return f"{day.year:04d}-{day.month:02d}"


def month_bounds(year: int, month: int) -> Tuple[date, date]:
    last_day = calendar.monthrange(year, month)[1]
    return date(year, month, 1), date(year, month, last_day)


@dataclass(frozen=True)
class DateRange:
    start: date
    end: date

    @classmethod
    def of(cls, start: DateLike, end: DateLike) -> "DateRange":
        return cls(parse_date(start), parse_date(end))

    @classmethod
    def month(cls, year: int, month: int) -> "DateRange":
        return cls(*month_bounds(year, month))

    @property
    def is_empty(self) -> bool:
        return self.end < self.start

    def before_start(self, day: date) -> bool:
        return day < self.start

    def contains(self, day: date) -> bool:
        return self.start <= day <= self.end

    def months(self) -> Iterator["DateRange"]:
        """Yield the full calendar months touched by this range."""
        if self.is_empty:
            return
        year, month = self.start.year, self.start.month
        while (year, month) <= (self.end.year, self.end.month):
            yield DateRange.month(year, month)
            if month == 12:
                year, month = year + 1, 1
            else:
                month += 1

    def to_dict(self) -> dict:
        return {"start": self.start.isoformat(), "end": self.end.isoformat()}


def require_range(start: DateLike, end: DateLike) -> DateRange:
    """Parse a period requested by a caller, rejecting an end before the start."""
    period = DateRange.of(start, end)
    if period.is_empty:
        raise LedgerError(
            "INVALID_DATE_RANGE",
            f"Period end {period.end.isoformat()} precedes start {period.start.isoformat()}",
        )
    return period
