#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""Shared helpers for the bookkeeping engine and CLI."""

from __future__ import annotations

import json
import sys
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, Optional


@dataclass
class LedgerError(Exception):
    code: str
    message: str
    details: Optional[Dict[str, Any]] = None

    def __str__(self) -> str:
        return f"{self.code}: {self.message}"

    def to_dict(self) -> Dict[str, Any]:
        payload: Dict[str, Any] = {
            "error": True,
            "code": self.code,
            "message": self.message,
        }
        if self.details:
            payload["details"] = self.details
        return payload


def load_json_input(path: Optional[str] = None) -> Dict[str, Any]:
    """Load a JSON object from ``path`` or, when omitted, from stdin."""
    try:
        if path:
            data = json.loads(Path(path).read_text(encoding="utf-8"))
        else:
            data = json.load(sys.stdin)
    except json.JSONDecodeError as exc:
        raise LedgerError(
            code="INVALID_JSON",
            message=f"Invalid JSON input: {exc}",
        ) from exc
    except OSError as exc:
        raise LedgerError(
            code="INPUT_NOT_FOUND",
            message=f"Cannot read input file: {exc}",
        ) from exc

    if not isinstance(data, dict):
        raise LedgerError(
            code="INVALID_JSON",
            message="Input must be a JSON object",
        )
    return data


def dump_json(data: Any) -> str:
    return json.dumps(data, ensure_ascii=False, indent=2)


def print_json(data: Any) -> None:
    print(dump_json(data))


def print_error(err: LedgerError) -> None:
    print_json(err.to_dict())


def handle_error(err: LedgerError) -> None:
    print_error(err)
    sys.exit(1)
