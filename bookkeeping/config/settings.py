#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""Engine configuration loaded from ``data/engine_config.json``."""

from __future__ import annotations

import json
import os
from pathlib import Path
from typing import Any, Dict

from bookkeeping.utils import LedgerError


CONFIG_ENV_VAR = "BOOKKEEPING_CONFIG"

DEFAULT_ENGINE_CONFIG: Dict[str, Any] = {
    "aging_buckets": [30, 60, 90],
    "balance_tolerance": 0.01,
    "top_parties_limit": 5,
    "log_level": "WARNING",
    "log_format": "console",
}

_LOG_LEVELS = {"DEBUG", "INFO", "WARNING", "ERROR"}
_LOG_FORMATS = {"console", "json"}


def default_config_path() -> Path:
    override = os.environ.get(CONFIG_ENV_VAR)
    if override:
        return Path(override)
    return Path(__file__).resolve().parents[2] / "data" / "engine_config.json"


def load_engine_config(path: str | Path | None = None) -> Dict[str, Any]:
    config_path = Path(path) if path else default_config_path()
    if not config_path.exists():
        return dict(DEFAULT_ENGINE_CONFIG)
    try:
        data = json.loads(config_path.read_text(encoding="utf-8"))
    except json.JSONDecodeError as exc:
        raise LedgerError("ENGINE_CONFIG_INVALID", f"Engine config JSON error: {exc}") from exc
    if not isinstance(data, dict):
        raise LedgerError("ENGINE_CONFIG_INVALID", "Engine config must be an object")
    merged = dict(DEFAULT_ENGINE_CONFIG)
    merged.update(data)
    _check_config(merged)
    return merged


def _check_config(config: Dict[str, Any]) -> None:
    buckets = config.get("aging_buckets")
    if (
        not isinstance(buckets, list)
        or not buckets
        or not all(isinstance(b, int) and b >= 0 for b in buckets)
        or sorted(set(buckets)) != buckets
    ):
        raise LedgerError(
            "ENGINE_CONFIG_INVALID",
            "aging_buckets must be a strictly increasing list of non-negative integers",
        )
    tolerance = config.get("balance_tolerance")
    if not isinstance(tolerance, (int, float)) or tolerance < 0:
        raise LedgerError("ENGINE_CONFIG_INVALID", "balance_tolerance must be >= 0")
    limit = config.get("top_parties_limit")
    if not isinstance(limit, int) or limit <= 0:
        raise LedgerError("ENGINE_CONFIG_INVALID", "top_parties_limit must be a positive integer")
    if config.get("log_level") not in _LOG_LEVELS:
        raise LedgerError("ENGINE_CONFIG_INVALID", f"Invalid log_level: {config.get('log_level')}")
    if config.get("log_format") not in _LOG_FORMATS:
        raise LedgerError("ENGINE_CONFIG_INVALID", f"Invalid log_format: {config.get('log_format')}")
