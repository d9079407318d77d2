"""Configuration module for the bookkeeping engine."""

from bookkeeping.config.logging import configure_logging, get_logger
from bookkeeping.config.settings import DEFAULT_ENGINE_CONFIG, load_engine_config

__all__ = ["DEFAULT_ENGINE_CONFIG", "load_engine_config", "configure_logging", "get_logger"]
