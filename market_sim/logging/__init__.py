"""
Logging configuration and utilities for the market simulator.
"""
from .config import configure_logging, get_ledger_logger, get_market_logger

__all__ = ["configure_logging", "get_ledger_logger", "get_market_logger"]
