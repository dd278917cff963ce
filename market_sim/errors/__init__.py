"""
Error classification for the market simulator.

Trading errors are reported to the user and the session continues; system
failures abort startup or the interactive loop.
"""

from .trading import (
    TradingError,
    InsufficientFundsError,
    InsufficientSharesError,
    SymbolNotFoundError,
    InvalidOrderError,
    AlertNotSupportedError,
)
from .system_failures import (
    SystemFailureError,
    ConfigurationError,
    SessionClosedError,
)

__all__ = [
    # Trading Errors
    "TradingError",
    "InsufficientFundsError",
    "InsufficientSharesError",
    "SymbolNotFoundError",
    "InvalidOrderError",
    "AlertNotSupportedError",
    # System Failures
    "SystemFailureError",
    "ConfigurationError",
    "SessionClosedError",
]
