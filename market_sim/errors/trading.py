"""
Trading error classifications.

These exceptions reject a single operation without touching ledger or
instrument state. The caller reports them and carries on.
"""

from typing import Optional, Dict, Any


class TradingError(Exception):
    """Base class for rejected trading operations."""

    def __init__(self, message: str, context: Optional[Dict[str, Any]] = None):
        super().__init__(message)
        self.context = context or {}
        self.recoverable = True


class InsufficientFundsError(TradingError):
    """Buy cost exceeds the current cash balance."""

    def __init__(self, message: str, symbol: Optional[str] = None,
                 required: Optional[float] = None,
                 available: Optional[float] = None, **kwargs):
        super().__init__(message, **kwargs)
        self.symbol = symbol
        self.required = required
        self.available = available


class InsufficientSharesError(TradingError):
    """Sell quantity exceeds the shares held for the symbol."""

    def __init__(self, message: str, symbol: Optional[str] = None,
                 requested: Optional[int] = None,
                 held: Optional[int] = None, **kwargs):
        super().__init__(message, **kwargs)
        self.symbol = symbol
        self.requested = requested
        self.held = held


class SymbolNotFoundError(TradingError):
    """Symbol is not part of the session's instrument set."""

    def __init__(self, message: str, symbol: Optional[str] = None, **kwargs):
        super().__init__(message, **kwargs)
        self.symbol = symbol


class InvalidOrderError(TradingError):
    """Non-positive quantity, price or alert threshold."""

    def __init__(self, message: str, field: Optional[str] = None,
                 value: Any = None, **kwargs):
        super().__init__(message, **kwargs)
        self.field = field
        self.value = value


class AlertNotSupportedError(TradingError):
    """Instrument kind cannot carry a price alert."""

    def __init__(self, message: str, symbol: Optional[str] = None, **kwargs):
        super().__init__(message, **kwargs)
        self.symbol = symbol
