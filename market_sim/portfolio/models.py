"""
Portfolio data models.

Immutable trade confirmation records and the per-symbol position states.
"""

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Any, Optional

from ..utils.time import format_timestamp, utc_now


class TradeSide(str, Enum):
    """Direction of an executed trade."""
    BUY = "buy"
    SELL = "sell"


class PositionState(str, Enum):
    """Per-symbol position lifecycle."""
    FLAT = "flat"    # No shares, no cost basis
    OPEN = "open"    # Shares held, cost basis recorded


@dataclass(frozen=True)
class TradeConfirmation:
    """Record of one executed trade."""

    side: TradeSide
    symbol: str
    quantity: int
    price: float
    amount: float                                    # Cost for buys, proceeds for sells
    balance_after: float

    # Realized P&L, sells only
    profit_loss: Optional[float] = None
    profit_loss_pct: Optional[float] = None

    timestamp: datetime = field(default_factory=utc_now)

    def to_dict(self) -> dict[str, Any]:
        """Plain representation for JSON output."""
        return {
            "kind": "trade",
            "side": self.side.value,
            "symbol": self.symbol,
            "quantity": self.quantity,
            "price": self.price,
            "amount": self.amount,
            "balance_after": self.balance_after,
            "profit_loss": self.profit_loss,
            "profit_loss_pct": self.profit_loss_pct,
            "timestamp": format_timestamp(self.timestamp),
        }
