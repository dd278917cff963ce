"""
Portfolio module.

Cash-and-holdings ledger with first-lot cost basis, and the read-only
reporting view over it.
"""
from .ledger import Ledger
from .models import PositionState, TradeConfirmation, TradeSide
from .report import PortfolioRow, PortfolioSummary, snapshot, summarize

__all__ = [
    "Ledger",
    "PortfolioRow",
    "PortfolioSummary",
    "PositionState",
    "TradeConfirmation",
    "TradeSide",
    "snapshot",
    "summarize",
]
