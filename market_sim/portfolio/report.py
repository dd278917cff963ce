"""Read-only portfolio reporting over a ledger and the live instrument prices."""

from dataclasses import dataclass
from typing import Optional, Sequence

from ..market.instruments import PricedInstrument
from .ledger import Ledger


@dataclass(frozen=True)
class PortfolioRow:
    """Valuation of one open position."""
    symbol: str
    shares: int
    current_price: float
    total_investment: float
    current_value: float
    profit_or_loss: float


@dataclass(frozen=True)
class PortfolioSummary:
    """Totals across all open positions plus cash."""
    cash_balance: float
    total_investment: float
    total_value: float
    total_profit_or_loss: float
    net_worth: float
    positions: int


def current_price(symbol: str, instruments: Sequence[PricedInstrument]) -> Optional[float]:
    """Linear lookup of a symbol's live price; None when the symbol is not listed."""
    for instrument in instruments:
        if instrument.symbol == symbol:
            return instrument.price
    return None


def snapshot(ledger: Ledger, instruments: Sequence[PricedInstrument]) -> list[PortfolioRow]:
    """
    Value every open position at the current prices.

    Symbols missing from ``instruments`` are valued at a price of 0.
    """
    rows = []

    for symbol, shares, basis in ledger.positions():
        if shares <= 0:
            continue
        price = current_price(symbol, instruments) or 0.0
        total_investment = basis * shares
        current_value = price * shares
        rows.append(PortfolioRow(
            symbol=symbol,
            shares=shares,
            current_price=price,
            total_investment=total_investment,
            current_value=current_value,
            profit_or_loss=current_value - total_investment,
        ))

    return rows


def summarize(ledger: Ledger, rows: Sequence[PortfolioRow]) -> PortfolioSummary:
    """Aggregate snapshot rows with the ledger's cash balance."""
    total_investment = sum(row.total_investment for row in rows)
    total_value = sum(row.current_value for row in rows)
    cash = ledger.balance

    return PortfolioSummary(
        cash_balance=cash,
        total_investment=total_investment,
        total_value=total_value,
        total_profit_or_loss=total_value - total_investment,
        net_worth=cash + total_value,
        positions=len(rows),
    )
