"""
Portfolio ledger.

Holds the cash balance, per-symbol share counts and per-symbol cost basis.
The basis is the price of the first lot bought while the position was flat;
later buys leave it unchanged until the position is fully closed. Realized
profit/loss on a sell is measured against that first-lot price.

Prices are supplied by the caller at each operation; the ledger holds no
reference to instruments.
"""

import math
import threading
from typing import Optional

from ..errors import InsufficientFundsError, InsufficientSharesError, InvalidOrderError
from ..logging.config import get_ledger_logger, log_position_transition, log_trade
from ..notify.base import BaseNotifier
from .models import PositionState, TradeConfirmation, TradeSide

logger = get_ledger_logger(__name__)


class Ledger:
    """Cash balance, holdings and first-lot cost basis for one run."""

    def __init__(self, initial_balance: float, notifier: Optional[BaseNotifier] = None):
        if initial_balance < 0:
            raise ValueError(f"initial_balance must be non-negative, got {initial_balance}")

        self._balance = float(initial_balance)
        self._holdings: dict[str, int] = {}
        self._cost_basis: dict[str, float] = {}
        self._lock = threading.Lock()
        self.notifier = notifier

    @property
    def balance(self) -> float:
        with self._lock:
            return self._balance

    def holdings(self) -> dict[str, int]:
        """Copy of the open positions, symbol -> shares."""
        with self._lock:
            return dict(self._holdings)

    def cost_basis(self) -> dict[str, float]:
        """Copy of the recorded first-lot prices of open positions."""
        with self._lock:
            return dict(self._cost_basis)

    def positions(self) -> list[tuple[str, int, float]]:
        """Open positions as (symbol, shares, cost basis), read under one lock."""
        with self._lock:
            return [
                (symbol, shares, self._cost_basis[symbol])
                for symbol, shares in self._holdings.items()
            ]

    def shares(self, symbol: str) -> int:
        with self._lock:
            return self._holdings.get(symbol, 0)

    def basis(self, symbol: str) -> Optional[float]:
        with self._lock:
            return self._cost_basis.get(symbol)

    def position_state(self, symbol: str) -> PositionState:
        with self._lock:
            return PositionState.OPEN if symbol in self._cost_basis else PositionState.FLAT

    def buy(self, symbol: str, price: float, quantity: int) -> TradeConfirmation:
        """
        Buy ``quantity`` shares at ``price``.

        Raises:
            InvalidOrderError: quantity or price not positive
            InsufficientFundsError: cost exceeds balance; nothing changes
        """
        _require_positive_quantity(symbol, quantity)
        _require_positive_price(symbol, price)

        cost = price * quantity

        with self._lock:
            if cost > self._balance:
                raise InsufficientFundsError(
                    f"Insufficient funds to buy {quantity} {symbol}: "
                    f"need {cost:.2f}, have {self._balance:.2f}",
                    symbol=symbol,
                    required=cost,
                    available=self._balance,
                    context={"price": price, "quantity": quantity}
                )

            opened = symbol not in self._cost_basis
            self._balance -= cost
            self._holdings[symbol] = self._holdings.get(symbol, 0) + quantity
            if opened:
                self._cost_basis[symbol] = price
            confirmation = TradeConfirmation(
                side=TradeSide.BUY,
                symbol=symbol,
                quantity=quantity,
                price=price,
                amount=cost,
                balance_after=self._balance
            )

        if opened:
            log_position_transition(
                logger, symbol,
                from_state=PositionState.FLAT.value,
                to_state=PositionState.OPEN.value,
                trigger=TradeSide.BUY.value,
                context={"cost_basis": price}
            )
        log_trade(logger, TradeSide.BUY.value, symbol, quantity, price, confirmation.balance_after)
        self._emit(confirmation)
        return confirmation

    def sell(self, symbol: str, price: float, quantity: int) -> TradeConfirmation:
        """
        Sell ``quantity`` shares at ``price`` and realize profit/loss.

        Raises:
            InvalidOrderError: quantity or price not positive
            InsufficientSharesError: more shares than held (unseen symbols hold 0); nothing changes
        """
        _require_positive_quantity(symbol, quantity)
        _require_positive_price(symbol, price)

        with self._lock:
            held = self._holdings.get(symbol, 0)
            if held < quantity:
                raise InsufficientSharesError(
                    f"Insufficient shares to sell {quantity} {symbol}: hold {held}",
                    symbol=symbol,
                    requested=quantity,
                    held=held,
                    context={"price": price}
                )

            basis = self._cost_basis[symbol]
            proceeds = price * quantity
            profit_loss = (price - basis) * quantity
            profit_loss_pct = profit_loss / (basis * quantity) * 100

            remaining = held - quantity
            self._balance += proceeds
            if remaining == 0:
                del self._holdings[symbol]
                del self._cost_basis[symbol]
            else:
                self._holdings[symbol] = remaining

            confirmation = TradeConfirmation(
                side=TradeSide.SELL,
                symbol=symbol,
                quantity=quantity,
                price=price,
                amount=proceeds,
                balance_after=self._balance,
                profit_loss=profit_loss,
                profit_loss_pct=profit_loss_pct
            )

        if remaining == 0:
            log_position_transition(
                logger, symbol,
                from_state=PositionState.OPEN.value,
                to_state=PositionState.FLAT.value,
                trigger=TradeSide.SELL.value,
                context={"cost_basis": basis}
            )
        log_trade(
            logger, TradeSide.SELL.value, symbol, quantity, price, confirmation.balance_after,
            context={"profit_loss": profit_loss, "profit_loss_pct": profit_loss_pct}
        )
        self._emit(confirmation)
        return confirmation

    def _emit(self, confirmation: TradeConfirmation) -> None:
        if self.notifier is not None:
            self.notifier.notify(confirmation)


def _require_positive_quantity(symbol: str, quantity: int) -> None:
    if isinstance(quantity, bool) or not isinstance(quantity, int) or quantity <= 0:
        raise InvalidOrderError(
            f"Quantity must be a positive integer, got {quantity}",
            field="quantity",
            value=quantity,
            context={"symbol": symbol}
        )


def _require_positive_price(symbol: str, price: float) -> None:
    if not math.isfinite(price) or price <= 0:
        raise InvalidOrderError(
            f"Price must be a positive finite number, got {price}",
            field="price",
            value=price,
            context={"symbol": symbol}
        )
