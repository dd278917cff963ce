"""Console notification sink."""

import json
import sys
from typing import TYPE_CHECKING, Optional, TextIO

from ..utils.time import format_timestamp
from .base import BaseNotifier

if TYPE_CHECKING:
    from ..market.events import AlertEvent
    from ..portfolio.models import TradeConfirmation


class ConsoleNotifier(BaseNotifier):
    """Prints alerts and trade confirmations for the interactive user."""

    def __init__(self, name: str = "console", format: str = "pretty",
                 stream: Optional[TextIO] = None):
        super().__init__(name)
        self.format = format
        self.stream = stream or sys.stdout

    def on_alert(self, event: "AlertEvent") -> None:
        if self.format == "json":
            self._write(json.dumps({
                "kind": "alert",
                "symbol": event.symbol,
                "threshold": event.threshold,
                "price": event.price,
                "timestamp": format_timestamp(event.timestamp),
            }))
        else:
            self._write(
                f"*** PRICE ALERT: {event.symbol} reached ${event.price:.2f} "
                f"(threshold ${event.threshold:.2f}) ***"
            )

        self.logger.debug("Alert printed", notifier=self.name, symbol=event.symbol)

    def on_trade(self, confirmation: "TradeConfirmation") -> None:
        if self.format == "json":
            self._write(json.dumps(confirmation.to_dict()))
            return

        verb = "Bought" if confirmation.side.value == "buy" else "Sold"
        noun = "cost" if confirmation.side.value == "buy" else "proceeds"
        output = (
            f"{verb} {confirmation.quantity} shares of {confirmation.symbol} "
            f"at ${confirmation.price:.2f} ({noun} ${confirmation.amount:.2f})"
        )
        if confirmation.profit_loss is not None:
            label = "Profit" if confirmation.profit_loss >= 0 else "Loss"
            output += (
                f". {label}: ${abs(confirmation.profit_loss):.2f} "
                f"({confirmation.profit_loss_pct:.2f}%)"
            )
        self._write(output)

    def _write(self, line: str) -> None:
        print(line, file=self.stream, flush=True)
