"""Base classes for notification sinks."""

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING, Any, Union

import structlog

if TYPE_CHECKING:
    from ..market.events import AlertEvent
    from ..portfolio.models import TradeConfirmation


class BaseNotifier(ABC):
    """Base class for notification sinks."""

    def __init__(self, name: str):
        self.name = name
        self.logger = structlog.get_logger(f"market_sim.notify.{name}")
        self._alert_count = 0
        self._trade_count = 0

    @abstractmethod
    def on_alert(self, event: "AlertEvent") -> None:
        """Handle a fired price alert."""

    @abstractmethod
    def on_trade(self, confirmation: "TradeConfirmation") -> None:
        """Handle an executed trade."""

    def notify(self, item: Union["AlertEvent", "TradeConfirmation"]) -> None:
        """Dispatch to the matching handler and count it."""
        # market.engine imports this module
        from ..market.events import AlertEvent

        if isinstance(item, AlertEvent):
            self._alert_count += 1
            self.on_alert(item)
        else:
            self._trade_count += 1
            self.on_trade(item)

    def get_stats(self) -> dict[str, Any]:
        """Get notification statistics."""
        return {
            "name": self.name,
            "alert_count": self._alert_count,
            "trade_count": self._trade_count,
        }


class RecordingNotifier(BaseNotifier):
    """Keeps every notification in memory."""

    def __init__(self, name: str = "recording"):
        super().__init__(name)
        self.alerts: list["AlertEvent"] = []
        self.trades: list["TradeConfirmation"] = []

    def on_alert(self, event: "AlertEvent") -> None:
        self.alerts.append(event)

    def on_trade(self, confirmation: "TradeConfirmation") -> None:
        self.trades.append(confirmation)
