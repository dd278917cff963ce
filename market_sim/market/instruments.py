"""
Tradable instruments.

Two concrete kinds share the ``PricedInstrument`` capability: ``Instrument``
only advances its price, ``AlertInstrument`` also carries a one-shot alert
threshold. Price reads and the update step each hold the instrument's lock,
so a reader never sees a half-applied update.
"""

import math
import threading
from typing import Iterable, Optional, Protocol, runtime_checkable

import structlog

from ..config.defaults import InstrumentSpec, PricingParams
from ..errors import InvalidOrderError
from .events import AlertEvent
from .random_source import StepGenerator

logger = structlog.get_logger(__name__)


@runtime_checkable
class PricedInstrument(Protocol):
    """Anything with a symbol and a live price that can advance by one step."""

    symbol: str
    supports_alerts: bool

    @property
    def price(self) -> float: ...

    def advance(self, rng: StepGenerator) -> Optional[AlertEvent]: ...


def random_step(price: float, rng: StepGenerator, pricing: PricingParams) -> float:
    """
    Apply one uniform random percentage move and clamp to the price floor.

    The move is drawn from ``2 * max_steps + 1`` discrete outcomes, each a
    multiple of ``step_granularity`` between ``-max_step_pct`` and
    ``+max_step_pct`` inclusive.
    """
    steps = int(rng.integers(-pricing.max_steps, pricing.max_steps + 1))
    pct = steps * pricing.step_granularity
    new_price = price + price * pct
    return max(new_price, pricing.price_floor)


class Instrument:
    """Plain instrument: symbol and random-walk price."""

    supports_alerts = False

    def __init__(self, symbol: str, price: float, pricing: Optional[PricingParams] = None):
        self._symbol = symbol
        self._pricing = pricing or PricingParams()
        self._price = max(float(price), self._pricing.price_floor)
        self._lock = threading.Lock()

    @property
    def symbol(self) -> str:
        return self._symbol

    @property
    def price(self) -> float:
        with self._lock:
            return self._price

    def advance(self, rng: StepGenerator) -> Optional[AlertEvent]:
        """Move the price by one random step. Plain instruments never emit events."""
        with self._lock:
            self._price = random_step(self._price, rng, self._pricing)
        return None

    def __repr__(self) -> str:
        return f"Instrument(symbol={self._symbol!r}, price={self.price:.2f})"


class AlertInstrument:
    """Instrument that can carry one armed price alert at a time."""

    supports_alerts = True

    def __init__(self, symbol: str, price: float, pricing: Optional[PricingParams] = None):
        self._symbol = symbol
        self._pricing = pricing or PricingParams()
        self._price = max(float(price), self._pricing.price_floor)
        self._alert_threshold = 0.0
        self._lock = threading.Lock()

    @property
    def symbol(self) -> str:
        return self._symbol

    @property
    def price(self) -> float:
        with self._lock:
            return self._price

    @property
    def alert_threshold(self) -> float:
        with self._lock:
            return self._alert_threshold

    @property
    def alert_armed(self) -> bool:
        return self.alert_threshold > 0

    def set_alert(self, threshold: float) -> None:
        """Arm the alert, replacing any previously armed threshold."""
        if not math.isfinite(threshold) or threshold <= 0:
            raise InvalidOrderError(
                f"Alert threshold must be a positive finite number, got {threshold}",
                field="threshold",
                value=threshold,
                context={"symbol": self._symbol}
            )

        with self._lock:
            previous = self._alert_threshold
            self._alert_threshold = float(threshold)

        logger.info(
            "Price alert armed",
            symbol=self._symbol,
            threshold=threshold,
            replaced=previous if previous > 0 else None
        )

    def reset_alert(self) -> None:
        """Disarm the alert."""
        with self._lock:
            self._alert_threshold = 0.0

    def check_alert(self) -> bool:
        """True iff an alert is armed and the price is at or above it."""
        with self._lock:
            return self._triggered()

    def advance(self, rng: StepGenerator) -> Optional[AlertEvent]:
        """
        Move the price by one random step, then evaluate the alert.

        Returns:
            The fired alert, or None. A fired alert is disarmed before returning.
        """
        with self._lock:
            self._price = random_step(self._price, rng, self._pricing)
            if not self._triggered():
                return None
            event = AlertEvent(
                symbol=self._symbol,
                threshold=self._alert_threshold,
                price=self._price
            )
            self._alert_threshold = 0.0

        return event

    def _triggered(self) -> bool:
        return self._alert_threshold > 0 and self._price >= self._alert_threshold

    def __repr__(self) -> str:
        return (
            f"AlertInstrument(symbol={self._symbol!r}, price={self.price:.2f}, "
            f"alert_threshold={self.alert_threshold:.2f})"
        )


def build_instruments(
    specs: Iterable[InstrumentSpec],
    pricing: Optional[PricingParams] = None
) -> list[PricedInstrument]:
    """Create the owning instrument list, picking the kind from each spec's ``alerts`` flag."""
    instruments: list[PricedInstrument] = []
    for spec in specs:
        kind = AlertInstrument if spec.alerts else Instrument
        instruments.append(kind(spec.symbol, spec.price, pricing))
    return instruments
