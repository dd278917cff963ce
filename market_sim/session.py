"""
Market session coordinator.

Owns the run's instrument list, ledger, price engine and notifier, and maps
each user-facing operation onto the core:

Symbol lookup → current price → Ledger / PriceEngine / Reporting view
"""

from typing import Optional

import structlog

from .config.defaults import DefaultConfig, get_default_config
from .errors import AlertNotSupportedError, SessionClosedError, SymbolNotFoundError
from .market.engine import PriceEngine
from .market.instruments import PricedInstrument, build_instruments
from .market.random_source import StepGenerator, create_generator
from .notify.base import BaseNotifier
from .portfolio.ledger import Ledger
from .portfolio.models import TradeConfirmation
from .portfolio.report import PortfolioRow, PortfolioSummary, snapshot, summarize

logger = structlog.get_logger(__name__)


class MarketSession:
    """
    One simulator run.

    The timed simulation phase runs on a worker thread and is joined before
    any trading operation is accepted; afterwards every operation runs on the
    caller's thread.
    """

    def __init__(
        self,
        config: DefaultConfig,
        instruments: list[PricedInstrument],
        ledger: Ledger,
        engine: PriceEngine
    ) -> None:
        self.config = config
        self.instruments = instruments
        self.ledger = ledger
        self.engine = engine
        self._closed = False

    @classmethod
    def create(
        cls,
        config: Optional[DefaultConfig] = None,
        rng: Optional[StepGenerator] = None,
        notifier: Optional[BaseNotifier] = None,
        seed: Optional[int] = None
    ) -> "MarketSession":
        """Build a session from configuration."""
        config = config or get_default_config()
        if rng is None:
            rng = create_generator(seed)

        instruments = build_instruments(config.instruments, config.pricing)
        ledger = Ledger(config.portfolio.initial_balance, notifier=notifier)
        engine = PriceEngine(rng, notifier=notifier)

        logger.info(
            "Market session created",
            instruments=[i.symbol for i in instruments],
            initial_balance=config.portfolio.initial_balance
        )
        return cls(config, instruments, ledger, engine)

    def __enter__(self) -> "MarketSession":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()

    @property
    def closed(self) -> bool:
        return self._closed

    def close(self) -> None:
        """Release the instrument collection. Safe to call more than once."""
        if self._closed:
            return
        self._closed = True
        count = len(self.instruments)
        self.instruments = []
        logger.info("Market session closed", instruments_released=count)

    def find_instrument(self, symbol: str) -> PricedInstrument:
        """Case-insensitive symbol lookup."""
        self._ensure_open()
        wanted = symbol.strip().upper()
        for instrument in self.instruments:
            if instrument.symbol.upper() == wanted:
                return instrument
        raise SymbolNotFoundError(f"Symbol {symbol!r} not found", symbol=symbol)

    def buy(self, symbol: str, quantity: int) -> TradeConfirmation:
        """Buy at the instrument's current price."""
        instrument = self.find_instrument(symbol)
        return self.ledger.buy(instrument.symbol, instrument.price, quantity)

    def sell(self, symbol: str, quantity: int) -> TradeConfirmation:
        """Sell at the instrument's current price."""
        instrument = self.find_instrument(symbol)
        return self.ledger.sell(instrument.symbol, instrument.price, quantity)

    def set_alert(self, symbol: str, threshold: float) -> None:
        """Arm a one-shot alert on an alert-capable instrument."""
        instrument = self.find_instrument(symbol)
        if not instrument.supports_alerts:
            raise AlertNotSupportedError(
                f"Alerts are not available for {instrument.symbol}",
                symbol=instrument.symbol
            )
        instrument.set_alert(threshold)  # type: ignore[attr-defined]

    def alert_symbols(self) -> list[str]:
        self._ensure_open()
        return [i.symbol for i in self.instruments if i.supports_alerts]

    def prices(self) -> list[tuple[str, float]]:
        """Snapshot of (symbol, current price) in instrument order."""
        self._ensure_open()
        return [(i.symbol, i.price) for i in self.instruments]

    def update_prices(self):
        """Advance every instrument once."""
        self._ensure_open()
        return self.engine.advance_all(self.instruments)

    def portfolio(self) -> tuple[list[PortfolioRow], PortfolioSummary]:
        """Current valuation rows and totals."""
        self._ensure_open()
        rows = snapshot(self.ledger, self.instruments)
        return rows, summarize(self.ledger, rows)

    def run_simulation(
        self,
        duration_ticks: Optional[int] = None,
        tick_interval: Optional[float] = None
    ) -> None:
        """
        Run the timed simulation phase on a worker thread and wait for it.

        An exception raised on the worker is re-raised here.
        """
        self._ensure_open()
        if duration_ticks is None:
            duration_ticks = self.config.simulation.duration_ticks
        if tick_interval is None:
            tick_interval = self.config.simulation.tick_interval_seconds

        worker = self.engine.start_simulation(self.instruments, duration_ticks, tick_interval)
        worker.wait()

    def _ensure_open(self) -> None:
        if self._closed:
            raise SessionClosedError("Market session is closed")
