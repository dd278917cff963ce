"""
Price engine.

Advances every instrument once on demand, or repeatedly on a timer for
the simulation phase. The timed loop runs on a worker thread that the
caller waits on before trading resumes; a failure on the worker is
re-raised to the waiting caller.
"""

import threading
import time
from typing import Callable, Optional, Sequence

from ..logging.config import get_market_logger, log_alert
from ..notify.base import BaseNotifier
from ..utils.time import time_elapsed_seconds, utc_now
from .events import AlertEvent
from .instruments import PricedInstrument
from .random_source import StepGenerator

logger = get_market_logger(__name__)


class PriceEngine:
    """Drives price advancement for a collection of instruments."""

    def __init__(
        self,
        rng: StepGenerator,
        notifier: Optional[BaseNotifier] = None,
        sleep: Callable[[float], None] = time.sleep
    ) -> None:
        self.rng = rng
        self.notifier = notifier
        self._sleep = sleep
        self.ticks_run = 0

    def advance_all(self, instruments: Sequence[PricedInstrument]) -> list[AlertEvent]:
        """
        Advance each instrument once, in sequence order.

        Each advance is visible as soon as it returns; fired alerts are
        dispatched to the notifier immediately.

        Returns:
            Alerts fired during this pass, in instrument order
        """
        fired: list[AlertEvent] = []

        for instrument in instruments:
            event = instrument.advance(self.rng)
            if event is None:
                continue

            log_alert(logger, event.symbol, event.threshold, event.price)
            if self.notifier is not None:
                self.notifier.notify(event)
            fired.append(event)

        logger.debug(
            "Advanced instrument prices",
            instruments=len(instruments),
            alerts_fired=len(fired)
        )
        return fired

    def run_simulation(
        self,
        instruments: Sequence[PricedInstrument],
        duration_ticks: int,
        tick_interval: float
    ) -> int:
        """
        Advance all instruments once per tick for ``duration_ticks`` ticks.

        Sleeps ``tick_interval`` seconds between ticks, not after the last.

        Returns:
            Number of ticks run
        """
        _check_schedule(duration_ticks, tick_interval)

        started_at = utc_now()
        logger.info(
            "Simulation started",
            duration_ticks=duration_ticks,
            tick_interval=tick_interval
        )

        for tick in range(duration_ticks):
            if tick > 0:
                self._sleep(tick_interval)
            self.advance_all(instruments)
            self.ticks_run += 1

        logger.info(
            "Simulation finished",
            ticks=duration_ticks,
            elapsed_seconds=time_elapsed_seconds(started_at)
        )
        return duration_ticks

    def start_simulation(
        self,
        instruments: Sequence[PricedInstrument],
        duration_ticks: int,
        tick_interval: float
    ) -> "SimulationThread":
        """Run ``run_simulation`` on a worker thread and return it, already started."""
        _check_schedule(duration_ticks, tick_interval)
        worker = SimulationThread(self, instruments, duration_ticks, tick_interval)
        worker.start()
        return worker


class SimulationThread(threading.Thread):
    """
    Daemon worker for the timed simulation phase.

    An exception raised by the loop is kept on ``error`` and re-raised by
    ``wait()`` on the joining thread.
    """

    def __init__(
        self,
        engine: PriceEngine,
        instruments: Sequence[PricedInstrument],
        duration_ticks: int,
        tick_interval: float
    ) -> None:
        super().__init__(name="price-simulation", daemon=True)
        self.engine = engine
        self.instruments = instruments
        self.duration_ticks = duration_ticks
        self.tick_interval = tick_interval
        self.error: Optional[BaseException] = None

    def run(self) -> None:
        try:
            self.engine.run_simulation(self.instruments, self.duration_ticks, self.tick_interval)
        except Exception as e:
            self.error = e
            logger.error(
                "Simulation failed",
                error=str(e),
                error_type=type(e).__name__,
                ticks_run=self.engine.ticks_run
            )

    def wait(self, timeout: Optional[float] = None) -> None:
        """Join the worker and re-raise whatever stopped it early."""
        self.join(timeout)
        if self.error is not None:
            raise self.error


def _check_schedule(duration_ticks: int, tick_interval: float) -> None:
    if duration_ticks < 0:
        raise ValueError(f"duration_ticks must be non-negative, got {duration_ticks}")
    if tick_interval < 0:
        raise ValueError(f"tick_interval must be non-negative, got {tick_interval}")
