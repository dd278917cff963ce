"""Pytest configuration and shared fixtures."""

import pytest
from typing import Callable, Iterable, List, Tuple

import numpy as np
import structlog

from market_sim.config.defaults import InstrumentSpec, PricingParams
from market_sim.market.instruments import AlertInstrument, Instrument
from market_sim.notify.base import BaseNotifier, RecordingNotifier
from market_sim.portfolio.ledger import Ledger


class ScriptedGenerator:
    """Stand-in for numpy's Generator that returns predetermined steps."""

    def __init__(self, steps: Iterable[int] = (), default: int = 0):
        self.steps: List[int] = list(steps)
        self.default = default
        self.calls: List[Tuple[int, int]] = []

    def integers(self, low: int, high: int) -> int:
        self.calls.append((low, high))
        value = self.steps.pop(0) if self.steps else self.default
        assert low <= value < high, f"scripted step {value} outside [{low}, {high})"
        return value


@pytest.fixture(autouse=True)
def reset_structlog():
    """Restore structlog defaults after tests that configure logging."""
    yield
    structlog.reset_defaults()


@pytest.fixture
def scripted_rng() -> Callable[..., ScriptedGenerator]:
    """Factory for scripted generators: ``scripted_rng([500, -500])``."""
    return ScriptedGenerator


@pytest.fixture
def seeded_rng() -> np.random.Generator:
    """Deterministic numpy generator."""
    return np.random.default_rng(12345)


@pytest.fixture
def pricing() -> PricingParams:
    return PricingParams()


@pytest.fixture
def recorder() -> RecordingNotifier:
    return RecordingNotifier()


@pytest.fixture
def ledger(recorder: RecordingNotifier) -> Ledger:
    """Ledger with a 1000 cash balance that records its confirmations."""
    return Ledger(1000.0, notifier=recorder)


@pytest.fixture
def instruments(pricing: PricingParams) -> list:
    """Small mixed instrument set."""
    return [
        AlertInstrument("AAPL", 150.0, pricing),
        Instrument("GOOGL", 2800.0, pricing),
        Instrument("MSFT", 300.0, pricing),
    ]


@pytest.fixture
def instrument_specs() -> tuple:
    return (
        InstrumentSpec(symbol="AAPL", price=150.0, alerts=True),
        InstrumentSpec(symbol="GOOGL", price=2800.0),
        InstrumentSpec(symbol="MSFT", price=300.0),
    )


class FailingNotifier(BaseNotifier):
    """Sink whose alert handler raises."""

    def __init__(self):
        super().__init__("failing")

    def on_alert(self, event) -> None:
        raise RuntimeError(f"alert sink unavailable for {event.symbol}")

    def on_trade(self, confirmation) -> None:
        pass


@pytest.fixture
def failing_notifier() -> FailingNotifier:
    return FailingNotifier()
