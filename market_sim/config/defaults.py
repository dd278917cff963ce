"""Default configuration parameters for the market simulator."""

from dataclasses import dataclass, field


@dataclass(frozen=True)
class PortfolioParams:
    """Portfolio ledger parameters."""
    initial_balance: float = 10000.0


@dataclass(frozen=True)
class SimulationParams:
    """Timed simulation phase parameters."""
    duration_ticks: int = 10
    tick_interval_seconds: float = 1.0


@dataclass(frozen=True)
class PricingParams:
    """Random walk parameters."""
    max_step_pct: float = 0.05                       # Largest move per advance
    step_granularity: float = 0.0001                 # 0.01 percentage points
    price_floor: float = 1.0                         # Minimum price after an advance

    @property
    def max_steps(self) -> int:
        """Number of granularity steps on each side of zero."""
        return int(round(self.max_step_pct / self.step_granularity))


@dataclass(frozen=True)
class InstrumentSpec:
    """Startup definition of one tradable instrument."""
    symbol: str
    price: float
    alerts: bool = False


DEFAULT_INSTRUMENTS: tuple[InstrumentSpec, ...] = (
    InstrumentSpec(symbol="AAPL", price=150.0, alerts=True),
    InstrumentSpec(symbol="GOOGL", price=2800.0),
    InstrumentSpec(symbol="MSFT", price=300.0),
    InstrumentSpec(symbol="AMZN", price=3300.0),
    InstrumentSpec(symbol="TSLA", price=700.0, alerts=True),
)


@dataclass(frozen=True)
class DefaultConfig:
    """Complete configuration."""
    portfolio: PortfolioParams
    simulation: SimulationParams
    pricing: PricingParams
    instruments: tuple[InstrumentSpec, ...] = field(default=DEFAULT_INSTRUMENTS)


def get_default_config() -> DefaultConfig:
    """Get the default configuration instance."""
    return DefaultConfig(
        portfolio=PortfolioParams(),
        simulation=SimulationParams(),
        pricing=PricingParams(),
        instruments=DEFAULT_INSTRUMENTS,
    )
