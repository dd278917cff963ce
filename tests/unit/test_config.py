"""Unit tests for configuration management."""

import pytest
from pathlib import Path

from market_sim.config.defaults import InstrumentSpec, PricingParams, get_default_config
from market_sim.config.loader import DEFAULT_CONFIG_PATH, ConfigLoader
from market_sim.config.validation import ConfigValidator
from market_sim.errors import ConfigurationError


@pytest.fixture
def write_config(tmp_path):
    """Write YAML text to a temporary config file and return its path."""
    def _write(text: str) -> Path:
        path = tmp_path / "market.yaml"
        path.write_text(text)
        return path
    return _write


class TestDefaultConfig:
    """Test suite for default configuration."""

    def test_default_config_creation(self) -> None:
        config = get_default_config()

        assert config.portfolio.initial_balance == 10000.0
        assert config.simulation.duration_ticks == 10
        assert config.simulation.tick_interval_seconds == 1.0
        assert config.pricing.price_floor == 1.0
        assert [spec.symbol for spec in config.instruments] == ["AAPL", "GOOGL", "MSFT", "AMZN", "TSLA"]

    def test_max_steps(self) -> None:
        """Test the default walk has 500 steps of 0.01 points each side of zero."""
        assert PricingParams().max_steps == 500


class TestConfigLoader:
    """Test suite for configuration loader."""

    def test_default_path(self) -> None:
        loader = ConfigLoader.create()

        assert loader.config_path == DEFAULT_CONFIG_PATH

    def test_bundled_config_is_valid(self) -> None:
        """Test that the shipped config/market.yaml loads cleanly."""
        config = ConfigLoader.create().load()

        assert len(config.instruments) == 5
        assert config.instruments[0] == InstrumentSpec(symbol="AAPL", price=150.0, alerts=True)

    def test_missing_optional_file_uses_defaults(self, tmp_path) -> None:
        loader = ConfigLoader(config_path=tmp_path / "absent.yaml", defaults=get_default_config())

        assert loader.required is False
        assert loader.load() == get_default_config()

    def test_missing_explicit_file_raises(self, tmp_path) -> None:
        """Test that a path given by the caller must exist."""
        loader = ConfigLoader.create(tmp_path / "absent.yaml")

        assert loader.required is True
        with pytest.raises(ConfigurationError) as exc_info:
            loader.load()

        assert "not found" in str(exc_info.value)
        assert exc_info.value.context["path"] == str(tmp_path / "absent.yaml")

    def test_default_path_is_optional(self) -> None:
        assert ConfigLoader.create().required is False

    def test_empty_file_uses_defaults(self, write_config) -> None:
        loader = ConfigLoader.create(write_config(""))

        assert loader.load() == get_default_config()

    def test_file_overrides_defaults(self, write_config) -> None:
        path = write_config(
            "portfolio:\n"
            "  initial_balance: 2500.0\n"
            "instruments:\n"
            "  - symbol: NVDA\n"
            "    price: 450.0\n"
            "    alerts: true\n"
        )

        config = ConfigLoader.create(path).load()

        assert config.portfolio.initial_balance == 2500.0
        assert config.simulation.duration_ticks == 10
        assert config.instruments == (InstrumentSpec(symbol="NVDA", price=450.0, alerts=True),)

    def test_overrides_beat_file(self, write_config) -> None:
        path = write_config("simulation:\n  duration_ticks: 3\n  tick_interval_seconds: 0.5\n")

        config = ConfigLoader.create(path).load({"simulation": {"duration_ticks": 7}})

        assert config.simulation.duration_ticks == 7
        assert config.simulation.tick_interval_seconds == 0.5

    def test_invalid_values_raise(self, write_config) -> None:
        path = write_config("portfolio:\n  initial_balance: -5\n")

        with pytest.raises(ConfigurationError) as exc_info:
            ConfigLoader.create(path).load()

        assert exc_info.value.errors[0].field == "initial_balance"
        assert exc_info.value.recoverable is False

    def test_non_mapping_file_raises(self, write_config) -> None:
        path = write_config("- just\n- a list\n")

        with pytest.raises(ConfigurationError):
            ConfigLoader.create(path).load()

    def test_merge_config_keeps_unrelated_defaults(self, tmp_path) -> None:
        loader = ConfigLoader(config_path=tmp_path / "absent.yaml", defaults=get_default_config())

        merged = loader.merge_config({"pricing": {"price_floor": 2.0}})

        assert merged["pricing"]["price_floor"] == 2.0
        assert merged["pricing"]["max_step_pct"] == 0.05
        assert merged["instruments"][0]["symbol"] == "AAPL"


class TestConfigValidator:
    """Test suite for configuration validation."""

    def test_valid_defaults(self, tmp_path) -> None:
        loader = ConfigLoader(config_path=tmp_path / "absent.yaml", defaults=get_default_config())
        merged = loader.merge_config()

        assert ConfigValidator.validate_config(merged) == []

    def test_unknown_parameter(self) -> None:
        errors = ConfigValidator.validate_portfolio_params({"initial_cash": 5})

        assert len(errors) == 1
        assert errors[0].field == "portfolio.initial_cash"
        assert errors[0].message == "Unknown parameter"

    @pytest.mark.parametrize("params,field", [
        ({"duration_ticks": -1}, "duration_ticks"),
        ({"duration_ticks": 2.5}, "duration_ticks"),
        ({"tick_interval_seconds": -0.1}, "tick_interval_seconds"),
    ])
    def test_invalid_simulation_params(self, params, field) -> None:
        errors = ConfigValidator.validate_simulation_params(params)

        assert [e.field for e in errors] == [field]

    @pytest.mark.parametrize("params,field", [
        ({"max_step_pct": 0}, "max_step_pct"),
        ({"max_step_pct": 1.5}, "max_step_pct"),
        ({"step_granularity": -0.01}, "step_granularity"),
        ({"max_step_pct": 0.01, "step_granularity": 0.05}, "step_granularity"),
        ({"price_floor": 0}, "price_floor"),
    ])
    def test_invalid_pricing_params(self, params, field) -> None:
        errors = ConfigValidator.validate_pricing_params(params)

        assert [e.field for e in errors] == [field]

    def test_duplicate_symbols(self) -> None:
        errors = ConfigValidator.validate_instruments([
            {"symbol": "AAPL", "price": 150.0},
            {"symbol": "aapl", "price": 151.0},
        ])

        assert [e.message for e in errors] == ["Duplicate symbol"]

    def test_instrument_fields(self) -> None:
        errors = ConfigValidator.validate_instruments([
            {"symbol": "", "price": 150.0},
            {"symbol": "MSFT", "price": -1},
            {"symbol": "TSLA", "price": 700.0, "alerts": "yes"},
        ])

        assert [e.field for e in errors] == [
            "instruments[0].symbol",
            "instruments[1].price",
            "instruments[2].alerts",
        ]

    def test_price_below_floor(self) -> None:
        errors = ConfigValidator.validate_instruments([{"symbol": "X", "price": 0.5}], price_floor=1.0)

        assert errors[0].message == "Must not be below price_floor"

    def test_empty_instrument_list(self) -> None:
        errors = ConfigValidator.validate_instruments([])

        assert errors[0].field == "instruments"

    def test_section_must_be_mapping(self) -> None:
        errors = ConfigValidator.validate_config({"portfolio": 5})

        assert errors[0].field == "portfolio"
        assert errors[0].message == "Must be a mapping"
