"""Tests for logging configuration and the standardized log helpers."""

import json
from io import StringIO
from unittest.mock import Mock

import structlog

from market_sim.logging.config import (
    configure_logging, log_alert, log_position_transition, log_trade
)
from market_sim.market.engine import PriceEngine


class TestLogHelpers:
    """Test that helpers bind the standard fields."""

    def test_log_trade(self):
        logger = Mock()

        log_trade(logger, "buy", "AAPL", 5, 150.0, 250.0)

        logger.bind.assert_called_once_with(
            side="buy", symbol="AAPL", quantity=5, price=150.0, balance_after=250.0
        )
        logger.bind.return_value.info.assert_called_once_with("Trade executed")

    def test_log_trade_with_context(self):
        logger = Mock()
        bound = logger.bind.return_value

        log_trade(logger, "sell", "AAPL", 5, 160.0, 1050.0, context={"profit_loss": 50.0})

        bound.bind.assert_called_once_with(context={"profit_loss": 50.0})
        bound.bind.return_value.info.assert_called_once_with("Trade executed")

    def test_log_alert_is_warning(self):
        logger = Mock()

        log_alert(logger, "AAPL", 155.0, 156.0)

        logger.bind.assert_called_once_with(symbol="AAPL", threshold=155.0, price=156.0)
        logger.bind.return_value.warning.assert_called_once_with("Price alert reached")

    def test_log_position_transition(self):
        logger = Mock()

        log_position_transition(logger, "AAPL", "flat", "open", "buy")

        logger.bind.assert_called_once_with(
            symbol="AAPL", from_state="flat", to_state="open", trigger="buy"
        )
        logger.bind.return_value.info.assert_called_once_with("Position transition")


class TestConfigureLogging:
    """Test the structlog processor chain end to end."""

    def teardown_method(self):
        structlog.reset_defaults()

    def test_json_output(self):
        stream = StringIO()
        configure_logging(level="INFO", format_json=True, stream=stream)

        structlog.get_logger("market_sim.test").info("hello", symbol="AAPL")

        record = json.loads(stream.getvalue().strip().splitlines()[-1])
        assert record["event"] == "hello"
        assert record["symbol"] == "AAPL"
        assert record["level"] == "info"
        assert record["logger"] == "market_sim.test"
        assert "timestamp" in record

    def test_level_filtering(self):
        stream = StringIO()
        configure_logging(level="WARNING", format_json=True, stream=stream)

        structlog.get_logger("market_sim.test").info("quiet")

        assert stream.getvalue() == ""

    def test_console_output_without_colors(self):
        stream = StringIO()
        configure_logging(level="INFO", include_timestamp=False, stream=stream)

        structlog.get_logger("market_sim.test").info("hello", symbol="AAPL")

        output = stream.getvalue()
        assert "hello" in output
        assert "symbol=AAPL" in output
        assert "\x1b[" not in output

    def test_simulation_logs_elapsed_time(self, scripted_rng, instruments):
        stream = StringIO()
        configure_logging(level="INFO", format_json=True, stream=stream)

        PriceEngine(scripted_rng(), sleep=lambda _: None).run_simulation(instruments, 2, 0.0)

        records = [json.loads(line) for line in stream.getvalue().strip().splitlines()]
        finished = [r for r in records if r["event"] == "Simulation finished"]
        assert finished[0]["ticks"] == 2
        assert finished[0]["elapsed_seconds"] >= 0
        assert finished[0]["subsystem"] == "market"

    def test_ledger_logs_trades(self, ledger):
        stream = StringIO()
        configure_logging(level="INFO", format_json=True, include_timestamp=False, stream=stream)

        ledger.buy("AAPL", 150.0, 5)

        records = [json.loads(line) for line in stream.getvalue().strip().splitlines()]
        events = [r["event"] for r in records]
        assert events == ["Position transition", "Trade executed"]
        assert records[1]["subsystem"] == "ledger"
        assert records[1]["symbol"] == "AAPL"
