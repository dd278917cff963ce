"""Tests for the error hierarchy and all-or-nothing failure behaviour."""

import pytest

from market_sim.errors import (
    AlertNotSupportedError,
    ConfigurationError,
    InsufficientFundsError,
    InsufficientSharesError,
    InvalidOrderError,
    SessionClosedError,
    SymbolNotFoundError,
    SystemFailureError,
    TradingError,
)


class TestErrorClassification:
    """Test recoverable versus unrecoverable classification."""

    @pytest.mark.parametrize("error_cls", [
        InsufficientFundsError,
        InsufficientSharesError,
        SymbolNotFoundError,
        InvalidOrderError,
        AlertNotSupportedError,
    ])
    def test_trading_errors_are_recoverable(self, error_cls):
        error = error_cls("rejected")

        assert isinstance(error, TradingError)
        assert error.recoverable is True
        assert error.context == {}

    @pytest.mark.parametrize("error_cls", [ConfigurationError, SessionClosedError])
    def test_system_failures_are_unrecoverable(self, error_cls):
        error = error_cls("failed")

        assert isinstance(error, SystemFailureError)
        assert not isinstance(error, TradingError)
        assert error.recoverable is False


class TestErrorContext:
    """Test the structured fields carried by each error."""

    def test_insufficient_funds_fields(self):
        error = InsufficientFundsError(
            "no cash", symbol="GOOGL", required=8400.0, available=1000.0,
            context={"quantity": 3}
        )

        assert error.symbol == "GOOGL"
        assert error.required == 8400.0
        assert error.available == 1000.0
        assert error.context == {"quantity": 3}
        assert str(error) == "no cash"

    def test_insufficient_shares_fields(self):
        error = InsufficientSharesError("no shares", symbol="AAPL", requested=5, held=2)

        assert (error.symbol, error.requested, error.held) == ("AAPL", 5, 2)

    def test_invalid_order_fields(self):
        error = InvalidOrderError("bad", field="quantity", value=0)

        assert error.field == "quantity"
        assert error.value == 0

    def test_configuration_error_keeps_validation_errors(self):
        error = ConfigurationError("invalid", errors=["a", "b"])

        assert error.errors == ["a", "b"]


class TestAllOrNothing:
    """Test that rejected trades leave the ledger untouched."""

    def test_failed_buy_then_failed_sell(self, ledger):
        ledger.buy("AAPL", 100.0, 4)
        snapshot_before = (ledger.balance, ledger.holdings(), ledger.cost_basis())

        with pytest.raises(InsufficientFundsError):
            ledger.buy("AAPL", 100.0, 7)
        with pytest.raises(InsufficientSharesError):
            ledger.sell("AAPL", 100.0, 5)
        with pytest.raises(InvalidOrderError):
            ledger.sell("AAPL", 100.0, -1)

        assert (ledger.balance, ledger.holdings(), ledger.cost_basis()) == snapshot_before
