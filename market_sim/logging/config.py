"""
Centralized logging configuration for the market simulator.

All components log through structlog so that price updates, alerts and
trades share one structured format. The interactive CLI routes logs to
stderr to keep them apart from the menu output.
"""
import logging
import sys
from typing import Any, Optional, TextIO

import structlog
from structlog.types import FilteringBoundLogger, Processor


def _event_processors(include_timestamp: bool) -> list[Processor]:
    """Enrichment applied to every event before rendering."""
    processors: list[Processor] = [
        structlog.stdlib.filter_by_level,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.add_log_level,
        structlog.stdlib.PositionalArgumentsFormatter(),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
        structlog.processors.UnicodeDecoder(),
    ]
    if include_timestamp:
        processors.append(structlog.processors.TimeStamper(fmt="iso"))
    return processors


def _renderer(format_json: bool) -> Processor:
    if format_json:
        return structlog.processors.JSONRenderer()
    # logs usually share a terminal with the menu
    return structlog.dev.ConsoleRenderer(colors=False)


def configure_logging(
    level: str = "INFO",
    format_json: bool = False,
    include_timestamp: bool = True,
    stream: Optional[TextIO] = None
) -> None:
    """
    Configure structlog for the entire application.

    Safe to call more than once: the stdlib root handler is replaced and
    loggers are not cached, so module-level loggers pick up the new chain.

    Args:
        level: Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        format_json: One JSON object per line instead of key=value text
        include_timestamp: Add an ISO-8601 ``timestamp`` field
        stream: Output stream, stdout when not given
    """
    logging.basicConfig(
        level=getattr(logging, level.upper()),
        stream=stream or sys.stdout,
        format="%(message)s",
        force=True,
    )

    structlog.configure(
        processors=_event_processors(include_timestamp) + [_renderer(format_json)],
        wrapper_class=structlog.stdlib.BoundLogger,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=False,
    )


def get_market_logger(name: str) -> FilteringBoundLogger:
    """Logger bound to the price/alert subsystem."""
    return structlog.get_logger(name, subsystem="market")


def get_ledger_logger(name: str) -> FilteringBoundLogger:
    """Logger bound to the portfolio ledger, with audit trail marking."""
    return structlog.get_logger(name, subsystem="ledger", audit_trail=True)


def log_trade(
    logger: FilteringBoundLogger,
    side: str,
    symbol: str,
    quantity: int,
    price: float,
    balance_after: float,
    context: Optional[dict[str, Any]] = None
) -> None:
    """
    Log an executed trade with standardized fields.

    Args:
        logger: Structlog logger instance
        side: "buy" or "sell"
        symbol: Instrument symbol
        quantity: Shares traded
        price: Execution price per share
        balance_after: Cash balance after the trade
        context: Additional context data (realized P&L for sells)
    """
    bound_logger = logger.bind(
        side=side,
        symbol=symbol,
        quantity=quantity,
        price=price,
        balance_after=balance_after,
    )

    if context:
        bound_logger = bound_logger.bind(context=context)

    bound_logger.info("Trade executed")


def log_alert(
    logger: FilteringBoundLogger,
    symbol: str,
    threshold: float,
    price: float
) -> None:
    """Log a fired price alert."""
    logger.bind(
        symbol=symbol,
        threshold=threshold,
        price=price,
    ).warning("Price alert reached")


def log_position_transition(
    logger: FilteringBoundLogger,
    symbol: str,
    from_state: str,
    to_state: str,
    trigger: str,
    context: Optional[dict[str, Any]] = None
) -> None:
    """
    Log a position state transition (flat/open) with standardized format.

    Args:
        logger: Structlog logger instance
        symbol: Instrument symbol
        from_state: Current position state
        to_state: Target position state
        trigger: Trade side that caused the transition
        context: Additional context data
    """
    bound_logger = logger.bind(
        symbol=symbol,
        from_state=from_state,
        to_state=to_state,
        trigger=trigger,
    )

    if context:
        bound_logger = bound_logger.bind(context=context)

    bound_logger.info("Position transition")
