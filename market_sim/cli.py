"""
Interactive command line front end.

Parses startup options, runs the timed simulation phase and then serves
the trading menu until the user exits.
"""

import argparse
import math
import sys
from pathlib import Path
from typing import Any, Callable, Optional, TextIO

import structlog

from . import __version__
from .config.loader import ConfigLoader
from .errors import ConfigurationError, TradingError
from .logging.config import configure_logging
from .notify.console import ConsoleNotifier
from .portfolio.report import PortfolioRow, PortfolioSummary
from .session import MarketSession

logger = structlog.get_logger(__name__)

MENU = """
==== Market Simulator ====
1. Buy
2. Sell
3. Show Portfolio
4. Show Prices
5. Update Prices
6. Set Price Alert
7. Exit"""

InputFn = Callable[[str], str]


class MenuLoop:
    """Text menu over a ``MarketSession``. Input and output are injectable."""

    def __init__(self, session: MarketSession, input_fn: InputFn = input,
                 stream: Optional[TextIO] = None):
        self.session = session
        self.input_fn = input_fn
        self.stream = stream or sys.stdout
        self.actions: dict[str, Callable[[], None]] = {
            "1": self.buy,
            "2": self.sell,
            "3": self.show_portfolio,
            "4": self.show_prices,
            "5": self.update_prices,
            "6": self.set_alert,
        }

    def run(self) -> None:
        """Serve menu choices until Exit or end of input."""
        while True:
            self.write(MENU)
            try:
                choice = self.input_fn("Enter your choice: ").strip()
            except EOFError:
                break

            if choice == "7":
                break

            action = self.actions.get(choice)
            if action is None:
                self.write("Invalid choice. Please try again.")
                continue

            try:
                action()
            except EOFError:
                break
            except TradingError as e:
                logger.info("Operation rejected", error=str(e), error_type=type(e).__name__)
                self.write(f"Error: {e}")

        self.write("Goodbye!")

    def buy(self) -> None:
        symbol = self.prompt_symbol()
        quantity = self.prompt_int("Enter quantity: ")
        self.session.buy(symbol, quantity)

    def sell(self) -> None:
        symbol = self.prompt_symbol()
        quantity = self.prompt_int("Enter quantity: ")
        self.session.sell(symbol, quantity)

    def set_alert(self) -> None:
        self.write("Alerts available for: " + ", ".join(self.session.alert_symbols()))
        symbol = self.prompt_symbol()
        threshold = self.prompt_float("Enter alert price: ")
        self.session.set_alert(symbol, threshold)
        self.write(f"Alert set for {symbol.upper()} at ${threshold:.2f}")

    def show_prices(self) -> None:
        self.write("Current prices:")
        for symbol, price in self.session.prices():
            self.write(f"  {symbol:<8} ${price:>10.2f}")

    def update_prices(self) -> None:
        self.session.update_prices()
        self.write("Prices updated.")
        self.show_prices()

    def show_portfolio(self) -> None:
        rows, summary = self.session.portfolio()
        self.write(format_portfolio(rows, summary))

    def prompt_symbol(self) -> str:
        while True:
            symbol = self.input_fn("Enter symbol: ").strip()
            if symbol:
                return symbol
            self.write("Symbol cannot be empty.")

    def prompt_int(self, prompt: str) -> int:
        while True:
            raw = self.input_fn(prompt).strip()
            try:
                return int(raw)
            except ValueError:
                self.write("Please enter a whole number.")

    def prompt_float(self, prompt: str) -> float:
        while True:
            raw = self.input_fn(prompt).strip()
            try:
                value = float(raw)
            except ValueError:
                self.write("Please enter a number.")
                continue
            if math.isfinite(value):
                return value
            self.write("Please enter a finite number.")

    def write(self, text: str) -> None:
        print(text, file=self.stream, flush=True)


def format_portfolio(rows: list[PortfolioRow], summary: PortfolioSummary) -> str:
    """Render portfolio rows and totals as a text table."""
    lines = [f"Cash balance: ${summary.cash_balance:.2f}"]
    if not rows:
        lines.append("No open positions.")
        return "\n".join(lines)

    lines.append(
        f"{'Symbol':<8}{'Shares':>8}{'Price':>12}{'Invested':>14}{'Value':>14}{'P/L':>14}"
    )
    for row in rows:
        lines.append(
            f"{row.symbol:<8}{row.shares:>8}{row.current_price:>12.2f}"
            f"{row.total_investment:>14.2f}{row.current_value:>14.2f}{row.profit_or_loss:>14.2f}"
        )
    lines.append(
        f"{'Total':<8}{'':>8}{'':>12}{summary.total_investment:>14.2f}"
        f"{summary.total_value:>14.2f}{summary.total_profit_or_loss:>14.2f}"
    )
    lines.append(f"Net worth: ${summary.net_worth:.2f}")
    return "\n".join(lines)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="market-sim",
        description="Simulate a small stock market and trade against it.",
    )
    parser.add_argument("--config", type=Path, default=None,
                        help="YAML configuration file, which must exist (default: config/market.yaml if present)")
    parser.add_argument("--seed", type=int, default=None,
                        help="Fixed random seed (default: wall-clock time)")
    parser.add_argument("--ticks", type=int, default=None,
                        help="Ticks in the opening simulation phase")
    parser.add_argument("--interval", type=float, default=None,
                        help="Seconds between simulation ticks")
    parser.add_argument("--balance", type=float, default=None,
                        help="Initial cash balance")
    parser.add_argument("--no-simulation", action="store_true",
                        help="Skip the opening simulation phase")
    parser.add_argument("--log-level", default="WARNING",
                        choices=["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"])
    parser.add_argument("--json-logs", action="store_true",
                        help="Emit logs as JSON")
    parser.add_argument("--json-output", action="store_true",
                        help="Print alerts and trade confirmations as JSON lines")
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    return parser


def _overrides_from_args(args: argparse.Namespace) -> dict[str, Any]:
    overrides: dict[str, Any] = {}
    if args.balance is not None:
        overrides.setdefault("portfolio", {})["initial_balance"] = args.balance
    if args.ticks is not None:
        overrides.setdefault("simulation", {})["duration_ticks"] = args.ticks
    if args.interval is not None:
        overrides.setdefault("simulation", {})["tick_interval_seconds"] = args.interval
    return overrides


def main(argv: Optional[list[str]] = None, input_fn: InputFn = input,
         stream: Optional[TextIO] = None) -> int:
    args = build_parser().parse_args(argv)
    stream = stream or sys.stdout

    configure_logging(level=args.log_level, format_json=args.json_logs, stream=sys.stderr)

    try:
        config = ConfigLoader.create(args.config).load(_overrides_from_args(args))
    except ConfigurationError as e:
        print(f"Configuration error: {e}", file=sys.stderr)
        return 1

    notifier = ConsoleNotifier(format="json" if args.json_output else "pretty", stream=stream)
    session = MarketSession.create(
        config,
        notifier=notifier,
        seed=args.seed,
    )
    try:
        if not args.no_simulation and config.simulation.duration_ticks > 0:
            print(
                f"Simulating {config.simulation.duration_ticks} ticks, "
                f"{config.simulation.tick_interval_seconds:g}s apart...",
                file=stream, flush=True,
            )
            session.run_simulation()
        MenuLoop(session, input_fn=input_fn, stream=stream).run()
    except KeyboardInterrupt:
        print("\nInterrupted.", file=stream)
    finally:
        session.close()
        logger.info("Session ended", **notifier.get_stats())

    return 0


if __name__ == "__main__":
    raise SystemExit(main())
