#!/usr/bin/env python3
"""
Basic Usage Example - Market Simulator

This script drives the simulator without the interactive menu. It shows how to:
- Create a session with a fixed seed
- Run the timed simulation phase
- Arm a price alert
- Buy and sell at the current quoted price
- Read the portfolio report

Run: python examples/basic_usage.py
"""

from market_sim.cli import format_portfolio
from market_sim.errors import TradingError
from market_sim.logging import configure_logging
from market_sim.notify import ConsoleNotifier
from market_sim.session import MarketSession


def print_prices(session: MarketSession) -> None:
    """Print the current price of every instrument."""
    for symbol, price in session.prices():
        print(f"   {symbol:<6} ${price:>9.2f}")
    print()


def main():
    """Main demonstration function."""
    print("📈 Market Simulator - Basic Usage Demo")
    print("=" * 60)

    configure_logging(level="WARNING")

    print("1. Creating a seeded session...")
    with MarketSession.create(notifier=ConsoleNotifier(), seed=2024) as session:
        print_prices(session)

        print("2. Running a short simulation (5 ticks, no delay)...")
        session.run_simulation(duration_ticks=5, tick_interval=0.0)
        print_prices(session)

        print("3. Arming an alert 2% above the current AAPL price...")
        aapl_price = session.find_instrument("AAPL").price
        session.set_alert("AAPL", round(aapl_price * 1.02, 2))
        print()

        print("4. Buying 10 AAPL and 5 MSFT...")
        session.buy("AAPL", 10)
        session.buy("MSFT", 5)
        print()

        print("5. Trying to buy more GOOGL than the balance allows...")
        try:
            session.buy("GOOGL", 100)
        except TradingError as e:
            print(f"   Rejected: {e}")
        print()

        print("6. Advancing prices 20 times...")
        for _ in range(20):
            session.update_prices()
        print_prices(session)

        print("7. Portfolio report:")
        rows, summary = session.portfolio()
        print(format_portfolio(rows, summary))
        print()

        print("8. Closing the AAPL position...")
        session.sell("AAPL", 10)
        print()

        rows, summary = session.portfolio()
        print(format_portfolio(rows, summary))

    print("\n✅ Demo completed")


if __name__ == "__main__":
    main()
