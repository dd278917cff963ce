#!/usr/bin/env python3
"""Configuration validation script."""

import sys
from pathlib import Path

# Add the project root to the Python path
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

from market_sim.config.loader import ConfigLoader
from market_sim.config.validation import ConfigValidator
from market_sim.errors import ConfigurationError


def main():
    """Main validation function."""
    config_path = Path(sys.argv[1]) if len(sys.argv) > 1 else None
    loader = ConfigLoader.create(config_path)

    print(f"🔍 Validating {loader.config_path}...")

    if not loader.config_path.exists() and not loader.required:
        print("⚠️  Default file not found, built-in defaults would be used")

    try:
        merged = loader.merge_config()
    except ConfigurationError as e:
        print(f"❌ {e}")
        sys.exit(1)

    errors = ConfigValidator.validate_config(merged)
    if errors:
        print(f"❌ Found {len(errors)} validation errors:")
        for error in errors:
            print(f"  • {error.field}: {error.message} (value: {error.value})")
        sys.exit(1)

    config = loader.load()
    print(f"✅ Configuration is valid")
    print(f"   Initial balance: ${config.portfolio.initial_balance:.2f}")
    print(f"   Simulation: {config.simulation.duration_ticks} ticks, "
          f"{config.simulation.tick_interval_seconds:g}s apart")
    for spec in config.instruments:
        alerts = " (alerts)" if spec.alerts else ""
        print(f"   {spec.symbol:<6} ${spec.price:>9.2f}{alerts}")
    sys.exit(0)


if __name__ == "__main__":
    main()
