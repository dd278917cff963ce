"""Entry point for ``python -m market_sim``."""

from .cli import main

raise SystemExit(main())
