"""
Market module.

Instruments with random-walk prices, one-shot price alerts and the engine
that advances them once or on a timer.
"""
from .engine import PriceEngine
from .events import AlertEvent
from .instruments import AlertInstrument, Instrument, PricedInstrument, build_instruments
from .random_source import create_generator

__all__ = [
    "AlertEvent",
    "AlertInstrument",
    "Instrument",
    "PriceEngine",
    "PricedInstrument",
    "build_instruments",
    "create_generator",
]
