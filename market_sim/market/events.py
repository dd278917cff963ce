"""Events emitted by the market layer."""

from dataclasses import dataclass, field
from datetime import datetime

from ..utils.time import utc_now


@dataclass(frozen=True)
class AlertEvent:
    """A price alert that fired during an advance."""
    symbol: str
    threshold: float
    price: float
    timestamp: datetime = field(default_factory=utc_now)
