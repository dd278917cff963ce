"""
Notification sinks.

Receive fired price alerts and trade confirmations from the core and
present them to the user or collect them for inspection.
"""
from .base import BaseNotifier, RecordingNotifier
from .console import ConsoleNotifier

__all__ = ["BaseNotifier", "ConsoleNotifier", "RecordingNotifier"]
