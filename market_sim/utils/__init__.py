"""
Utility functions module.

Shared helpers for timestamps on trade confirmations, alert events and
simulation timing.
"""
