"""
Market Sim - Single-Process Market Simulator

Generates pseudo-random price movements for a fixed set of instruments,
lets a user trade positions against a cash balance, tracks realized and
unrealized profit/loss and raises one-shot price alerts.
"""

__version__ = "0.1.0"
__author__ = "Market Sim Team"
