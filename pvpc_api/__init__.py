"""
PVPC Spot Price API: fetches, stores and serves Spanish day-ahead electricity prices.
"""

__version__ = "1.0.0"
