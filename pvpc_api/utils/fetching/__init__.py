"""
Fetching package for tariff API clients.
"""

from .ree_fetcher import ReePriceFetcher

__all__ = ['ReePriceFetcher']
