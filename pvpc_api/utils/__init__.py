"""
Utilities package: tariff API client, TTL cache and clock.
"""

from .cache_utils import TTLCache
from .clock import Clock, FixedClock
from .fetching import ReePriceFetcher

__all__ = ['TTLCache', 'Clock', 'FixedClock', 'ReePriceFetcher']
