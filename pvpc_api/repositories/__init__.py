"""
Repository package for data access layer.
"""

from .base_repository import BaseRepository
from .price_repository import PriceRepository

__all__ = [
    "BaseRepository",
    "PriceRepository",
]
