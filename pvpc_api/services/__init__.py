"""
Services package for business logic layer.
Imports all services for easy access.
"""

# Base service
from .base_service import BaseService

# Individual services
from .price_service import (
    PriceService,
    cache_key,
    PRICE_CACHE_KEYS,
    TODAY_CACHE_KEY,
    TOMORROW_CACHE_KEY,
    DASHBOARD_CACHE_KEY,
)
from .average_service import AverageService, WEEKDAY_NAMES
from .dashboard_service import DashboardService


__all__ = [
    # Base service
    "BaseService",

    # Individual services
    "PriceService",
    "AverageService",
    "DashboardService",

    # Cache keys and tables
    "cache_key",
    "PRICE_CACHE_KEYS",
    "TODAY_CACHE_KEY",
    "TOMORROW_CACHE_KEY",
    "DASHBOARD_CACHE_KEY",
    "WEEKDAY_NAMES",
]
