"""
Configuration package for application settings.
"""

from .settings import (
    ApplicationConfig,
    APIConfig,
    CacheConfig,
    DatabaseConfig,
    LocaleConfig,
    ReeApiConfig,
)
from .database import DatabaseManager

__all__ = [
    "ApplicationConfig",
    "APIConfig",
    "CacheConfig",
    "DatabaseConfig",
    "LocaleConfig",
    "ReeApiConfig",
    "DatabaseManager",
]
