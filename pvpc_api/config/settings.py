"""
Application configuration settings.
Values are read from the environment (and an optional .env file).
"""

import os
from typing import List
from pathlib import Path
from dotenv import load_dotenv
from pydantic import BaseModel


DEFAULT_REE_API_URL = "https://api.esios.ree.es/archives/70/download_json?locale=es"


def _env_list(name: str, default: List[str]) -> List[str]:
    """Read a comma separated list from the environment."""
    raw = os.getenv(name)
    if not raw:
        return default
    return [item.strip() for item in raw.split(",") if item.strip()]


class DatabaseConfig(BaseModel):
    """Database configuration settings."""

    database_path: str = "db/prices.db"  # Relative to pvpc_api directory
    connection_timeout: int = 30


class ReeApiConfig(BaseModel):
    """Tariff API (REE PVPC) settings."""

    url: str = DEFAULT_REE_API_URL
    timeout_seconds: float = 30.0


class CacheConfig(BaseModel):
    """Time-to-live of cached derived values, in seconds."""

    today_ttl_seconds: int = 60 * 60 * 6
    tomorrow_ttl_seconds: int = 60 * 60 * 12
    dashboard_ttl_seconds: int = 60 * 60


class LocaleConfig(BaseModel):
    """Market time zone and weekday naming."""

    timezone: str = "Europe/Madrid"
    weekday_locale: str = "en"


class APIConfig(BaseModel):
    """API configuration settings."""

    title: str = "PVPC Spot Price API"
    description: str = "REST API serving day-ahead PVPC electricity prices, averages and usage recommendations"
    version: str = "1.0.0"
    host: str = "0.0.0.0"
    port: int = 8000
    debug: bool = False
    reload: bool = False
    log_level: str = "INFO"

    # CORS settings
    allow_origins: list = ["*"]
    allow_credentials: bool = True
    allow_methods: list = ["*"]
    allow_headers: list = ["*"]


class ApplicationConfig:
    """Main application configuration."""

    def __init__(
        self,
        database: DatabaseConfig = None,
        api: APIConfig = None,
        ree_api: ReeApiConfig = None,
        cache: CacheConfig = None,
        locale: LocaleConfig = None,
    ):
        self.database = database or DatabaseConfig()
        self.api = api or APIConfig()
        self.ree_api = ree_api or ReeApiConfig()
        self.cache = cache or CacheConfig()
        self.locale = locale or LocaleConfig()

    @classmethod
    def from_env(cls) -> "ApplicationConfig":
        """Build the configuration from environment variables."""
        env_path = Path(__file__).parent.parent / '.env'
        load_dotenv(env_path)
        load_dotenv()

        api_defaults = APIConfig()
        return cls(
            database=DatabaseConfig(
                database_path=os.getenv(
                    "PVPC_DATABASE_PATH", DatabaseConfig().database_path),
            ),
            api=APIConfig(
                host=os.getenv("PVPC_HOST", api_defaults.host),
                port=int(os.getenv("PVPC_PORT", api_defaults.port)),
                log_level=os.getenv(
                    "PVPC_LOG_LEVEL", api_defaults.log_level).upper(),
                allow_origins=_env_list(
                    "PVPC_ALLOW_ORIGINS", api_defaults.allow_origins),
            ),
            ree_api=ReeApiConfig(
                url=os.getenv("PVPC_REE_API_URL", DEFAULT_REE_API_URL),
                timeout_seconds=float(
                    os.getenv("PVPC_REE_TIMEOUT", ReeApiConfig().timeout_seconds)),
            ),
            locale=LocaleConfig(
                timezone=os.getenv("PVPC_TIMEZONE", LocaleConfig().timezone),
                weekday_locale=os.getenv(
                    "PVPC_WEEKDAY_LOCALE", LocaleConfig().weekday_locale),
            ),
        )

    @property
    def database_path(self) -> str:
        """Get database path."""
        if os.path.isabs(self.database.database_path):
            return self.database.database_path
        # Relative paths resolve against the pvpc_api directory
        config_dir = os.path.dirname(os.path.abspath(__file__))
        package_dir = os.path.dirname(config_dir)
        return os.path.join(package_dir, self.database.database_path)

    @property
    def is_debug(self) -> bool:
        """Check if debug mode is enabled."""
        return self.api.debug
