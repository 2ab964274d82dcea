"""
Wiring of the application's collaborators.

Every request handler reaches the services through the container stored on
``app.state``; tests build their own container around a temporary database
and a fixed clock.
"""

import logging
from dataclasses import dataclass
from typing import Optional

from .config import ApplicationConfig, DatabaseManager
from .repositories import PriceRepository
from .services import AverageService, DashboardService, PriceService
from .utils import Clock, ReePriceFetcher, TTLCache


logger = logging.getLogger(__name__)


@dataclass
class AppContainer:
    config: ApplicationConfig
    db_manager: DatabaseManager
    repository: PriceRepository
    cache: TTLCache
    clock: Clock
    fetcher: Optional[ReePriceFetcher] = None

    def price_service(self) -> PriceService:
        return PriceService(
            self.repository,
            self.cache,
            clock=self.clock,
            fetcher=self.fetcher,
            cache_config=self.config.cache,
        )

    def average_service(self) -> AverageService:
        return AverageService(
            self.repository,
            clock=self.clock,
            weekday_locale=self.config.locale.weekday_locale,
        )

    def dashboard_service(self) -> DashboardService:
        return DashboardService(
            self.price_service(),
            self.cache,
            clock=self.clock,
            cache_config=self.config.cache,
        )

    def close(self) -> None:
        if self.fetcher is not None:
            self.fetcher.close()


def build_container(
    config: Optional[ApplicationConfig] = None,
    clock: Optional[Clock] = None,
    fetcher: Optional[ReePriceFetcher] = None,
) -> AppContainer:
    config = config or ApplicationConfig.from_env()
    clock = clock or Clock(config.locale.timezone)

    db_manager = DatabaseManager(
        config.database_path, timeout=config.database.connection_timeout)
    db_manager.initialize_schema()
    logger.info(f"🗄️ Price store ready at {config.database_path}")

    if fetcher is None:
        fetcher = ReePriceFetcher(
            config.ree_api.url, timeout_seconds=config.ree_api.timeout_seconds)

    return AppContainer(
        config=config,
        db_manager=db_manager,
        repository=PriceRepository(db_manager),
        cache=TTLCache(clock),
        clock=clock,
        fetcher=fetcher,
    )
