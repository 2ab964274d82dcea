"""
Service for the price write path and the plain price reads.
"""

import sqlite3
import logging
import pandas as pd
from datetime import date, timedelta
from typing import Iterable, List, Optional

import pytz

from .base_service import BaseService
from ..config import CacheConfig
from ..exceptions import FetchError, InvalidInputError
from ..models import (
    DailyPriceStats, DayHealth, FetchBatch, FetchOutcome, PriceRecord,
    PriceTuple, SystemHealth,
)
from ..repositories import PriceRepository
from ..utils import Clock, ReePriceFetcher, TTLCache


TODAY_CACHE_KEY = "today_prices"
TOMORROW_CACHE_KEY = "tomorrow_prices"
DASHBOARD_CACHE_KEY = "dashboard_stats"

# Every key prefix derived from stored prices; dropped after each successful save
PRICE_CACHE_KEYS = (TODAY_CACHE_KEY, TOMORROW_CACHE_KEY, DASHBOARD_CACHE_KEY)


def cache_key(prefix: str, *scope) -> str:
    """Cache key scoped to the day (and hour) its value was computed for."""
    return ":".join([prefix, *(str(part) for part in scope)])


def records_from_frame(df: pd.DataFrame, is_fallback: bool = False) -> List[PriceRecord]:
    """Convert repository rows into PriceRecord models."""
    records = []
    for _, row in df.iterrows():
        records.append(PriceRecord(
            date=row['date'],
            hour=int(row['hour']),
            price=float(row['price']),
            is_fallback=is_fallback,
            timestamp=row['timestamp'],
        ))
    return records


class PriceService(BaseService):
    """Service for storing fetched prices and reading them back."""

    def __init__(
        self,
        repository: PriceRepository,
        cache: TTLCache,
        clock: Clock = None,
        fetcher: Optional[ReePriceFetcher] = None,
        cache_config: CacheConfig = None,
    ):
        """Initialize service with its collaborators."""
        super().__init__(repository, clock)
        self.cache = cache
        self.fetcher = fetcher
        self.cache_config = cache_config or CacheConfig()
        self.logger = logging.getLogger(__name__)

    def validate_input(self, **kwargs) -> bool:
        """Validate input parameters for price queries."""
        days = kwargs.get('days')

        if days is not None and (days < 1 or days > 365):
            raise InvalidInputError("Days must be between 1 and 365")

        return True

    # Write path

    def fetch_from_external_api(self) -> FetchBatch:
        """Download and parse the latest prices from the tariff API."""
        if self.fetcher is None:
            raise FetchError("No price fetcher configured")
        return self.fetcher.fetch()

    def save_prices(self, prices: Iterable[PriceTuple]) -> int:
        """
        Upsert each tuple by (date, hour).

        A tuple that fails to write is logged and skipped; the rest of the
        batch still goes through. When anything was written the derived
        cache entries are dropped before returning.

        Returns:
            int: Number of tuples written successfully.
        """
        prices = list(prices)
        self.logger.info(f"💾 Saving {len(prices)} prices")

        if prices:
            dates = sorted({price.date.isoformat() for price in prices})
            self.logger.info(f"📅 Dates in received data: {', '.join(dates)}")

        written_at = self.clock.now().astimezone(pytz.utc)
        saved_count = 0
        for price in prices:
            try:
                self.repository.upsert(price, written_at)
                saved_count += 1
            except (sqlite3.Error, ValueError, TypeError) as e:
                self.logger.error(
                    f"Error saving price for {price.date} hour {price.hour}: {e}")

        if saved_count > 0:
            self.clear_price_cache()

        self.logger.info(f"✅ Saved {saved_count} prices")
        return saved_count

    def fetch_and_store(self) -> FetchOutcome:
        """Fetch prices from the tariff API and store them."""
        batch = self.fetch_from_external_api()
        saved = self.save_prices(batch.accepted)
        return FetchOutcome(
            message="Prices updated successfully",
            saved=saved,
            accepted=len(batch.accepted),
            rejected=len(batch.rejected),
        )

    def clear_price_cache(self) -> None:
        """Invalidate every cached value derived from stored prices."""
        for prefix in PRICE_CACHE_KEYS:
            self.cache.delete_prefix(prefix)
        self.logger.info(f"🗑️ Cache cleared for keys: {', '.join(PRICE_CACHE_KEYS)}")

    # Reads

    def get_prices_for_day(self, day: date) -> List[PriceRecord]:
        """Get the stored prices of one day, hour ascending."""
        df = self.repository.find_by_date_range(day, day + timedelta(days=1))
        return records_from_frame(df)

    def get_today_prices(self) -> List[PriceRecord]:
        """Get today's prices, cached."""
        today = self.clock.today()
        key = cache_key(TODAY_CACHE_KEY, today.isoformat())
        cached = self.cache.get(key)
        if cached is not None:
            self.logger.info(
                f"📦 Returning today prices from cache ({len(cached)} items)")
            return cached

        self.logger.info(f"🔍 Looking up prices for {today.isoformat()}")
        result = self.get_prices_for_day(today)
        self.logger.info(f"📊 Found {len(result)} prices for today ({today.isoformat()})")

        self.cache.set(key, result, self.cache_config.today_ttl_seconds)
        return result

    def get_tomorrow_prices(self) -> List[PriceRecord]:
        """Get tomorrow's prices; only a non-empty result is cached."""
        tomorrow = self.clock.today() + timedelta(days=1)
        key = cache_key(TOMORROW_CACHE_KEY, tomorrow.isoformat())
        cached = self.cache.get(key)
        if cached is not None:
            self.logger.info(
                f"📦 Returning tomorrow prices from cache ({len(cached)} items)")
            return cached

        result = self.get_prices_for_day(tomorrow)

        if not result:
            self.logger.warning(
                "No prices found for tomorrow. They are normally published around 20:30")
            return result

        self.cache.set(key, result, self.cache_config.tomorrow_ttl_seconds)
        return result

    def get_latest_prices(self, limit: int = 24) -> List[PriceRecord]:
        """Get the most recently dated prices, flagged as fallback data."""
        df = self.repository.find_latest(limit=limit)
        return records_from_frame(df, is_fallback=True)

    def get_price_history(self, days: int = 7) -> List[PriceRecord]:
        """Get prices of the last `days` days, newest day first."""
        self.validate_input(days=days)
        start = self.clock.today() - timedelta(days=days)
        return records_from_frame(self.repository.find_since(start))

    def get_price_stats(self, days: int = 30) -> List[DailyPriceStats]:
        """Get average, minimum and maximum price per day, newest day first."""
        self.validate_input(days=days)
        start = self.clock.today() - timedelta(days=days)
        df = self.repository.find_daily_stats(start)

        stats = []
        for _, row in df.iterrows():
            stats.append(DailyPriceStats(
                date=row['date'],
                avg_price=round(float(row['avg_price']), 6),
                min_price=float(row['min_price']),
                max_price=float(row['max_price']),
            ))
        return stats

    def get_system_health(self) -> SystemHealth:
        """Report whether today's and yesterday's prices are stored."""
        today = self.clock.today()
        yesterday = today - timedelta(days=1)

        today_prices = self.get_today_prices()
        yesterday_count = len(self.get_prices_for_day(yesterday))
        latest_timestamp = max(
            (price.timestamp for price in today_prices if price.timestamp),
            default=None,
        )

        return SystemHealth(
            status="healthy",
            timestamp=self.clock.now().isoformat(),
            timezone=self.clock.timezone_name,
            total_records=self.repository.count(),
            today=DayHealth(
                date=today.isoformat(),
                count=len(today_prices),
                has_data=len(today_prices) > 0,
                latest_timestamp=latest_timestamp,
            ),
            yesterday=DayHealth(
                date=yesterday.isoformat(),
                count=yesterday_count,
                has_data=yesterday_count > 0,
            ),
        )
