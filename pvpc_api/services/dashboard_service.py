"""
Service for the dashboard snapshot and usage recommendations.
"""

import math
import logging
from typing import List

import pytz

from .base_service import BaseService
from .price_service import DASHBOARD_CACHE_KEY, PriceService, cache_key
from ..config import CacheConfig
from ..exceptions import NoDataError
from ..models import DashboardStats, PriceRecord, Recommendation, RecommendationSet
from ..utils import Clock, TTLCache


IDEAL_THRESHOLD = 0.8  # current price at or below 80% of the day's average
AVOID_THRESHOLD = 1.2  # current price at or above 120% of the day's average


def percent_of(delta: float, base: float) -> int:
    """Whole percentage of delta relative to base, rounded half up; 0 for a zero base."""
    if base == 0:
        return 0
    return math.floor(delta / base * 100 + 0.5)


def cheapest_and_most_expensive(prices: List[PriceRecord]):
    """First occurrence of the minimum and maximum price, in list order."""
    cheapest = prices[0]
    most_expensive = prices[0]
    for price in prices:
        if price.price < cheapest.price:
            cheapest = price
        if price.price > most_expensive.price:
            most_expensive = price
    return cheapest, most_expensive


class DashboardService(BaseService):
    """Service for dashboard statistics and recommendations."""

    def __init__(self, price_service: PriceService, cache: TTLCache,
                 clock: Clock = None, cache_config: CacheConfig = None):
        """Initialize service on top of the price service."""
        super().__init__(price_service.repository, clock or price_service.clock)
        self.price_service = price_service
        self.cache = cache
        self.cache_config = cache_config or CacheConfig()
        self.logger = logging.getLogger(__name__)

    def validate_input(self, **kwargs) -> bool:
        """No parameters to validate."""
        return True

    def get_dashboard_stats(self) -> DashboardStats:
        """
        Current, minimum and maximum price of the day.

        Uses today's prices, or the latest stored prices (flagged as
        fallback) when today has none.

        Raises:
            NoDataError: If no prices have ever been stored
        """
        # keyed by hour since the current price changes with it
        now = self.clock.now()
        key = cache_key(DASHBOARD_CACHE_KEY, now.date().isoformat(), now.hour)
        cached = self.cache.get(key)
        if cached is not None:
            self.logger.info("📦 Returning dashboard stats from cache")
            return cached

        prices = self.price_service.get_today_prices()
        is_fallback = False

        if not prices:
            self.logger.warning(
                "No data found for today, searching for latest available data")
            prices = self.price_service.get_latest_prices(limit=24)
            if not prices:
                raise NoDataError("No price data available")
            is_fallback = True
            self.logger.warning(
                f"Using fallback data from {prices[0].date} ({len(prices)} records)")

        current_hour = now.hour
        current = next((p for p in prices if p.hour == current_hour), prices[0])
        cheapest, most_expensive = cheapest_and_most_expensive(prices)

        stats = DashboardStats(
            current_price=current.price,
            min_price=cheapest.price,
            min_price_hour=cheapest.hour,
            max_price=most_expensive.price,
            max_price_hour=most_expensive.hour,
            last_updated=now.astimezone(pytz.utc).isoformat(),
            is_fallback=is_fallback,
            data_date=prices[0].date.isoformat(),
        )

        self.cache.set(key, stats, self.cache_config.dashboard_ttl_seconds)
        self.logger.info("💾 Cached dashboard stats")
        return stats

    def get_recommendations(self) -> RecommendationSet:
        """Usage recommendations and a daily tip based on today's prices."""
        prices = self.price_service.get_today_prices()

        if not prices:
            return RecommendationSet(
                recommendations=[],
                daily_tip="No price data available to generate recommendations.",
            )

        current_hour = self.clock.current_hour()
        avg_price = sum(p.price for p in prices) / len(prices)
        cheapest, most_expensive = cheapest_and_most_expensive(prices)

        # Without a price for this hour the average is used, so neither
        # "ideal" nor "avoid" can fire
        current_price = next(
            (p.price for p in prices if p.hour == current_hour), avg_price)

        recommendations = []

        if current_price <= avg_price * IDEAL_THRESHOLD:
            savings = percent_of(avg_price - current_price, avg_price)
            recommendations.append(Recommendation(
                type="ideal",
                title="Ideal moment",
                description="Run the washing machine now",
                time_range="Next 2 hours",
                percentage=f"{savings}%",
                appliance="washing machine",
                savings_percentage=savings,
            ))

        if current_price >= avg_price * AVOID_THRESHOLD:
            overshoot = percent_of(current_price - avg_price, avg_price)
            recommendations.append(Recommendation(
                type="avoid",
                title="Avoid now",
                description="Wait before using high-consumption appliances",
                time_range=f"Until {(current_hour + 2) % 24}:00",
                percentage=f"{overshoot}%",
                appliance="dishwasher",
            ))

        if cheapest.hour > current_hour:
            recommendations.append(Recommendation(
                type="schedule",
                title="Schedule for later",
                description=f"Schedule the dishwasher for {cheapest.hour}:00",
                time_range=f"At {cheapest.hour}:00",
                appliance="dishwasher",
                savings_percentage=percent_of(avg_price - cheapest.price, avg_price),
            ))

        spread = percent_of(most_expensive.price - cheapest.price, most_expensive.price)
        daily_tip = (
            f"The cheapest prices will be at {cheapest.hour}:00 and the most "
            f"expensive at {most_expensive.hour}:00. Save up to {spread}% by "
            f"choosing the right time."
        )

        return RecommendationSet(recommendations=recommendations, daily_tip=daily_tip)
