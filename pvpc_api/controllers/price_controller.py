"""
Controller for price data endpoints.

This controller handles the hourly price reads and the fetch trigger:
- Today's and tomorrow's prices
- Recent price history and per-day statistics
- Fetching and storing the latest prices from the tariff API
- Data presence health check

Tags:
    - price-data
    - electricity-prices
    - rest-endpoints

Endpoints:
    - GET /prices/today: Today's prices
    - GET /prices/tomorrow: Tomorrow's prices, once published
    - GET /prices/history: Prices of the last days
    - GET /prices/stats: Average, minimum and maximum per day
    - POST /prices/fetch: Fetch and store the latest prices
    - GET /prices/health: Whether today's and yesterday's prices are stored
"""

from fastapi import Depends, HTTPException, Query, Request
from typing import List

from .base_controller import BaseController
from ..services import PriceService
from ..models import DailyPriceStats, FetchOutcome, PriceRecord, SystemHealth


def get_price_service(request: Request) -> PriceService:
    """Dependency injection for PriceService."""
    return request.app.state.container.price_service()


class PriceController(BaseController):
    """Controller for price data endpoints."""

    def _setup_routes(self):
        """Setup routes for price data operations."""

        @self.router.get(
            "/prices/today",
            response_model=List[PriceRecord],
            tags=["Price Data"],
            summary="Get today's prices",
            description="""
            Hourly prices of the current day in the market time zone, hour ascending.
            Prices are in EUR/kWh. An empty list means today's prices are not stored yet.
            """,
        )
        async def get_today_prices(service: PriceService = Depends(get_price_service)):
            try:
                return service.get_today_prices()
            except HTTPException:
                raise
            except Exception as e:
                self.handle_exception(e, "Error retrieving today's prices")

        @self.router.get(
            "/prices/tomorrow",
            response_model=List[PriceRecord],
            tags=["Price Data"],
            summary="Get tomorrow's prices",
            description="""
            Hourly prices of the next day. The day-ahead market publishes them
            around 20:30 local time; before that the list is empty.
            """,
        )
        async def get_tomorrow_prices(service: PriceService = Depends(get_price_service)):
            try:
                return service.get_tomorrow_prices()
            except HTTPException:
                raise
            except Exception as e:
                self.handle_exception(e, "Error retrieving tomorrow's prices")

        @self.router.get(
            "/prices/history",
            response_model=List[PriceRecord],
            tags=["Price Data"],
            summary="Get recent price history",
            description="Prices of the last `days` days (1-365), newest day first and hour ascending within a day.",
        )
        async def get_price_history(
            days: int = Query(7, description="Number of days back from today"),
            service: PriceService = Depends(get_price_service),
        ):
            try:
                return service.get_price_history(days=days)
            except HTTPException:
                raise
            except Exception as e:
                self.handle_exception(e, "Error retrieving price history")

        @self.router.get(
            "/prices/stats",
            response_model=List[DailyPriceStats],
            tags=["Statistics & Analytics"],
            summary="Get daily price statistics",
            description="Average, minimum and maximum price per day over the last `days` days (1-365), newest first.",
        )
        async def get_price_stats(
            days: int = Query(30, description="Number of days back from today"),
            service: PriceService = Depends(get_price_service),
        ):
            try:
                return service.get_price_stats(days=days)
            except HTTPException:
                raise
            except Exception as e:
                self.handle_exception(e, "Error retrieving price statistics")

        @self.router.post(
            "/prices/fetch",
            response_model=FetchOutcome,
            tags=["Price Data"],
            summary="Fetch and store the latest prices",
            description="""
            Downloads the PVPC document from the tariff API and upserts every
            parsed hour. Rows that cannot be parsed are skipped and counted as
            rejected. Meant to be called periodically by an external scheduler.
            """,
        )
        def fetch_prices(service: PriceService = Depends(get_price_service)):
            try:
                outcome = service.fetch_and_store()
                self.logger.info(
                    f"✅ Fetch completed: {outcome.saved} saved, {outcome.rejected} rejected")
                return outcome
            except HTTPException:
                raise
            except Exception as e:
                self.handle_exception(e, "Error fetching prices")

        @self.router.get(
            "/prices/health",
            response_model=SystemHealth,
            tags=["System Information"],
            summary="Price data health",
            description="Reports whether today's and yesterday's prices are stored.",
        )
        async def get_system_health(service: PriceService = Depends(get_price_service)):
            try:
                return service.get_system_health()
            except HTTPException:
                raise
            except Exception as e:
                self.handle_exception(e, "Error checking price data health")
