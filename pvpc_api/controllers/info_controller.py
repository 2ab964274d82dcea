"""
Controller for API information and health endpoints.
"""

from fastapi import Request

from .base_controller import BaseController
from ..models import APIInfo, HealthResponse


class InfoController(BaseController):
    """Controller for API information and health endpoints."""

    def _setup_routes(self):
        """Setup routes for API info and health."""

        @self.router.get("/", response_model=APIInfo, tags=["System Information"])
        async def get_api_info(request: Request):
            """API root endpoint with basic information."""
            return APIInfo(
                message="PVPC Spot Price API",
                version=request.app.version,
                endpoints={
                    "today": "/prices/today - Today's hourly prices",
                    "tomorrow": "/prices/tomorrow - Tomorrow's hourly prices",
                    "history": "/prices/history - Prices of the last days",
                    "stats": "/prices/stats - Daily average, minimum and maximum",
                    "dashboard": "/prices/dashboard-stats - Current, cheapest and most expensive hour",
                    "recommendations": "/prices/recommendations - Usage recommendations",
                    "fetch": "/prices/fetch - Fetch and store prices (POST)",
                    "averages": "/prices/monthly-averages, /prices/weekly-averages, "
                                "/prices/daily-averages, /prices/weekly-daily-averages",
                    "health": "/health - Health check",
                }
            )

        @self.router.get("/health", response_model=HealthResponse, tags=["System Information"])
        async def health_check():
            """Health check endpoint."""
            return HealthResponse(
                status="healthy",
                service="pvpc-price-api"
            )
