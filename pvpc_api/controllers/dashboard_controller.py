"""
Controller for the dashboard and recommendation endpoints.
"""

from fastapi import Depends, HTTPException, Request

from .base_controller import BaseController
from ..services import DashboardService
from ..models import DashboardStats, RecommendationSet


def get_dashboard_service(request: Request) -> DashboardService:
    """Dependency injection for DashboardService."""
    return request.app.state.container.dashboard_service()


class DashboardController(BaseController):
    """Controller for dashboard statistics and recommendations."""

    def _setup_routes(self):
        """Setup routes for the dashboard."""

        @self.router.get(
            "/prices/dashboard-stats",
            response_model=DashboardStats,
            tags=["Price Data"],
            summary="Get the dashboard snapshot",
            description="""
            Current price with the day's cheapest and most expensive hour. When
            today has no data the latest stored day is used and `isFallback` is true.
            Returns 404 when no prices have been stored at all.
            """,
        )
        async def get_dashboard_stats(service: DashboardService = Depends(get_dashboard_service)):
            try:
                return service.get_dashboard_stats()
            except HTTPException:
                raise
            except Exception as e:
                self.handle_exception(e, "Error retrieving dashboard stats")

        @self.router.get(
            "/prices/recommendations",
            response_model=RecommendationSet,
            tags=["Price Data"],
            summary="Get usage recommendations",
        )
        async def get_recommendations(service: DashboardService = Depends(get_dashboard_service)):
            try:
                return service.get_recommendations()
            except HTTPException:
                raise
            except Exception as e:
                self.handle_exception(e, "Error generating recommendations")
