"""
Controller for average price endpoints.

Endpoints:
    - GET /prices/monthly-averages: Average per month of the current year
    - GET /prices/weekly-averages: Average per ISO week of the current year
    - GET /prices/daily-averages: Average of every day of a month
    - GET /prices/weekly-daily-averages: Day-by-day averages of one week
"""

from fastapi import Depends, HTTPException, Query, Request
from typing import List, Optional

from .base_controller import BaseController
from ..services import AverageService
from ..models import DailyAverage, MonthlyAverage, WeeklyAverage, WeeklyDay


def get_average_service(request: Request) -> AverageService:
    """Dependency injection for AverageService."""
    return request.app.state.container.average_service()


class AverageController(BaseController):
    """Controller for average price endpoints."""

    def _setup_routes(self):
        """Setup routes for average price calculations."""

        @self.router.get(
            "/prices/monthly-averages",
            response_model=List[MonthlyAverage],
            tags=["Statistics & Analytics"],
            summary="Get monthly averages of the current year",
        )
        async def get_monthly_averages(service: AverageService = Depends(get_average_service)):
            try:
                return service.get_monthly_averages()
            except HTTPException:
                raise
            except Exception as e:
                self.handle_exception(e, "Error retrieving monthly averages")

        @self.router.get(
            "/prices/weekly-averages",
            response_model=List[WeeklyAverage],
            tags=["Statistics & Analytics"],
            summary="Get weekly averages of the current year",
            description="Average price per ISO-8601 week; weeks without data are left out.",
        )
        async def get_weekly_averages(service: AverageService = Depends(get_average_service)):
            try:
                return service.get_weekly_averages()
            except HTTPException:
                raise
            except Exception as e:
                self.handle_exception(e, "Error retrieving weekly averages")

        @self.router.get(
            "/prices/daily-averages",
            response_model=List[DailyAverage],
            tags=["Statistics & Analytics"],
            summary="Get the average of every day of a month",
            description="""
            One entry per calendar day of the month, day ascending. Days without
            data report an average of 0. Defaults to the current month.
            """,
        )
        async def get_daily_averages(
            month: Optional[int] = Query(None, description="Month 1-12"),
            year: Optional[int] = Query(None, description="Four digit year"),
            service: AverageService = Depends(get_average_service),
        ):
            try:
                return service.get_daily_averages(month=month, year=year)
            except HTTPException:
                raise
            except Exception as e:
                self.handle_exception(e, "Error retrieving daily averages")

        @self.router.get(
            "/prices/weekly-daily-averages",
            response_model=List[WeeklyDay],
            tags=["Statistics & Analytics"],
            summary="Get day-by-day averages of a week",
            description="""
            Averages from the Monday of the week containing `date` (default today)
            up to `date` itself, or through Sunday when `fullWeek` is true.
            """,
        )
        async def get_weekly_daily_averages(
            reference_date: Optional[str] = Query(
                None, alias="date", description="Reference date in YYYY-MM-DD format"),
            full_week: bool = Query(
                False, alias="fullWeek", description="Cover Monday through Sunday"),
            service: AverageService = Depends(get_average_service),
        ):
            try:
                return service.get_weekly_daily_averages(
                    reference_date=reference_date, full_week=full_week)
            except HTTPException:
                raise
            except Exception as e:
                self.handle_exception(e, "Error retrieving weekly daily averages")
