"""
Controllers package for API endpoint handlers.
Imports all controllers for easy access.
"""

from fastapi import APIRouter

# Base controller
from .base_controller import BaseController

# Individual controllers
from .info_controller import InfoController
from .price_controller import PriceController, get_price_service
from .average_controller import AverageController, get_average_service
from .dashboard_controller import DashboardController, get_dashboard_service


class PvpcPriceController:
    """Aggregate controller that combines all price controllers."""

    def __init__(self):
        """Initialize aggregate controller with all sub-controllers."""
        self.router = APIRouter()

        # Initialize individual controllers
        self.info_controller = InfoController()
        self.price_controller = PriceController()
        self.average_controller = AverageController()
        self.dashboard_controller = DashboardController()

        self._setup_aggregate_routes()

    def _setup_aggregate_routes(self):
        """Setup aggregate routes by including all controller routers."""
        self.router.include_router(self.info_controller.router)
        self.router.include_router(self.price_controller.router)
        self.router.include_router(self.average_controller.router)
        self.router.include_router(self.dashboard_controller.router)


__all__ = [
    # Base controller
    "BaseController",

    # Individual controllers
    "InfoController",
    "PriceController",
    "AverageController",
    "DashboardController",

    # Aggregate controller
    "PvpcPriceController",

    # Dependencies
    "get_price_service",
    "get_average_service",
    "get_dashboard_service",
]
