"""
Models package for API data structures.
Imports all models for easy access.
"""

# Price models
from .price_models import (
    ApiModel,
    PriceTuple,
    PriceRecord,
    ParseFault,
    FetchBatch,
    FetchOutcome,
)

# Statistics models
from .stats_models import (
    DailyAverage,
    MonthlyAverage,
    WeeklyAverage,
    WeeklyDay,
    DailyPriceStats,
)

# Response models
from .response_models import (
    DashboardStats,
    Recommendation,
    RecommendationSet,
    DayHealth,
    SystemHealth,
    APIInfo,
    HealthResponse,
)

__all__ = [
    # Price models
    "ApiModel",
    "PriceTuple",
    "PriceRecord",
    "ParseFault",
    "FetchBatch",
    "FetchOutcome",

    # Statistics models
    "DailyAverage",
    "MonthlyAverage",
    "WeeklyAverage",
    "WeeklyDay",
    "DailyPriceStats",

    # Response models
    "DashboardStats",
    "Recommendation",
    "RecommendationSet",
    "DayHealth",
    "SystemHealth",
    "APIInfo",
    "HealthResponse",
]
