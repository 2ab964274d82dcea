"""
Response models for API endpoints.
"""

from typing import List, Optional
from pydantic import BaseModel

from .price_models import ApiModel


class DashboardStats(ApiModel):
    """Snapshot of the day's prices for the dashboard."""
    current_price: float
    min_price: float
    min_price_hour: int
    max_price: float
    max_price_hour: int
    last_updated: str  # computation time, ISO 8601
    # true when today had no data and the latest stored day was used
    is_fallback: bool = False
    data_date: Optional[str] = None


class Recommendation(ApiModel):
    """Usage advice derived from today's prices."""
    type: str  # "ideal", "avoid" or "schedule"
    title: str
    description: str
    time_range: str
    percentage: Optional[str] = None
    appliance: Optional[str] = None
    savings_percentage: Optional[int] = None


class RecommendationSet(ApiModel):
    """Model for the recommendations response."""
    recommendations: List[Recommendation]
    daily_tip: str


class DayHealth(ApiModel):
    """Data presence for one day."""
    date: str
    count: int
    has_data: bool
    latest_timestamp: Optional[str] = None


class SystemHealth(ApiModel):
    """Model for the price system health response."""
    status: str
    timestamp: str
    timezone: str
    total_records: int
    today: DayHealth
    yesterday: DayHealth


class APIInfo(BaseModel):
    """Model for API information."""
    message: str
    version: str
    endpoints: dict


class HealthResponse(BaseModel):
    """Model for health check response."""
    status: str
    service: str
