"""
Statistics models for price averages.
"""

from .price_models import ApiModel


class DailyAverage(ApiModel):
    """Average price of one calendar day; 0 when the day has no data."""
    day: int
    month: int
    year: int
    avg_price: float


class MonthlyAverage(ApiModel):
    """Average price of a month of the current year."""
    month: int
    avg_price: float


class WeeklyAverage(ApiModel):
    """Average price of an ISO week of the current year."""
    week: int
    avg_price: float


class WeeklyDay(ApiModel):
    """One day of the Monday-based week breakdown."""
    date: str  # YYYY-MM-DD
    day: str  # localized weekday name
    average_day: float


class DailyPriceStats(ApiModel):
    """Per-day aggregate over a look-back window."""
    date: str
    avg_price: float
    min_price: float
    max_price: float
