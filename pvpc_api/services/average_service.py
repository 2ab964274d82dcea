"""
Service for monthly, weekly and daily price averages.
"""

import calendar
import logging
from datetime import date, datetime, timedelta
from typing import List, Optional, Union

from .base_service import BaseService
from ..exceptions import InvalidDateError
from ..models import DailyAverage, MonthlyAverage, WeeklyAverage, WeeklyDay
from ..repositories import PriceRepository
from ..utils import Clock


# Indexed by Sunday-based weekday number (Sunday=0 .. Saturday=6)
WEEKDAY_NAMES = {
    "en": ["Sunday", "Monday", "Tuesday", "Wednesday", "Thursday", "Friday", "Saturday"],
    "es": ["Domingo", "Lunes", "Martes", "Miércoles", "Jueves", "Viernes", "Sábado"],
}

MIN_YEAR = 2000
MAX_YEAR = 2100


def sunday_based_weekday(day: date) -> int:
    """Weekday number with Sunday=0 .. Saturday=6."""
    return day.isoweekday() % 7


def week_monday(day: date) -> date:
    """Monday of the ISO week containing day."""
    return day - timedelta(days=(sunday_based_weekday(day) + 6) % 7)


class AverageService(BaseService):
    """Service for average price calculations."""

    def __init__(self, repository: PriceRepository, clock: Clock = None,
                 weekday_locale: str = "en"):
        """Initialize service with repository and clock dependencies."""
        super().__init__(repository, clock)
        self.weekday_names = WEEKDAY_NAMES.get(weekday_locale, WEEKDAY_NAMES["en"])
        self.logger = logging.getLogger(__name__)

    def validate_input(self, **kwargs) -> bool:
        """Validate month and year parameters."""
        month = kwargs.get('month')
        year = kwargs.get('year')

        if month is not None and (month < 1 or month > 12):
            raise InvalidDateError("Month must be between 1 and 12")

        if year is not None and (year < MIN_YEAR or year > MAX_YEAR):
            raise InvalidDateError(f"Year must be between {MIN_YEAR} and {MAX_YEAR}")

        return True

    @staticmethod
    def parse_reference_date(value: Union[str, date, None]) -> Optional[date]:
        """
        Parse a reference date given as YYYY-MM-DD.

        Raises:
            InvalidDateError: If the string is not a valid calendar date
        """
        if value is None or isinstance(value, date):
            return value
        try:
            return datetime.strptime(value.strip(), "%Y-%m-%d").date()
        except (ValueError, AttributeError) as e:
            raise InvalidDateError(
                f"Invalid date format: {value!r}. Use YYYY-MM-DD") from e

    def get_monthly_averages(self) -> List[MonthlyAverage]:
        """Average price per month of the current year; months without data are absent."""
        df = self.repository.find_monthly_averages(self.clock.today().year)
        return [
            MonthlyAverage(month=int(row['month']), avg_price=float(row['avg_price']))
            for _, row in df.iterrows()
        ]

    def get_weekly_averages(self) -> List[WeeklyAverage]:
        """Average price per ISO week of the current year; weeks without data are absent."""
        df = self.repository.find_weekly_averages(self.clock.today().year)
        return [
            WeeklyAverage(week=int(row['week']), avg_price=float(row['avg_price']))
            for _, row in df.iterrows()
        ]

    def get_daily_averages(self, month: int = None, year: int = None) -> List[DailyAverage]:
        """
        Average price of every day of a month.

        Args:
            month: Month 1-12, defaults to the current month
            year: Year, defaults to the current year

        Returns:
            One entry per calendar day, day ascending; days without data report 0.
        """
        today = self.clock.today()
        month = today.month if month is None else month
        year = today.year if year is None else year
        self.validate_input(month=month, year=year)

        days_in_month = calendar.monthrange(year, month)[1]
        start = date(year, month, 1)
        end = start + timedelta(days=days_in_month)

        df = self.repository.find_day_of_month_averages(start, end)
        averages = {int(row['day']): float(row['avg_price']) for _, row in df.iterrows()}

        return [
            DailyAverage(day=day, month=month, year=year, avg_price=averages.get(day, 0))
            for day in range(1, days_in_month + 1)
        ]

    def get_weekly_daily_averages(self, reference_date: Union[str, date, None] = None,
                                  full_week: bool = False) -> List[WeeklyDay]:
        """
        Day-by-day averages of the week containing the reference date.

        The window starts on Monday. By default it ends with the reference
        date itself, so a Friday yields Monday..Friday; with full_week it
        always covers Monday..Sunday.

        Args:
            reference_date: YYYY-MM-DD string or date, defaults to today
            full_week: Cover the whole week instead of stopping at the reference date

        Raises:
            InvalidDateError: If the reference date string does not parse
        """
        target = self.parse_reference_date(reference_date) or self.clock.today()

        monday = week_monday(target)
        end = monday + timedelta(days=7) if full_week else target + timedelta(days=1)

        df = self.repository.find_date_averages(monday, end)
        averages = {row['date']: float(row['avg_price']) for _, row in df.iterrows()}

        result = []
        current = monday
        while current < end:
            date_string = current.isoformat()
            average = averages.get(date_string)
            result.append(WeeklyDay(
                date=date_string,
                day=self.weekday_names[sunday_based_weekday(current)],
                average_day=round(average, 6) if average is not None else 0,
            ))
            current += timedelta(days=1)

        return result
