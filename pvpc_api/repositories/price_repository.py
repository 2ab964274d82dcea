"""
Repository for hourly price data.
Handles upserts, range reads and the grouping aggregations behind the
average endpoints.
"""

import pandas as pd
from datetime import date, datetime

from .base_repository import BaseRepository
from ..models import PriceTuple


PRICE_COLUMNS = "date, hour, price, timestamp"


def _iso(value: date) -> str:
    return value.isoformat()


class PriceRepository(BaseRepository):
    """Repository for price tuples keyed by (date, hour)."""

    table_name = "prices"

    def upsert(self, price: PriceTuple, written_at: datetime) -> int:
        """
        Insert a tuple or overwrite the stored price for its (date, hour).

        The write timestamp only moves when the price actually changes, so
        replaying an identical batch leaves the table untouched.

        Returns:
            int: Number of rows inserted or changed (0 or 1).
        """
        query = """
            INSERT INTO prices (date, hour, price, timestamp)
            VALUES (?, ?, ?, ?)
            ON CONFLICT (date, hour) DO UPDATE SET
                price = excluded.price,
                timestamp = excluded.timestamp
            WHERE prices.price IS NOT excluded.price
        """
        return self.db_manager.execute_update(query, [
            _iso(price.date),
            int(price.hour),
            float(price.price),
            written_at.isoformat(),
        ])

    def find_by_date_range(self, start: date, end: date) -> pd.DataFrame:
        """Find prices with start <= date < end, ordered by date and hour."""
        query = f"""
            SELECT {PRICE_COLUMNS}
            FROM prices
            WHERE date >= ? AND date < ?
            ORDER BY date ASC, hour ASC
        """
        return self.db_manager.execute_query(query, [_iso(start), _iso(end)])

    def find_since(self, start: date) -> pd.DataFrame:
        """Find prices on or after start, newest day first."""
        query = f"""
            SELECT {PRICE_COLUMNS}
            FROM prices
            WHERE date >= ?
            ORDER BY date DESC, hour ASC
        """
        return self.db_manager.execute_query(query, [_iso(start)])

    def find_latest(self, limit: int = 24) -> pd.DataFrame:
        """Find the most recently dated prices."""
        query = f"""
            SELECT {PRICE_COLUMNS}
            FROM prices
            ORDER BY date DESC, hour ASC
            LIMIT ?
        """
        return self.db_manager.execute_query(query, [limit])

    def find_daily_stats(self, start: date) -> pd.DataFrame:
        """Average, minimum and maximum price per day since start."""
        query = """
            SELECT
                date,
                AVG(price) as avg_price,
                MIN(price) as min_price,
                MAX(price) as max_price
            FROM prices
            WHERE date >= ?
            GROUP BY date
            ORDER BY date DESC
        """
        return self.db_manager.execute_query(query, [_iso(start)])

    def find_monthly_averages(self, year: int) -> pd.DataFrame:
        """Average price per month of the given year; empty months are absent."""
        query = """
            SELECT
                CAST(strftime('%m', date) AS INTEGER) as month,
                AVG(price) as avg_price
            FROM prices
            WHERE date >= ? AND date < ?
            GROUP BY month
            ORDER BY month ASC
        """
        return self.db_manager.execute_query(
            query, [_iso(date(year, 1, 1)), _iso(date(year + 1, 1, 1))])

    def find_weekly_averages(self, year: int) -> pd.DataFrame:
        """
        Average price per ISO week of the given year; empty weeks are absent.

        SQLite has no ISO week function, so the grouping happens in pandas.
        Days of early January that belong to the previous ISO year are
        grouped under that week number (52 or 53).
        """
        query = """
            SELECT date, price
            FROM prices
            WHERE date >= ? AND date < ?
        """
        df = self.db_manager.execute_query(
            query, [_iso(date(year, 1, 1)), _iso(date(year + 1, 1, 1))])
        if df.empty:
            return pd.DataFrame(columns=["week", "avg_price"])

        df["week"] = pd.to_datetime(df["date"]).dt.isocalendar().week.astype(int)
        grouped = (
            df.groupby("week", as_index=False)["price"]
            .mean()
            .rename(columns={"price": "avg_price"})
            .sort_values("week")
        )
        return grouped.reset_index(drop=True)

    def find_day_of_month_averages(self, start: date, end: date) -> pd.DataFrame:
        """Average price per day-of-month for start <= date < end."""
        query = """
            SELECT
                CAST(strftime('%d', date) AS INTEGER) as day,
                AVG(price) as avg_price
            FROM prices
            WHERE date >= ? AND date < ?
            GROUP BY day
            ORDER BY day ASC
        """
        return self.db_manager.execute_query(query, [_iso(start), _iso(end)])

    def find_date_averages(self, start: date, end: date) -> pd.DataFrame:
        """Average price per date for start <= date < end."""
        query = """
            SELECT date, AVG(price) as avg_price
            FROM prices
            WHERE date >= ? AND date < ?
            GROUP BY date
            ORDER BY date ASC
        """
        return self.db_manager.execute_query(query, [_iso(start), _iso(end)])
