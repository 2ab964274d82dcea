"""
Base repository interface for the (date, hour) keyed price store.
"""

from abc import ABC, abstractmethod
from datetime import date, datetime
from typing import Any
import pandas as pd

from ..config import DatabaseManager


class BaseRepository(ABC):
    """
    Abstract repository over one SQLite table.

    Subclasses name their table; generic reads are built from it.
    """

    table_name: str = ""

    def __init__(self, db_manager: DatabaseManager):
        self.db_manager = db_manager

    def count(self) -> int:
        """Count total records."""
        return int(self.db_manager.execute_scalar(
            f"SELECT COUNT(*) FROM {self.table_name}") or 0)

    @abstractmethod
    def upsert(self, record: Any, written_at: datetime) -> int:
        """Insert a record or update the one sharing its key."""
        pass

    @abstractmethod
    def find_by_date_range(self, start: date, end: date) -> pd.DataFrame:
        """Find records with start <= date < end."""
        pass
