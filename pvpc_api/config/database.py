"""
Database Configuration and Management Module

This module provides connection and query management for the price store.
Hourly prices live in a single SQLite table keyed by (date, hour); the
DatabaseManager is constructed explicitly and handed to the repositories.

Tags:
    - database
    - configuration
    - sqlite
    - data-access
    - repository-pattern

Usage:
    ```python
    from pvpc_api.config import DatabaseManager

    db = DatabaseManager("/tmp/prices.db")
    db.initialize_schema()
    df = db.execute_query("SELECT * FROM prices WHERE date = ?", ["2024-06-01"])
    ```

Database Schema:
    - Table: prices
    - Columns: date (YYYY-MM-DD), hour (0-23), price (EUR/kWh), timestamp (write time)
    - Constraint: UNIQUE(date, hour)
"""

import os
import sqlite3
import pandas as pd
from contextlib import contextmanager
from typing import Any, Iterator, List, Optional, Union


SCHEMA_STATEMENTS = [
    """
    CREATE TABLE IF NOT EXISTS prices (
        date TEXT NOT NULL,
        hour INTEGER NOT NULL CHECK (hour BETWEEN 0 AND 23),
        price REAL NOT NULL,
        timestamp TEXT NOT NULL,
        UNIQUE (date, hour)
    )
    """,
    "CREATE INDEX IF NOT EXISTS idx_prices_date ON prices (date)",
]


class DatabaseManager:
    """
    Connection and query management for the price store.

    Features:
    - SQLite row factory for column access by name
    - Automatic connection cleanup
    - Type-safe parameter binding
    - Pandas integration for aggregate reads

    Examples:
        >>> db = DatabaseManager("prices.db")
        >>> df = db.execute_query("SELECT * FROM prices LIMIT 5")
        >>> count = db.execute_scalar("SELECT COUNT(*) FROM prices")
    """

    def __init__(self, database_path: str, timeout: int = 30):
        """
        Initialize the DatabaseManager.

        Args:
            database_path (str): Path of the SQLite file. Its directory is
                created when missing.
            timeout (int): Seconds to wait on a locked database.
        """
        self.database_path = database_path
        self.timeout = timeout

        db_dir = os.path.dirname(self.database_path)
        if db_dir and not os.path.exists(db_dir):
            os.makedirs(db_dir, exist_ok=True)

    def get_connection(self) -> sqlite3.Connection:
        """
        Get a database connection with row factory enabled.

        Returns:
            sqlite3.Connection: Connection with row factory for column access by name.

        Note:
            The connection should be closed after use. The execute_* methods
            handle connection cleanup automatically.
        """
        conn = sqlite3.connect(self.database_path, timeout=self.timeout)
        conn.row_factory = sqlite3.Row  # Enable column access by name
        return conn

    @contextmanager
    def connection(self) -> Iterator[sqlite3.Connection]:
        """Connection that is closed when the block exits."""
        conn = self.get_connection()
        try:
            yield conn
        finally:
            conn.close()

    def initialize_schema(self) -> None:
        """Create the prices table and its indexes if they do not exist."""
        with self.connection() as conn:
            for statement in SCHEMA_STATEMENTS:
                conn.execute(statement)
            conn.commit()

    def execute_query(self, query: str, params: Optional[List[Any]] = None) -> pd.DataFrame:
        """
        Run a SELECT and return the rows as a pandas DataFrame.

        Args:
            query (str): SQL with ? placeholders.
            params (Optional[List[Any]]): Values bound to the placeholders.

        Raises:
            sqlite3.Error: If the query execution fails.
        """
        with self.connection() as conn:
            return pd.read_sql_query(query, conn, params=params or [])

    def execute_update(self, query: str, params: Optional[List[Any]] = None) -> int:
        """
        Run an INSERT, UPDATE or DELETE and commit it.

        Returns:
            int: Rows changed, as reported by SQLite. An upsert whose
            update clause is skipped reports 0.
        """
        with self.connection() as conn:
            cursor = conn.execute(query, params or [])
            conn.commit()
            return cursor.rowcount

    def execute_scalar(self, query: str, params: Optional[List[Any]] = None) -> Union[Any, None]:
        """
        First column of the first row, or None when nothing came back.

        Examples:
            >>> total = db.execute_scalar("SELECT COUNT(*) FROM prices")
            >>> latest = db.execute_scalar("SELECT MAX(date) FROM prices")
        """
        with self.connection() as conn:
            row = conn.execute(query, params or []).fetchone()
            return row[0] if row else None
