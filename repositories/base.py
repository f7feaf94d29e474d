"""
Base Repository

Provides the foundation for all repository classes: a timed read_df()
against the configured SQLAlchemy engine that turns any database error into
a QueryFailure.

Design Principles:
1. Dependency Injection - Receives DatabaseConfig, doesn't create it
2. One failure type - Callers only ever see QueryFailure from a read
3. Consistent interface - All repositories inherit this pattern
"""

from typing import Any, Mapping, Optional
import logging
import time

import pandas as pd

from config import DatabaseConfig
from domain.exceptions import QueryFailure
from logging_config import setup_logging

logger = setup_logging(__name__)


class BaseRepository:
    """
    Base class for all repository implementations.

    Attributes:
        db: DatabaseConfig instance for database access
    """

    def __init__(self, db: DatabaseConfig, logger_instance: Optional[logging.Logger] = None):
        """
        Initialize repository with database configuration.

        Args:
            db: DatabaseConfig instance
            logger_instance: Optional logger (defaults to module logger)
        """
        self.db = db
        self._logger = logger_instance or logger

    def read_df(
        self,
        query: Any,
        params: Mapping[str, Any] | None = None,
        *,
        operation: str = "read_df",
    ) -> pd.DataFrame:
        """Execute a read-only SQL query and return a DataFrame.

        Args:
            query: SQL query string or SQLAlchemy TextClause
            params: Optional query parameters
            operation: Name used in timing logs and error messages

        Returns:
            DataFrame with query results

        Raises:
            QueryFailure: the engine could not connect, run or decode the query
        """
        start = time.perf_counter()
        try:
            with self.db.engine.connect() as conn:
                df = pd.read_sql_query(query, conn, params=params)
        except Exception as e:
            self._logger.error(f"{operation}() failed on '{self.db.alias}': {e}")
            raise QueryFailure(operation, e) from e

        elapsed = round((time.perf_counter() - start) * 1000, 2)
        self._logger.debug(f"TIME {operation}() = {elapsed} ms")
        return df

    def read_records(
        self,
        query: Any,
        params: Mapping[str, Any] | None = None,
        *,
        operation: str = "read_records",
    ) -> list[dict[str, Any]]:
        """Like read_df(), but returns one dict per row with nulls as None."""
        df = self.read_df(query, params, operation=operation)
        if df.empty:
            return []
        df = df.astype(object).where(df.notna(), None)
        return df.to_dict(orient="records")
