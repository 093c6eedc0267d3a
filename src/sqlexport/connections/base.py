"""
Abstract base connection class for ibis-backed data sources.
"""

from __future__ import annotations

import concurrent.futures
import re
from abc import ABC, abstractmethod
from datetime import datetime
from typing import Any

import ibis

from sqlexport.core.rows import ResultSet
from sqlexport.exceptions import QueryExecutionError, QueryTimeoutError
from sqlexport.utils.logging import get_logger

logger = get_logger("sqlexport.connections.base")

MAX_LOGGED_QUERY = 500

_SECRET_PATTERNS = [
    # key=value connection strings (ADO.NET / ODBC style)
    re.compile(r"(?i)\b(password|pwd|user id|uid)\s*=\s*[^;]*"),
    # user:password@ in URLs
    re.compile(r"(?<=://)[^/@\s]+(?=@)"),
]


def mask_connection_string(connection_string: str) -> str:
    """Hide credentials in a connection string or URL for display."""
    if not connection_string:
        return ""
    masked = _SECRET_PATTERNS[0].sub(lambda m: f"{m.group(1)}=*****", connection_string)
    return _SECRET_PATTERNS[1].sub("*****", masked)


def truncate_query(query: str, limit: int = MAX_LOGGED_QUERY) -> str:
    """Shorten a query for log output."""
    return query if len(query) <= limit else query[:limit] + "..."


def convert_cell(value: Any) -> Any:
    """
    Convert a driver value to a plain Python scalar.

    numpy scalars become Python numbers, pandas timestamps become datetimes
    and pandas/numpy missing markers become None.
    """
    if value is None or isinstance(value, (str, int, float, bool, datetime)):
        if isinstance(value, float) and value != value:
            return None
        return value
    # pandas.NA / NaT and numpy scalars, without importing them here
    type_name = type(value).__name__
    if type_name in ("NAType", "NaTType"):
        return None
    if hasattr(value, "to_pydatetime"):
        return value.to_pydatetime()
    if hasattr(value, "item") and type(value).__module__ == "numpy":
        return value.item()
    return value


class BaseConnection(ABC):
    """
    Base class for queryable connections using ibis.

    Subclasses create the ibis backend lazily in ``connection``. Queries run
    through the backend's DB-API cursor (``raw_sql``) so server-specific SQL
    such as ``FOR XML`` / ``FOR JSON`` passes through untouched.
    """

    def __init__(self, name: str, config: dict[str, Any]):
        """
        Initialize connection.

        Args:
            name: Connection name (profile name)
            config: Connection configuration dictionary
        """
        self.name = name
        self.config = config
        self._connection: ibis.BaseBackend | None = None

    @property
    @abstractmethod
    def connection(self) -> ibis.BaseBackend:
        """
        Get ibis backend connection (lazy initialization).

        Returns:
            ibis.BaseBackend: ibis backend connection
        """
        pass

    @property
    def display_name(self) -> str:
        """Connection description safe for logs."""
        return self.name

    def fetch(self, query: str, timeout: float | None = None) -> ResultSet:
        """
        Run a query and materialize its rows.

        Args:
            query: SQL text
            timeout: Seconds to wait for the query (None waits indefinitely)

        Returns:
            ResultSet (empty for statements that return no rows)

        Raises:
            QueryTimeoutError: If the query does not finish in time
            QueryExecutionError: If the query fails
        """
        backend = self.connection

        if timeout is None:
            return self._fetch(backend, query)

        executor = concurrent.futures.ThreadPoolExecutor(max_workers=1, thread_name_prefix="sqlexport-query")
        future = executor.submit(self._fetch, backend, query)
        try:
            return future.result(timeout=timeout)
        except concurrent.futures.TimeoutError:
            logger.error(f"Query timed out after {timeout:g}s on {self.display_name}")
            self._interrupt(backend)
            raise QueryTimeoutError(timeout, query=truncate_query(query)) from None
        finally:
            executor.shutdown(wait=False)

    def _fetch(self, backend: ibis.BaseBackend, query: str) -> ResultSet:
        try:
            cursor = backend.raw_sql(query)
        except Exception as e:
            logger.error(f"SQL Error executing query: {e}")
            logger.error(f"Failed query: {truncate_query(query)}")
            raise QueryExecutionError(f"SQL Error: {e}", query=truncate_query(query), cause=e) from e

        try:
            if cursor is None or not getattr(cursor, "description", None):
                return ResultSet()
            columns = [column[0] for column in cursor.description]
            records = cursor.fetchall()
        except Exception as e:
            logger.error(f"Error reading query results: {e}")
            raise QueryExecutionError(f"Error reading results: {e}", query=truncate_query(query), cause=e) from e
        finally:
            # DuckDB hands back the connection itself as the cursor
            if cursor is not None and cursor is not getattr(backend, "con", None) and hasattr(cursor, "close"):
                try:
                    cursor.close()
                except Exception as e:
                    logger.debug(f"Error closing cursor for {self.name}: {e}")

        rows = []
        for index, record in enumerate(records):
            row = {}
            for column, value in zip(columns, record):
                try:
                    row[column] = convert_cell(value)
                except Exception as e:
                    logger.warning(f"Error reading column {column} in row {index + 1}: {e}")
                    row[column] = None
            rows.append(row)

        logger.info(f"Retrieved {len(rows)} rows")
        return ResultSet(rows)

    def _interrupt(self, backend: ibis.BaseBackend) -> None:
        """Ask the driver to cancel a running query, where it supports that."""
        interrupt = getattr(getattr(backend, "con", None), "interrupt", None)
        if callable(interrupt):
            try:
                interrupt()
            except Exception as e:
                logger.debug(f"Error interrupting query on {self.name}: {e}")

    def close(self) -> None:
        """Close connection and cleanup resources."""
        if self._connection:
            if hasattr(self._connection, "disconnect"):
                try:
                    self._connection.disconnect()
                except Exception as e:
                    logger.debug(f"Error during disconnect() for {self.name}: {e}")
            self._connection = None

    def __enter__(self) -> "BaseConnection":
        """Context manager entry."""
        return self

    def __exit__(self, exc_type: type[BaseException] | None, exc_val: BaseException | None, exc_tb: Any) -> None:
        """Context manager exit - closes connection."""
        try:
            self.close()
        except Exception as e:
            # Don't override the original exception if one occurred
            if exc_type is None:
                raise
            else:
                logger.warning(f"Error closing connection {self.name} during context exit: {e}")

    def __repr__(self) -> str:
        """String representation."""
        return f"{self.__class__.__name__}(name='{self.name}')"
