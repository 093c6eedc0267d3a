"""
Data source connections.

``run_query`` is the single entry point the export pipeline uses: it opens
the profile's connection, runs the query under the command timeout and
returns the materialized rows.
"""

from typing import Any

from sqlexport.connections.base import BaseConnection, mask_connection_string, truncate_query
from sqlexport.connections.duckdb import DuckDBConnection
from sqlexport.connections.ibis_generic import (
    IbisConnection,
    UrlConnection,
    is_url,
    mssql_config_from_connection_string,
)
from sqlexport.core.rows import ResultSet
from sqlexport.exceptions import ConfigurationError
from sqlexport.utils.logging import get_logger

logger = get_logger("sqlexport.connections")

__all__ = [
    "BaseConnection",
    "DuckDBConnection",
    "IbisConnection",
    "UrlConnection",
    "create_connection",
    "run_query",
    "mask_connection_string",
    "truncate_query",
]


def create_connection(connection_info: dict[str, Any], name: str = "default") -> BaseConnection:
    """
    Create a connection from a profile's connection mapping.

    Args:
        connection_info: Mapping with a ``type`` (duckdb, url, mssql, postgres, ...).
            A ``url`` that is ADO.NET style ``key=value`` pairs opens SQL Server.
        name: Profile name, used in messages

    Returns:
        Unopened connection; the backend connects on first use

    Raises:
        ConfigurationError: If the mapping is empty or names an unknown type,
            or a SQL Server connection string is malformed
    """
    if not connection_info:
        raise ConfigurationError(f"Connection string is empty in profile '{name}'")

    conn_type = str(connection_info.get("type", "duckdb")).lower()
    if conn_type == "duckdb":
        return DuckDBConnection(name, connection_info)
    if conn_type == "url":
        url = str(connection_info.get("url", ""))
        if not is_url(url) and "=" in url:
            return IbisConnection(name, mssql_config_from_connection_string(url))
        return UrlConnection(name, connection_info)
    return IbisConnection(name, connection_info)


def run_query(connection_info: dict[str, Any], sql_text: str, timeout_seconds: float | None = 30) -> ResultSet:
    """
    Execute a query and return its rows.

    Args:
        connection_info: Connection mapping from the profile
        sql_text: Query to run
        timeout_seconds: Command timeout (None waits indefinitely)

    Returns:
        ResultSet, possibly empty

    Raises:
        ExportConnectionError: If the data source cannot be reached
        QueryExecutionError: If the query fails or times out
    """
    with create_connection(connection_info, name=connection_info.get("name", "default")) as conn:
        logger.debug(f"Executing query on {conn.display_name}")
        return conn.fetch(sql_text, timeout=timeout_seconds)
