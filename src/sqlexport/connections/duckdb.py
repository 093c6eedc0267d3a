"""
DuckDB connection via ibis.
"""

import re
from pathlib import Path
from typing import Any

import ibis

from sqlexport.connections.base import BaseConnection
from sqlexport.exceptions import ExportConnectionError
from sqlexport.utils.logging import get_logger

logger = get_logger("sqlexport.connections.duckdb")


class DuckDBConnection(BaseConnection):
    """
    DuckDB connection wrapper using ibis.

    Config::

        connection:
          type: duckdb
          path: data/warehouse.duckdb   # or :memory:
          read_only: true
    """

    @property
    def path(self) -> str:
        return str(self.config.get("path", ":memory:"))

    @property
    def display_name(self) -> str:
        return f"duckdb:{self.path}"

    @property
    def connection(self) -> ibis.BaseBackend:
        """
        Get DuckDB connection via ibis (lazy initialization).

        Returns:
            ibis.BaseBackend: ibis DuckDB backend

        Raises:
            ExportConnectionError: If the database cannot be opened
        """
        if self._connection is None:
            path = self.path

            if path == ":memory:":
                self._connection = ibis.duckdb.connect()
                return self._connection

            read_only = bool(self.config.get("read_only", False))
            if not read_only and not path.startswith("s3://"):
                Path(path).parent.mkdir(parents=True, exist_ok=True)

            try:
                self._connection = ibis.duckdb.connect(path, read_only=read_only)
            except Exception as e:
                error_str = str(e)
                if "lock" in error_str.lower() or "conflicting" in error_str.lower():
                    pid_match = re.search(r"PID\s+(\d+)", error_str)
                    pid_info = f" (PID: {pid_match.group(1)})" if pid_match else ""
                    raise ExportConnectionError(
                        f"Cannot connect to DuckDB database '{path}': File is locked by another process{pid_info}",
                        details={"path": path},
                    ) from e
                raise ExportConnectionError(
                    f"Cannot connect to DuckDB database '{path}': {error_str}", details={"path": path}
                ) from e

            logger.debug(f"Connected to DuckDB database {path}")

        return self._connection
