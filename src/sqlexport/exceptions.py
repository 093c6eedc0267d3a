"""
sqlexport exception hierarchy.

All domain-specific exceptions inherit from SqlExportError, so a caller can
catch any export failure with a single base class while still telling the
failure classes apart when deciding on an exit code or a notification.

Hierarchy::

    SqlExportError
    ├── ConfigurationError        - profile loading, missing query/format
    │   ├── UnsupportedFormatError - format token not recognised
    │   └── ProfileNotFoundError  - named profile not in the store
    ├── ExportConnectionError     - data source cannot be opened
    ├── QueryExecutionError       - query failed on the data source
    │   └── QueryTimeoutError     - query exceeded its command timeout
    ├── OutputFileError           - output file cannot be written
    └── NotificationError         - error mail could not be delivered

Malformed cells and malformed embedded documents are not errors: encoders
recover from them locally and report warnings instead.
"""

from __future__ import annotations


class SqlExportError(Exception):
    """Base exception for all sqlexport errors."""

    def __init__(self, message: str, *, details: dict | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.details = details or {}


# --- Configuration -----------------------------------------------------------


class ConfigurationError(SqlExportError):
    """Raised when a profile or command line option is missing or invalid."""


class UnsupportedFormatError(ConfigurationError):
    """Raised when the requested output format is not recognised."""

    def __init__(self, format: str, supported: tuple[str, ...] | list[str]) -> None:
        choices = ", ".join(supported)
        super().__init__(
            f"Invalid format: {format}. Must be one of: {choices}",
            details={"format": format, "supported": list(supported)},
        )
        self.format = format


class ProfileNotFoundError(ConfigurationError):
    """Raised when a named profile is not in the profile store."""

    def __init__(self, name: str) -> None:
        super().__init__(f"Profile '{name}' not found", details={"profile": name})
        self.profile_name = name


# --- Data source -------------------------------------------------------------


class ExportConnectionError(SqlExportError):
    """Raised when the data source connection cannot be established."""


class QueryExecutionError(SqlExportError):
    """Raised when the query fails on the data source."""

    def __init__(self, message: str, *, query: str | None = None, cause: Exception | None = None) -> None:
        super().__init__(message, details={"query": query} if query is not None else None)
        self.query = query
        if cause is not None:
            self.__cause__ = cause


class QueryTimeoutError(QueryExecutionError):
    """Raised when the query runs longer than the profile's command timeout."""

    def __init__(self, timeout: float, *, query: str | None = None) -> None:
        super().__init__(f"Query did not complete within {timeout:g} seconds", query=query)
        self.timeout = timeout


# --- Output ------------------------------------------------------------------


class OutputFileError(SqlExportError):
    """Raised when the rendered document cannot be written."""

    def __init__(self, path: str, message: str) -> None:
        super().__init__(f"Error writing output to '{path}': {message}", details={"path": path})
        self.path = path


# --- Notification ------------------------------------------------------------


class NotificationError(SqlExportError):
    """Raised when an error notification cannot be delivered."""
