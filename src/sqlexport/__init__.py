"""
sqlexport - run a SQL query per profile and export the result as JSON,
XML, YAML or delimited text.
"""

__version__ = "0.1.0"

from sqlexport.config import Profile, ProfileStore
from sqlexport.core.orchestrator import ExportOrchestrator, ExportResult
from sqlexport.core.rows import DetectionOutcome, EncodeResult, ResultSet, to_display_string

# Exceptions
from sqlexport.exceptions import (
    ConfigurationError,
    ExportConnectionError,
    NotificationError,
    OutputFileError,
    ProfileNotFoundError,
    QueryExecutionError,
    QueryTimeoutError,
    SqlExportError,
    UnsupportedFormatError,
)
from sqlexport.export import (
    SUPPORTED_FORMATS,
    CsvSettings,
    JsonSettings,
    OutputSettings,
    XmlSettings,
    YamlSettings,
    detect_and_encode,
    export_rows,
    get_encoder,
)

# Logging utilities
from sqlexport.utils.logging import get_logger, setup_logging, setup_logging_from_config

__all__ = [
    # Row model
    "ResultSet",
    "EncodeResult",
    "DetectionOutcome",
    "to_display_string",
    # Export engine
    "SUPPORTED_FORMATS",
    "export_rows",
    "detect_and_encode",
    "get_encoder",
    "CsvSettings",
    "XmlSettings",
    "JsonSettings",
    "YamlSettings",
    "OutputSettings",
    # Pipeline
    "Profile",
    "ProfileStore",
    "ExportOrchestrator",
    "ExportResult",
    # Logging
    "setup_logging",
    "setup_logging_from_config",
    "get_logger",
    # Exceptions
    "SqlExportError",
    "ConfigurationError",
    "UnsupportedFormatError",
    "ProfileNotFoundError",
    "ExportConnectionError",
    "QueryExecutionError",
    "QueryTimeoutError",
    "OutputFileError",
    "NotificationError",
]
