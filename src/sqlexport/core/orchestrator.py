"""
Export pipeline: acquire rows, select an encoder, render, write.
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from datetime import datetime
from pathlib import Path
from typing import Any

from sqlexport.config.profile import Profile
from sqlexport.connections import run_query
from sqlexport.core.rows import DetectionOutcome, ResultSet
from sqlexport.exceptions import ConfigurationError
from sqlexport.export import export_rows, normalize_format
from sqlexport.output import FileSink, default_output_path
from sqlexport.utils.logging import get_logger

logger = get_logger("sqlexport.orchestrator")

DataSource = Callable[[dict[str, Any], str, float | None], ResultSet]


@dataclass(frozen=True)
class ExportResult:
    """Outcome of one export run."""

    path: Path
    format: str
    row_count: int
    warnings: tuple[str, ...] = ()


class ExportOrchestrator:
    """
    Run one export for a profile.

    The pipeline is linear and synchronous: Acquire -> Select-Encoder ->
    Encode -> Write. Query and format given to run() override the
    profile's defaults. Errors from the data source and the sink propagate
    unchanged; the orchestrator never retries.

    Args:
        profile: Profile providing connection, defaults and output settings
        data_source: ``run_query(connection_info, sql_text, timeout_seconds)``
        sink: Object with ``write_text(path, content)``
        clock: Returns the timestamp used in default output file names
    """

    def __init__(
        self,
        profile: Profile,
        data_source: DataSource | None = None,
        sink: Any | None = None,
        clock: Callable[[], datetime] = datetime.now,
    ) -> None:
        self.profile = profile
        self.data_source = data_source or run_query
        self.sink = sink or FileSink()
        self.clock = clock

    def resolve_format(self, format: str | None = None) -> str:
        """Requested format, falling back to the profile's, validated."""
        requested = (format or "").strip() or (self.profile.format or "").strip()
        if not requested:
            raise ConfigurationError(f"No format specified in command or profile '{self.profile.name}'")
        return normalize_format(requested)

    def resolve_query(self, query: str | None = None) -> str:
        """Requested query, falling back to the profile's."""
        resolved = (query or "").strip() or (self.profile.query or "").strip()
        if not resolved:
            raise ConfigurationError(f"No query specified in command or profile '{self.profile.name}'")
        return resolved

    def acquire(self, query: str) -> ResultSet:
        """Run the query against the profile's data source."""
        connection_info = self.profile.connection_info
        if not connection_info:
            raise ConfigurationError(f"Connection string is empty in profile '{self.profile.name}'")
        return self.data_source(connection_info, query, self.profile.timeout)

    def render(self, rows: ResultSet, format: str) -> DetectionOutcome:
        """Encode rows with the profile's output settings."""
        outcome = export_rows(rows, format, self.profile.output_properties)
        for warning in outcome.warnings:
            logger.debug(f"Export warning: {warning}")
        return outcome

    def target_path(self, outcome: DetectionOutcome, output_path: str | Path | None = None) -> Path:
        """Explicit path, or a timestamped file named after the resolved format."""
        if output_path:
            return Path(output_path)
        return default_output_path(self.profile.output_directory, outcome.extension, now=self.clock())

    def run(
        self,
        query: str | None = None,
        format: str | None = None,
        output_path: str | Path | None = None,
    ) -> ExportResult:
        """
        Execute the export.

        Returns:
            ExportResult with the written path and resolved format

        Raises:
            ConfigurationError: Missing query/format/connection or unsupported format
            ExportConnectionError, QueryExecutionError: From the data source
            OutputFileError: From the sink
        """
        token = self.resolve_format(format)
        sql_text = self.resolve_query(query)

        logger.info(f"Running export for profile '{self.profile.name}' as {token}")
        rows = self.acquire(sql_text)

        outcome = self.render(rows, token)
        if token != outcome.format:
            logger.info(f"{token} resolved to {outcome.format}")

        path = self.target_path(outcome, output_path)
        written = self.sink.write_text(path, outcome.text)
        return ExportResult(
            path=Path(written) if written is not None else path,
            format=outcome.format,
            row_count=len(rows),
            warnings=outcome.warnings,
        )
