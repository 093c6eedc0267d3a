"""
Shared CLI helpers: exit codes, logging setup, the export runner.
"""

from enum import IntEnum
from pathlib import Path

from rich.console import Console
from rich.markup import escape

from sqlexport.config.loader import ProfileStore, load_settings
from sqlexport.core.orchestrator import ExportOrchestrator
from sqlexport.exceptions import (
    ConfigurationError,
    ExportConnectionError,
    OutputFileError,
    ProfileNotFoundError,
    QueryExecutionError,
    SqlExportError,
    UnsupportedFormatError,
)
from sqlexport.notify import EmailNotifier
from sqlexport.utils.logging import get_logger, setup_logging_from_config

logger = get_logger("sqlexport.cli")

console = Console()

SETTINGS_FILE = "sqlexport.yaml"


class ExitCode(IntEnum):
    SUCCESS = 0
    GENERAL_ERROR = 1
    PROFILE_NOT_FOUND = 2
    CONNECTION_ERROR = 3
    QUERY_EXECUTION_ERROR = 4
    OUTPUT_FILE_ERROR = 5
    FORMAT_ERROR = 6
    CONFIGURATION_ERROR = 7


def exit_code_for(error: BaseException) -> ExitCode:
    """Map an exception to the process exit code."""
    # Order matters: subclasses before their bases
    if isinstance(error, ProfileNotFoundError):
        return ExitCode.PROFILE_NOT_FOUND
    if isinstance(error, UnsupportedFormatError):
        return ExitCode.FORMAT_ERROR
    if isinstance(error, ConfigurationError):
        return ExitCode.CONFIGURATION_ERROR
    if isinstance(error, ExportConnectionError):
        return ExitCode.CONNECTION_ERROR
    if isinstance(error, QueryExecutionError):
        return ExitCode.QUERY_EXECUTION_ERROR
    if isinstance(error, OutputFileError):
        return ExitCode.OUTPUT_FILE_ERROR
    return ExitCode.GENERAL_ERROR


def configure_logging(verbose: bool = False, settings_file: Path | None = None) -> None:
    """Set up logging from ``sqlexport.yaml`` (if present) and the verbose flag."""
    settings = load_settings(settings_file or Path.cwd() / SETTINGS_FILE)
    logging_config = dict(settings.get("logging") or {})
    if verbose:
        logging_config["level"] = "DEBUG"
    setup_logging_from_config({"logging": logging_config})


def load_store(profiles_dir: Path) -> ProfileStore:
    """Load profiles, writing the demo profile on first use."""
    return ProfileStore.load(profiles_dir, create_default=True)


def execute_export(
    store: ProfileStore,
    profile_name: str,
    query: str | None = None,
    format: str | None = None,
    output: Path | None = None,
) -> ExitCode:
    """
    Run one export and report the outcome on the console.

    Failures are logged, shown, and sent to the profile's notifier when
    notifications are enabled. The return value is the process exit code.
    """
    try:
        profile = store.get(profile_name)
    except ProfileNotFoundError as e:
        logger.error(e.message)
        console.print(f"[red]Profile '{escape(profile_name)}' not found. Use 'sqlexport profiles' to see available profiles.[/red]")
        return exit_code_for(e)

    console.print(f"[green]Using profile:[/green] [blue]{escape(profile.name)}[/blue]")
    notifier = EmailNotifier(profile.notifications)

    try:
        with console.status("Executing query..."):
            result = ExportOrchestrator(profile).run(query=query, format=format, output_path=output)
    except SqlExportError as e:
        code = exit_code_for(e)
        logger.error(f"Export failed ({code.name}): {e.message}")
        console.print(f"[red]Error: {escape(e.message)}[/red]")
        if e.__cause__ is not None:
            console.print(f"[red]Details: {escape(str(e.__cause__))}[/red]")
        notifier.notify_failure(profile.name, e)
        return code
    except Exception as e:
        logger.exception(f"Unhandled error executing export: {e}")
        console.print(f"[red]Error: {escape(str(e))}[/red]")
        notifier.notify_failure(profile.name, e)
        return ExitCode.GENERAL_ERROR

    console.print(f"Retrieved {result.row_count} rows")
    if result.warnings:
        console.print(f"[yellow]{len(result.warnings)} value(s) could not be rendered and were left empty (see log)[/yellow]")
    console.print(f"[green]Output written to:[/green] [blue]{escape(str(result.path))}[/blue] ({result.format})")
    return ExitCode.SUCCESS
