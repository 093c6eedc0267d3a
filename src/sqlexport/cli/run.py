"""
sqlexport run - Execute a profile's query and export the result.
"""

from pathlib import Path

import typer

from sqlexport.cli.common import configure_logging, execute_export, load_store
from sqlexport.cli.profiles import show_profiles
from sqlexport.config.loader import DEFAULT_PROFILES_DIR
from sqlexport.export import SUPPORTED_FORMATS
from sqlexport.utils.logging import get_logger

logger = get_logger("sqlexport.cli.run")

app = typer.Typer(name="run", help="Run a query and export the result", invoke_without_command=True)


@app.callback()
def run(
    ctx: typer.Context,
    profile: str = typer.Option("default", "--profile", "-p", help="Profile name to use"),
    query: str | None = typer.Option(None, "--query", "-q", help="SQL query to execute (optional if defined in profile)"),
    format: str | None = typer.Option(
        None, "--format", "-f", help=f"Output format: {', '.join(SUPPORTED_FORMATS)} (optional if defined in profile)"
    ),
    output: Path | None = typer.Option(None, "--output", "-o", help="Output file path (overrides profile setting)"),
    list_profiles: bool = typer.Option(False, "--list", "-l", help="List available profiles and exit"),
    profiles_dir: Path = typer.Option(Path(DEFAULT_PROFILES_DIR), "--profiles-dir", "-d", help="Profiles directory"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Verbose output"),
) -> None:
    """
    Run a SQL query for a profile and export the result.

    Query, format and output path default to the profile's settings.
    """
    if ctx.invoked_subcommand is None:
        configure_logging(verbose)
        store = load_store(profiles_dir)

        if list_profiles:
            show_profiles(store)
            raise typer.Exit(0)

        code = execute_export(store, profile, query=query, format=format, output=output)
        raise typer.Exit(int(code))
