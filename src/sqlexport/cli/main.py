"""
Main CLI entry point.
"""

from pathlib import Path

import typer

from sqlexport import __version__
from sqlexport.cli import init, profiles, run
from sqlexport.cli.common import configure_logging, load_store
from sqlexport.cli.interactive import run_interactive
from sqlexport.config.loader import DEFAULT_PROFILES_DIR


def version_callback(value: bool):
    """Callback to display version and exit."""
    if value:
        typer.echo(f"sqlexport version {__version__}")
        raise typer.Exit()


app = typer.Typer(
    name="sqlexport",
    help="Run SQL queries per profile and export the result in various formats",
    add_completion=True,
)

# Register subcommands
app.add_typer(run.app, name="run")
app.add_typer(profiles.app, name="profiles")
app.add_typer(init.app, name="init")


@app.callback(invoke_without_command=True)
def entrypoint(
    ctx: typer.Context,
    version: bool = typer.Option(
        False,
        "--version",
        "-v",
        callback=version_callback,
        help="Show version and exit.",
    ),
    profiles_dir: Path = typer.Option(
        Path(DEFAULT_PROFILES_DIR), "--profiles-dir", "-d", help="Profiles directory (interactive mode)"
    ),
):
    """
    Run SQL queries per profile and export the result as JSON, XML, YAML, CSV or TAB.

    Without a command, sqlexport starts in interactive mode.
    Run 'sqlexport <command> --help' for help on a specific command.
    """
    if ctx.invoked_subcommand is None:
        configure_logging()
        code = run_interactive(load_store(profiles_dir))
        raise typer.Exit(int(code))


def main():
    """Main CLI entry point."""
    app()


if __name__ == "__main__":
    main()
