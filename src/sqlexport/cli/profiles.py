"""
sqlexport profiles - List available profiles.
"""

from pathlib import Path

import typer
from rich.markup import escape
from rich.table import Table

from sqlexport.cli.common import configure_logging, console, load_store
from sqlexport.config.loader import DEFAULT_PROFILES_DIR, ProfileStore
from sqlexport.connections import mask_connection_string

app = typer.Typer(name="profiles", help="List available export profiles", invoke_without_command=True)


def describe_connection(info: dict) -> str:
    """One-line, credential-free description of a connection mapping."""
    if not info:
        return "-"
    conn_type = str(info.get("type", "duckdb"))
    if conn_type == "duckdb":
        return f"duckdb: {info.get('path', ':memory:')}"
    if conn_type == "url":
        return mask_connection_string(str(info.get("url", "")))
    cfg = info.get("config", {})
    return f"{conn_type}: {cfg.get('host', 'localhost')}/{cfg.get('database', '')}"


def show_profiles(store: ProfileStore, verbose: bool = False) -> None:
    """Print the profiles as a table."""
    if not len(store):
        console.print("[yellow]No profiles found.[/yellow]")
        return

    table = Table(title="Available Profiles", show_header=True)
    table.add_column("#", style="dim")
    table.add_column("Name", style="cyan")
    table.add_column("Connection", style="green")
    table.add_column("Format", style="yellow")
    table.add_column("Output Directory", style="magenta")
    table.add_column("Timeout", style="dim")

    for index, profile in enumerate(store, start=1):
        table.add_row(
            str(index),
            escape(profile.name),
            escape(describe_connection(profile.connection_info)),
            profile.format or "-",
            escape(profile.output_directory or "."),
            f"{profile.timeout}s" if profile.timeout else "none",
        )

    console.print(table)

    if verbose:
        console.print()
        for profile in store:
            query = profile.query if len(profile.query) <= 50 else profile.query[:47] + "..."
            xml = profile.output_properties.xml
            console.print(f"[bold]{escape(profile.name)}[/bold]")
            console.print(f"  Query: [dim]{escape(query)}[/dim]")
            console.print(f"  XML Settings: AppendHeader={xml.append_header}, RootNode=\"{escape(xml.root_node)}\"")
            console.print()


@app.callback()
def profiles(
    ctx: typer.Context,
    profiles_dir: Path = typer.Option(Path(DEFAULT_PROFILES_DIR), "--profiles-dir", "-d", help="Profiles directory"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Show queries and settings"),
) -> None:
    """
    List the profiles found in the profiles directory.
    """
    if ctx.invoked_subcommand is None:
        configure_logging(verbose)
        show_profiles(load_store(profiles_dir), verbose=verbose)
