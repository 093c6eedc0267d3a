"""
Interactive mode, used when sqlexport is started without a command.
"""

from pathlib import Path

from rich.markup import escape
from rich.prompt import Confirm, Prompt

from sqlexport.cli.common import ExitCode, console, execute_export
from sqlexport.config.loader import ProfileStore
from sqlexport.export import SUPPORTED_FORMATS


def choose_profile(store: ProfileStore, answer: str) -> str | None:
    """Resolve a profile number (1-based, sorted order) or name."""
    names = store.names()
    answer = answer.strip()
    if answer.isdigit() and 1 <= int(answer) <= len(names):
        return names[int(answer) - 1]
    return answer if answer in store else None


def run_interactive(store: ProfileStore) -> ExitCode:
    """Prompt for a profile and optional overrides, then run the export."""
    console.print("[bold green]=== sqlexport ===[/bold green]")
    console.print()

    names = store.names()
    if not names:
        console.print("[red]No profiles found. Please create a profile first.[/red]")
        return ExitCode.PROFILE_NOT_FOUND

    console.print("[yellow]Available profiles:[/yellow]")
    for index, name in enumerate(names, start=1):
        console.print(f" {index}. [cyan]{escape(name)}[/cyan]")

    answer = Prompt.ask("\nEnter profile number or name", console=console)
    profile_name = choose_profile(store, answer)
    if profile_name is None:
        console.print(f"[red]Profile '{escape(answer)}' not found.[/red]")
        return ExitCode.PROFILE_NOT_FOUND

    query = None
    if not Confirm.ask("Use default query from profile?", default=True, console=console):
        query = Prompt.ask("Enter custom SQL query", console=console)

    format = None
    if not Confirm.ask("Use default format from profile?", default=True, console=console):
        format = Prompt.ask(f"Enter format ({', '.join(SUPPORTED_FORMATS)})", console=console)

    output = None
    if not Confirm.ask("Use default output path from profile?", default=True, console=console):
        output = Path(Prompt.ask("Enter output file path", console=console))

    return execute_export(store, profile_name, query=query, format=format, output=output)
