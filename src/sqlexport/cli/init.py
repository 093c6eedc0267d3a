"""
sqlexport init - Write a starter profile.
"""

from dataclasses import replace
from pathlib import Path

import typer

from sqlexport.config.loader import DEFAULT_PROFILES_DIR, DEMO_PROFILE, write_profile

app = typer.Typer(name="init", help="Create a starter profile", invoke_without_command=True)


@app.callback()
def init(
    ctx: typer.Context,
    name: str = typer.Argument("default", help="Profile name"),
    profiles_dir: Path = typer.Option(Path(DEFAULT_PROFILES_DIR), "--profiles-dir", "-d", help="Profiles directory"),
    force: bool = typer.Option(False, "--force", help="Overwrite an existing profile"),
):
    """
    Create a profile file based on the demo profile.
    """
    if ctx.invoked_subcommand is None:
        target = profiles_dir / f"{name}.yaml"
        if target.exists() and not force:
            typer.echo(f"Error: Profile {target} already exists (use --force to overwrite)", err=True)
            raise typer.Exit(1)

        profile = replace(DEMO_PROFILE, name=name)
        path = write_profile(profile, profiles_dir)

        typer.echo(f"Created profile: {path}")
        typer.echo("  Edit the connection and query, then run:")
        typer.echo(f"  sqlexport run --profile {name}")
