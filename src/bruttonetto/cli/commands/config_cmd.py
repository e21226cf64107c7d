"""Config commands — show and change defaults in config.json."""

from dataclasses import asdict

import typer
from rich.console import Console
from rich.table import Table

from ...core.config import config_path, get_config, update_config
from ...core.exceptions import ConfigError

app = typer.Typer(help="Show and change default settings")
console = Console()


@app.command("show")
def show():
    """Show the current defaults."""
    cfg = get_config()
    table = Table(title=f"Konfiguration — {config_path()}")
    table.add_column("Key", style="bold")
    table.add_column("Value")
    for key, value in asdict(cfg).items():
        table.add_row(key, str(value))
    console.print(table)


@app.command("set")
def set_value(
    key: str = typer.Argument(..., help="Config key, e.g. bundesland"),
    value: str = typer.Argument(..., help="New value"),
):
    """Change a single default and save config.json."""
    try:
        update_config(key, value)
    except ConfigError as e:
        console.print(f"[red]{e}[/red]")
        raise typer.Exit(1)
    console.print(f"[green]✓ {key} = {value}[/green]")
