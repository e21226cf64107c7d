"""Brutto-Netto-Rechner CLI — main entry point."""

import logging
import os

import typer
from rich.console import Console
from rich.logging import RichHandler

from .commands import config_cmd, rechner, setup

app = typer.Typer(
    name="bn",
    help="Brutto-Netto-Rechner 2026 — Lohnsteuer, Soli, Kirchensteuer, Sozialversicherung",
    rich_markup_mode="rich",
    no_args_is_help=True,
)

app.command("netto")(rechner.netto)
app.command("lohnsteuer")(rechner.lohnsteuer)
app.command("sv")(rechner.sv)
app.command("est")(rechner.est)
app.add_typer(config_cmd.app, name="config", help="Default settings (config.json)")
app.add_typer(setup.app, name="setup", help="Interactive setup wizard")


@app.callback()
def startup(
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Show calculation details"),
):
    """Configure logging (LOG_LEVEL env var, or --verbose for DEBUG)."""
    level = "DEBUG" if verbose else os.environ.get("LOG_LEVEL", "WARNING").upper()
    logging.basicConfig(
        level=getattr(logging, level, logging.WARNING),
        format="%(message)s",
        handlers=[RichHandler(console=Console(stderr=True), show_path=False)],
        force=True,
    )


if __name__ == "__main__":
    app()
