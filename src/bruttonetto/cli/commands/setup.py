"""Interactive setup wizard — bn setup."""

from decimal import Decimal

import typer
from rich import box
from rich.console import Console
from rich.panel import Panel
from rich.prompt import Confirm, FloatPrompt, IntPrompt, Prompt
from rich.table import Table

from ...core.config import AppConfig, get_config, save_config
from ...core.formatting import format_prozent
from ...core.models import Bundesland, Krankenversicherung

app = typer.Typer(help="Interactive setup wizard")
console = Console()


def _say(text: str, style: str = ""):
    """Bot 'speaks'."""
    console.print(f"\n  {text}" if not style else f"\n  [{style}]{text}[/{style}]")


def _pick(choices: list[str], default: int = 0) -> int:
    """Pick from numbered list. Returns 0-based index."""
    for i, c in enumerate(choices, 1):
        console.print(f"    [bold]{i}.[/bold] {c}")
    while True:
        raw = Prompt.ask("  [cyan]>[/cyan]", default=str(default + 1), console=console)
        try:
            idx = int(raw) - 1
            if 0 <= idx < len(choices):
                return idx
        except ValueError:
            pass
        console.print("    [red]Enter a number from the list[/red]")


def _yesno(prompt: str, default: bool = True) -> bool:
    console.print(f"\n  {prompt}")
    return Confirm.ask("  [cyan]>[/cyan]", default=default, console=console)


@app.command("run")
def run_setup():
    """Run the interactive setup wizard."""
    existing = get_config()

    console.print()
    console.print(Panel.fit(
        "[bold]Brutto-Netto-Rechner — Setup[/bold]",
        border_style="cyan",
        padding=(0, 4),
    ))
    _say("Answer a few questions — the answers become the defaults for bn netto.")
    _say("Current settings are shown as defaults. Press Enter to keep them.")

    # ── Name (optional) ───────────────────────────────────────────────────────
    console.print("\n  Your name? (optional)")
    name = Prompt.ask("  [cyan]>[/cyan]", default=existing.user_name or "", console=console)

    # ── Bundesland ────────────────────────────────────────────────────────────
    _say("In which Bundesland do you live?")
    laender = [b.value for b in Bundesland]
    land_default = laender.index(existing.bundesland) if existing.bundesland in laender else 9
    bundesland = laender[_pick(laender, land_default)]

    # ── Steuerklasse ──────────────────────────────────────────────────────────
    _say("Steuerklasse (1–6)?")
    while True:
        steuerklasse = IntPrompt.ask("  [cyan]>[/cyan]", default=existing.steuerklasse, console=console)
        if 1 <= steuerklasse <= 6:
            break
        console.print("    [red]Steuerklasse must be between 1 and 6[/red]")
    if steuerklasse in (5, 6):
        _say("Steuerklasse V/VI is calculated with a simplified method.", "yellow")

    kirche = _yesno("Kirchensteuerpflichtig?", default=existing.kirchensteuer)

    # ── Krankenversicherung ───────────────────────────────────────────────────
    _say("Krankenversicherung:")
    arten = [k.value for k in Krankenversicherung]
    kv_default = arten.index(existing.krankenversicherung) if existing.krankenversicherung in arten else 0
    krankenversicherung = arten[_pick(arten, kv_default)]

    zusatz = existing.kv_zusatzbeitrag
    if krankenversicherung != Krankenversicherung.PRIVAT.value:
        _say("KV-Zusatzbeitrag Ihrer Krankenkasse in % (Durchschnitt 2026: 2,9 %):")
        zusatz_pct = FloatPrompt.ask(
            "  [cyan]>[/cyan]", default=float(existing.kv_zusatzbeitrag * 100), console=console
        )
        zusatz = (Decimal(str(zusatz_pct)) / 100).quantize(Decimal("0.0001"))

    # ── Kinder / Alter ────────────────────────────────────────────────────────
    _say("Anzahl Kinder unter 25 (for the Pflegeversicherung):")
    kinder = IntPrompt.ask("  [cyan]>[/cyan]", default=existing.kinder_unter_25, console=console)
    _say("Kinderfreibeträge laut Lohnsteuerabzugsmerkmalen (e.g. 0.5, 1, 1.5):")
    kfb = FloatPrompt.ask("  [cyan]>[/cyan]", default=float(existing.kinderfreibetrag), console=console)
    _say("Your age:")
    alter = IntPrompt.ask("  [cyan]>[/cyan]", default=existing.alter, console=console)

    # ── Summary & confirm ─────────────────────────────────────────────────────
    console.print()
    table = Table(box=box.ROUNDED, border_style="cyan", show_header=False, padding=(0, 2))
    table.add_column(style="dim")
    table.add_column(style="bold")
    if name:
        table.add_row("Name", name)
    table.add_row("Bundesland", bundesland)
    table.add_row("Steuerklasse", str(steuerklasse))
    table.add_row("Kirchensteuer", "ja" if kirche else "nein")
    table.add_row("Krankenversicherung", krankenversicherung)
    if krankenversicherung != Krankenversicherung.PRIVAT.value:
        table.add_row("KV-Zusatzbeitrag", format_prozent(zusatz * 100, 2))
    table.add_row("Kinder unter 25", str(kinder))
    table.add_row("Kinderfreibeträge", str(kfb))
    table.add_row("Alter", str(alter))
    console.print(table)

    if not _yesno("Save these settings?", default=True):
        _say("Cancelled. Settings unchanged.", "yellow")
        raise typer.Exit()

    save_config(AppConfig(
        steuerjahr=existing.steuerjahr,
        bundesland=bundesland,
        steuerklasse=steuerklasse,
        kirchensteuer=kirche,
        krankenversicherung=krankenversicherung,
        kv_zusatzbeitrag=zusatz,
        alter=alter,
        kinder_unter_25=kinder,
        kinderfreibetrag=Decimal(str(kfb)),
        user_name=name,
    ))

    console.print()
    console.print(Panel.fit(
        "[bold green]✓ Settings saved to config.json[/bold green]\n\n"
        "[dim]Run [bold]bn setup run[/bold] again to change.[/dim]",
        border_style="green",
        padding=(0, 2),
    ))
    console.print()
