"""Calculator commands — netto, lohnsteuer, sv, est."""

import json
import re
from decimal import Decimal
from typing import Optional

import typer
from rich.console import Console
from rich.table import Table

from ...core.calculator import BruttoNettoResult, brutto_netto
from ...core.config import get_config
from ...core.exceptions import BruttoNettoError
from ...core.formatting import format_euro, format_prozent, parse_german_number
from ...core.models import (
    Bundesland,
    BruttoNettoInput,
    Krankenversicherung,
    LohnsteuerProfil,
    SVProfil,
    Zeitraum,
    land_name,
    to_decimal,
)
from ...core.sozialversicherung import SVResult, berechne_sozialversicherung
from ...core.tax import (
    berechne_lohnsteuer,
    durchschnittssteuersatz,
    get_steuerdaten,
    grenzsteuersatz,
    tarif_nach_klasse,
    tarifzone,
)

console = Console()

SV_LABELS = {
    "kv": "Krankenversicherung",
    "pv": "Pflegeversicherung",
    "rv": "Rentenversicherung",
    "av": "Arbeitslosenversicherung",
}


_TAUSENDER = re.compile(r"-?\d{1,3}(\.\d{3})+")


def _betrag(text: str) -> Decimal:
    """Accept "3.000,50" and "3.000" (German) as well as "3000.50".

    A dot followed by groups of exactly three digits is read as a
    thousands separator, so "3.000" is three thousand, not three.
    """
    if "," in text or _TAUSENDER.fullmatch(text.strip()):
        return parse_german_number(text)
    try:
        return to_decimal(text, "betrag")
    except BruttoNettoError:
        console.print(f"[red]Not a valid amount: {text}[/red]")
        raise typer.Exit(1)


def _prozent(value: Optional[float], default: Decimal) -> Decimal:
    """CLI rates are entered in percent (2.9 → 0.029)."""
    if value is None:
        return default
    return to_decimal(value) / 100


def _daten(jahr: int):
    try:
        return get_steuerdaten(jahr)
    except BruttoNettoError as e:
        console.print(f"[red]{e}[/red]")
        raise typer.Exit(1)


def _pick(value, default):
    return default if value is None else value


def _print_sv(sv: SVResult, title: str) -> None:
    table = Table(title=title)
    table.add_column("Zweig")
    table.add_column("Arbeitnehmer", justify="right")
    table.add_column("Arbeitgeber", justify="right")
    for key, beitrag in sv.zweige().items():
        table.add_row(SV_LABELS[key], format_euro(beitrag.an), format_euro(beitrag.ag))
    table.add_row(
        "[bold]Summe[/bold]",
        f"[bold]{format_euro(sv.summe_an)}[/bold]",
        f"[bold]{format_euro(sv.summe_ag)}[/bold]",
    )
    console.print(table)


def _print_result(r: BruttoNettoResult) -> None:
    steuern = Table(title="Steuern")
    steuern.add_column("Posten")
    steuern.add_column("Monat", justify="right")
    steuern.add_column("Jahr", justify="right")
    steuern.add_row("Lohnsteuer", format_euro(r.steuern_monat.lohnsteuer), format_euro(r.steuern_jahr.lohnsteuer))
    steuern.add_row("Solidaritätszuschlag", format_euro(r.steuern_monat.soli), format_euro(r.steuern_jahr.soli))
    steuern.add_row("Kirchensteuer", format_euro(r.steuern_monat.kirchensteuer), format_euro(r.steuern_jahr.kirchensteuer))
    steuern.add_row(
        "[bold]Steuern gesamt[/bold]",
        f"[bold]{format_euro(r.steuern_monat.gesamt)}[/bold]",
        f"[bold]{format_euro(r.steuern_jahr.gesamt)}[/bold]",
    )
    console.print(steuern)

    _print_sv(r.sv, "Sozialversicherung (Monat)")

    summary = Table(show_header=False, box=None, padding=(0, 2))
    summary.add_column("Label", style="dim")
    summary.add_column("Monat", justify="right")
    summary.add_column("Jahr", justify="right")
    summary.add_row("Brutto", format_euro(r.brutto_monat), format_euro(r.brutto_jahr))
    summary.add_row("Abzüge", f"[red]{format_euro(r.abzuege_monat)}[/red]", f"[red]{format_euro(r.abzuege_jahr)}[/red]")
    summary.add_row(
        "[bold]Netto[/bold]",
        f"[bold green]{format_euro(r.netto_monat)}[/bold green]",
        f"[bold green]{format_euro(r.netto_jahr)}[/bold green]",
    )
    console.print(summary)
    console.print(
        f"\n  Steuerquote {format_prozent(r.steuerquote)}  |  "
        f"SV-Quote {format_prozent(r.svquote)}  |  "
        f"Nettoquote {format_prozent(r.nettoquote)}"
    )
    for hinweis in r.hinweise:
        console.print(f"  [yellow]⚠ {hinweis}[/yellow]")
    console.print()


def netto(
    brutto: str = typer.Argument(..., help="Bruttogehalt (Monat, oder Jahr mit --jahr), z. B. 3000, 3.000 oder 3.000,50"),
    jahr: bool = typer.Option(False, "--jahr", "-j", help="Betrag ist ein Jahresbrutto"),
    steuerklasse: Optional[int] = typer.Option(None, "--steuerklasse", "-k", min=1, max=6, help="Steuerklasse 1–6"),
    bundesland: Optional[Bundesland] = typer.Option(None, "--bundesland", "-b", help="Bundesland"),
    kirche: Optional[bool] = typer.Option(None, "--kirche/--keine-kirche", help="Kirchensteuerpflichtig"),
    kv: Optional[Krankenversicherung] = typer.Option(None, "--kv", help="Art der Krankenversicherung"),
    zusatzbeitrag: Optional[float] = typer.Option(None, "--zusatzbeitrag", help="KV-Zusatzbeitrag in % (z. B. 2.9)"),
    pkv_beitrag: str = typer.Option("0", "--pkv-beitrag", help="Monatlicher PKV-Beitrag"),
    ohne_ag_zuschuss: bool = typer.Option(False, "--ohne-ag-zuschuss", help="Kein Arbeitgeberzuschuss zur PKV"),
    ohne_rv: bool = typer.Option(False, "--ohne-rv", help="Nicht rentenversicherungspflichtig"),
    ohne_av: bool = typer.Option(False, "--ohne-av", help="Nicht arbeitslosenversicherungspflichtig"),
    kinder: Optional[int] = typer.Option(None, "--kinder", min=0, help="Kinder unter 25 (Pflegeversicherung)"),
    eltern: bool = typer.Option(False, "--eltern", help="Elterneigenschaft auch ohne Kinder unter 25"),
    kinderfreibetrag: Optional[float] = typer.Option(None, "--kinderfreibetrag", min=0, help="Zahl der Kinderfreibeträge"),
    alter: Optional[int] = typer.Option(None, "--alter", min=0, help="Alter in Jahren"),
    freibetrag: str = typer.Option("0", "--freibetrag", help="Steuerfreibetrag pro Jahr"),
    gwv: str = typer.Option("0", "--gwv", help="Geldwerter Vorteil pro Monat"),
    steuerjahr: Optional[int] = typer.Option(None, "--steuerjahr", help="Steuerjahr"),
    as_json: bool = typer.Option(False, "--json", help="Ergebnis als JSON ausgeben"),
):
    """Brutto-Netto-Rechnung: Steuern, Sozialversicherung und Nettogehalt."""
    cfg = get_config()
    kinder_anzahl = _pick(kinder, cfg.kinder_unter_25)
    try:
        eingabe = BruttoNettoInput(
            brutto=_betrag(brutto),
            zeitraum=Zeitraum.JAHR if jahr else Zeitraum.MONAT,
            steuerklasse=_pick(steuerklasse, cfg.steuerklasse),
            bundesland=_pick(bundesland, cfg.bundesland),
            kirchensteuer=_pick(kirche, cfg.kirchensteuer),
            krankenversicherung=_pick(kv, cfg.krankenversicherung),
            kv_zusatzbeitrag=_prozent(zusatzbeitrag, cfg.kv_zusatzbeitrag),
            pkv_beitrag=_betrag(pkv_beitrag),
            arbeitgeberzuschuss_pkv=not ohne_ag_zuschuss,
            rentenversichert=not ohne_rv,
            arbeitslosenversichert=not ohne_av,
            hat_kinder=eltern or kinder_anzahl > 0,
            kinderfreibetrag=_pick(kinderfreibetrag, cfg.kinderfreibetrag),
            kinder_unter_25=kinder_anzahl,
            alter=_pick(alter, cfg.alter),
            steuerfreibetrag=_betrag(freibetrag),
            geldwerter_vorteil=_betrag(gwv),
            steuerjahr=_pick(steuerjahr, cfg.steuerjahr),
        )
        result = brutto_netto(eingabe)
    except BruttoNettoError as e:
        console.print(f"[red]{e}[/red]")
        raise typer.Exit(1)

    if as_json:
        typer.echo(json.dumps(result.to_dict(), indent=2, ensure_ascii=False))
        return

    titel = "Jahresbrutto" if jahr else "Monatsbrutto"
    console.print(
        f"\n[bold]Brutto-Netto {eingabe.steuerjahr}[/bold] — {titel} {format_euro(eingabe.brutto)}, "
        f"Steuerklasse {eingabe.steuerklasse}, {land_name(eingabe.bundesland)}\n"
    )
    _print_result(result)


def lohnsteuer(
    brutto_jahr: str = typer.Argument(..., help="Jahresbrutto"),
    steuerklasse: Optional[int] = typer.Option(None, "--steuerklasse", "-k", min=1, max=6, help="Steuerklasse 1–6"),
    bundesland: Optional[Bundesland] = typer.Option(None, "--bundesland", "-b", help="Bundesland"),
    kirche: Optional[bool] = typer.Option(None, "--kirche/--keine-kirche", help="Kirchensteuerpflichtig"),
    kinderfreibetrag: Optional[float] = typer.Option(None, "--kinderfreibetrag", min=0, help="Zahl der Kinderfreibeträge"),
    freibetrag: str = typer.Option("0", "--freibetrag", help="Steuerfreibetrag pro Jahr"),
    gwv: str = typer.Option("0", "--gwv", help="Geldwerter Vorteil pro Monat"),
    steuerjahr: Optional[int] = typer.Option(None, "--steuerjahr", help="Steuerjahr"),
):
    """Jährliche Lohnsteuer, Solidaritätszuschlag und Kirchensteuer."""
    cfg = get_config()
    daten = _daten(_pick(steuerjahr, cfg.steuerjahr))
    profil = LohnsteuerProfil(
        brutto_jahr=_betrag(brutto_jahr),
        steuerklasse=_pick(steuerklasse, cfg.steuerklasse),
        kirchensteuer=_pick(kirche, cfg.kirchensteuer),
        bundesland=_pick(bundesland, cfg.bundesland),
        kinderfreibetrag=_pick(kinderfreibetrag, cfg.kinderfreibetrag),
        steuerfreibetrag=_betrag(freibetrag),
        geldwerter_vorteil=_betrag(gwv),
    )
    r = berechne_lohnsteuer(profil, daten)

    table = Table(title=f"Lohnsteuer {daten.jahr} — Steuerklasse {profil.steuerklasse}")
    table.add_column("Posten")
    table.add_column("Jahr", justify="right")
    table.add_row("Brutto (inkl. geldwerter Vorteil)", format_euro(r.brutto))
    table.add_row("Werbungskostenpauschale", f"[dim]−{format_euro(r.werbungskosten)}[/dim]")
    table.add_row("Sonderausgabenpauschale", f"[dim]−{format_euro(r.sonderausgaben)}[/dim]")
    table.add_row("Vorsorgepauschale", f"[dim]−{format_euro(r.vorsorgepauschale)}[/dim]")
    table.add_row("Zu versteuerndes Einkommen", format_euro(r.zve))
    table.add_row("Lohnsteuer", format_euro(r.lohnsteuer))
    table.add_row("Solidaritätszuschlag", format_euro(r.soli))
    table.add_row("Kirchensteuer", format_euro(r.kirchensteuer))
    table.add_row("[bold]Gesamt[/bold]", f"[bold red]{format_euro(r.gesamt)}[/bold red]")
    console.print(table)
    if profil.steuerklasse in (5, 6):
        console.print("  [yellow]⚠ Steuerklasse V/VI: vereinfachte Berechnung, weicht vom BMF-Rechner ab.[/yellow]")
    console.print()


def sv(
    brutto_monat: str = typer.Argument(..., help="Monatsbrutto"),
    bundesland: Optional[Bundesland] = typer.Option(None, "--bundesland", "-b", help="Bundesland"),
    kv: Optional[Krankenversicherung] = typer.Option(None, "--kv", help="Art der Krankenversicherung"),
    zusatzbeitrag: Optional[float] = typer.Option(None, "--zusatzbeitrag", help="KV-Zusatzbeitrag in % (z. B. 2.9)"),
    pkv_beitrag: str = typer.Option("0", "--pkv-beitrag", help="Monatlicher PKV-Beitrag"),
    ohne_ag_zuschuss: bool = typer.Option(False, "--ohne-ag-zuschuss", help="Kein Arbeitgeberzuschuss zur PKV"),
    ohne_rv: bool = typer.Option(False, "--ohne-rv", help="Nicht rentenversicherungspflichtig"),
    ohne_av: bool = typer.Option(False, "--ohne-av", help="Nicht arbeitslosenversicherungspflichtig"),
    kinder: Optional[int] = typer.Option(None, "--kinder", min=0, help="Kinder unter 25"),
    eltern: bool = typer.Option(False, "--eltern", help="Elterneigenschaft auch ohne Kinder unter 25"),
    alter: Optional[int] = typer.Option(None, "--alter", min=0, help="Alter in Jahren"),
    steuerjahr: Optional[int] = typer.Option(None, "--steuerjahr", help="Steuerjahr"),
):
    """Monatliche Sozialversicherungsbeiträge (Arbeitnehmer und Arbeitgeber)."""
    cfg = get_config()
    daten = _daten(_pick(steuerjahr, cfg.steuerjahr))
    kinder_anzahl = _pick(kinder, cfg.kinder_unter_25)
    try:
        profil = SVProfil(
            brutto_monat=_betrag(brutto_monat),
            bundesland=_pick(bundesland, cfg.bundesland),
            krankenversicherung=_pick(kv, cfg.krankenversicherung),
            kv_zusatzbeitrag=_prozent(zusatzbeitrag, cfg.kv_zusatzbeitrag),
            pkv_beitrag=_betrag(pkv_beitrag),
            arbeitgeberzuschuss_pkv=not ohne_ag_zuschuss,
            rentenversichert=not ohne_rv,
            arbeitslosenversichert=not ohne_av,
            kinder_anzahl=kinder_anzahl,
            hat_kinder=eltern or kinder_anzahl > 0,
            alter=_pick(alter, cfg.alter),
        )
    except BruttoNettoError as e:
        console.print(f"[red]{e}[/red]")
        raise typer.Exit(1)

    _print_sv(berechne_sozialversicherung(profil, daten), f"Sozialversicherung {daten.jahr} (Monat)")
    console.print()


def est(
    zve: str = typer.Argument(..., help="Zu versteuerndes Einkommen (Jahr)"),
    splitting: bool = typer.Option(False, "--splitting", help="Splittingtarif (Zusammenveranlagung)"),
    steuerjahr: Optional[int] = typer.Option(None, "--steuerjahr", help="Steuerjahr"),
):
    """Einkommensteuer nach § 32a EStG für ein zu versteuerndes Einkommen."""
    daten = _daten(_pick(steuerjahr, get_config().steuerjahr))
    betrag = _betrag(zve)
    steuer = tarif_nach_klasse(betrag, 3 if splitting else 1, daten)
    basis = betrag / 2 if splitting else betrag

    console.print(f"\n[bold]Einkommensteuer {daten.jahr}[/bold]{' (Splitting)' if splitting else ''}")
    console.print(f"  zvE:                 {format_euro(betrag)}")
    console.print(f"  Tarifzone:           {tarifzone(basis, daten)}")
    console.print(f"  Einkommensteuer:     [bold]{format_euro(steuer)}[/bold]")
    console.print(f"  Durchschnittssatz:   {format_prozent(durchschnittssteuersatz(basis, daten), 2)}")
    console.print(f"  Grenzsteuersatz:     {format_prozent(grenzsteuersatz(basis, daten) * 100, 2)}")
    console.print()
