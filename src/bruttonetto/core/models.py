"""Data models for the Brutto-Netto-Rechner."""

from dataclasses import dataclass, fields
from decimal import Decimal, InvalidOperation
from enum import Enum

from .exceptions import InvalidInputError


class Bundesland(str, Enum):
    BADEN_WUERTTEMBERG = "Baden-Württemberg"
    BAYERN = "Bayern"
    BERLIN = "Berlin"
    BRANDENBURG = "Brandenburg"
    BREMEN = "Bremen"
    HAMBURG = "Hamburg"
    HESSEN = "Hessen"
    MECKLENBURG_VORPOMMERN = "Mecklenburg-Vorpommern"
    NIEDERSACHSEN = "Niedersachsen"
    NORDRHEIN_WESTFALEN = "Nordrhein-Westfalen"
    RHEINLAND_PFALZ = "Rheinland-Pfalz"
    SAARLAND = "Saarland"
    SACHSEN = "Sachsen"
    SACHSEN_ANHALT = "Sachsen-Anhalt"
    SCHLESWIG_HOLSTEIN = "Schleswig-Holstein"
    THUERINGEN = "Thüringen"


class Krankenversicherung(str, Enum):
    GESETZLICH = "gesetzlich"
    PRIVAT = "privat"
    FREIWILLIG = "freiwillig"  # freiwillig gesetzlich versichert


class Zeitraum(str, Enum):
    MONAT = "monat"
    JAHR = "jahr"


def to_decimal(value, name: str = "value") -> Decimal:
    """Coerce int/float/str input to a finite Decimal without float artefacts."""
    if isinstance(value, bool):
        raise InvalidInputError(f"{name}: expected a number, got {value!r}")
    if not isinstance(value, Decimal):
        try:
            value = Decimal(str(value))
        except (InvalidOperation, ValueError) as e:
            raise InvalidInputError(f"{name}: not a number: {value!r}") from e
    if not value.is_finite():
        raise InvalidInputError(f"{name}: not a finite number: {value!r}")
    return value


def to_int(value, name: str = "value") -> int:
    """Coerce to int; fractional or unparseable values are rejected."""
    number = to_decimal(value, name)
    if number != number.to_integral_value():
        raise InvalidInputError(f"{name}: not an integer: {value!r}")
    return int(number)


_TRUE = ("1", "true", "ja", "yes", "on")
_FALSE = ("0", "false", "nein", "no", "off")


def to_bool(value, name: str = "value") -> bool:
    """Coerce bools, 0/1 and yes/no strings (German or English) to bool."""
    if isinstance(value, bool):
        return value
    if isinstance(value, int) and value in (0, 1):
        return bool(value)
    if isinstance(value, str):
        lowered = value.strip().lower()
        if lowered in _TRUE:
            return True
        if lowered in _FALSE:
            return False
    raise InvalidInputError(f"{name}: expected yes/no, got {value!r}")


def _coerce_enum(enum_cls, value, name: str):
    if isinstance(value, enum_cls):
        return value
    try:
        return enum_cls(value)
    except ValueError as e:
        allowed = ", ".join(m.value for m in enum_cls)
        raise InvalidInputError(f"{name}: unknown value {value!r} (allowed: {allowed})") from e


def _coerce_fields(record, convert, names: tuple[str, ...]) -> None:
    for f in fields(record):
        if f.name in names:
            setattr(record, f.name, convert(getattr(record, f.name), f.name))


@dataclass
class LohnsteuerProfil:
    """Input for the annual wage-tax calculation.

    ``geldwerter_vorteil`` is a *monthly* non-cash benefit (e.g. company car);
    it is added twelve times to the annual gross. ``kinderfreibetrag`` is the
    child-allowance count from the ELStAM record (0.5 steps are allowed).
    """

    brutto_jahr: Decimal
    steuerklasse: int = 1
    kirchensteuer: bool = False
    bundesland: str = Bundesland.NORDRHEIN_WESTFALEN
    kinderfreibetrag: Decimal = Decimal("0")
    steuerfreibetrag: Decimal = Decimal("0")
    geldwerter_vorteil: Decimal = Decimal("0")

    def __post_init__(self):
        _coerce_fields(
            self,
            to_decimal,
            ("brutto_jahr", "kinderfreibetrag", "steuerfreibetrag", "geldwerter_vorteil"),
        )
        self.steuerklasse = to_int(self.steuerklasse, "steuerklasse")
        self.kirchensteuer = to_bool(self.kirchensteuer, "kirchensteuer")


@dataclass
class SVProfil:
    """Input for the monthly social-insurance calculation."""

    brutto_monat: Decimal
    bundesland: str = Bundesland.NORDRHEIN_WESTFALEN
    krankenversicherung: Krankenversicherung = Krankenversicherung.GESETZLICH
    kv_zusatzbeitrag: Decimal = Decimal("0.029")
    pkv_beitrag: Decimal = Decimal("0")
    arbeitgeberzuschuss_pkv: bool = True
    rentenversichert: bool = True
    arbeitslosenversichert: bool = True
    kinder_anzahl: int = 0  # children under 25
    hat_kinder: bool = False
    alter: int = 30

    def __post_init__(self):
        _coerce_fields(self, to_decimal, ("brutto_monat", "kv_zusatzbeitrag", "pkv_beitrag"))
        _coerce_fields(
            self,
            to_bool,
            ("arbeitgeberzuschuss_pkv", "rentenversichert", "arbeitslosenversichert", "hat_kinder"),
        )
        _coerce_fields(self, to_int, ("kinder_anzahl", "alter"))
        self.krankenversicherung = _coerce_enum(
            Krankenversicherung, self.krankenversicherung, "krankenversicherung"
        )


@dataclass
class BruttoNettoInput:
    """Everything the gross-to-net calculation needs, as entered in the form."""

    brutto: Decimal
    zeitraum: Zeitraum = Zeitraum.MONAT
    steuerklasse: int = 1
    bundesland: str = Bundesland.NORDRHEIN_WESTFALEN
    kirchensteuer: bool = False
    krankenversicherung: Krankenversicherung = Krankenversicherung.GESETZLICH
    kv_zusatzbeitrag: Decimal = Decimal("0.029")
    pkv_beitrag: Decimal = Decimal("0")
    arbeitgeberzuschuss_pkv: bool = True
    rentenversichert: bool = True
    arbeitslosenversichert: bool = True
    hat_kinder: bool = False
    kinderfreibetrag: Decimal = Decimal("0")
    kinder_unter_25: int = 0
    alter: int = 30
    steuerfreibetrag: Decimal = Decimal("0")
    geldwerter_vorteil: Decimal = Decimal("0")
    steuerjahr: int = 2026

    def __post_init__(self):
        _coerce_fields(
            self,
            to_decimal,
            (
                "brutto",
                "kv_zusatzbeitrag",
                "pkv_beitrag",
                "kinderfreibetrag",
                "steuerfreibetrag",
                "geldwerter_vorteil",
            ),
        )
        _coerce_fields(
            self,
            to_bool,
            (
                "kirchensteuer",
                "arbeitgeberzuschuss_pkv",
                "rentenversichert",
                "arbeitslosenversichert",
                "hat_kinder",
            ),
        )
        _coerce_fields(self, to_int, ("steuerklasse", "kinder_unter_25", "alter", "steuerjahr"))
        self.zeitraum = _coerce_enum(Zeitraum, self.zeitraum, "zeitraum")
        self.krankenversicherung = _coerce_enum(
            Krankenversicherung, self.krankenversicherung, "krankenversicherung"
        )


def land_name(bundesland) -> str:
    """Plain name of a Bundesland, whether given as enum member or string."""
    return bundesland.value if isinstance(bundesland, Bundesland) else str(bundesland)
