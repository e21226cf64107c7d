"""Application configuration — loaded from config.json at project root."""

import json
import logging
import os
from dataclasses import asdict, dataclass, fields
from decimal import Decimal
from pathlib import Path
from typing import Optional

from .exceptions import ConfigError, InvalidInputError
from .models import Bundesland, Krankenversicherung, to_bool, to_decimal, to_int

logger = logging.getLogger(__name__)

CONFIG_ENV_VAR = "BRUTTONETTO_CONFIG"


@dataclass
class AppConfig:
    steuerjahr: int = 2026
    bundesland: str = Bundesland.NORDRHEIN_WESTFALEN.value
    steuerklasse: int = 1
    kirchensteuer: bool = False
    krankenversicherung: str = Krankenversicherung.GESETZLICH.value
    kv_zusatzbeitrag: Decimal = Decimal("0.029")
    alter: int = 30
    kinder_unter_25: int = 0
    kinderfreibetrag: Decimal = Decimal("0")
    user_name: str = ""


_DEFAULTS = AppConfig()
_ALLOWED = {
    "bundesland": tuple(b.value for b in Bundesland),
    "krankenversicherung": tuple(k.value for k in Krankenversicherung),
    "steuerklasse": (1, 2, 3, 4, 5, 6),
}
_cached: Optional[AppConfig] = None
_path_override: Optional[Path] = None


def _find_project_root() -> Path:
    """Walk up from this file to find the project root (where pyproject.toml lives)."""
    current = Path(__file__).resolve().parent
    for _ in range(10):
        if (current / "pyproject.toml").exists():
            return current
        current = current.parent
    # Fallback: current working directory
    return Path.cwd()


def config_path() -> Path:
    if _path_override is not None:
        return _path_override
    env = os.environ.get(CONFIG_ENV_VAR)
    if env:
        return Path(env)
    return _find_project_root() / "config.json"


def set_config_path(path) -> None:
    """Redirect config.json (used by tests) and drop the cached config."""
    global _path_override, _cached
    _path_override = Path(path) if path is not None else None
    _cached = None


def _coerce(name: str, raw):
    """Convert a raw JSON/CLI value to the type of AppConfig field ``name``."""
    default = getattr(_DEFAULTS, name)
    try:
        if isinstance(default, bool):
            return to_bool(raw, name)
        if isinstance(default, int):
            return to_int(raw, name)
        if isinstance(default, Decimal):
            return to_decimal(raw, name)
        return str(raw)
    except InvalidInputError as e:
        raise ConfigError(f"Invalid value for {name}: {raw!r}") from e


def config_from_dict(data: dict) -> AppConfig:
    known = {f.name for f in fields(AppConfig)}
    unknown = set(data) - known
    if unknown:
        logger.warning("Ignoring unknown config keys: %s", ", ".join(sorted(unknown)))
    return AppConfig(**{k: _coerce(k, v) for k, v in data.items() if k in known})


def get_config() -> AppConfig:
    global _cached
    if _cached is not None:
        return _cached
    path = config_path()
    if not path.exists():
        _cached = AppConfig()
        return _cached
    try:
        data = json.loads(path.read_text(encoding="utf-8"))
        _cached = config_from_dict(data)
    except (OSError, json.JSONDecodeError, ConfigError) as e:
        logger.warning("Could not read %s (%s) — using defaults", path, e)
        _cached = AppConfig()
    return _cached


def update_config(key: str, value) -> AppConfig:
    """Set a single key and persist. Raises ConfigError for unknown keys."""
    if key not in {f.name for f in fields(AppConfig)}:
        raise ConfigError(f"Unknown config key: {key}")
    coerced = _coerce(key, value)
    allowed = _ALLOWED.get(key)
    if allowed is not None and coerced not in allowed:
        raise ConfigError(
            f"Invalid value for {key}: {value!r} (allowed: {', '.join(str(a) for a in allowed)})"
        )
    data = asdict(get_config())
    data[key] = coerced
    cfg = AppConfig(**data)
    save_config(cfg)
    return cfg


def save_config(cfg: AppConfig) -> None:
    global _cached
    _cached = cfg
    data = {
        k: (float(v) if isinstance(v, Decimal) else v)
        for k, v in asdict(cfg).items()
    }
    path = config_path()
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(json.dumps(data, indent=2, ensure_ascii=False), encoding="utf-8")
