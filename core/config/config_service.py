"""Typed, layered configuration loader with precedence handling."""
from __future__ import annotations

import os
import configparser
import shutil
from dataclasses import dataclass, fields
from pathlib import Path
from threading import RLock
from typing import Any, Callable, Dict, Tuple

# --------------------------------------------------------------------------- #
#  Paths & default definitions
# --------------------------------------------------------------------------- #

def _find_project_root() -> Path:
    here = Path(__file__).resolve()
    for parent in here.parents:
        if (parent / "core").is_dir():
            return parent
    return here.parent

PROJECT_ROOT = _find_project_root()
CONFIG_DIR = PROJECT_ROOT / "core" / "config"
DEFAULTS_INI = CONFIG_DIR / "defaults.ini"
MACHINE_INI = CONFIG_DIR / "config.ini"

ENV_PREFIX = "PAPERROOST_"


_DEFAULTS: Dict[str, Dict[str, Any]] = {
    "Database": {
        "app_store": (PROJECT_ROOT / "databases" / "paperroost.db").as_posix(),
        "logging": (PROJECT_ROOT / "databases" / "logs.db").as_posix(),
    },
    "General": {
        "app_name": "PaperRoost",
        "version": "1.0.0",
    },
    "Signature": {
        "stroke_width": "4",
        "stroke_color": "#000000",
        "background_color": "#FFFFFF",
    },
    "Contracts": {
        "sample_count": "50",
        "encrypt_store": "true",
    },
    "Security": {
        "pin_length": "4",
        "bcrypt_rounds": "12",
    },
}


# --------------------------------------------------------------------------- #
#  Datamodels
# --------------------------------------------------------------------------- #

@dataclass
class DatabaseConfig:
    app_store: Path
    logging: Path


@dataclass
class GeneralConfig:
    app_name: str = "PaperRoost"
    version: str = ""


@dataclass
class SignatureConfig:
    stroke_width: int = 4
    stroke_color: str = "#000000"
    background_color: str = "#FFFFFF"


@dataclass
class ContractsConfig:
    sample_count: int = 50
    encrypt_store: bool = True


@dataclass
class SecurityConfig:
    pin_length: int = 4
    bcrypt_rounds: int = 12


# --------------------------------------------------------------------------- #
#  Helpers
# --------------------------------------------------------------------------- #

def _ensure_machine_config() -> None:
    """Ensure config directory and machine config exist."""
    CONFIG_DIR.mkdir(parents=True, exist_ok=True)
    if not MACHINE_INI.exists():
        if DEFAULTS_INI.exists():
            shutil.copy(DEFAULTS_INI, MACHINE_INI)
        else:
            parser = configparser.ConfigParser()
            parser.read_dict(_DEFAULTS)
            with MACHINE_INI.open("w", encoding="utf-8") as fh:
                parser.write(fh)


def _cp_to_dict(cp: configparser.ConfigParser) -> Dict[str, Dict[str, Any]]:
    data: Dict[str, Dict[str, Any]] = {}
    for section in cp.sections():
        data[section] = {k: v for k, v in cp.items(section)}
    return data


def _apply(target: Dict[str, Dict[str, Any]], source: Dict[str, Dict[str, Any]],
           layer: str, origin: str,
           sources: Dict[Tuple[str, str], Dict[str, str]]) -> None:
    for section, items in source.items():
        sec = target.setdefault(section, {})
        for key, value in items.items():
            sec[key] = value
            sources[(section, key)] = {"layer": layer, "source": origin}


def _cast(value: Any, typ: type) -> Any:
    if typ is Path:
        return Path(str(value)).expanduser()
    if typ is bool:
        if isinstance(value, bool):
            return value
        return str(value).strip().lower() in {"1", "true", "yes", "on"}
    if typ is int:
        return int(value)
    if typ is float:
        return float(value)
    return typ(value)


_TYPES: Dict[str, type] = {"Path": Path, "bool": bool, "int": int, "float": float, "str": str}


def _build_dataclass(cls: type, data: Dict[str, Any]) -> Any:
    kwargs = {}
    for field in fields(cls):
        # annotations are strings under `from __future__ import annotations`
        typ = _TYPES.get(field.type, str) if isinstance(field.type, str) else field.type
        val = data.get(field.name, field.default)
        kwargs[field.name] = _cast(val, typ)
    return cls(**kwargs)


def _env_overlays(environ: Dict[str, str] | None = None) -> Dict[str, Dict[str, Any]]:
    result: Dict[str, Dict[str, Any]] = {}
    for env_key, value in (os.environ if environ is None else environ).items():
        if not env_key.startswith(ENV_PREFIX):
            continue
        remainder = env_key[len(ENV_PREFIX):]
        parts = remainder.split("__", 1)
        if len(parts) != 2:
            continue
        section, key = parts
        section = section.title()
        key = key.lower()
        result.setdefault(section, {})[key] = value
    return result


def _user_config_path() -> Path:
    if os.name == "nt":
        appdata = os.environ.get("APPDATA") or (Path.home() / "AppData" / "Roaming")
        return Path(appdata) / "PaperRoost" / "config.ini"
    return Path(os.environ.get("XDG_CONFIG_HOME", Path.home() / ".config")) / "paperroost" / "config.ini"


# --------------------------------------------------------------------------- #
#  ConfigService
# --------------------------------------------------------------------------- #


class ConfigService:
    """Facade merging layered configuration with type safety."""

    def __init__(self, *, machine_ini: Path | None = None, user_ini: Path | None = None,
                 environ: Dict[str, str] | None = None) -> None:
        self._lock = RLock()
        self._machine_ini = machine_ini
        self._user_ini = user_ini
        self._environ = environ
        if machine_ini is None:
            _ensure_machine_config()
        self.reload()

    # ------------------------------------------------------------------ #
    def reload(self) -> None:
        with self._lock:
            merged: Dict[str, Dict[str, Any]] = {}
            sources: Dict[Tuple[str, str], Dict[str, str]] = {}

            # Layer 0: embedded defaults
            _apply(merged, _DEFAULTS, "code", "embedded", sources)

            # Layer 1: defaults.ini
            if DEFAULTS_INI.exists():
                cp = configparser.ConfigParser()
                cp.read(DEFAULTS_INI, encoding="utf-8")
                _apply(merged, _cp_to_dict(cp), "defaults.ini", str(DEFAULTS_INI), sources)

            # Layer 2: machine config
            machine_ini = self._machine_ini or MACHINE_INI
            if machine_ini.exists():
                cp = configparser.ConfigParser()
                cp.read(machine_ini, encoding="utf-8")
                _apply(merged, _cp_to_dict(cp), "machine", str(machine_ini), sources)

            # Layer 3: user overrides
            user_ini = self._user_ini or _user_config_path()
            if user_ini.exists():
                cp = configparser.ConfigParser()
                cp.read(user_ini, encoding="utf-8")
                _apply(merged, _cp_to_dict(cp), "user", str(user_ini), sources)

            # Layer 4: environment variables
            env = _env_overlays(self._environ)
            _apply(merged, env, "env", "os.environ", sources)

            self._merged = merged
            self._sources = sources

            self.database = _build_dataclass(DatabaseConfig, merged.get("Database", {}))
            self.general = _build_dataclass(GeneralConfig, merged.get("General", {}))
            self.signature = _build_dataclass(SignatureConfig, merged.get("Signature", {}))
            self.contracts = _build_dataclass(ContractsConfig, merged.get("Contracts", {}))
            self.security = _build_dataclass(SecurityConfig, merged.get("Security", {}))

    # ------------------------------------------------------------------ #
    def get(self, section: str, key: str, *, cast: Callable[[Any], Any] | type = str) -> Any:
        val = self._merged.get(section, {}).get(key)
        if val is None:
            return None
        if isinstance(cast, type):
            return _cast(val, cast)
        return cast(val)

    def meta_source(self, section: str, key: str) -> Dict[str, str] | None:
        return self._sources.get((section, key))


# Global singleton
config_service = ConfigService()
