"""CLI configuration: per-user paths and simulation overrides."""
from __future__ import annotations

import json
import os
from dataclasses import fields, replace
from pathlib import Path
from typing import Any, Dict

from cozyshop.domain.settings import SimulationSettings
from cozyshop.services.errors import ConfigError

_RANGE_KEYS = {"browse_delay_range", "deliberate_delay_range", "spawn_window"}


def get_user_data_dir() -> Path:
    """Return the per-user data directory."""
    if os.name == "nt":
        base = os.environ.get("APPDATA")
        if base:
            return Path(base) / "CozyArtistShop"
        return Path.home() / "CozyArtistShop"
    return Path.home() / ".config" / "cozy_artist_shop"


def get_default_config_path() -> Path:
    return get_user_data_dir() / "config.json"


def load_config(path: Path | None = None) -> Dict[str, Any]:
    """Load the raw config mapping.

    The default location is optional and silently falls back to ``{}``. An
    explicitly requested file must exist and hold a JSON object.
    """
    config_path = path or get_default_config_path()
    try:
        text = config_path.read_text(encoding="utf-8")
    except FileNotFoundError as exc:
        if path is None:
            return {}
        raise ConfigError(f"Config file not found: {config_path}") from exc
    except OSError as exc:
        raise ConfigError(f"Unable to read config file: {config_path}") from exc
    try:
        raw = json.loads(text)
    except json.JSONDecodeError as exc:
        raise ConfigError(f"Invalid JSON in {config_path}: {exc}") from exc
    if not isinstance(raw, dict):
        raise ConfigError(f"Expected a JSON object in {config_path}")
    return raw


def settings_from_config(config: Dict[str, Any]) -> SimulationSettings:
    """Apply the optional ``simulation`` section on top of the default settings."""
    overrides = config.get("simulation", {})
    if not isinstance(overrides, dict):
        raise ConfigError("'simulation' must be an object.")
    known = {entry.name for entry in fields(SimulationSettings)}
    unknown = sorted(set(overrides) - known)
    if unknown:
        raise ConfigError(f"Unknown simulation settings: {', '.join(unknown)}")
    values: Dict[str, Any] = {}
    for key, value in overrides.items():
        if key in _RANGE_KEYS:
            if not isinstance(value, list) or len(value) != 2:
                raise ConfigError(f"simulation.{key} must be a [low, high] pair.")
            value = _parse_range(key, value)
        elif isinstance(value, bool) or not isinstance(value, (int, float)):
            raise ConfigError(f"simulation.{key} must be a number.")
        values[key] = value
    try:
        return replace(SimulationSettings(), **values)
    except (TypeError, ValueError) as exc:
        raise ConfigError(f"Invalid simulation settings: {exc}") from exc


def _parse_range(key: str, value: list) -> tuple[float, float]:
    try:
        low, high = (_number(entry) for entry in value)
    except (TypeError, ValueError) as exc:
        raise ConfigError(f"simulation.{key} must hold two numbers (got {value!r}).") from exc
    return low, high


def _number(entry: object) -> float:
    if isinstance(entry, bool) or not isinstance(entry, (int, float)):
        raise TypeError(f"{entry!r} is not a number")
    return float(entry)


def load_settings(path: Path | None = None) -> SimulationSettings:
    return settings_from_config(load_config(path))

