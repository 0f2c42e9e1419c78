"""Composer configuration and the helpers that load it from disk."""

from __future__ import annotations

import os
from dataclasses import dataclass, fields, replace
from pathlib import Path
from typing import Any, Mapping

import tomllib
import yaml
from platformdirs import user_config_dir

from .errors import ConfigurationError

DEFAULT_APP_NAME = "plugflux"
CONFIG_FILE_NAME = "config.toml"
CONFIG_SECTION = "composer"

_ENV_KEY_MAP: dict[str, str] = {
    "name": "PLUGFLUX_APP_NAME",
    "dev_mode": "PLUGFLUX_DEV_MODE",
    "strict_mode": "PLUGFLUX_STRICT_MODE",
}
_TRUE_VALUES = {"1", "true", "yes", "on"}
_FALSE_VALUES = {"0", "false", "no", "off", ""}


def default_config_path() -> Path:
    """Return the platform-specific default config path."""

    base_dir = Path(user_config_dir(DEFAULT_APP_NAME, appauthor=False))
    return base_dir / CONFIG_FILE_NAME


@dataclass(frozen=True)
class ComposerConfig:
    """Options recognised by the composer.

    ``name`` is a label only. ``dev_mode`` turns on duplicate-plugin warnings.
    ``strict_mode`` makes missing plugin dependencies fatal.
    """

    name: str = "Plugflux App"
    dev_mode: bool = False
    strict_mode: bool = False

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any]) -> "ComposerConfig":
        known = {item.name for item in fields(cls)}
        unknown = sorted(set(data) - known)
        if unknown:
            raise ConfigurationError(f"unknown composer option(s): {', '.join(unknown)}")
        values: dict[str, Any] = {}
        for key, raw in data.items():
            values[key] = str(raw) if key == "name" else _coerce_bool(key, raw)
        return cls(**values)

    @classmethod
    def coerce(cls, config: "ComposerConfig | Mapping[str, Any] | None") -> "ComposerConfig":
        if config is None:
            return cls()
        if isinstance(config, cls):
            return config
        if isinstance(config, Mapping):
            return cls.from_mapping(config)
        raise ConfigurationError(f"unsupported config type {type(config).__name__}")


def _coerce_bool(key: str, raw: Any) -> bool:
    if isinstance(raw, bool):
        return raw
    if isinstance(raw, str):
        lowered = raw.strip().lower()
        if lowered in _TRUE_VALUES:
            return True
        if lowered in _FALSE_VALUES:
            return False
    raise ConfigurationError(f"{key} must be a boolean, got {raw!r}")


def _load_document(path: Path) -> Mapping[str, Any]:
    try:
        if path.suffix in {".yml", ".yaml"}:
            with path.open("r", encoding="utf-8") as handle:
                document = yaml.safe_load(handle) or {}
        else:
            with path.open("rb") as handle:
                document = tomllib.load(handle)
    except (OSError, tomllib.TOMLDecodeError, yaml.YAMLError) as exc:
        raise ConfigurationError(f"unable to read config at {path}") from exc

    if not isinstance(document, Mapping):
        raise ConfigurationError(f"config at {path} must be a mapping")
    section = document.get(CONFIG_SECTION, {})
    if not isinstance(section, Mapping):
        raise ConfigurationError(f"[{CONFIG_SECTION}] in {path} must be a table")
    return section


def load_config(
    path: Path | str | None = None,
    *,
    env: Mapping[str, str] | None = None,
) -> ComposerConfig:
    """Build a :class:`ComposerConfig` from a file plus environment overrides.

    ``path`` defaults to :func:`default_config_path`. A missing file yields the
    defaults; TOML and YAML (``.yml``/``.yaml``) files are read from their
    ``composer`` section. ``PLUGFLUX_*`` variables win over the file.
    """

    config_path = Path(path) if path is not None else default_config_path()
    section: Mapping[str, Any] = {}
    if config_path.exists():
        section = _load_document(config_path)
    config = ComposerConfig.from_mapping(section)

    environment = os.environ if env is None else env
    overrides: dict[str, Any] = {}
    for key, variable in _ENV_KEY_MAP.items():
        if variable in environment:
            raw = environment[variable]
            overrides[key] = raw if key == "name" else _coerce_bool(variable, raw)
    if overrides:
        config = replace(config, **overrides)
    return config
