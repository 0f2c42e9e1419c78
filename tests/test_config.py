"""Tests for composer configuration loading."""

from __future__ import annotations

from pathlib import Path

import pytest

from plugflux_core.config import ComposerConfig, default_config_path, load_config
from plugflux_core.errors import ConfigurationError


def test_defaults_when_file_is_missing(tmp_path: Path) -> None:
    config = load_config(tmp_path / "missing.toml", env={})

    assert config == ComposerConfig()
    assert config.name == "Plugflux App"
    assert not config.dev_mode
    assert not config.strict_mode


def test_toml_section_is_read(tmp_path: Path) -> None:
    config_file = tmp_path / "config.toml"
    config_file.write_text('[composer]\nname = "Demo"\nstrict_mode = true\n')

    config = load_config(config_file, env={})

    assert config == ComposerConfig(name="Demo", dev_mode=False, strict_mode=True)


def test_yaml_section_is_read(tmp_path: Path) -> None:
    config_file = tmp_path / "config.yml"
    config_file.write_text("composer:\n  dev_mode: yes\n")

    assert load_config(config_file, env={}).dev_mode is True


def test_environment_overrides_file(tmp_path: Path) -> None:
    config_file = tmp_path / "config.toml"
    config_file.write_text("[composer]\nstrict_mode = true\n")

    config = load_config(
        config_file,
        env={"PLUGFLUX_STRICT_MODE": "0", "PLUGFLUX_DEV_MODE": "true", "PLUGFLUX_APP_NAME": "Env"},
    )

    assert config == ComposerConfig(name="Env", dev_mode=True, strict_mode=False)


def test_malformed_files_raise(tmp_path: Path) -> None:
    broken = tmp_path / "config.toml"
    broken.write_text("[composer\n")
    with pytest.raises(ConfigurationError):
        load_config(broken, env={})

    unknown = tmp_path / "unknown.toml"
    unknown.write_text("[composer]\nturbo = true\n")
    with pytest.raises(ConfigurationError):
        load_config(unknown, env={})

    not_bool = tmp_path / "bool.toml"
    not_bool.write_text('[composer]\ndev_mode = "maybe"\n')
    with pytest.raises(ConfigurationError):
        load_config(not_bool, env={})


def test_coerce_accepts_mappings_and_instances() -> None:
    config = ComposerConfig(strict_mode=True)

    assert ComposerConfig.coerce(config) is config
    assert ComposerConfig.coerce(None) == ComposerConfig()
    assert ComposerConfig.coerce({"dev_mode": True}).dev_mode
    with pytest.raises(ConfigurationError):
        ComposerConfig.coerce(42)  # type: ignore[arg-type]


def test_default_config_path_points_to_toml() -> None:
    path = default_config_path()
    assert path.name == "config.toml"
    assert "plugflux" in str(path)
