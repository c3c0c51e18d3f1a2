"""Tests for configuration loading."""

from __future__ import annotations

from pathlib import Path

import pytest

from modlink.config.config import DEFAULT_INSTALL_COMMAND, Config


def test_missing_file_yields_defaults(tmp_path: Path) -> None:
    """No config file means built-in defaults and no file is written."""

    config_file = tmp_path / "config.toml"

    config = Config.load(config_file)

    assert config.cache_dir is None
    assert config.dependency_dir == "node_modules"
    assert config.install_command == DEFAULT_INSTALL_COMMAND
    assert config.log_file is None
    assert config.use_lock is True
    assert not config_file.exists()


def test_values_are_read_from_toml(tmp_path: Path) -> None:
    """TOML values are converted to their runtime types."""

    config_file = tmp_path / "config.toml"
    _ = config_file.write_text(
        "\n".join(
            [
                f'cache_dir = "{tmp_path / "store"}"',
                'dependency_dir = "vendor/bundle"',
                'install_command = ["pnpm", "install", "--frozen-lockfile"]',
                f'log_file = "{tmp_path / "modlink.log"}"',
                "use_lock = false",
            ]
        ),
        encoding="utf-8",
    )

    config = Config.load(config_file)

    assert config.cache_dir == tmp_path / "store"
    assert config.dependency_dir == "vendor/bundle"
    assert config.install_command == ("pnpm", "install", "--frozen-lockfile")
    assert config.log_file == tmp_path / "modlink.log"
    assert config.use_lock is False


def test_empty_path_values_become_none(tmp_path: Path) -> None:
    """Blank path strings are treated as unset."""

    config_file = tmp_path / "config.toml"
    _ = config_file.write_text('cache_dir = ""\nlog_file = " "\n', encoding="utf-8")

    config = Config.load(config_file)

    assert config.cache_dir is None
    assert config.log_file is None


def test_install_command_string_is_split() -> None:
    """A plain string command is split on whitespace."""

    assert Config(install_command="yarn install").install_command == ("yarn", "install")  # pyright: ignore[reportArgumentType]


def test_unknown_keys_are_rejected(tmp_path: Path) -> None:
    """Typos in the config file are reported by name."""

    config_file = tmp_path / "config.toml"
    _ = config_file.write_text('dependancy_dir = "node_modules"\n', encoding="utf-8")

    with pytest.raises(ValueError, match="dependancy_dir"):
        _ = Config.load(config_file)


@pytest.mark.parametrize("value", ["", "/abs/node_modules", "../outside"])
def test_dependency_dir_must_stay_inside_project(value: str) -> None:
    """Absolute or escaping dependency directories are refused."""

    with pytest.raises(ValueError, match="dependency_dir"):
        _ = Config(dependency_dir=value)


def test_empty_install_command_is_rejected() -> None:
    """An install command needs at least one element."""

    with pytest.raises(ValueError, match="install_command"):
        _ = Config(install_command=())


def test_load_caches_per_file(tmp_path: Path) -> None:
    """Repeated loads of the same file return the same instance."""

    config_file = tmp_path / "config.toml"

    first = Config.load(config_file)
    second = Config.load(config_file)
    Config.reset()
    third = Config.load(config_file)

    assert first is second
    assert third is not first


def test_default_location_follows_environment(
    tmp_path: Path, monkeypatch: pytest.MonkeyPatch
) -> None:
    """``MODLINK_CONFIG`` selects the file ``Config.load`` reads."""

    config_file = tmp_path / "custom.toml"
    _ = config_file.write_text('dependency_dir = "deps"\n', encoding="utf-8")
    monkeypatch.setenv("MODLINK_CONFIG", str(config_file))

    assert Config.load().dependency_dir == "deps"
