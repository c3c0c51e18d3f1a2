"""Shared pytest fixtures for modlink tests."""

from __future__ import annotations

from collections.abc import Iterator
from pathlib import Path

import pytest

from modlink.config.config import Config
from modlink.config.paths import ENV_CACHE_DIR, ENV_CONFIG_FILE


class FakeInstaller:
    """Installer double that counts calls and can populate the cache target."""

    def __init__(
        self,
        *,
        exit_code: int = 0,
        populate: Path | None = None,
        error: OSError | None = None,
    ) -> None:
        self.exit_code = exit_code
        self.populate = populate
        self.error = error
        self.calls = 0

    @property
    def command(self) -> tuple[str, ...]:
        return ("npm", "install")

    def run(self) -> int:
        self.calls += 1
        if self.error is not None:
            raise self.error
        if self.populate is not None and self.exit_code == 0:
            package = self.populate / "left-pad"
            package.mkdir(parents=True, exist_ok=True)
            _ = (package / "index.js").write_text("module.exports = 1;\n")
        return self.exit_code


@pytest.fixture(autouse=True)
def isolated_environment(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Iterator[None]:
    """Keep user config and cache overrides out of every test."""

    monkeypatch.delenv(ENV_CACHE_DIR, raising=False)
    monkeypatch.setenv(ENV_CONFIG_FILE, str(tmp_path / "no-config.toml"))
    Config.reset()
    yield None
    Config.reset()


@pytest.fixture
def project_dir(tmp_path: Path) -> Path:
    """Provide an empty project directory."""

    project = tmp_path / "work" / "app"
    project.mkdir(parents=True)
    return project


@pytest.fixture
def cache_root(tmp_path: Path) -> Path:
    """Provide a cache root path that does not exist yet."""

    return tmp_path / "cache"


@pytest.fixture
def make_installer() -> type[FakeInstaller]:
    """Expose the installer double to tests."""

    return FakeInstaller
