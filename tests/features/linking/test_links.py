"""Tests for the symlink and junction strategies."""

from __future__ import annotations

import os
import subprocess
import sys
from pathlib import Path

import pytest
from pytest_mock import MockerFixture

from modlink.features.linking.adapters import JunctionLinker, SymlinkLinker, linker_for
from modlink.platform.profile import LINUX, WINDOWS, LinkKind


def test_linker_for_picks_strategy_from_profile() -> None:
    """Windows gets junctions, other platforms get symlinks."""

    assert isinstance(linker_for(WINDOWS), JunctionLinker)
    assert linker_for(WINDOWS).kind is LinkKind.JUNCTION
    linux_linker = linker_for(LINUX)
    assert type(linux_linker) is SymlinkLinker
    assert linux_linker.kind is LinkKind.SYMLINK


def test_symlink_read_resolves_relative_targets(tmp_path: Path) -> None:
    """Relative link targets are resolved against the link's parent."""

    target = tmp_path / "store" / "abc"
    target.mkdir(parents=True)
    project = tmp_path / "project"
    project.mkdir()
    link = project / "node_modules"
    os.symlink(os.path.join("..", "store", "abc"), link, target_is_directory=True)

    assert SymlinkLinker(LINUX).read(link) == target


def test_symlink_read_of_missing_link_is_none(tmp_path: Path) -> None:
    """Unreadable links report ``None`` instead of raising."""

    assert SymlinkLinker(LINUX).read(tmp_path / "missing") is None


def test_symlink_create_and_remove_keep_target(tmp_path: Path) -> None:
    """Removing the link leaves the target directory and its files alone."""

    target = tmp_path / "target"
    target.mkdir()
    _ = (target / "keep.txt").write_text("keep")
    link = tmp_path / "link"
    linker = SymlinkLinker(LINUX)

    linker.create(target, link)
    assert linker.is_link(link)
    linker.remove(link)

    assert not os.path.lexists(link)
    assert (target / "keep.txt").read_text() == "keep"


def test_junction_create_runs_mklink(tmp_path: Path, mocker: MockerFixture) -> None:
    """Junctions are created with ``mklink /J <slot> <target>``."""

    run = mocker.patch(
        "modlink.features.linking.adapters.links.subprocess.run",
        return_value=subprocess.CompletedProcess(args=[], returncode=0, stdout="", stderr=""),
    )

    JunctionLinker(WINDOWS).create(tmp_path / "target", tmp_path / "slot")

    command = run.call_args.args[0]
    assert command == ["cmd", "/c", "mklink", "/J", str(tmp_path / "slot"), str(tmp_path / "target")]


def test_junction_create_failure_raises_oserror(tmp_path: Path, mocker: MockerFixture) -> None:
    """A non-zero ``mklink`` status surfaces as ``OSError`` with its output."""

    _ = mocker.patch(
        "modlink.features.linking.adapters.links.subprocess.run",
        return_value=subprocess.CompletedProcess(
            args=[], returncode=1, stdout="", stderr="You do not have sufficient privilege."
        ),
    )

    with pytest.raises(OSError, match="sufficient privilege"):
        JunctionLinker(WINDOWS).create(tmp_path / "target", tmp_path / "slot")


def test_junction_preflight_fails_and_cleans_up(tmp_path: Path, mocker: MockerFixture) -> None:
    """A failing create makes preflight return False and removes its temp folder."""

    preflight_root = tmp_path / "preflight"
    preflight_root.mkdir()
    _ = mocker.patch(
        "modlink.features.linking.adapters.links.tempfile.mkdtemp",
        return_value=str(preflight_root),
    )
    linker = JunctionLinker(WINDOWS)
    _ = mocker.patch.object(linker, "create", side_effect=OSError("not permitted"))

    assert linker.preflight() is False
    assert not preflight_root.exists()


def test_junction_preflight_succeeds_when_read_back_matches(
    tmp_path: Path, mocker: MockerFixture
) -> None:
    """A link that reads back to the temp target passes preflight."""

    preflight_root = tmp_path / "preflight"
    preflight_root.mkdir()
    _ = mocker.patch(
        "modlink.features.linking.adapters.links.tempfile.mkdtemp",
        return_value=str(preflight_root),
    )
    linker = JunctionLinker(WINDOWS)

    def _create(target: Path, slot: Path) -> None:
        os.symlink(target, slot, target_is_directory=True)

    _ = mocker.patch.object(linker, "create", side_effect=_create)

    assert linker.preflight() is True
    assert not preflight_root.exists()


def test_symlink_preflight_is_always_true() -> None:
    """Symlink platforms need no preflight."""

    assert SymlinkLinker(LINUX).preflight() is True


@pytest.mark.skipif(sys.platform != "win32", reason="junction paths are Windows-only")
def test_junction_read_strips_extended_prefix(tmp_path: Path, mocker: MockerFixture) -> None:
    """``\\\\?\\`` prefixes returned by junction read-back are dropped."""

    _ = mocker.patch(
        "modlink.features.linking.adapters.links.os.readlink",
        return_value="\\\\?\\C:\\cache\\abc",
    )

    assert JunctionLinker(WINDOWS).read(tmp_path / "node_modules") == Path("C:\\cache\\abc")
