"""Tests for the local filesystem adapter used by the resolver."""

from __future__ import annotations

import errno
import os
import shutil
from pathlib import Path

import pytest
from pytest_mock import MockerFixture

from modlink.features.linking.adapters import LocalLinkFileSystem


def _exdev(*_args: object, **_kwargs: object) -> None:
    raise OSError(errno.EXDEV, "Invalid cross-device link")


def test_move_renames_within_a_filesystem(tmp_path: Path) -> None:
    """Plain renames move the whole tree."""

    source = tmp_path / "src"
    (source / "pkg").mkdir(parents=True)
    _ = (source / "pkg" / "a.js").write_text("a")
    destination = tmp_path / "dest"

    LocalLinkFileSystem().move(source, destination)

    assert not source.exists()
    assert (destination / "pkg" / "a.js").read_text() == "a"


def test_move_falls_back_to_copy_across_devices(tmp_path: Path, mocker: MockerFixture) -> None:
    """Cross-device moves copy the tree and delete the source."""

    source = tmp_path / "src"
    (source / "pkg").mkdir(parents=True)
    _ = (source / "pkg" / "a.js").write_text("a")
    destination = tmp_path / "dest"
    _ = mocker.patch("modlink.features.linking.adapters.filesystem.local.os.rename", side_effect=_exdev)

    LocalLinkFileSystem().move(source, destination)

    assert not source.exists()
    assert (destination / "pkg" / "a.js").read_text() == "a"


def test_failed_copy_removes_partial_destination(tmp_path: Path, mocker: MockerFixture) -> None:
    """A copy that fails midway leaves only the original tree behind."""

    source = tmp_path / "src"
    source.mkdir()
    _ = (source / "a.js").write_text("a")
    destination = tmp_path / "dest"
    _ = mocker.patch("modlink.features.linking.adapters.filesystem.local.os.rename", side_effect=_exdev)

    def _partial_copy(src: Path, dst: Path, symlinks: bool = False) -> Path:
        os.makedirs(dst)
        _ = (Path(dst) / "half.js").write_text("half")
        raise shutil.Error("disk full")

    _ = mocker.patch(
        "modlink.features.linking.adapters.filesystem.local.shutil.copytree",
        side_effect=_partial_copy,
    )

    with pytest.raises(OSError, match="disk full"):
        LocalLinkFileSystem().move(source, destination)

    assert not destination.exists()
    assert (source / "a.js").read_text() == "a"


def test_other_rename_errors_propagate(tmp_path: Path, mocker: MockerFixture) -> None:
    """Only cross-device errors trigger the copy fallback."""

    _ = mocker.patch(
        "modlink.features.linking.adapters.filesystem.local.os.rename",
        side_effect=PermissionError(errno.EACCES, "Permission denied"),
    )
    copytree = mocker.patch("modlink.features.linking.adapters.filesystem.local.shutil.copytree")

    with pytest.raises(PermissionError):
        LocalLinkFileSystem().move(tmp_path / "a", tmp_path / "b")
    copytree.assert_not_called()


def test_ensure_directory_reports_creation(tmp_path: Path) -> None:
    """Only the first call creates the directory."""

    filesystem = LocalLinkFileSystem()

    assert filesystem.ensure_directory(tmp_path / "a" / "b") is True
    assert filesystem.ensure_directory(tmp_path / "a" / "b") is False


def test_exists_sees_dangling_links(tmp_path: Path) -> None:
    """Broken links still occupy their path."""

    link = tmp_path / "link"
    os.symlink(tmp_path / "missing", link)

    assert LocalLinkFileSystem().exists(link)


def test_remove_deletes_link_but_not_target(tmp_path: Path) -> None:
    """Removing a link never recurses into its target."""

    target = tmp_path / "target"
    target.mkdir()
    _ = (target / "keep.txt").write_text("keep")
    link = tmp_path / "link"
    os.symlink(target, link, target_is_directory=True)

    LocalLinkFileSystem().remove(link)

    assert not os.path.lexists(link)
    assert (target / "keep.txt").exists()
