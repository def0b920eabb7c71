"""Unit tests for FilesystemRemover.

Tests real recursive removal under tmp_path and the tagging of
failures with their operation and exact path.
"""

import errno
import os
import shutil
from pathlib import Path
from unittest.mock import patch

import pytest
from teardownctl.cleanup.errors import RemovalError, RemovalOperation
from teardownctl.cleanup.remover import FilesystemRemover, operation_for


def _busy(path: str) -> OSError:
    return OSError(errno.EBUSY, os.strerror(errno.EBUSY), path)


class TestFilesystemRemover:
    """Tests for FilesystemRemover.remove_all()."""

    @pytest.fixture
    def remover(self) -> FilesystemRemover:
        """Create FilesystemRemover instance."""
        return FilesystemRemover()

    def test_removes_tree(self, remover: FilesystemRemover, tmp_path: Path) -> None:
        """A nested directory tree is removed completely."""
        root = tmp_path / "k0s"
        (root / "kubelet" / "pods").mkdir(parents=True)
        (root / "kubelet" / "pods" / "state").write_text("x")
        (root / "pki").mkdir()
        (root / "pki" / "ca.crt").write_text("cert")

        remover.remove_all(str(root))

        assert not root.exists()

    def test_missing_path_is_noop(self, remover: FilesystemRemover, tmp_path: Path) -> None:
        """Removing a path that does not exist succeeds."""
        remover.remove_all(str(tmp_path / "missing"))

    def test_removes_file(self, remover: FilesystemRemover, tmp_path: Path) -> None:
        """A plain file is unlinked."""
        target = tmp_path / "k0s.sock"
        target.write_text("")

        remover.remove_all(str(target))

        assert not target.exists()

    def test_removes_symlink_not_target(self, remover: FilesystemRemover, tmp_path: Path) -> None:
        """A symlink to a directory is removed without touching its target."""
        real = tmp_path / "real"
        real.mkdir()
        (real / "keep.txt").write_text("keep")
        link = tmp_path / "link"
        link.symlink_to(real)

        remover.remove_all(str(link))

        assert not link.is_symlink()
        assert (real / "keep.txt").exists()

    def test_file_unlink_failure_is_tagged(
        self, remover: FilesystemRemover, tmp_path: Path
    ) -> None:
        """A failing unlink of a single file raises a tagged RemovalError."""
        target = tmp_path / "file"
        target.write_text("")

        with (
            patch("teardownctl.cleanup.remover.os.unlink", side_effect=PermissionError(13, "denied")),
            pytest.raises(RemovalError) as exc_info,
        ):
            remover.remove_all(str(target))

        assert exc_info.value.operation == RemovalOperation.UNLINK
        assert exc_info.value.path == str(target)

    def test_first_failure_is_raised(self, remover: FilesystemRemover, tmp_path: Path) -> None:
        """Failures collected during rmtree surface as the first RemovalError."""
        root = tmp_path / "data"
        root.mkdir()

        def fake_rmtree(path: str, onexc: object) -> None:
            onexc(os.unlink, f"{path}/a", PermissionError(13, "denied"))  # type: ignore[operator]
            onexc(os.rmdir, path, OSError(errno.ENOTEMPTY, "not empty"))  # type: ignore[operator]

        with (
            patch.object(shutil, "rmtree", side_effect=fake_rmtree),
            pytest.raises(RemovalError) as exc_info,
        ):
            remover.remove_all(str(root))

        assert exc_info.value.path == f"{root}/a"
        assert exc_info.value.operation == RemovalOperation.UNLINK

    def test_vanished_entries_ignored(self, remover: FilesystemRemover, tmp_path: Path) -> None:
        """Entries removed concurrently are not failures."""
        root = tmp_path / "data"
        root.mkdir()

        def fake_rmtree(path: str, onexc: object) -> None:
            onexc(os.lstat, f"{path}/gone", FileNotFoundError(2, "gone"))  # type: ignore[operator]

        with patch.object(shutil, "rmtree", side_effect=fake_rmtree):
            remover.remove_all(str(root))


class TestTagError:
    """Tests for FilesystemRemover.tag_error()."""

    def test_rmdir_of_mount_point(self) -> None:
        """rmdir failing with EBUSY is an UNLINK failure on that exact path."""
        error = FilesystemRemover.tag_error(os.rmdir, "/var/lib/k0s", _busy("/var/lib/k0s"))

        assert error is not None
        assert error.operation == RemovalOperation.UNLINK
        assert error.path == "/var/lib/k0s"
        assert error.errno == errno.EBUSY
        assert isinstance(error.__cause__, OSError)

    def test_file_not_found_ignored(self) -> None:
        """FileNotFoundError is not reported."""
        assert FilesystemRemover.tag_error(os.unlink, "/x", FileNotFoundError(2, "gone")) is None

    def test_scan_failure(self) -> None:
        """A failed directory listing is a SCAN failure."""
        error = FilesystemRemover.tag_error(os.scandir, "/x", PermissionError(13, "denied"))

        assert error is not None
        assert error.operation == RemovalOperation.SCAN

    def test_str_names_operation_and_path(self) -> None:
        """The message carries the operation and path."""
        error = FilesystemRemover.tag_error(os.rmdir, "/var/lib/k0s", _busy("/var/lib/k0s"))

        assert str(error) == "unlink /var/lib/k0s: Device or resource busy"


class TestOperationFor:
    """Tests for operation_for()."""

    @pytest.mark.parametrize(
        ("func", "expected"),
        [
            (os.unlink, RemovalOperation.UNLINK),
            (os.remove, RemovalOperation.UNLINK),
            (os.rmdir, RemovalOperation.UNLINK),
            (os.open, RemovalOperation.SCAN),
            (os.scandir, RemovalOperation.SCAN),
            (os.lstat, RemovalOperation.STAT),
            (os.path.islink, RemovalOperation.STAT),
            (os.chmod, RemovalOperation.OTHER),
        ],
    )
    def test_mapping(self, func: object, expected: RemovalOperation) -> None:
        """Functions rmtree reports are mapped to operations."""
        assert operation_for(func) == expected  # type: ignore[arg-type]
