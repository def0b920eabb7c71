"""Pytest configuration and shared fixtures.

This module contains fixtures used across all test modules, including
in-memory fakes for the mount and removal capabilities.
"""

from collections.abc import Callable, Iterable

import pytest
from teardownctl.cleanup.errors import EnumerationError
from teardownctl.cleanup.models import MountRecord, TeardownTarget
from teardownctl.cleanup.mounter import Mounter, UnmountResult
from teardownctl.cleanup.remover import FilesystemRemover


class FakeMounter(Mounter):
    """In-memory mount table that records every unmount call."""

    def __init__(
        self,
        paths: Iterable[str] = (),
        *,
        fail_unmount: Iterable[str] = (),
        fail_lazy: Iterable[str] = (),
        list_error: EnumerationError | None = None,
    ) -> None:
        self.records = [MountRecord(path=p, device="tmpfs", fstype="tmpfs") for p in paths]
        self.fail_unmount = set(fail_unmount)
        self.fail_lazy = set(fail_lazy)
        self.list_error = list_error
        self.calls: list[tuple[str, str]] = []

    def list(self) -> list[MountRecord]:
        if self.list_error is not None:
            raise self.list_error
        return list(self.records)

    def unmount(self, path: str) -> UnmountResult:
        self.calls.append(("unmount", path))
        if path in self.fail_unmount:
            return UnmountResult(path=path, success=False, error="target is busy")
        self._forget(path)
        return UnmountResult(path=path, success=True)

    def unmount_lazy(self, path: str) -> UnmountResult:
        self.calls.append(("unmount_lazy", path))
        if path in self.fail_lazy:
            return UnmountResult(path=path, success=False, error="invalid argument", lazy=True)
        self._forget(path)
        return UnmountResult(path=path, success=True, lazy=True)

    def _forget(self, path: str) -> None:
        self.records = [r for r in self.records if r.path != path]


class FakeRemover(FilesystemRemover):
    """Remover that records calls and raises preset errors instead of deleting."""

    def __init__(self, errors: dict[str, OSError] | None = None) -> None:
        self.errors = errors or {}
        self.calls: list[str] = []

    def remove_all(self, path: str) -> None:
        self.calls.append(path)
        error = self.errors.get(path)
        if error is not None:
            raise error


@pytest.fixture
def target() -> TeardownTarget:
    """Teardown target with the default kubelet directory."""
    return TeardownTarget.from_dirs("/var/lib/k0s", "/run/k0s")


@pytest.fixture
def make_mounter() -> Callable[..., FakeMounter]:
    """Factory for FakeMounter instances."""
    return FakeMounter


@pytest.fixture
def make_remover() -> Callable[..., FakeRemover]:
    """Factory for FakeRemover instances."""
    return FakeRemover
