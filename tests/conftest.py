from __future__ import annotations

import errno
import os
from pathlib import Path
from typing import Callable

import pytest

from tests._fixtures.tree_builder import SourceTreeBuilder


@pytest.fixture
def tree(tmp_path: Path) -> SourceTreeBuilder:
    """Provide a throwaway project tree rooted at the pytest tmp_path."""
    return SourceTreeBuilder(tmp_path)


@pytest.fixture
def deny_listing(monkeypatch: pytest.MonkeyPatch) -> Callable[[Path], None]:
    """Make ``os.scandir`` fail with EACCES for the given directories.

    Running as root ignores permission bits, so chmod alone cannot simulate
    an unreadable directory.
    """
    denied: set[str] = set()
    real_scandir = os.scandir

    def scandir(path="."):
        if os.path.realpath(path) in denied:
            raise PermissionError(errno.EACCES, "Permission denied", os.fspath(path))
        return real_scandir(path)

    monkeypatch.setattr(os, "scandir", scandir)

    def deny(path: Path) -> None:
        denied.add(os.path.realpath(path))

    return deny
