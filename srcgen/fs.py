"""Filesystem primitives used by the generators.

Errors are the builtin ``OSError`` family; their messages already carry the
offending path.
"""

from __future__ import annotations

import json
import os
import tempfile
from pathlib import Path
from typing import Any


def read_text(path: Path) -> str:
    return Path(path).read_text(encoding="utf-8")


def read_json(path: Path) -> Any:
    """Parse a JSON document; raises ``json.JSONDecodeError`` on malformed input."""
    return json.loads(read_text(path))


def write_text(path: Path, content: str) -> None:
    """Replace ``path`` with ``content`` in a single atomic step.

    The data is written to a sibling temporary file first, so readers see either
    the previous file or the complete new one.
    """
    target = Path(path)
    fd, tmp_name = tempfile.mkstemp(prefix=f".{target.name}.", suffix=".tmp", dir=target.parent)
    try:
        with os.fdopen(fd, "w", encoding="utf-8", newline="\n") as handle:
            handle.write(content)
        os.chmod(tmp_name, _target_mode(target))
        os.replace(tmp_name, target)
    except BaseException:
        try:
            os.unlink(tmp_name)
        except FileNotFoundError:
            pass
        raise


def _target_mode(target: Path) -> int:
    # mkstemp creates 0600 files; keep the existing mode or apply the umask.
    try:
        return target.stat().st_mode & 0o777
    except FileNotFoundError:
        umask = os.umask(0)
        os.umask(umask)
        return 0o666 & ~umask


__all__ = ["read_json", "read_text", "write_text"]
