"""File writing utilities that return WriteResult."""

from __future__ import annotations

import os
from pathlib import Path

from savebackup.results import WriteResult


def ensure_parent_dir(path: Path) -> bool:
    """Create every missing directory above *path*.

    Returns ``True`` if anything was created.
    """
    if path.parent.is_dir():
        return False
    path.parent.mkdir(parents=True, exist_ok=True)
    return True


def write_text(path: Path, content: str) -> WriteResult:
    """Write *content* to *path*, replacing any existing file.

    The text goes to a temporary sibling first and is moved into place
    with :func:`os.replace`, so a failed write never leaves a truncated
    backup behind. Line endings are written unchanged.
    """
    data = content.encode("utf-8")
    tmp_path = path.with_name(f"{path.name}.tmp.{os.getpid()}")
    try:
        with open(tmp_path, "wb") as f:
            f.write(data)
        os.replace(tmp_path, path)
    finally:
        if tmp_path.exists():
            tmp_path.unlink()
    msg = f"Written: {path} ({len(data)} bytes)"
    return WriteResult(path=str(path), written=True, bytes_written=len(data), message=msg)


def preview_text(path: Path, content: str) -> WriteResult:
    """Describe what :func:`write_text` would do without touching disk."""
    nbytes = len(content.encode("utf-8"))
    if path.exists():
        msg = f"{path}: WOULD REPLACE ({nbytes} bytes)"
    else:
        msg = f"{path}: WOULD CREATE ({nbytes} bytes)"
    return WriteResult(path=str(path), written=False, bytes_written=0, message=msg)
