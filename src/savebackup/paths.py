"""Backup destination derivation.

A backup of ``/home/u/proj/main.txt`` saved on 2024-01-05 with the
``yyyy-MM-dd`` format under ``/home/u/.SaveBackup`` lands at::

    /home/u/.SaveBackup/home/u/proj/main-2024-01-05.txt

The whole source path is appended to the backup root, so the original
directory tree is mirrored under it.
"""

from __future__ import annotations

import platform
from datetime import datetime

from savebackup.utils.dates import format_timestamp

ILLEGAL_PATH_CHARS = ":"
WINDOWS_SEPARATOR = "\\"


def is_windows_host() -> bool:
    return platform.system().startswith("Windows")


def file_extension(source_path: str) -> str:
    """Text after the last ``.`` of the file name, or ``""``."""
    name = source_path.replace("\\", "/").rsplit("/", 1)[-1]
    if "." not in name:
        return ""
    return name.rsplit(".", 1)[1]


def strip_extension(source_path: str, extension: str) -> str:
    # Plain substring removal: every ".ext" in the path goes, not only the suffix.
    if not extension:
        return source_path
    return source_path.replace("." + extension, "")


def sanitize(stem: str) -> str:
    for ch in ILLEGAL_PATH_CHARS:
        stem = stem.replace(ch, "")
    return stem


def derive_destination(
    source_path: str,
    dest_root: str,
    file_date_format: str,
    now: datetime,
    is_windows: bool,
) -> str:
    """Build the backup path for *source_path* saved at *now*.

    The backup root and the sanitized source stem are concatenated, not
    joined; only Windows gets a separator appended to the root first.
    A source without an extension still ends in ``"."``.
    """
    extension = file_extension(source_path)
    stem = sanitize(strip_extension(source_path, extension))
    timestamp = format_timestamp(file_date_format, now)
    root = dest_root + WINDOWS_SEPARATOR if is_windows else dest_root
    return f"{root}{stem}-{timestamp}.{extension}"
