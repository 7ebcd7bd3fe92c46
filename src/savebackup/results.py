"""Result types for backup operations."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum


class ErrorKind(str, Enum):
    """Why a backup did not complete."""

    DIRECTORY_CREATE = "directory_create"
    WRITE = "write"


@dataclass
class WriteResult:
    """Result of a write operation."""

    path: str
    written: bool
    bytes_written: int = 0
    message: str = ""


@dataclass
class BackupResult:
    """Outcome of handling one document save."""

    source_path: str | None
    destination: str | None = None
    written: bool = False
    bytes_written: int = 0
    skipped: bool = False
    errors: list[ErrorKind] = field(default_factory=list)
    message: str = ""

    @property
    def success(self) -> bool:
        return self.skipped or not self.errors
