"""Rich-based logging for savebackup with per-channel file logging."""

from __future__ import annotations

import traceback
from collections import deque
from datetime import datetime
from pathlib import Path
from typing import TYPE_CHECKING, Callable

from rich.console import Console
from rich.markup import escape

from savebackup.utils.dates import format_timestamp

RECENT_LIMIT = 100

if TYPE_CHECKING:
    from savebackup.settings import Settings


class BackupLogger:
    """Logger with rich console echo and settings-gated log files.

    Info messages are echoed to stdout unless *quiet*; errors always go to
    stderr. Each channel is also appended to its log file when the matching
    ``infoLogging`` / ``errorLogging`` setting is on. ``recent`` keeps the
    last ``RECENT_LIMIT`` messages of either channel.
    """

    def __init__(
        self,
        settings: Settings,
        quiet: bool = False,
        clock: Callable[[], datetime] = datetime.now,
    ) -> None:
        self.settings = settings
        self.quiet = quiet
        self._clock = clock
        self._console = Console(quiet=quiet, soft_wrap=True)
        self._err_console = Console(stderr=True, soft_wrap=True)
        self.recent: deque[str] = deque(maxlen=RECENT_LIMIT)

    def _timestamp(self) -> str:
        return format_timestamp(self.settings.log_date_format, self._clock())

    def info(self, msg: str) -> None:
        self.recent.append(f"[INFO] {msg}")
        self._console.print(f"  [green]INFO[/green]  {escape(msg)}")
        if self.settings.info_logging:
            self._append(self.settings.info_log_file, f"[{self._timestamp()}] [INFO] {msg}\n")

    def error(self, msg: str, exc: BaseException | None = None) -> None:
        self.recent.append(f"[ERROR] {msg}")
        self._err_console.print(f"  [red]ERROR[/red] {escape(msg)}")
        if exc is not None:
            self._err_console.print(f"        {escape(f'{type(exc).__name__}: {exc}')}")
        if self.settings.error_logging:
            entry = f"[{self._timestamp()}] [ERROR] {msg}\n"
            if exc is not None:
                entry += "".join(traceback.format_exception(type(exc), exc, exc.__traceback__))
            self._append(self.settings.error_log_file, entry)

    def _append(self, log_file: str, entry: str) -> bool:
        """Append *entry* to *log_file*; failures go to the console only."""
        path = Path(log_file)
        try:
            path.parent.mkdir(parents=True, exist_ok=True)
            with open(path, "a", encoding="utf-8") as f:
                f.write(entry)
        except OSError as e:
            self._err_console.print(
                f"  [red]ERROR[/red] Could not write to log file {escape(str(path))}: {escape(str(e))}"
            )
            return False
        return True


class SilentLogger(BackupLogger):
    """Suppresses info echo; errors still reach stderr and files follow the settings."""

    def __init__(
        self,
        settings: Settings,
        clock: Callable[[], datetime] = datetime.now,
    ) -> None:
        super().__init__(settings, quiet=True, clock=clock)
