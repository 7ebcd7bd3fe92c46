"""Startup component that wires settings, logging and the backup handler."""

from __future__ import annotations

from datetime import datetime
from pathlib import Path
from typing import Callable

from savebackup.events import Connection, SaveNotifier
from savebackup.handler import BackupHandler
from savebackup.settings import Settings, SettingsStore
from savebackup.utils.logger import BackupLogger


class SaveBackupComponent:
    """Subscribes a :class:`BackupHandler` to a :class:`SaveNotifier`.

    Settings are loaded on first use and kept for the life of the
    component; edits to the settings file after that are not picked up.
    """

    component_name = "SaveBackup Component"

    def __init__(
        self,
        home: str | Path | None = None,
        settings_path: str | Path | None = None,
        notifier: SaveNotifier | None = None,
        clock: Callable[[], datetime] = datetime.now,
        is_windows: bool | None = None,
        quiet: bool = False,
        dry_run: bool = False,
    ) -> None:
        self.home = Path(home) if home is not None else Path.home()
        self.notifier = notifier or SaveNotifier()
        self.quiet = quiet
        self.dry_run = dry_run
        self._clock = clock
        self._is_windows = is_windows
        self._store = SettingsStore(
            settings_path,
            self.home,
            log=BackupLogger(Settings.defaults(self.home), quiet=quiet, clock=clock),
        )
        self._handler: BackupHandler | None = None
        self._connection: Connection | None = None

    @property
    def settings_path(self) -> Path:
        return self._store.path

    @property
    def settings(self) -> Settings:
        return self._store.load()

    @property
    def handler(self) -> BackupHandler:
        if self._handler is None:
            settings = self.settings
            log = BackupLogger(settings, quiet=self.quiet, clock=self._clock)
            self._handler = BackupHandler(
                settings,
                log,
                clock=self._clock,
                is_windows=self._is_windows,
                dry_run=self.dry_run,
            )
        return self._handler

    @property
    def active(self) -> bool:
        return self._connection is not None and self._connection.connected

    def init_component(self) -> None:
        if self.active:
            return
        self._connection = self.notifier.subscribe(self.handler)

    def dispose_component(self) -> None:
        if self._connection is not None:
            self._connection.disconnect()
            self._connection = None
