"""Settings file bootstrap and loading for SaveBackup.ini."""

from __future__ import annotations

import os
import threading
from dataclasses import dataclass, field
from pathlib import Path
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from savebackup.utils.logger import BackupLogger


SETTINGS_FILENAME = "SaveBackup.ini"

DESTINATION_PATH = "destinationPath"
FILE_DATE_FORMAT = "fileDateFormat"
LOG_DATE_FORMAT = "logDateFormat"
INFO_LOGGING = "infoLogging"
ERROR_LOGGING = "errorLogging"
INFO_LOG_FILE = "infoLogFile"
ERROR_LOG_FILE = "errorLogFile"

KNOWN_KEYS = (
    DESTINATION_PATH,
    FILE_DATE_FORMAT,
    LOG_DATE_FORMAT,
    INFO_LOGGING,
    ERROR_LOGGING,
    INFO_LOG_FILE,
    ERROR_LOG_FILE,
)

TRUE_VALUES = {"true", "yes", "on", "1"}
COMMENT_PREFIXES = ("#", ";", "!")


# === Errors ===


class ConfigIOError(Exception):
    """Raised when the settings file cannot be created or read."""


# === Defaults ===


def default_settings_path(home: str | Path) -> Path:
    return Path(home) / SETTINGS_FILENAME


def default_values(home: str | Path) -> dict[str, str]:
    """Default value for every known key, rooted at *home*."""
    home = Path(home)
    return {
        DESTINATION_PATH: str(home / ".SaveBackup"),
        FILE_DATE_FORMAT: "yyyy-MM-dd_HH-mm-ss",
        LOG_DATE_FORMAT: "dd MMM yyyy, h:mm:ss a",
        INFO_LOGGING: "false",
        ERROR_LOGGING: "false",
        INFO_LOG_FILE: str(home / "SaveBackupInfo.txt"),
        ERROR_LOG_FILE: str(home / "SaveBackupError.txt"),
    }


# === Settings ===


@dataclass(frozen=True)
class Settings:
    """Immutable view over loaded settings values.

    Keys that are missing or blank fall back to the defaults for *home*.
    """

    home: str
    values: dict[str, str] = field(default_factory=dict)

    @classmethod
    def defaults(cls, home: str | Path) -> Settings:
        return cls(home=str(home), values=default_values(home))

    def get(self, key: str) -> str:
        value = self.values.get(key, "").strip()
        if value:
            return value
        return default_values(self.home).get(key, "")

    def _flag(self, key: str) -> bool:
        return self.get(key).lower() in TRUE_VALUES

    def _path(self, key: str) -> str:
        return os.path.expanduser(self.get(key))

    @property
    def destination_path(self) -> str:
        return self._path(DESTINATION_PATH)

    @property
    def file_date_format(self) -> str:
        return self.get(FILE_DATE_FORMAT)

    @property
    def log_date_format(self) -> str:
        return self.get(LOG_DATE_FORMAT)

    @property
    def info_logging(self) -> bool:
        return self._flag(INFO_LOGGING)

    @property
    def error_logging(self) -> bool:
        return self._flag(ERROR_LOGGING)

    @property
    def info_log_file(self) -> str:
        return self._path(INFO_LOG_FILE)

    @property
    def error_log_file(self) -> str:
        return self._path(ERROR_LOG_FILE)


# === Parsing ===


def parse_settings(text: str) -> dict[str, str]:
    """Parse ``key=value`` lines, skipping comments and unknown keys."""
    values: dict[str, str] = {}
    for raw_line in text.splitlines():
        line = raw_line.strip()
        if not line or line.startswith(COMMENT_PREFIXES):
            continue
        key, sep, value = line.partition("=")
        if not sep:
            continue
        key = key.strip()
        if key in KNOWN_KEYS:
            values[key] = value.strip()
    return values


def render_settings(values: dict[str, str]) -> str:
    lines = [
        "# SaveBackup settings",
        "# One key=value pair per line. Missing keys use their defaults.",
    ]
    for key in KNOWN_KEYS:
        if key in values:
            lines.append(f"{key}={values[key]}")
    return "\n".join(lines) + "\n"


# === Store ===


class SettingsStore:
    """Creates SaveBackup.ini when absent, then reads it once per store.

    Errors are logged through the error channel and never raised, so
    callers always get a usable :class:`Settings`.
    """

    def __init__(
        self,
        path: str | Path | None = None,
        home: str | Path | None = None,
        log: BackupLogger | None = None,
    ) -> None:
        self.home = Path(home) if home is not None else Path.home()
        self.path = Path(path) if path is not None else default_settings_path(self.home)
        self._log = log
        self._lock = threading.Lock()
        self._values: dict[str, str] = {}
        self._settings: Settings | None = None

    @property
    def loaded(self) -> bool:
        return self._settings is not None

    # ------------------------------------------------------------------
    # Public
    # ------------------------------------------------------------------

    def bootstrap(self) -> bool:
        """Write the default settings file if none exists.

        Returns ``True`` only when this call created the file. An existing
        file is never touched.
        """
        if self.path.exists():
            return False
        self._values = default_values(self.home)
        try:
            return self._create()
        except ConfigIOError as e:
            self._report(e)
            return False

    def read(self) -> dict[str, str]:
        """Merge the settings file into the in-memory values."""
        try:
            self._values.update(self._read())
        except ConfigIOError as e:
            self._report(e)
        return dict(self._values)

    def load(self) -> Settings:
        """Bootstrap and read on the first call; return the cached result after."""
        with self._lock:
            if self._settings is None:
                self.bootstrap()
                self.read()
                self._settings = Settings(home=str(self.home), values=dict(self._values))
            return self._settings

    # ------------------------------------------------------------------
    # Internal helpers
    # ------------------------------------------------------------------

    def _create(self) -> bool:
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
        except OSError as e:
            raise ConfigIOError(f"An error occurred creating the settings file {self.path}.") from e
        try:
            with open(self.path, "x", encoding="utf-8") as f:
                f.write(render_settings(self._values))
        except FileExistsError:
            return False
        except OSError as e:
            raise ConfigIOError(f"An error occurred creating the settings file {self.path}.") from e
        return True

    def _read(self) -> dict[str, str]:
        try:
            text = self.path.read_text(encoding="utf-8")
        except OSError as e:
            raise ConfigIOError(f"An error occurred reading the settings file {self.path}.") from e
        return parse_settings(text)

    def _report(self, err: ConfigIOError) -> None:
        log = self._log
        if log is None:
            from savebackup.utils.logger import BackupLogger

            log = BackupLogger(Settings.defaults(self.home))
        log.error(str(err), err.__cause__ or err)
