"""Backs up each document just before the host saves it."""

from __future__ import annotations

from datetime import datetime
from pathlib import Path
from typing import TYPE_CHECKING, Callable, Iterable

from savebackup.paths import derive_destination, is_windows_host
from savebackup.results import BackupResult, ErrorKind
from savebackup.utils.io import ensure_parent_dir, preview_text, write_text

if TYPE_CHECKING:
    from savebackup.events import SaveEvent
    from savebackup.settings import Settings
    from savebackup.utils.logger import BackupLogger


FOLDER_ERROR = "An error occurred creating the required folder."
WRITE_ERROR = "A problem has occurred with writing the file {source_path}"


class BackupHandler:
    """Writes a timestamped copy of a document's text under the backup root.

    Handling is best-effort: every failure is logged and reported in the
    returned :class:`BackupResult`, and nothing is raised to the caller.
    """

    def __init__(
        self,
        settings: Settings,
        log: BackupLogger,
        clock: Callable[[], datetime] = datetime.now,
        is_windows: bool | None = None,
        dry_run: bool = False,
    ) -> None:
        self._settings = settings
        self._log = log
        self._clock = clock
        self._is_windows = is_windows_host() if is_windows is None else is_windows
        self.dry_run = dry_run

    # ------------------------------------------------------------------
    # Public
    # ------------------------------------------------------------------

    def destination_for(self, source_path: str, now: datetime | None = None) -> str:
        return derive_destination(
            source_path,
            self._settings.destination_path,
            self._settings.file_date_format,
            now or self._clock(),
            self._is_windows,
        )

    def before_document_saving(self, source_path: str | None, text: str) -> BackupResult:
        """Back up one document. Documents without a file are skipped silently."""
        if not source_path:
            return BackupResult(source_path=source_path, skipped=True)

        destination = self.destination_for(source_path)
        result = BackupResult(source_path=source_path, destination=destination)
        self._log.info(f"Saving file {destination}")

        path = Path(destination)
        if self.dry_run:
            result.message = preview_text(path, text).message
            return result

        try:
            ensure_parent_dir(path)
        except Exception as exc:  # noqa: BLE001
            result.errors.append(ErrorKind.DIRECTORY_CREATE)
            self._log.error(FOLDER_ERROR, exc)

        try:
            wr = write_text(path, text)
        except Exception as exc:  # noqa: BLE001
            result.errors.append(ErrorKind.WRITE)
            result.message = WRITE_ERROR.format(source_path=source_path)
            self._log.error(result.message, exc)
            return result

        result.written = wr.written
        result.bytes_written = wr.bytes_written
        result.message = wr.message
        return result

    __call__ = before_document_saving

    def handle(self, event: SaveEvent) -> BackupResult:
        return self.before_document_saving(event.source_path, event.text)

    def before_all_documents_saving(self, events: Iterable[SaveEvent]) -> list[BackupResult]:
        """Back up every pending document; a skipped entry does not stop the rest."""
        return [self.handle(event) for event in events]
