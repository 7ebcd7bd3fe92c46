"""Tests for savebackup.handler — backing up documents before save."""

from __future__ import annotations

from datetime import datetime
from pathlib import Path

import pytest

from savebackup.events import SaveEvent
from savebackup.handler import FOLDER_ERROR, BackupHandler
from savebackup.results import ErrorKind
from savebackup.settings import Settings
from savebackup.utils.logger import BackupLogger, SilentLogger

NOW = datetime(2024, 1, 5, 9, 30, 0)


def _settings(tmp_path: Path, **values: str) -> Settings:
    base = {
        "destinationPath": str(tmp_path / "backup"),
        "fileDateFormat": "yyyy-MM-dd",
        "infoLogFile": str(tmp_path / "info.txt"),
        "errorLogFile": str(tmp_path / "error.txt"),
    }
    base.update(values)
    return Settings(home=str(tmp_path), values=base)


def _handler(settings: Settings, log: BackupLogger | None = None, **kwargs) -> BackupHandler:
    return BackupHandler(
        settings,
        log or SilentLogger(settings, clock=lambda: NOW),
        clock=lambda: NOW,
        is_windows=False,
        **kwargs,
    )


def _source(tmp_path: Path, name: str = "main.txt") -> str:
    return str(tmp_path / "proj" / name)


# === destination ===


def test_destination_mirrors_source_path(tmp_path: Path):
    handler = _handler(_settings(tmp_path))
    source = _source(tmp_path)
    expected = str(tmp_path / "backup") + str(tmp_path / "proj" / "main") + "-2024-01-05.txt"
    assert handler.destination_for(source) == expected


def test_destination_explicit_time(tmp_path: Path):
    handler = _handler(_settings(tmp_path, fileDateFormat="yyyy-MM-dd_HH-mm-ss"))
    dest = handler.destination_for("/p/a.md", now=datetime(2023, 12, 31, 23, 59, 58))
    assert dest.endswith("/p/a-2023-12-31_23-59-58.md")


# === before_document_saving ===


def test_backup_written_with_exact_content(tmp_path: Path):
    handler = _handler(_settings(tmp_path))
    text = "hello\r\nwörld\n"

    result = handler.before_document_saving(_source(tmp_path), text)

    assert result.success
    assert result.written is True
    assert result.errors == []
    backup = Path(result.destination)
    assert backup.read_bytes() == text.encode("utf-8")
    assert result.bytes_written == len(text.encode("utf-8"))


def test_backup_creates_missing_directory_chain(tmp_path: Path):
    handler = _handler(_settings(tmp_path))
    source = str(tmp_path / "deep" / "er" / "still" / "file.py")

    result = handler(source, "print('x')\n")

    backup = Path(result.destination)
    assert backup.parent.is_dir()
    assert backup.read_text() == "print('x')\n"
    assert (tmp_path / "backup").is_dir()


def test_backup_logs_saving_line(tmp_path: Path):
    settings = _settings(tmp_path)
    log = SilentLogger(settings)
    result = _handler(settings, log).before_document_saving(_source(tmp_path), "x")
    assert list(log.recent) == [f"[INFO] Saving file {result.destination}"]


def test_saving_line_goes_to_info_file_when_enabled(tmp_path: Path):
    settings = _settings(tmp_path, infoLogging="true")
    result = _handler(settings).before_document_saving(_source(tmp_path), "x")
    assert f"Saving file {result.destination}" in (tmp_path / "info.txt").read_text()


def test_same_second_overwrites(tmp_path: Path):
    handler = _handler(_settings(tmp_path))
    first = handler(_source(tmp_path), "one")
    second = handler(_source(tmp_path), "two")
    assert first.destination == second.destination
    assert Path(second.destination).read_text() == "two"


def test_different_times_keep_both(tmp_path: Path):
    settings = _settings(tmp_path, fileDateFormat="HH-mm-ss")
    times = iter([datetime(2024, 1, 5, 9, 0, 0), datetime(2024, 1, 5, 9, 0, 1)])
    handler = BackupHandler(settings, SilentLogger(settings), clock=lambda: next(times), is_windows=False)

    a = handler(_source(tmp_path), "one")
    b = handler(_source(tmp_path), "two")

    assert a.destination != b.destination
    assert Path(a.destination).read_text() == "one"
    assert Path(b.destination).read_text() == "two"


# === documents without a file ===


@pytest.mark.parametrize("path", [None, ""])
def test_missing_path_is_skipped_silently(
    tmp_path: Path, capsys: pytest.CaptureFixture[str], path: str | None
):
    settings = _settings(tmp_path, infoLogging="true", errorLogging="true")
    log = BackupLogger(settings)

    result = _handler(settings, log).before_document_saving(path, "unsaved text")

    assert result.skipped is True
    assert result.success is True
    assert result.destination is None
    assert list(tmp_path.iterdir()) == []
    assert list(log.recent) == []
    captured = capsys.readouterr()
    assert captured.out == ""
    assert captured.err == ""


# === failures ===


def test_unwritable_destination_is_logged_not_raised(tmp_path: Path):
    blocker = tmp_path / "blocker"
    blocker.write_text("not a directory")
    settings = _settings(tmp_path, destinationPath=str(blocker), errorLogging="true")
    log = SilentLogger(settings)
    source = _source(tmp_path)

    result = _handler(settings, log).before_document_saving(source, "text")

    assert result.success is False
    assert result.written is False
    assert result.errors == [ErrorKind.DIRECTORY_CREATE, ErrorKind.WRITE]
    assert result.message == f"A problem has occurred with writing the file {source}"
    assert f"[ERROR] {FOLDER_ERROR}" in log.recent
    assert f"[ERROR] {result.message}" in log.recent
    error_log = (tmp_path / "error.txt").read_text()
    assert "A problem has occurred with writing the file" in error_log
    assert "Traceback" in error_log


@pytest.mark.parametrize("bad_dir", ["x\x00y", "d\ud800"])
def test_unencodable_path_is_logged_not_raised(tmp_path: Path, bad_dir: str):
    settings = _settings(tmp_path)
    log = SilentLogger(settings)
    source = str(tmp_path / bad_dir / "a.txt")

    result = _handler(settings, log).before_document_saving(source, "text")

    assert result.success is False
    assert result.written is False
    assert result.errors == [ErrorKind.DIRECTORY_CREATE, ErrorKind.WRITE]
    assert f"[ERROR] {FOLDER_ERROR}" in log.recent
    assert f"[ERROR] {result.message}" in log.recent


def test_write_failure_after_directory_exists(tmp_path: Path):
    settings = _settings(tmp_path)
    handler = _handler(settings)
    source = _source(tmp_path)
    Path(handler.destination_for(source)).mkdir(parents=True)

    result = handler(source, "text")

    assert result.errors == [ErrorKind.WRITE]


# === dry run ===


def test_dry_run_writes_nothing(tmp_path: Path):
    handler = _handler(_settings(tmp_path), dry_run=True)
    result = handler(_source(tmp_path), "text")
    assert result.written is False
    assert result.success is True
    assert "WOULD CREATE" in result.message
    assert not (tmp_path / "backup").exists()


# === batches ===


def test_batch_skips_only_missing_entries(tmp_path: Path):
    handler = _handler(_settings(tmp_path))
    events = [
        SaveEvent(source_path=_source(tmp_path, "a.txt"), text="A"),
        SaveEvent(source_path=None, text="scratch"),
        SaveEvent(source_path=_source(tmp_path, "b.txt"), text="B"),
    ]

    results = handler.before_all_documents_saving(events)

    assert [r.skipped for r in results] == [False, True, False]
    assert Path(results[0].destination).read_text() == "A"
    assert Path(results[2].destination).read_text() == "B"


def test_batch_continues_after_failure(tmp_path: Path):
    handler = _handler(_settings(tmp_path))
    bad = _source(tmp_path, "bad.txt")
    Path(handler.destination_for(bad)).mkdir(parents=True)

    results = handler.before_all_documents_saving(
        [SaveEvent(bad, "x"), SaveEvent(_source(tmp_path, "good.txt"), "y")]
    )

    assert results[0].success is False
    assert results[1].success is True
