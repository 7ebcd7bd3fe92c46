"""Tests for savebackup.component — wiring and lifecycle."""

from __future__ import annotations

from datetime import datetime
from pathlib import Path

from savebackup.component import SaveBackupComponent
from savebackup.events import SaveEvent
from savebackup.settings import SETTINGS_FILENAME

NOW = datetime(2024, 1, 5, 9, 30, 0)


def _component(home: Path, **kwargs) -> SaveBackupComponent:
    return SaveBackupComponent(home=home, clock=lambda: NOW, is_windows=False, quiet=True, **kwargs)


def test_init_creates_settings_and_subscribes(tmp_path: Path):
    component = _component(tmp_path)
    component.init_component()

    assert (tmp_path / SETTINGS_FILENAME).is_file()
    assert component.active is True
    assert component.component_name == "SaveBackup Component"


def test_save_event_produces_backup(tmp_path: Path):
    (tmp_path / SETTINGS_FILENAME).write_text(
        f"destinationPath={tmp_path / 'bk'}\nfileDateFormat=yyyy-MM-dd\n"
    )
    component = _component(tmp_path)
    component.init_component()

    results = component.notifier.fire(SaveEvent("/home/u/proj/main.txt", "hello"))

    expected = Path(f"{tmp_path / 'bk'}/home/u/proj/main-2024-01-05.txt")
    assert results[0].destination == str(expected)
    assert expected.read_text() == "hello"


def test_init_twice_subscribes_once(tmp_path: Path):
    component = _component(tmp_path)
    component.init_component()
    component.init_component()

    results = component.notifier.fire(SaveEvent(str(tmp_path / "a.txt"), "A"))

    assert len(results) == 1


def test_dispose_disconnects(tmp_path: Path):
    component = _component(tmp_path)
    component.init_component()
    component.dispose_component()

    assert component.active is False
    assert component.notifier.fire(SaveEvent(str(tmp_path / "a.txt"), "A")) == []


def test_settings_not_reloaded(tmp_path: Path):
    component = _component(tmp_path)
    first = component.settings
    (tmp_path / SETTINGS_FILENAME).write_text("fileDateFormat=yyyy\n")

    assert component.settings is first
    assert component.handler is component.handler


def test_custom_settings_path(tmp_path: Path):
    path = tmp_path / "etc" / "backup.ini"
    component = _component(tmp_path, settings_path=path)
    component.init_component()
    assert component.settings_path == path
    assert path.is_file()
    assert not (tmp_path / SETTINGS_FILENAME).exists()
