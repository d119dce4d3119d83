"""
Tests for the boundary operations and the polling area tracker.

Usage:
    pytest tests/test_tracker.py
"""

import asyncio
import logging

import pytest

from core.document.log_reader import ReadError
from zonetrack.scanner.models import MalformedLogLine
from zonetrack.tracker import (
    AreaTracker,
    ScanResult,
    TrackerConfig,
    get_area_name,
    read_area_name,
)


def _line(area: str) -> str:
    return (
        "2024/01/01 12:00:00 1 a [DEBUG Client 1] "
        f'Generating level 2 area "{area}" with seed 7\n'
    )


@pytest.fixture
def client_log(tmp_path):
    path = tmp_path / "Client.txt"
    path.write_text("", encoding="utf-8")
    return path


def _append(path, text: str) -> None:
    with open(path, "a", encoding="utf-8") as f:
        f.write(text)


# ------------------------------------------------------------------
# Boundary operations
# ------------------------------------------------------------------


def test_read_area_name(client_log):
    _append(client_log, _line("1_1_1") + _line("1_1_town"))
    assert read_area_name(client_log) == "1_1_town"


def test_read_area_name_missing_file(tmp_path):
    with pytest.raises(ReadError):
        read_area_name(tmp_path / "missing.txt")


def test_read_area_name_malformed(client_log):
    _append(client_log, "Generating level 2\n")
    with pytest.raises(MalformedLogLine):
        read_area_name(client_log)


def test_get_area_name(client_log):
    _append(client_log, _line("1_2_3"))
    assert asyncio.run(get_area_name(client_log)) == "1_2_3"


def test_get_area_name_read_error(tmp_path):
    with pytest.raises(ReadError):
        asyncio.run(get_area_name(str(tmp_path / "missing.txt")))


# ------------------------------------------------------------------
# AreaTracker
# ------------------------------------------------------------------


def test_poll_reports_changes(client_log):
    tracker = AreaTracker(TrackerConfig(log_path=str(client_log)))

    first = tracker.poll()
    assert first.ok and first.area_name == "" and not first.changed

    _append(client_log, _line("1_1_1"))
    second = tracker.poll()
    assert second.changed and second.area_name == "1_1_1"
    assert tracker.current_area == "1_1_1"

    third = tracker.poll()
    assert not third.changed


def test_poll_error_clears_area(client_log):
    _append(client_log, _line("1_1_1"))
    tracker = AreaTracker(TrackerConfig(log_path=str(client_log)))
    tracker.poll()

    client_log.unlink()
    result = tracker.poll()

    assert isinstance(result.error, ReadError)
    assert not result.ok
    assert result.area_name == ""
    assert result.changed
    assert tracker.current_area == ""


def test_poll_error_keeps_area(client_log):
    _append(client_log, _line("1_1_1"))
    config = TrackerConfig(log_path=str(client_log), clear_on_error=False)
    tracker = AreaTracker(config)
    tracker.poll()

    _append(client_log, "Generating level x\n")
    result = tracker.poll()

    assert isinstance(result.error, MalformedLogLine)
    assert result.area_name == "1_1_1"
    assert not result.changed
    assert tracker.current_area == "1_1_1"


def test_poll_unknown_encoding_is_reported(client_log):
    _append(client_log, _line("1_1_1"))
    config = TrackerConfig(log_path=str(client_log), encoding="no-such-codec")
    result = AreaTracker(config).poll()

    assert isinstance(result.error, ReadError)
    assert isinstance(result.error.__cause__, LookupError)
    assert result.area_name == ""


def test_repeated_failure_warns_once(tmp_path, caplog):
    caplog.set_level(logging.DEBUG, logger="zonetrack.tracker")
    log = tmp_path / "Client.txt"
    tracker = AreaTracker(TrackerConfig(log_path=str(log)))

    for _ in range(3):
        tracker.poll()

    records = [r for r in caplog.records if r.name == "zonetrack.tracker"]
    warnings = [r for r in records if r.levelno == logging.WARNING]
    assert len(warnings) == 1
    assert sum(r.levelno == logging.DEBUG for r in records) == 2

    log.write_text(_line("1_1_1"), encoding="utf-8")
    tracker.poll()
    log.unlink()
    tracker.poll()

    warnings = [
        r
        for r in caplog.records
        if r.name == "zonetrack.tracker" and r.levelno == logging.WARNING
    ]
    assert len(warnings) == 2


def test_watch_calls_on_change_and_sleeps(client_log):
    config = TrackerConfig(log_path=str(client_log), poll_interval=0.25)
    tracker = AreaTracker(config)
    changes = []
    sleeps = []
    areas = iter(["1_1_1", "1_1_1", "1_1_2"])

    def fake_sleep(seconds):
        sleeps.append(seconds)
        _append(client_log, _line(next(areas)))

    polls = tracker.watch(on_change=changes.append, max_polls=4, sleep=fake_sleep)

    assert polls == 4
    assert sleeps == [0.25, 0.25, 0.25]
    assert [r.area_name for r in changes] == ["1_1_1", "1_1_2"]
    assert all(isinstance(r, ScanResult) for r in changes)


def test_watch_stops_on_keyboard_interrupt(client_log):
    tracker = AreaTracker(TrackerConfig(log_path=str(client_log)))

    def interrupt(_seconds):
        raise KeyboardInterrupt

    assert tracker.watch(sleep=interrupt) == 1


def test_scan_result_str():
    assert str(ScanResult(path="c.txt", area_name="1_1_1")) == "c.txt: 1_1_1"
    assert str(ScanResult(path="c.txt")) == "c.txt: <none>"
