# tests/test_logging_setup.py

from __future__ import annotations

import logging
from pathlib import Path

import pytest

from agency_desk.logging_setup import _ConsoleNoiseFilter, setup_logging


def _record(name: str, level: int) -> logging.LogRecord:
    return logging.LogRecord(name, level, __file__, 1, "msg", None, None)


def test_console_filter_levels() -> None:
    f = _ConsoleNoiseFilter()
    assert f.filter(_record("agency_desk.tasks.task_store", logging.DEBUG)) is True
    assert f.filter(_record("agency_desk.notifications.alerts", logging.INFO)) is False
    assert f.filter(_record("agency_desk.notifications.alerts", logging.WARNING)) is True
    assert f.filter(_record("agency_desk.connectors.alert_runner", logging.INFO)) is False
    assert f.filter(_record("httpx", logging.WARNING)) is False
    assert f.filter(_record("py.warnings", logging.ERROR)) is True


@pytest.fixture()
def restore_root_logging():
    root = logging.getLogger()
    handlers, level = list(root.handlers), root.level
    yield
    for h in list(root.handlers):
        root.removeHandler(h)
        h.close()
    for h in handlers:
        root.addHandler(h)
    root.setLevel(level)
    logging.captureWarnings(False)


def test_setup_logging_splits_alert_log(tmp_path: Path, restore_root_logging) -> None:
    log_file = setup_logging(log_dir=tmp_path)
    setup_logging(log_dir=tmp_path)

    logging.getLogger("agency_desk.notifications.alerts").info("alert delivered")
    logging.getLogger("agency_desk.tasks.task_store").info("task added")
    for h in logging.getLogger().handlers:
        h.flush()

    assert log_file == tmp_path / "agency.log"
    main_log = log_file.read_text(encoding="utf-8")
    alerts_log = (tmp_path / "alerts.log").read_text(encoding="utf-8")
    assert main_log.count("alert delivered") == 1
    assert "task added" in main_log
    assert "alert delivered" in alerts_log
    assert "task added" not in alerts_log
    assert logging.getLogger("httpx").level == logging.WARNING
