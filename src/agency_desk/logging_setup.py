# src/agency_desk/logging_setup.py

from __future__ import annotations

import logging
import sys
from logging.handlers import RotatingFileHandler
from pathlib import Path

# Background loggers: they run in the alert thread and would interleave with the prompt.
BACKGROUND_LOGGERS = (
    "agency_desk.notifications.alerts",
    "agency_desk.connectors.alert_runner",
)

# Libraries that log every request at INFO/DEBUG.
CHATTY_LIBRARIES = ("httpx", "httpcore", "openai")

LOG_FILE_MAX_BYTES = 5 * 1024 * 1024
LOG_FILE_BACKUPS = 3


class _ConsoleNoiseFilter(logging.Filter):
    """
    Keep the interactive console readable:
    - agency_desk logs pass through
    - the background alert sweep only at WARNING+
    - third-party libraries and captured Python warnings only at ERROR+
    """

    def filter(self, record: logging.LogRecord) -> bool:
        name = record.name

        # Our logs. The alert sweep has its own file; the console only needs its failures.
        if name.startswith("agency_desk."):
            if name.startswith(BACKGROUND_LOGGERS):
                return record.levelno >= logging.WARNING
            return True

        # warnings.warn(...) routed through logging.
        if name == "py.warnings":
            return record.levelno >= logging.ERROR

        # openai / httpx retries show up as errors in our own logs anyway.
        return record.levelno >= logging.ERROR


class _BackgroundOnlyFilter(logging.Filter):
    def filter(self, record: logging.LogRecord) -> bool:
        return record.name.startswith(BACKGROUND_LOGGERS)


def _file_handler(path: Path, level: int, fmt: logging.Formatter) -> logging.Handler:
    fh = RotatingFileHandler(
        str(path),
        maxBytes=LOG_FILE_MAX_BYTES,
        backupCount=LOG_FILE_BACKUPS,
        encoding="utf-8",
    )
    fh.setLevel(level)
    fh.setFormatter(fmt)
    return fh


def setup_logging(
    *,
    log_dir: str | Path = ".local/agency",
    console_level: int = logging.INFO,
    file_level: int = logging.DEBUG,
) -> Path:
    """
    Configure logging with:
    - Console handler: filtered for the REPL
    - agency.log: everything at file_level (rotated)
    - alerts.log: only the background alert sweep, so delivery history is easy to follow

    Call this ONCE, before the first logger.info. Returns the main log file path.
    """
    log_dir = Path(log_dir)
    log_dir.mkdir(parents=True, exist_ok=True)
    log_file = log_dir / "agency.log"

    root = logging.getLogger()
    root.setLevel(logging.DEBUG)

    # Re-running setup must not duplicate output.
    for h in list(root.handlers):
        root.removeHandler(h)
        h.close()

    fmt = logging.Formatter(
        fmt="%(asctime)s.%(msecs)03d %(levelname)s [%(threadName)s] %(name)s: %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )

    # Console (interactive)
    ch = logging.StreamHandler(sys.stderr)
    ch.setLevel(console_level)
    ch.setFormatter(fmt)
    ch.addFilter(_ConsoleNoiseFilter())
    root.addHandler(ch)

    # File (everything)
    root.addHandler(_file_handler(log_file, file_level, fmt))

    # File (alert sweep only)
    alerts = _file_handler(log_dir / "alerts.log", logging.INFO, fmt)
    alerts.addFilter(_BackgroundOnlyFilter())
    root.addHandler(alerts)

    # Route warnings.warn(...) into logging as 'py.warnings'
    logging.captureWarnings(True)

    # Request-level chatter stays out of agency.log too.
    for name in CHATTY_LIBRARIES:
        logging.getLogger(name).setLevel(logging.WARNING)

    return log_file
