# src/agency_desk/config.py

"""Centralized settings loaded from environment variables (+ optional .env).

Design goals:
- One Settings object for the whole app (normal "settings layer").
- No secrets required at import time.
- Every consumer also accepts an injected settings object (tests, CLI).
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Dict, List, Optional

ENV_PREFIX = "AGENCY"


def _k(suffix: str) -> str:
    """Build env var name with the project prefix."""
    return f"{ENV_PREFIX}_{suffix}"


def _load_dotenv_if_available() -> None:
    """Load .env locally if python-dotenv is installed. Safe no-op otherwise."""
    try:
        from dotenv import load_dotenv  # type: ignore
    except Exception:
        return
    load_dotenv(override=False)


_load_dotenv_if_available()


def _env(name: str, default: str = "") -> str:
    v = os.getenv(name)
    return default if v is None else v


def _first_env(*names: str, default: str | None = None) -> str | None:
    for n in names:
        v = os.getenv(n)
        if v is not None and v.strip() != "":
            return v
    return default


def _env_bool(name: str, default: bool) -> bool:
    raw = os.getenv(name)
    if raw is None:
        return default
    return raw.strip().lower() in {"1", "true", "yes", "y", "on"}


def _env_int(name: str, default: int) -> int:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    try:
        return int(raw)
    except ValueError:
        return default


def _env_float(name: str, default: float) -> float:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    try:
        return float(raw)
    except ValueError:
        return default


def _env_list(name: str, default: List[str]) -> List[str]:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return list(default)
    parts = [p.strip() for p in raw.replace(",", " ").split() if p.strip()]
    return parts


def _env_path(name: str, default: Path) -> Path:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    return Path(raw).expanduser()


@dataclass(frozen=True, slots=True)
class Settings:
    # ---- App / logging ----
    app_name: str
    log_level: str
    time_zone: str

    # ---- Session (identity is provided externally) ----
    session_user_id: Optional[str]
    session_display_name: str

    # ---- Connector flags ----
    console_enabled: bool
    alerts_enabled: bool

    # ---- LLM / OpenRouter ----
    openrouter_api_key: Optional[str]
    openrouter_base_url: str
    llm_models: List[str]
    extra_headers: Dict[str, str]
    llm_max_tool_rounds: int

    # ---- Notifications / AI tool windows ----
    notification_horizon_days: int
    notification_limit: int
    upcoming_tool_horizon_days: int
    upcoming_tool_limit: int
    alert_poll_seconds: float

    # ---- Calendar ----
    calendar_access_token: Optional[str]
    calendar_id: str
    calendar_base_url: str
    calendar_reminder_minutes: int

    # ---- Local data paths (ignored by git) ----
    data_dir: Path
    store_db_path: Path

    @staticmethod
    def from_env() -> "Settings":
        app_name = _first_env(_k("APP_NAME"), default="agency-desk") or "agency-desk"
        log_level = _env(_k("LOG_LEVEL"), "INFO")
        time_zone = _env(_k("TIME_ZONE"), "America/New_York")

        session_user_id = _first_env(_k("USER_ID"), default="local") or None
        session_display_name = _env(_k("USER_DISPLAY_NAME"), "Dr. Alejandro")

        console_enabled = _env_bool(_k("CONSOLE_ENABLED"), True)
        alerts_enabled = _env_bool(_k("ALERTS_ENABLED"), True)

        openrouter_api_key = _first_env(_k("OPENROUTER_API_KEY"), "OPENROUTER_API_KEY", default=None)
        openrouter_base_url = _env(_k("OPENROUTER_BASE_URL"), "https://openrouter.ai/api/v1")

        http_referer = _env(_k("HTTP_REFERER"), "https://example.com")
        title = _env(_k("APP_TITLE"), app_name)

        extra_headers = {
            "HTTP-Referer": http_referer,
            "X-Title": title,
        }

        llm_models = _env_list(
            _k("LLM_MODELS"),
            [
                "google/gemini-2.0-flash-001",
                "openai/gpt-4o-mini",
                "qwen/qwen-2.5-72b-instruct",
            ],
        )
        llm_max_tool_rounds = _env_int(_k("LLM_MAX_TOOL_ROUNDS"), 4)

        notification_horizon_days = _env_int(_k("NOTIFICATION_HORIZON_DAYS"), 1)
        notification_limit = _env_int(_k("NOTIFICATION_LIMIT"), 0)
        upcoming_tool_horizon_days = _env_int(_k("UPCOMING_TOOL_HORIZON_DAYS"), 2)
        upcoming_tool_limit = _env_int(_k("UPCOMING_TOOL_LIMIT"), 5)
        alert_poll_seconds = _env_float(_k("ALERT_POLL_SECONDS"), 60.0)

        calendar_access_token = _first_env(_k("CALENDAR_ACCESS_TOKEN"), default=None)
        calendar_id = _env(_k("CALENDAR_ID"), "primary")
        calendar_base_url = _env(_k("CALENDAR_BASE_URL"), "https://www.googleapis.com/calendar/v3")
        calendar_reminder_minutes = _env_int(_k("CALENDAR_REMINDER_MINUTES"), 10)

        data_dir = _env_path(_k("DATA_DIR"), Path(".local/agency"))
        store_db_path = _env_path(_k("STORE_DB_PATH"), data_dir / "agency.sqlite3")

        return Settings(
            app_name=app_name,
            log_level=log_level,
            time_zone=time_zone,
            session_user_id=session_user_id,
            session_display_name=session_display_name,
            console_enabled=console_enabled,
            alerts_enabled=alerts_enabled,
            openrouter_api_key=openrouter_api_key,
            openrouter_base_url=openrouter_base_url,
            llm_models=llm_models,
            extra_headers=extra_headers,
            llm_max_tool_rounds=llm_max_tool_rounds,
            notification_horizon_days=notification_horizon_days,
            notification_limit=notification_limit,
            upcoming_tool_horizon_days=upcoming_tool_horizon_days,
            upcoming_tool_limit=upcoming_tool_limit,
            alert_poll_seconds=alert_poll_seconds,
            calendar_access_token=calendar_access_token,
            calendar_id=calendar_id,
            calendar_base_url=calendar_base_url,
            calendar_reminder_minutes=calendar_reminder_minutes,
            data_dir=data_dir,
            store_db_path=store_db_path,
        )


SETTINGS = Settings.from_env()


def get_settings() -> Settings:
    return SETTINGS
