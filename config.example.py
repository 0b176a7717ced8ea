# config.example.py

"""
Documentation-only module (safe to commit).

The real configuration is loaded from environment variables (optionally via a local .env file,
see src/agency_desk/config.py). Do NOT commit real secrets or calendar tokens.
"""

ENV_VARS = {
    # App / logging
    "AGENCY_APP_NAME": "App display name (default: agency-desk).",
    "AGENCY_LOG_LEVEL": "Console logging level (default: INFO).",
    "AGENCY_TIME_ZONE": "IANA time zone for due windows and calendar events (default: America/New_York).",
    # Session (identity comes from outside the app)
    "AGENCY_USER_ID": "Signed-in user id; empty => no session (default: local).",
    "AGENCY_USER_DISPLAY_NAME": "How the assistant addresses the user (default: Dr. Alejandro).",
    # Connectors
    "AGENCY_CONSOLE_ENABLED": "Enable console connector (true/false).",
    "AGENCY_ALERTS_ENABLED": "Run the task-alert sweep in the background (true/false).",
    "AGENCY_ALERT_POLL_SECONDS": "Alert sweep interval in seconds (default: 45).",
    # LLM / OpenRouter
    "AGENCY_OPENROUTER_API_KEY": "OpenRouter API key (without it the offline demo client is used).",
    "AGENCY_OPENROUTER_BASE_URL": "OpenRouter base URL (default: https://openrouter.ai/api/v1).",
    "AGENCY_LLM_MODELS": "Comma/space separated list of models to try in order.",
    "AGENCY_LLM_MAX_TOOL_ROUNDS": "Max tool-call rounds per user message (default: 4).",
    "AGENCY_LLM_READ_TIMEOUT_SECONDS": "LLM read timeout (default: 45).",
    "AGENCY_LLM_CONNECT_TIMEOUT_SECONDS": "LLM connect timeout (default: 5).",
    "AGENCY_HTTP_REFERER": "Optional OpenRouter metadata header.",
    "AGENCY_APP_TITLE": "Optional OpenRouter metadata header title.",
    # Notifications / assistant tool
    "AGENCY_NOTIFICATION_HORIZON_DAYS": "Bell window: today + N days (default: 1).",
    "AGENCY_NOTIFICATION_LIMIT": "Max bell entries; 0 => unbounded (default: 0).",
    "AGENCY_UPCOMING_TOOL_HORIZON_DAYS": "Assistant upcoming-tasks window: today + N days (default: 2).",
    "AGENCY_UPCOMING_TOOL_LIMIT": "Max tasks returned to the assistant (default: 5).",
    # Calendar
    "AGENCY_CALENDAR_ACCESS_TOKEN": "Google Calendar OAuth access token (empty => calendar sync off).",
    "AGENCY_CALENDAR_ID": "Target calendar id (default: primary).",
    "AGENCY_CALENDAR_BASE_URL": "Calendar API base URL (default: https://www.googleapis.com/calendar/v3).",
    "AGENCY_CALENDAR_REMINDER_MINUTES": "Popup reminder before the event (default: 10).",
    # Paths (gitignored)
    "AGENCY_DATA_DIR": "Local data directory (default: .local/agency).",
    "AGENCY_STORE_DB_PATH": "Document store SQLite path (default: <data_dir>/agency.sqlite3).",
}
