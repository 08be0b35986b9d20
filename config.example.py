# config.example.py

"""
Documentation-only module (safe to commit).

Configuration is read from environment variables, optionally from a local .env
file (python-dotenv). Keep .env out of version control: the session file path it
points at holds a bearer token.
"""

ENV_VARS = {
    # App / logging
    "TASKDESK_APP_NAME": "App display name (default: taskdesk).",
    "TASKDESK_LOG_LEVEL": "Console logging level (default: INFO).",
    # Task API
    "TASKDESK_API_BASE_URL": "Task API base URL (default: http://localhost:3333).",
    "VITE_API_BASE_URL": "Fallback for TASKDESK_API_BASE_URL, shared with the web front-end.",
    "TASKDESK_API_CONNECT_TIMEOUT_SECONDS": "HTTP connect timeout (default: 5).",
    "TASKDESK_API_READ_TIMEOUT_SECONDS": "HTTP read timeout (default: 25).",
    # Paths (gitignored)
    "TASKDESK_DATA_DIR": "Local data directory (default: .local/taskdesk).",
    "TASKDESK_TOKEN_PATH": "Session file path (default: <data_dir>/session.json).",
    "TASKDESK_TOKEN_KEY": "Key of the token inside the session file (default: auth_token).",
    # Display
    "TASKDESK_DUE_SOON_DAYS": "Days ahead that count as 'due soon' (default: 3).",
}
