# config.example.py

"""
Documentation-only module (safe to commit).

The real configuration is loaded from environment variables (optionally via a local .env file).
This file exists to make the repo self-documenting even without opening .env.
"""

ENV_VARS = {
    # App / logging
    "TASKPLANNER_APP_NAME": "App display name (default: taskplanner).",
    "TASKPLANNER_LOG_LEVEL": "Console logging level (default: INFO).",
    # Paths (gitignored)
    "TASKPLANNER_DATA_DIR": "Local data directory, also holds taskplanner.log (default: .local/taskplanner).",
    "TASKPLANNER_CSV_PATH": "CSV task file (default: <data_dir>/tasks.csv).",
    "TASKPLANNER_JSON_PATH": "JSON task file (default: <data_dir>/tasks.json).",
    # Lifecycle
    "TASKPLANNER_LOAD_ON_START": "Load the CSV file when the console starts (default: true).",
    "TASKPLANNER_SAVE_ON_EXIT": "Save the CSV file when the console exits (default: true).",
    # Query tuning
    "TASKPLANNER_RECENT_LIMIT": "How many tasks /filter recent shows (default: 10).",
    "TASKPLANNER_UPCOMING_DAYS": "Look-ahead window for /upcoming in days (default: 7).",
    "TASKPLANNER_DUE_SOON_DAYS": "Deadline distance flagged as 'due soon' (default: 3).",
    "TASKPLANNER_OLDEST_OPEN_LIMIT": "How many oldest open tasks /stats lists (default: 3).",
}
