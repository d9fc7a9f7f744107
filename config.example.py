# config.example.py

"""
Documentation-only module (safe to commit).

The real configuration is loaded from environment variables (optionally via a local .env file).
This file exists to make the repo self-documenting even without opening .env.example.
"""

ENV_VARS = {
    # App / logging
    "TODO_APP_NAME": "App display name (default: todo-tracker).",
    "TODO_LOG_LEVEL": "Console logging level (default: WARNING).",
    "TODO_LOG_DIR": "Directory for todo.log (default: .local/todo).",
    "TODO_LOG_TO_FILE": "Write the full DEBUG log to <log_dir>/todo.log (true/false, default: true).",
    # Storage
    "TODO_TASKS_FILE": "Tasks file path (default: tasks.json, relative to the working directory).",
}
