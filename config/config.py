"""Settings shared by every environment, read from the process environment.

A .env file next to the project is loaded by create_app() before the
settings module is imported.
"""

import os


def env_flag(name: str, default: str = "0") -> bool:
    return bool(int(os.environ.get(name, default)))


def db_config_from_env(default_password: str = "") -> dict:
    return {
        "host": os.environ.get("DB_HOST", "localhost"),
        "port": int(os.environ.get("DB_PORT", "3306")),
        "user": os.environ.get("DB_USER", "root"),
        "password": os.environ.get("DB_PASSWORD", default_password),
        "database": os.environ.get("DB_NAME", "shift_scheduler"),
    }


LOG_LEVEL = os.environ.get("LOG_LEVEL", "INFO").upper()

# Login sessions last this many days.
SESSION_DAYS = int(os.environ.get("SESSION_DAYS", "7"))
