# src/task_cli/config.py

"""Settings loaded from environment variables (+ optional .env).

- One Settings object for the whole app.
- The task file location is an explicit value, never derived from where the
  package is installed.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path

from dotenv import load_dotenv

ENV_PREFIX = "TASK_CLI"


def _k(suffix: str) -> str:
    """Build env var name with the project prefix."""
    return f"{ENV_PREFIX}_{suffix}"


load_dotenv(override=False)


def _env(name: str, default: str = "") -> str:
    v = os.getenv(name)
    return default if v is None else v


def _env_bool(name: str, default: bool) -> bool:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    return raw.strip().lower() in {"1", "true", "yes", "y", "on"}


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
    log_file_enabled: bool

    # ---- Local data paths ----
    data_dir: Path
    data_file: Path
    log_file: Path

    # ---- Behaviour ----
    persist_on_list: bool

    @staticmethod
    def from_env() -> "Settings":
        app_name = _env(_k("APP_NAME"), "task-cli").strip() or "task-cli"
        log_level = _env(_k("LOG_LEVEL"), "WARNING").strip().upper() or "WARNING"
        log_file_enabled = _env_bool(_k("LOG_FILE_ENABLED"), True)

        data_dir = _env_path(_k("DATA_DIR"), Path(".local/task-cli"))
        data_file = _env_path(_k("DATA_FILE"), data_dir / "tasks.json")
        log_file = _env_path(_k("LOG_FILE"), data_dir / "task-cli.log")

        persist_on_list = _env_bool(_k("PERSIST_ON_LIST"), False)

        return Settings(
            app_name=app_name,
            log_level=log_level,
            log_file_enabled=log_file_enabled,
            data_dir=data_dir,
            data_file=data_file,
            log_file=log_file,
            persist_on_list=persist_on_list,
        )


SETTINGS = Settings.from_env()


def get_settings() -> Settings:
    return SETTINGS
