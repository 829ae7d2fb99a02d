# src/task_tracker/config.py

"""Centralized settings loaded from environment variables (+ optional .env).

Design goals:
- One Settings object for the whole app.
- Every value has a default suitable for local development.
- Prefixed names (TASKS_DB_URL) win over the legacy unprefixed ones (DB_URL).
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path

from dotenv import load_dotenv

from .tasks.task_errors import StorageError

ENV_PREFIX = "TASKS"

SQLITE_SCHEME = "sqlite://"


def _k(suffix: str) -> str:
    """Build env var name with the project prefix."""
    return f"{ENV_PREFIX}_{suffix}"


def _env(name: str, default: str = "") -> str:
    v = os.getenv(name)
    return default if v is None else v


def _first_env(*names: str, default: str | None = None) -> str | None:
    for n in names:
        v = os.getenv(n)
        if v is not None and v.strip() != "":
            return v
    return default


def _env_path(name: str, default: Path) -> Path:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    return Path(raw).expanduser()


def sqlite_path_from_url(url: str) -> Path:
    """
    Resolve a database URL to a SQLite file path.

    Accepted forms:
      sqlite:///relative/tasks.sqlite3
      sqlite:////absolute/tasks.sqlite3
      /any/plain/path.sqlite3
    """
    raw = (url or "").strip()
    if not raw:
        raise StorageError("Database URL is empty")

    if raw.startswith(SQLITE_SCHEME):
        path = raw[len(SQLITE_SCHEME):]
        # sqlite:///x -> "/x" -> "x"; sqlite:////x -> "//x" -> "/x"
        if path.startswith("/"):
            path = path[1:]
        if not path:
            raise StorageError(f"Database URL has no path: {raw}")
        return Path(path).expanduser()

    if "://" in raw:
        scheme = raw.split("://", 1)[0]
        raise StorageError(f"Unsupported database URL scheme {scheme!r} (only sqlite is supported)")

    return Path(raw).expanduser()


@dataclass(frozen=True, slots=True)
class Settings:
    # ---- App / logging ----
    app_name: str
    log_level: str

    # ---- Database ----
    db_url: str
    db_user: str
    db_password: str

    # ---- Local data paths (ignored by git) ----
    data_dir: Path

    @property
    def db_path(self) -> Path:
        return sqlite_path_from_url(self.db_url)

    @staticmethod
    def from_env() -> "Settings":
        app_name = _env(_k("APP_NAME"), "Task Manager")
        log_level = _env(_k("LOG_LEVEL"), "WARNING")

        data_dir = _env_path(_k("DATA_DIR"), Path(".local/task_tracker"))

        db_url = _first_env(
            _k("DB_URL"), "DB_URL", default=f"sqlite:///{data_dir / 'tasks.sqlite3'}"
        ) or ""
        db_user = _first_env(_k("DB_USER"), "DB_USER", default="tasks") or ""
        db_password = _first_env(_k("DB_PASSWORD"), "DB_PASSWORD", default="tasks") or ""

        return Settings(
            app_name=app_name,
            log_level=log_level,
            db_url=db_url.strip(),
            db_user=db_user.strip(),
            db_password=db_password,
            data_dir=data_dir,
        )

    def __repr__(self) -> str:
        return (
            f"Settings(app_name={self.app_name!r}, log_level={self.log_level!r}, "
            f"db_url={self.db_url!r}, db_user={self.db_user!r}, db_password='***', "
            f"data_dir={str(self.data_dir)!r})"
        )


_SETTINGS: Settings | None = None


def get_settings() -> Settings:
    """Load settings once (reading .env on first use) and reuse them."""
    global _SETTINGS
    if _SETTINGS is None:
        load_dotenv(override=False)
        _SETTINGS = Settings.from_env()
    return _SETTINGS
