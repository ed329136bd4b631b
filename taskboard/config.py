"""Settings loaded from environment variables (+ optional .env).

One Settings object for the whole service. Nothing here needs a secret at
import time, so tests can import the app with no environment at all.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path
from typing import List, Optional

from dotenv import load_dotenv

ENV_PREFIX = "TASKBOARD"

load_dotenv(override=False)


def _k(suffix: str) -> str:
    """Build env var name with the project prefix."""
    return f"{ENV_PREFIX}_{suffix}"


def _env(name: str, default: str = "") -> str:
    v = os.getenv(name)
    return default if v is None else v


def _env_int(name: str, default: int) -> int:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    try:
        return int(raw)
    except ValueError:
        return default


def _env_list(name: str, default: List[str]) -> List[str]:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return list(default)
    return [p.strip() for p in raw.replace(",", " ").split() if p.strip()]


def _env_path(name: str) -> Optional[Path]:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return None
    return Path(raw).expanduser()


@dataclass(frozen=True, slots=True)
class Settings:
    # ---- App / logging ----
    app_name: str
    log_level: str
    log_dir: Optional[Path]

    # ---- Storage ----
    database_url: str

    # ---- HTTP ----
    host: str
    port: int
    client_urls: List[str]

    @staticmethod
    def from_env() -> "Settings":
        return Settings(
            app_name=_env(_k("APP_NAME"), "taskboard"),
            log_level=_env(_k("LOG_LEVEL"), "INFO").upper(),
            log_dir=_env_path(_k("LOG_DIR")),
            database_url=_env(_k("DATABASE_URL"), "sqlite:///./taskboard.db"),
            host=_env(_k("HOST"), "127.0.0.1"),
            port=_env_int(_k("PORT"), 5000),
            client_urls=_env_list(_k("CLIENT_URLS"), ["http://localhost:5173"]),
        )


SETTINGS = Settings.from_env()


def get_settings() -> Settings:
    return SETTINGS
