"""Application configuration objects and helpers."""

from __future__ import annotations

import os
from datetime import timedelta
from pathlib import Path
from typing import Any

from dotenv import load_dotenv

load_dotenv()


def _env_bool(name: str, default: bool = False) -> bool:
    """Interpret environment variable values as booleans."""

    value = os.getenv(name)
    if value is None:
        return default
    return value.strip().lower() in {"1", "true", "yes", "on"}


def _env_int(name: str, default: int) -> int:
    value = os.getenv(name)
    if value is None or not value.strip():
        return default
    try:
        return int(value)
    except ValueError as exc:
        raise ValueError(f"{name} must be an integer, got {value!r}") from exc


class BaseConfig:
    """Base configuration shared across environments."""

    APP_NAME = "FinControl"
    DB_FILENAME = "fincontrol.db"
    JWT_ALGORITHM = "HS256"
    DEBUG = False
    TESTING = False

    def __init__(self) -> None:
        self.SECRET_KEY = os.getenv("FINCONTROL_SECRET_KEY", "replace-me")
        self.DATA_DIR = self._resolve_data_dir()
        self.DEV_MODE = _env_bool("FINCONTROL_DEV_MODE", default=True)
        self.DATABASE_URL = os.getenv("FINCONTROL_DATABASE_URL", self._build_sqlite_url())
        self.TOKEN_TTL = timedelta(minutes=_env_int("FINCONTROL_TOKEN_TTL_MINUTES", 60))
        self.HOST = os.getenv("FINCONTROL_HOST", "127.0.0.1")
        self.PORT = _env_int("FINCONTROL_PORT", 3000)
        if not self.DEV_MODE and self.SECRET_KEY == "replace-me":
            raise ValueError("FINCONTROL_SECRET_KEY must be set in non-dev mode.")

    def _resolve_data_dir(self) -> Path:
        """Return the directory where the SQLite file and logs live."""

        data_root = os.getenv("FINCONTROL_DATA_DIR", "instance")
        path = Path(data_root).expanduser().resolve()
        path.mkdir(parents=True, exist_ok=True)
        return path

    def _build_sqlite_url(self) -> str:
        return f"sqlite:///{self.DATA_DIR / self.DB_FILENAME}"

    def sqlalchemy_engine_options(self) -> dict[str, Any]:
        """Expose engine kwargs for SQLModel to consume."""

        if self.DATABASE_URL.startswith("sqlite"):
            return {"connect_args": {"check_same_thread": False}}
        return {"pool_pre_ping": True}


class DevConfig(BaseConfig):
    """Development configuration using local SQLite."""

    DEBUG = True


class TestConfig(BaseConfig):
    """Configuration used by the test-suite; callers point DATA_DIR at a tmp path."""

    TESTING = True

    def __init__(self) -> None:
        super().__init__()
        self.DEV_MODE = True


class ClientConfig:
    """Settings for the command-line client."""

    def __init__(self) -> None:
        self.API_URL = os.getenv("FINCONTROL_API_URL", "http://127.0.0.1:3000").rstrip("/")
        self.CLIENT_DIR = Path(os.getenv("FINCONTROL_CLIENT_DIR", "~/.fincontrol")).expanduser()
        self.TIMEOUT = _env_int("FINCONTROL_API_TIMEOUT", 10)
