from __future__ import annotations

import os
from dataclasses import dataclass, field
from typing import List


@dataclass(frozen=True)
class Settings:
    """
    Application settings loaded from environment variables.

    Env vars:
    - BASE_JSON_PATH: path to the JSON file holding the todos. Default './data/todos.json'
    - PERSISTENCE_BACKEND: 'file' (default) or 'memory'
    - TODOS_CREATE_IF_MISSING: 'true' (default) to write an empty store at startup when absent
    - CORS_ALLOW_ORIGINS: comma-separated list of allowed origins; '*' by default
    - APP_ENV: 'development' (default) or 'production' (JSON logs)
    - LOG_LEVEL: minimum log level, 'INFO' by default
    - HOST / PORT: bind address used by `python -m todo_api`
    """

    json_path: str
    persistence_backend: str = "file"
    create_if_missing: bool = True
    cors_allow_origins: List[str] = field(default_factory=lambda: ["*"])
    env: str = "development"
    log_level: str = "INFO"
    host: str = "127.0.0.1"
    port: int = 8000


def _get_env(name: str, default: str) -> str:
    value = os.getenv(name, default)
    if value is None or value == "":
        return default
    return value


def _parse_bool(value: str, default: bool = False) -> bool:
    v = value.strip().lower()
    if v in {"1", "true", "yes", "on"}:
        return True
    if v in {"0", "false", "no", "off"}:
        return False
    return default


def _parse_int(value: str, default: int) -> int:
    try:
        return int(value.strip())
    except ValueError:
        return default


def _parse_origins(origins_value: str) -> List[str]:
    """
    Parse CORS origins from env. Supports:
    - '*' to allow all origins
    - Comma-separated list of origins
    """
    value = origins_value.strip()
    if value == "*":
        return ["*"]
    return [o.strip() for o in value.split(",") if o.strip()]


# PUBLIC_INTERFACE
def get_settings() -> Settings:
    """Return application settings loaded from environment variables."""
    backend = _get_env("PERSISTENCE_BACKEND", "file").strip().lower()
    if backend not in {"file", "memory"}:
        # Fallback to the JSON file if unsupported
        backend = "file"

    env = _get_env("APP_ENV", "development").strip().lower()

    return Settings(
        json_path=_get_env("BASE_JSON_PATH", "./data/todos.json").strip(),
        persistence_backend=backend,
        create_if_missing=_parse_bool(_get_env("TODOS_CREATE_IF_MISSING", "true"), True),
        cors_allow_origins=_parse_origins(_get_env("CORS_ALLOW_ORIGINS", "*")),
        env=env,
        log_level=_get_env("LOG_LEVEL", "INFO").strip().upper(),
        host=_get_env("HOST", "127.0.0.1").strip(),
        port=_parse_int(_get_env("PORT", "8000"), 8000),
    )
