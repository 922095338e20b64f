"""
Environment-backed settings.

Values are read lazily (at call time) so tests can monkeypatch the
environment and `.env` files loaded at startup are honored.
"""

from __future__ import annotations

import os

from .errors import ConfigError

DEFAULT_ALLOWED_ORIGINS = (
    "https://delta38-frontend.netlify.app",
    "http://localhost:3000",
)

DEFAULT_MAX_UPLOAD_BYTES = 10 * 1024 * 1024  # 10 MiB
DEFAULT_SCHEMA_VERSION = "v2"

_TRUTHY = {"1", "true", "yes", "on"}


def env_int(name: str, default: int) -> int:
    raw = os.environ.get(name, "").strip()
    if not raw:
        return default
    try:
        return int(raw)
    except ValueError:
        return default


def env_flag(name: str, default: bool = False) -> bool:
    raw = os.environ.get(name, "").strip().lower()
    if not raw:
        return default
    return raw in _TRUTHY


def allowed_origins() -> list[str]:
    raw = os.environ.get("ALLOWED_ORIGINS", "").strip()
    if not raw:
        return list(DEFAULT_ALLOWED_ORIGINS)
    return [origin.strip().rstrip("/") for origin in raw.split(",") if origin.strip()]


def log_level() -> str:
    return os.environ.get("LOG_LEVEL", "INFO").strip().upper() or "INFO"


def ingest_skip_rows() -> int:
    """
    Leading non-data rows (title/legend) to skip before the header row.
    """
    value = env_int("INGEST_SKIP_ROWS", 0)
    if value < 0:
        raise ConfigError("Invalid INGEST_SKIP_ROWS. It must be >= 0.")
    return value


def ingest_schema_version() -> str:
    return os.environ.get("INGEST_SCHEMA_VERSION", DEFAULT_SCHEMA_VERSION).strip() or DEFAULT_SCHEMA_VERSION


def header_case_insensitive() -> bool:
    return env_flag("INGEST_HEADER_CASE_INSENSITIVE", False)


def max_upload_bytes() -> int:
    """
    Read MAX_UPLOAD_BYTES from env, falling back to a sane default.
    """
    raw = os.environ.get("MAX_UPLOAD_BYTES", "").strip()
    if not raw:
        return DEFAULT_MAX_UPLOAD_BYTES

    try:
        value = int(raw)
    except ValueError as exc:
        raise ConfigError("Invalid MAX_UPLOAD_BYTES. It must be an integer.") from exc

    if value <= 0:
        raise ConfigError("Invalid MAX_UPLOAD_BYTES. It must be > 0.")

    return value
