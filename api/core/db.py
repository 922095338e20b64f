"""
Async database access helpers (raw SQL) using asyncpg.

The connection pool is created by the FastAPI lifespan (see `api/main.py`),
stored on `app.state.pool` and handed to routes through the `get_pool`
dependency. Services and repositories receive the pool as an argument.

SQL parameter style:
- asyncpg uses positional placeholders: $1, $2, $3, ...
"""

from __future__ import annotations

import os
from typing import Any
from urllib.parse import parse_qsl, urlencode, urlsplit, urlunsplit

import asyncpg
from fastapi import Request

from .config import env_int
from .errors import ConfigError

DEFAULT_POOL_MIN_SIZE = 1
DEFAULT_POOL_MAX_SIZE = 5


def _split_database_url(url: str) -> tuple[str, str | None]:
    """
    Return (dsn_without_sslmode, sslmode).

    libpq-style `sslmode` is translated to asyncpg's `ssl=` argument instead of
    being passed through in the DSN.
    """
    parts = urlsplit(url)
    if not parts.query:
        return url, None

    sslmode = None
    params = []
    for k, v in parse_qsl(parts.query, keep_blank_values=True):
        if k == "sslmode":
            sslmode = v or None
            continue
        params.append((k, v))
    query = urlencode(params)
    return urlunsplit((parts.scheme, parts.netloc, parts.path, query, parts.fragment)), sslmode


def database_url() -> str:
    url = os.environ.get("DATABASE_URL", "").strip()
    if not url:
        raise ConfigError("DATABASE_URL is not set.")
    return url


async def create_pool() -> asyncpg.Pool:
    dsn, sslmode = _split_database_url(database_url())
    kwargs: dict[str, Any] = {}
    if sslmode and sslmode != "disable":
        # Hosted Postgres providers use certificates we don't verify.
        kwargs["ssl"] = sslmode
    return await asyncpg.create_pool(
        dsn=dsn,
        min_size=env_int("DB_POOL_MIN_SIZE", DEFAULT_POOL_MIN_SIZE),
        max_size=env_int("DB_POOL_MAX_SIZE", DEFAULT_POOL_MAX_SIZE),
        command_timeout=30,
        **kwargs,
    )


async def close_pool(pool: asyncpg.Pool | None) -> None:
    # Pool.close() waits for acquired connections to be released.
    if pool is None:
        return None
    await pool.close()


def get_pool(request: Request) -> asyncpg.Pool:
    """
    FastAPI dependency returning the process-wide pool.
    """
    pool = getattr(request.app.state, "pool", None)
    if pool is None:
        raise ConfigError("DB pool is not initialized. The app lifespan must run first.")
    return pool


def _record_to_dict(record: asyncpg.Record) -> dict[str, Any]:
    return dict(record)


async def fetch_one(pool: asyncpg.Pool, sql: str, *args: Any) -> dict[str, Any] | None:
    """
    Run a query and return a single row as a dict (or None).
    """
    row = await pool.fetchrow(sql, *args)
    return _record_to_dict(row) if row is not None else None


async def fetch_all(pool: asyncpg.Pool, sql: str, *args: Any) -> list[dict[str, Any]]:
    """
    Run a query and return all rows as a list of dicts.
    """
    rows = await pool.fetch(sql, *args)
    return [_record_to_dict(r) for r in rows]


def affected_rows(status: str) -> int:
    """
    Parse the row count from a command tag like "DELETE 12" or "INSERT 0 3".
    """
    try:
        return int((status or "").rsplit(" ", 1)[-1])
    except ValueError:
        return 0


async def advisory_xact_lock(conn: asyncpg.Connection, name: str) -> None:
    """
    Take a transaction-scoped advisory lock keyed by `name`.

    Must be called inside `conn.transaction()`; released on commit/rollback.
    """
    await conn.execute("SELECT pg_advisory_xact_lock(hashtext($1))", name)
