"""
Parts persistence.
This module is where `repuestos` SQL lives.

Every write takes the table's advisory lock inside its transaction so a
replace (clear + load) can't interleave with another writer.
"""

from __future__ import annotations

import asyncpg

from core import db

from .records import COLUMNS, PartRecord

TABLE_LOCK = "repuestos"

_INSERT_SQL = (
    f"INSERT INTO repuestos ({', '.join(COLUMNS.values())}) "
    f"VALUES ({', '.join(f'${i}' for i in range(1, len(COLUMNS) + 1))})"
)


async def insert_parts(pool: asyncpg.Pool, records: list[PartRecord]) -> int:
    """
    Append `records` in a single transaction. Returns the inserted count.
    """
    if not records:
        return 0

    async with pool.acquire() as conn:  # type: asyncpg.Connection
        async with conn.transaction():
            await db.advisory_xact_lock(conn, TABLE_LOCK)
            await conn.executemany(_INSERT_SQL, [r.as_row() for r in records])
    return len(records)


async def replace_parts(pool: asyncpg.Pool, records: list[PartRecord]) -> tuple[int, int]:
    """
    Clear the table and load `records` atomically.

    Returns (deleted, inserted).
    """
    async with pool.acquire() as conn:  # type: asyncpg.Connection
        async with conn.transaction():
            await db.advisory_xact_lock(conn, TABLE_LOCK)
            status = await conn.execute("DELETE FROM repuestos")
            if records:
                await conn.executemany(_INSERT_SQL, [r.as_row() for r in records])
    return db.affected_rows(status), len(records)


async def delete_all_parts(pool: asyncpg.Pool) -> int:
    async with pool.acquire() as conn:  # type: asyncpg.Connection
        async with conn.transaction():
            await db.advisory_xact_lock(conn, TABLE_LOCK)
            status = await conn.execute("DELETE FROM repuestos")
    return db.affected_rows(status)
