"""
Search SQL (raw).

Case-insensitive substring matching with LIKE. The caller passes an already
escaped, lower-cased `%term%` pattern (see `like_pattern`).
"""

from __future__ import annotations

from typing import Any

import asyncpg

from core import db


def like_pattern(keyword: str) -> str:
    """
    Lower-case `keyword` and escape LIKE wildcards so it matches literally.
    """
    escaped = keyword.lower().replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")
    return f"%{escaped}%"


async def search_parts(pool: asyncpg.Pool, pattern: str) -> list[dict[str, Any]]:
    return await db.fetch_all(
        pool,
        """
        SELECT id, codigo, marca, entradas, salidas, stock, precios, importe_inventario
        FROM repuestos
        WHERE lower(coalesce(codigo, '')) LIKE $1 ESCAPE '\\'
           OR lower(coalesce(marca, '')) LIKE $1 ESCAPE '\\'
        ORDER BY id
        """,
        pattern,
    )


async def find_image_url(pool: asyncpg.Pool, pattern: str) -> str | None:
    row = await db.fetch_one(
        pool,
        """
        SELECT url
        FROM imagenes_ilustrativas
        WHERE lower(categoria) LIKE $1 ESCAPE '\\'
        ORDER BY id
        LIMIT 1
        """,
        pattern,
    )
    return row["url"] if row is not None else None
