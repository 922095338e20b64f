"""
Illustrative image persistence.
"""

from __future__ import annotations

from typing import Any

import asyncpg

from core import db


async def upsert_image(pool: asyncpg.Pool, *, category: str, url: str) -> dict[str, Any]:
    """
    One URL per category: re-uploads overwrite the stored URL.
    """
    row = await db.fetch_one(
        pool,
        """
        INSERT INTO imagenes_ilustrativas (categoria, url)
        VALUES ($1, $2)
        ON CONFLICT (categoria) DO UPDATE SET url = EXCLUDED.url
        RETURNING id, categoria, url
        """,
        category,
        url,
    )
    if row is None:
        raise RuntimeError("Failed to upsert illustrative image.")
    return row
