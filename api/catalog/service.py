"""
Search service (orchestration).
"""

from __future__ import annotations

from dataclasses import dataclass

import asyncpg

from core.errors import BadRequestError, PersistenceError
from stock.records import PartRecord

from . import repository


@dataclass(frozen=True)
class SearchResult:
    parts: list[PartRecord]
    illustrative_image_url: str | None


async def search(pool: asyncpg.Pool, keyword: str | None) -> SearchResult:
    keyword = (keyword or "").strip()
    if not keyword:
        raise BadRequestError("Falta el parámetro de búsqueda")

    pattern = repository.like_pattern(keyword)
    try:
        rows = await repository.search_parts(pool, pattern)
        url = await repository.find_image_url(pool, pattern)
    except (asyncpg.PostgresError, asyncpg.InterfaceError, OSError) as exc:
        raise PersistenceError("Error al buscar repuestos") from exc

    return SearchResult(
        parts=[PartRecord.from_row(row) for row in rows],
        illustrative_image_url=url,
    )
