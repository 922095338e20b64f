"""
Search API endpoint.
"""

from __future__ import annotations

import asyncpg
from fastapi import APIRouter, Depends, Query

from core import db

from . import service

router = APIRouter()


@router.get("/repuestos")
async def search_parts(
    query: str | None = Query(None),
    pool: asyncpg.Pool = Depends(db.get_pool),
) -> dict:
    result = await service.search(pool, query)
    return {
        "productos": [part.as_dict() for part in result.parts],
        "imagenIlustrativa": result.illustrative_image_url,
    }
