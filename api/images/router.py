"""
FastAPI router for illustrative image uploads.
"""

from __future__ import annotations

import asyncpg
from fastapi import APIRouter, Depends, File, Form, UploadFile

from core import config, db
from core.uploads import read_upload_bytes

from . import service

router = APIRouter()


@router.post("/imagenes")
async def upload_images(
    imagenes: list[UploadFile] = File(default=[]),
    categorias: list[str] | None = Form(None),
    pool: asyncpg.Pool = Depends(db.get_pool),
) -> dict:
    """
    Upload up to 10 images. `categorias[i]` labels `imagenes[i]`; missing
    labels default to "elemento N".
    """
    service.validate_batch([f.filename or "" for f in imagenes])

    max_bytes = config.max_upload_bytes()
    batch = [
        service.UploadedImage(filename=f.filename or "", data=await read_upload_bytes(f, max_bytes=max_bytes))
        for f in imagenes
    ]
    saved = await service.upload_images(pool, batch, categorias)
    return {
        "message": "Imágenes ilustrativas guardadas correctamente",
        "imagenes": [{"categoria": s.category, "url": s.url} for s in saved],
    }
