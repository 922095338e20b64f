"""
FastAPI router for stock endpoints.
"""

from __future__ import annotations

import asyncpg
from fastapi import APIRouter, Depends, File, Query, UploadFile

from core import config, db
from core.errors import ValidationError
from core.uploads import read_upload_bytes

from . import service
from .service import IngestMode

router = APIRouter()


@router.post("/stock/excel")
async def upload_stock_workbook(
    archivo: UploadFile | None = File(None),
    modo: IngestMode = Query(IngestMode.APPEND),
    filas_omitidas: int | None = Query(None, ge=0),
    pool: asyncpg.Pool = Depends(db.get_pool),
) -> dict:
    """
    Load parts from an Excel workbook.

    `modo=replace` clears the table first (same transaction); `modo=append`
    adds rows. `filas_omitidas` overrides the configured leading-row skip.
    """
    if archivo is None:
        raise ValidationError("No se recibió ningún archivo.")

    # Rejected before reading or parsing anything.
    service.validate_workbook_upload(archivo.filename)
    data = await read_upload_bytes(archivo, max_bytes=config.max_upload_bytes())

    report = await service.ingest_workbook(pool, data, mode=modo, skip_rows=filas_omitidas)
    return {
        "message": f"Se cargaron {report.accepted} repuestos desde Excel.",
        "aceptados": report.accepted,
        "omitidos": report.skipped,
        "reemplazados": report.replaced,
        "modo": report.mode.value,
        "hoja": report.sheet_name,
    }


@router.delete("/stock/eliminar-todo")
async def delete_all_stock(pool: asyncpg.Pool = Depends(db.get_pool)) -> dict:
    deleted = await service.clear_parts(pool)
    return {"message": "Todos los repuestos fueron eliminados.", "eliminados": deleted}
