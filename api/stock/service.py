"""
Stock ingestion "service layer".

This file contains logic that is independent of FastAPI's routing layer:
- validate workbook uploads
- parse the workbook and map rows to PartRecords
- persist accepted rows (append or replace) as one atomic batch
"""

from __future__ import annotations

import enum
import logging
from dataclasses import dataclass

import asyncpg

from core import config
from core.errors import PersistenceError
from core.uploads import validate_extension

from . import repository
from .mapping import get_mapping, map_row
from .records import PartRecord
from .workbook import read_sheet_rows

ALLOWED_EXTENSIONS = {".xlsx", ".xls", ".xlsm"}

# Store failures we translate into PersistenceError.
_STORE_ERRORS = (asyncpg.PostgresError, asyncpg.InterfaceError, OSError)

logger = logging.getLogger(__name__)


class IngestMode(str, enum.Enum):
    APPEND = "append"
    REPLACE = "replace"


@dataclass(frozen=True)
class IngestReport:
    accepted: int
    skipped: int
    mode: IngestMode
    sheet_name: str
    replaced: int = 0


def validate_workbook_upload(filename: str | None) -> str:
    return validate_extension(
        filename,
        ALLOWED_EXTENSIONS,
        message="Solo se permiten archivos Excel (.xlsx, .xls, .xlsm)",
    )


def stage_records(
    rows: list[dict],
    *,
    schema_version: str | None = None,
    case_insensitive: bool | None = None,
) -> tuple[list[PartRecord], int]:
    """
    Run every row through the mapper. Returns (accepted_records, skipped_count).
    """
    mapping = get_mapping(schema_version or config.ingest_schema_version())
    if case_insensitive is None:
        case_insensitive = config.header_case_insensitive()

    staged: list[PartRecord] = []
    skipped = 0
    for row in rows:
        record = map_row(row, mapping, case_insensitive=case_insensitive)
        if record is None:
            skipped += 1
            continue
        staged.append(record)
    return staged, skipped


async def ingest_workbook(
    pool: asyncpg.Pool,
    data: bytes,
    *,
    mode: IngestMode = IngestMode.APPEND,
    skip_rows: int | None = None,
    schema_version: str | None = None,
    case_insensitive: bool | None = None,
) -> IngestReport:
    """
    Parse `data` as a workbook and load its parts into `repuestos`.

    Raises ParseError/EmptyWorkbookError for unreadable workbooks and
    PersistenceError when the batch can't be written (nothing is written).
    """
    if skip_rows is None:
        skip_rows = config.ingest_skip_rows()

    sheet = read_sheet_rows(data, skip_rows=skip_rows)
    staged, skipped = stage_records(
        sheet.rows,
        schema_version=schema_version,
        case_insensitive=case_insensitive,
    )

    replaced = 0
    try:
        if mode is IngestMode.REPLACE:
            replaced, accepted = await repository.replace_parts(pool, staged)
        else:
            accepted = await repository.insert_parts(pool, staged)
    except _STORE_ERRORS as exc:
        logger.error(
            "ingest_failed mode=%s sheet=%s staged=%s",
            mode.value,
            sheet.sheet_name,
            len(staged),
        )
        raise PersistenceError("Error al guardar los repuestos del archivo Excel.") from exc

    logger.info(
        "ingest_complete mode=%s sheet=%s accepted=%s skipped=%s replaced=%s",
        mode.value,
        sheet.sheet_name,
        accepted,
        skipped,
        replaced,
    )
    return IngestReport(
        accepted=accepted,
        skipped=skipped,
        mode=mode,
        sheet_name=sheet.sheet_name,
        replaced=replaced,
    )


async def clear_parts(pool: asyncpg.Pool) -> int:
    try:
        deleted = await repository.delete_all_parts(pool)
    except _STORE_ERRORS as exc:
        raise PersistenceError("Error al eliminar repuestos.") from exc
    logger.info("parts_cleared deleted=%s", deleted)
    return deleted
