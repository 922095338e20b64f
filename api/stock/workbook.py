"""
Workbook reading with pandas.

`.xlsx`/`.xlsm` are read through openpyxl, legacy `.xls` through xlrd; pandas
picks the engine from the file signature.
"""

from __future__ import annotations

import io
import logging
from dataclasses import dataclass
from typing import Any

import pandas as pd

from core.errors import EmptyWorkbookError, ParseError

PREFERRED_SHEET_KEYWORD = "inventario"

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SheetRows:
    sheet_name: str
    rows: list[dict[str, Any]]


def open_workbook(data: bytes) -> pd.ExcelFile:
    if not data:
        raise ParseError("El archivo Excel está vacío.")
    try:
        return pd.ExcelFile(io.BytesIO(data))
    except Exception as exc:
        raise ParseError("No se pudo leer el archivo Excel.") from exc


def select_sheet(sheet_names: list[str], keyword: str = PREFERRED_SHEET_KEYWORD) -> str:
    """
    Prefer the first sheet whose name contains `keyword` (case-insensitive);
    otherwise the first sheet.
    """
    if not sheet_names:
        raise EmptyWorkbookError("El archivo Excel no contiene hojas.")

    needle = keyword.lower()
    for name in sheet_names:
        if needle in str(name).lower():
            return name
    return sheet_names[0]


def read_sheet_rows(data: bytes, *, skip_rows: int = 0) -> SheetRows:
    """
    Parse the workbook and return the selected sheet as header-keyed rows.

    `skip_rows` leading rows (titles/legends) are dropped before the header
    row. Empty cells come back as "". Cells keep the type Excel stored them
    with (numbers stay numbers, text stays text, leading zeros included).
    """
    if skip_rows < 0:
        raise ValueError("skip_rows must be >= 0")

    with open_workbook(data) as book:
        sheet = select_sheet(list(book.sheet_names))
        try:
            frame = book.parse(
                sheet,
                skiprows=skip_rows,
                dtype=object,
                na_filter=False,
            )
        except pd.errors.EmptyDataError:
            frame = pd.DataFrame()
        except Exception as exc:
            raise ParseError("No se pudo leer la hoja del archivo Excel.") from exc

    rows = frame.to_dict(orient="records")
    logger.info("workbook_read sheet=%s skip_rows=%s rows=%s", sheet, skip_rows, len(rows))
    return SheetRows(sheet_name=str(sheet), rows=rows)
