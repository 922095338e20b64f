"""Unit tests for workbook parsing and sheet selection."""

from __future__ import annotations

import pytest

from core.errors import EmptyWorkbookError, ParseError
from stock.workbook import read_sheet_rows, select_sheet


def test_select_sheet_prefers_inventory_sheet() -> None:
    """A sheet named like 'inventario' wins regardless of case or position."""
    assert select_sheet(["Resumen", "Hoja INVENTARIO 2024", "Otra"]) == "Hoja INVENTARIO 2024"


def test_select_sheet_falls_back_to_first() -> None:
    """Without an inventory sheet the first one is used."""
    assert select_sheet(["Stock", "Precios"]) == "Stock"


def test_select_sheet_requires_sheets() -> None:
    """A workbook without sheets cannot be ingested."""
    with pytest.raises(EmptyWorkbookError):
        select_sheet([])


def test_read_sheet_rows_returns_header_keyed_rows(sample_workbook: bytes) -> None:
    """Rows come back keyed by header text; numbers stay numeric, blanks are ""."""
    sheet = read_sheet_rows(sample_workbook)

    assert sheet.sheet_name == "Inventario"
    assert len(sheet.rows) == 3
    assert sheet.rows[0]["CODIGO"] == "F-100"
    assert sheet.rows[0]["STOCK"] == 8
    assert sheet.rows[2]["IMPORTE_INVENTARIO"] == ""


def test_read_sheet_rows_picks_inventory_sheet(make_workbook) -> None:
    """Sheets before the inventory sheet are ignored."""
    data = make_workbook(
        [["CODIGO", "MARCA", "STOCK"], ["B-1", "Bosch", 1]],
        title="INVENTARIO",
        extra_sheets={"Resumen": [["Total", 99]]},
    )

    sheet = read_sheet_rows(data)

    assert sheet.sheet_name == "INVENTARIO"
    assert sheet.rows == [{"CODIGO": "B-1", "MARCA": "Bosch", "STOCK": 1}]


def test_read_sheet_rows_skips_leading_rows(make_workbook) -> None:
    """Title/legend rows above the header are dropped when configured."""
    data = make_workbook(
        [["CODIGO", "MARCA", "STOCK"], ["B-1", "Bosch", 1]],
        leading_rows=[["Listado de repuestos"], ["Taller Delta 38"], ["Actualizado: marzo"]],
    )

    sheet = read_sheet_rows(data, skip_rows=3)

    assert sheet.rows == [{"CODIGO": "B-1", "MARCA": "Bosch", "STOCK": 1}]


def test_read_sheet_rows_keeps_native_numbers_and_text_codes(make_workbook) -> None:
    """Tiny numeric amounts survive and text codes keep leading zeros."""
    data = make_workbook([["CODIGO", "MARCA", "PRECIOS"], ["00123", "Bosch", 0.00001]])

    sheet = read_sheet_rows(data)

    assert sheet.rows == [{"CODIGO": "00123", "MARCA": "Bosch", "PRECIOS": 0.00001}]


def test_read_sheet_rows_rejects_non_workbooks() -> None:
    """Bytes that aren't a spreadsheet raise ParseError."""
    with pytest.raises(ParseError):
        read_sheet_rows(b"CODIGO,MARCA\nX1,Bosch\n")

    with pytest.raises(ParseError):
        read_sheet_rows(b"")
