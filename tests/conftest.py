"""Pytest configuration for repository test runs."""

from __future__ import annotations

import io
import sys
from pathlib import Path

import openpyxl
import pytest


def pytest_sessionstart() -> None:
    """Add api directory to sys.path for test imports."""
    project_root = Path(__file__).resolve().parent.parent
    api_path = project_root / "api"
    if str(api_path) not in sys.path:
        sys.path.insert(0, str(api_path))


class FakePartsStore:
    """In-memory stand-in for `stock.repository` (one list per table)."""

    def __init__(self) -> None:
        self.rows: list = []
        self.fail: Exception | None = None

    async def insert_parts(self, pool, records):
        if self.fail is not None:
            raise self.fail
        self.rows.extend(records)
        return len(records)

    async def replace_parts(self, pool, records):
        if self.fail is not None:
            raise self.fail
        deleted = len(self.rows)
        self.rows = list(records)
        return deleted, len(records)

    async def delete_all_parts(self, pool):
        if self.fail is not None:
            raise self.fail
        deleted = len(self.rows)
        self.rows = []
        return deleted


@pytest.fixture()
def parts_store(monkeypatch: pytest.MonkeyPatch) -> FakePartsStore:
    """Route all parts SQL to an in-memory store."""
    from stock import repository

    store = FakePartsStore()
    monkeypatch.setattr(repository, "insert_parts", store.insert_parts)
    monkeypatch.setattr(repository, "replace_parts", store.replace_parts)
    monkeypatch.setattr(repository, "delete_all_parts", store.delete_all_parts)
    return store


def build_workbook(
    rows: list[list],
    *,
    title: str = "Inventario",
    leading_rows: list[list] | None = None,
    extra_sheets: dict[str, list[list]] | None = None,
) -> bytes:
    """Build an .xlsx in memory; `extra_sheets` are placed before `title`."""
    workbook = openpyxl.Workbook()
    first = workbook.active
    sheets = list((extra_sheets or {}).items()) + [(title, (leading_rows or []) + rows)]
    for index, (name, sheet_rows) in enumerate(sheets):
        sheet = first if index == 0 else workbook.create_sheet()
        sheet.title = name
        for row in sheet_rows:
            sheet.append(row)
    buf = io.BytesIO()
    workbook.save(buf)
    return buf.getvalue()


HEADER = ["CODIGO", "MARCA", "ENTRADAS", "SALIDAS", "STOCK", "PRECIOS", "IMPORTE_INVENTARIO"]

SAMPLE_ROWS = [
    HEADER,
    ["F-100", "Bosch", 10, 2, 8, "$ 1.234,50", "$ 9.876,00"],
    ["", "", 0, 0, 0, None, None],
    ["AC-7", "Mann", 0, 0, 3, "1,234.50", None],
]


@pytest.fixture()
def sample_workbook() -> bytes:
    """Header + three data rows, the middle one blank."""
    return build_workbook(SAMPLE_ROWS)


@pytest.fixture()
def api_client():
    """TestClient with a dummy pool; the lifespan (real DB) is not started."""
    from fastapi.testclient import TestClient

    import main
    from core import db

    main.app.dependency_overrides[db.get_pool] = lambda: object()
    try:
        yield TestClient(main.app)
    finally:
        main.app.dependency_overrides.clear()


@pytest.fixture()
def make_workbook():
    """Factory fixture around `build_workbook`."""
    return build_workbook
