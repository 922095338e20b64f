"""
Spreadsheet row -> PartRecord mapping.

Workbook layouts drifted over time, so header aliases are declared per schema
version instead of being hardcoded in the pipeline. Columns that no alias
claims are ignored.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Any, Mapping

from core.errors import ConfigError

from .normalize import normalize_amount, parse_count
from .records import PartRecord


@dataclass(frozen=True)
class HeaderMapping:
    """
    `aliases` maps canonical PartRecord field -> accepted header texts, in
    priority order (first non-empty cell wins).
    """

    version: str
    aliases: dict[str, tuple[str, ...]]
    description: str = ""


# Generic catalogue layout. Only code/brand survive into the ledger shape.
CATALOG_V1 = HeaderMapping(
    version="v1",
    aliases={
        "code": ("CODIGO", "CÓDIGO"),
        "brand": ("MARCA",),
    },
    description="categoria/marca/modelo/codigo/descripcion catalogue sheets",
)

# Stock-ledger layout (canonical).
LEDGER_V2 = HeaderMapping(
    version="v2",
    aliases={
        "code": ("CODIGO", "CÓDIGO"),
        "brand": ("MARCA",),
        "entries": ("ENTRADAS",),
        "exits": ("SALIDAS",),
        "stock": ("STOCK",),
        "unit_price": ("PRECIOS", "PRECIO"),
        "inventory_value": ("IMPORTE_INVENTARIO", "IMPORTE INVENTARIO"),
    },
    description="codigo/marca/entradas/salidas/stock/precios/importe_inventario ledger sheets",
)

MAPPINGS: dict[str, HeaderMapping] = {m.version: m for m in (CATALOG_V1, LEDGER_V2)}


def get_mapping(version: str) -> HeaderMapping:
    try:
        return MAPPINGS[version]
    except KeyError:
        known = "; ".join(f"{m.version} ({m.description})" for m in MAPPINGS.values())
        raise ConfigError(f"Unknown ingest schema version '{version}'. Known: {known}") from None


def _cell_text(value: Any) -> str:
    if value is None:
        return ""
    if isinstance(value, float) and math.isnan(value):
        return ""
    return str(value).strip()


def _lookup(row: Mapping[Any, Any], headers: tuple[str, ...], *, case_insensitive: bool) -> Any:
    for header in headers:
        value = row.get(header)
        if _cell_text(value):
            return value
    if not case_insensitive:
        return None

    wanted = {h.strip().casefold() for h in headers}
    for key, value in row.items():
        if str(key).strip().casefold() in wanted and _cell_text(value):
            return value
    return None


def map_row(
    raw_row: Mapping[Any, Any],
    mapping: HeaderMapping = LEDGER_V2,
    *,
    case_insensitive: bool = False,
) -> PartRecord | None:
    """
    Map one header-keyed row to a PartRecord.

    Returns None for blank rows (no code, no brand, zero stock); those are
    skipped by the pipeline, not treated as errors.
    """
    def get(field: str) -> Any:
        headers = mapping.aliases.get(field)
        if not headers:
            return None
        return _lookup(raw_row, headers, case_insensitive=case_insensitive)

    record = PartRecord(
        code=_cell_text(get("code")),
        brand=_cell_text(get("brand")),
        entries=max(0, parse_count(get("entries"))),
        exits=max(0, parse_count(get("exits"))),
        stock=parse_count(get("stock")),
        unit_price=normalize_amount(get("unit_price")),
        inventory_value=normalize_amount(get("inventory_value")),
    )
    if record.is_blank():
        return None
    return record
