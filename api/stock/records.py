"""
Canonical part record (stock-ledger shape) and its column layout.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from decimal import Decimal
from typing import Any

# Canonical field -> `repuestos` column, in insert order.
COLUMNS: dict[str, str] = {
    "code": "codigo",
    "brand": "marca",
    "entries": "entradas",
    "exits": "salidas",
    "stock": "stock",
    "unit_price": "precios",
    "inventory_value": "importe_inventario",
}


def _decimal_or_none(value: Any) -> Decimal | None:
    if value is None:
        return None
    if isinstance(value, Decimal):
        return value
    return Decimal(str(value))


@dataclass(frozen=True)
class PartRecord:
    code: str = ""
    brand: str = ""
    entries: int = 0
    exits: int = 0
    stock: int = 0
    unit_price: Decimal | None = None
    inventory_value: Decimal | None = None
    # Database id; only set on rows read back from `repuestos`.
    id: int | None = field(default=None, compare=False)

    def is_blank(self) -> bool:
        return not self.code and not self.brand and not self.stock

    def as_row(self) -> tuple[Any, ...]:
        return tuple(getattr(self, name) for name in COLUMNS)

    def as_dict(self) -> dict[str, Any]:
        """
        API shape: column names as keys.
        """
        return {"id": self.id, **{column: getattr(self, name) for name, column in COLUMNS.items()}}

    @classmethod
    def from_row(cls, row: dict[str, Any]) -> "PartRecord":
        return cls(
            code=row.get("codigo") or "",
            brand=row.get("marca") or "",
            entries=int(row.get("entradas") or 0),
            exits=int(row.get("salidas") or 0),
            stock=int(row.get("stock") or 0),
            unit_price=_decimal_or_none(row.get("precios")),
            inventory_value=_decimal_or_none(row.get("importe_inventario")),
            id=row.get("id"),
        )
