"""
Tolerant parsing of spreadsheet numbers.

Workshop sheets mix "$ 1.234,56" (es-AR) with "$1,234.56" (en-US) and
accounting placeholders like "$ -". Amounts that can't be read are stored as
unknown (None), never as zero.
"""

from __future__ import annotations

import math
import re
import unicodedata
from decimal import Decimal, InvalidOperation
from typing import Any

_AMOUNT_RE = re.compile(r"^\+?(\d+(\.\d+)?|\.\d+)$")
_LEADING_INT_RE = re.compile(r"^[+-]?\d+")

# `repuestos` count columns are Postgres `integer`.
INT32_MIN = -(2**31)
INT32_MAX = 2**31 - 1


def _strip_noise(text: str) -> str:
    # Currency symbols, whitespace and hyphens (thousands separators in some exports).
    return "".join(
        ch for ch in text
        if not ch.isspace() and ch != "-" and unicodedata.category(ch) != "Sc"
    )


def _canonical_decimal_text(text: str) -> str:
    """
    Resolve separators into plain "1234.56" form.

    - both "," and "." present: the rightmost one is the decimal separator
    - single "," only: decimal comma
    - repeated "," or repeated "." only: thousands separators
    """
    commas = text.count(",")
    dots = text.count(".")
    if commas and dots:
        if text.rfind(",") > text.rfind("."):
            return text.replace(".", "").replace(",", ".")
        return text.replace(",", "")
    if commas == 1:
        return text.replace(",", ".")
    if commas > 1:
        return text.replace(",", "")
    if dots > 1:
        return text.replace(".", "")
    return text


def normalize_amount(raw: Any) -> Decimal | None:
    """
    Convert a currency/number cell to Decimal, or None when unknown.

    Never raises.
    """
    if raw is None or isinstance(raw, bool):
        return None

    if isinstance(raw, Decimal):
        return raw if raw.is_finite() else None
    if isinstance(raw, int):
        return Decimal(raw)
    if isinstance(raw, float):
        return Decimal(repr(raw)) if math.isfinite(raw) else None

    try:
        text = _canonical_decimal_text(_strip_noise(str(raw)))
    except Exception:
        return None

    if not text or not _AMOUNT_RE.match(text):
        return None

    try:
        value = Decimal(text)
    except InvalidOperation:
        return None
    return value if value.is_finite() else None


def parse_count(raw: Any) -> int:
    """
    Integer ledger fields: leading integer of the cell text, 0 on failure.

    Values outside the int32 column range count as failures too.
    """
    if raw is None or isinstance(raw, bool):
        return 0
    if isinstance(raw, int):
        value = raw
    elif isinstance(raw, float):
        if not math.isfinite(raw):
            return 0
        value = int(raw)
    else:
        m = _LEADING_INT_RE.match(str(raw).strip())
        if not m:
            return 0
        value = int(m.group(0))
    return value if INT32_MIN <= value <= INT32_MAX else 0
