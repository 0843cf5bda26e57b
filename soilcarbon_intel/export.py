"""
CSV export of processed records.

Output contract:
- header line is always the full fixed column list, in order
- missing or absent values are empty cells
- a value is quoted only when it contains ',' or '"'; quotes are doubled
- lines are joined with LF, no trailing newline
"""

from __future__ import annotations

import logging
import math
from decimal import Decimal
from pathlib import Path
from typing import Any, Mapping, Optional, Sequence, Union

from pydantic import BaseModel

from .rules import CSV_HEADERS

logger = logging.getLogger(__name__)

Record = Union[Mapping[str, Any], BaseModel]


def _as_mapping(record: Record) -> Mapping[str, Any]:
    if isinstance(record, BaseModel):
        return record.model_dump()
    return record


def _format_float(value: float) -> str:
    """
    Plain decimal text for magnitudes in [1e-6, 1e21), exponent form outside it.

    20.0 -> "20", 0.00001 -> "0.00001", 1e-07 -> "1e-7", 1e300 -> "1e+300".
    """
    if math.isnan(value):
        return "NaN"
    if math.isinf(value):
        return "Infinity" if value > 0 else "-Infinity"
    if value.is_integer() and abs(value) < 1e21:
        return str(int(value))

    text = repr(value)
    if "e" not in text:
        return text
    mantissa, exponent = text.split("e")
    if -7 < int(exponent) < 21:
        return format(Decimal(text), "f")
    return f"{mantissa}e{int(exponent):+d}"


def format_value(value: Any) -> str:
    if value is None:
        return ""
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, float):
        return _format_float(value)
    return str(value)


def escape_field(text: str) -> str:
    if "," in text or '"' in text:
        return '"' + text.replace('"', '""') + '"'
    return text


def to_csv(records: Sequence[Record], headers: Sequence[str] = CSV_HEADERS) -> Optional[str]:
    """Render `records` as CSV text, or None when there is nothing to export."""
    if not records:
        return None

    lines = [",".join(headers)]
    for record in records:
        row = _as_mapping(record)
        lines.append(",".join(escape_field(format_value(row.get(h))) for h in headers))
    return "\n".join(lines)


def export_csv(records: Sequence[Record], filename: Union[str, Path]) -> Optional[Path]:
    """Write `records` to `filename`. Empty input writes nothing and returns None."""
    content = to_csv(records)
    if content is None:
        logger.info("No records to export; skipping %s", filename)
        return None

    path = Path(filename)
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(content, encoding="utf-8", newline="")
    logger.info("Exported %d records to %s", len(records), path)
    return path
