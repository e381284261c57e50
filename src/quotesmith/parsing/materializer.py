"""Row materialization: raw spreadsheet rows to normalized line items."""

import json
import logging
from dataclasses import dataclass
from typing import Any, Optional, Sequence

from .models import ColumnMapping, ParsedRow, RawRow
from .normalize import format_number, parse_price, parse_quantity

logger = logging.getLogger(__name__)

# Data rows start at row 2; row 1 is always the header
FIRST_DATA_ROW = 2


@dataclass
class MaterializeResult:
    """Outcome of materializing a document's rows."""

    rows: list[ParsedRow]
    total_rows: int  # Rows in the source before truncation
    truncated: bool


def _cell(row: RawRow, column: Optional[str]) -> Any:
    """Look up a mapped column; None when unmapped or absent."""
    if column is None:
        return None
    return row.get(column)


def _text(value: Any) -> str:
    if value is None:
        return ""
    if isinstance(value, float):
        return format_number(value)
    return str(value)


def _snapshot(row: RawRow) -> dict[str, Any]:
    """Deep, JSON-safe copy of a raw row."""
    return json.loads(json.dumps(row, default=str))


def materialize_row(row: RawRow, mapping: ColumnMapping, row_number: int) -> ParsedRow:
    """Build one ParsedRow from a raw row under a column mapping."""
    return ParsedRow(
        row_number=row_number,
        part_number=_text(_cell(row, mapping.part_number)),
        quantity=parse_quantity(_cell(row, mapping.quantity)),
        description=_text(_cell(row, mapping.description)),
        unit_price=parse_price(_cell(row, mapping.unit_price)),
        unit_of_measure=_text(_cell(row, mapping.unit_of_measure)),
        notes=_text(_cell(row, mapping.notes)),
        raw_data=_snapshot(row),
    )


def materialize_rows(
    raw_rows: Sequence[RawRow],
    mapping: ColumnMapping,
    max_rows: Optional[int] = None,
) -> MaterializeResult:
    """
    Apply a column mapping over raw rows.

    Args:
        raw_rows: Source rows in document order
        mapping: Semantic field to source column mapping
        max_rows: Row ceiling (None for unlimited)

    Returns:
        MaterializeResult with rows numbered 2, 3, ... in source order
    """
    total = len(raw_rows)
    kept = raw_rows if max_rows is None else raw_rows[:max_rows]
    truncated = len(kept) < total

    rows = [
        materialize_row(row, mapping, index + FIRST_DATA_ROW)
        for index, row in enumerate(kept)
    ]

    if truncated:
        logger.warning(f"Row limit applied: processed {len(rows)} of {total} rows")
    logger.debug(f"Materialized {len(rows)} rows")

    return MaterializeResult(rows=rows, total_rows=total, truncated=truncated)
