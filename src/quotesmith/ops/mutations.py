"""Row mutation operations.

Each operation takes the current RowSet and returns a new RowSet plus the
remediation records describing what changed. Inputs are never modified.
"""

import logging
from dataclasses import dataclass, field
from typing import Any, Iterable, Optional

from ..parsing.models import ParsedRow, RowField
from ..parsing.normalize import coerce_float, format_number
from .models import Remediation
from .rows import RowNotFoundError, RowSet

logger = logging.getLogger(__name__)

# Row number used for remediations that apply to every row
ALL_ROWS = 0


@dataclass
class MutationResult:
    """New row state and the remediations that produced it."""

    rows: RowSet
    remediations: list[Remediation] = field(default_factory=list)


@dataclass
class QuantityFixResult(MutationResult):
    affected_rows: list[int] = field(default_factory=list)


@dataclass
class UpdateCellResult(MutationResult):
    success: bool = True
    old_value: Any = None
    new_value: Any = None
    error: Optional[str] = None


@dataclass
class DeleteRowsResult(MutationResult):
    deleted_count: int = 0


@dataclass
class ClearColumnResult(MutationResult):
    affected_count: int = 0


def display_value(value: Any) -> str:
    if value is None:
        return "empty"
    if isinstance(value, float):
        return format_number(value)
    return str(value)


def find_absent_quantities(rows: Iterable[ParsedRow]) -> list[int]:
    """Row numbers whose quantity is absent."""
    return [row.row_number for row in rows if row.quantity is None]


def find_missing_quantities(rows: Iterable[ParsedRow]) -> list[int]:
    """Row numbers whose quantity is absent or zero."""
    return [row.row_number for row in rows if row.quantity is None or row.quantity == 0]


def fix_missing_quantities(
    rows: RowSet,
    default_value: float = 1,
    target_rows: Optional[Iterable[int]] = None,
) -> QuantityFixResult:
    """Set a default quantity on rows that have none.

    Without explicit targets, only rows with an absent quantity are fixed.
    Targets that are not in the row set are skipped.
    """
    if target_rows is None:
        targets = find_absent_quantities(rows)
    else:
        # Repeated targets are fixed and recorded once
        targets = list(dict.fromkeys(target_rows))
    reason = f"Auto-fixed: Set missing quantity to {format_number(float(default_value))}"

    replacements = []
    remediations = []
    for row_number in targets:
        row = rows.find(row_number)
        if row is None:
            logger.debug(f"Skipping quantity fix for unknown row {row_number}")
            continue
        replacements.append(row.model_copy(update={"quantity": float(default_value)}))
        remediations.append(
            Remediation(
                row_number=row_number,
                field=RowField.QUANTITY,
                old_value=row.quantity,
                new_value=default_value,
                reason=reason,
            )
        )

    logger.info(f"Fixed {len(replacements)} rows with missing quantities")
    return QuantityFixResult(
        rows=rows.replace_many(replacements),
        remediations=remediations,
        affected_rows=targets,
    )


def _coerce(field_name: RowField, value: Any) -> Any:
    if field_name.is_numeric:
        # Unreadable numbers become NaN rather than an error
        return coerce_float(value)
    if isinstance(value, float):
        return format_number(value)
    return str(value)


def update_cell(
    rows: RowSet, row_number: int, field_name: RowField, new_value: Any
) -> UpdateCellResult:
    """Replace one field of one row."""
    try:
        row = rows.get(row_number)
    except RowNotFoundError as e:
        logger.warning(str(e))
        return UpdateCellResult(rows=rows, success=False, error=str(e))

    old_value = getattr(row, field_name.attribute)
    coerced = _coerce(field_name, new_value)
    updated = row.model_copy(update={field_name.attribute: coerced})

    reason = f"Updated {field_name.value} from {display_value(old_value)} to {display_value(new_value)}"
    logger.info(f"Row {row_number}: {reason}")

    return UpdateCellResult(
        rows=rows.replace(updated),
        remediations=[
            Remediation(
                row_number=row_number,
                field=field_name,
                old_value=old_value,
                new_value=coerced,
                reason=reason,
            )
        ],
        old_value=old_value,
        new_value=coerced,
    )


def delete_rows(rows: RowSet, row_numbers: Iterable[int]) -> DeleteRowsResult:
    """Remove rows by number; unknown numbers are ignored."""
    requested = list(row_numbers)
    remaining = rows.without(requested)
    deleted_count = len(rows) - len(remaining)

    remediations = [
        Remediation(
            row_number=row_number,
            old_value="ROW",
            new_value="DELETED",
            reason="Row deleted by user request",
        )
        for row_number in requested
    ]

    logger.info(f"Deleted {deleted_count} rows: {requested}")
    return DeleteRowsResult(rows=remaining, remediations=remediations, deleted_count=deleted_count)


def _has_value(value: Any) -> bool:
    return value is not None and value != ""


def clear_column(rows: RowSet, field_name: RowField) -> ClearColumnResult:
    """Empty a field on every row that has a value for it."""
    attribute = field_name.attribute
    cleared = [
        row.model_copy(update={attribute: field_name.empty_value})
        for row in rows
        if _has_value(getattr(row, attribute))
    ]

    remediations = []
    if cleared:
        remediations.append(
            Remediation(
                row_number=ALL_ROWS,
                field=field_name,
                old_value="ALL",
                new_value=None,
                reason=f"Cleared column: {field_name.value}",
            )
        )

    logger.info(f"Cleared column {field_name.value}, affected {len(cleared)} rows")
    return ClearColumnResult(
        rows=rows.replace_many(cleared),
        remediations=remediations,
        affected_count=len(cleared),
    )
