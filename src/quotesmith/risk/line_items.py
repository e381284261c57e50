"""Row-based detectors: duplicates, unit-of-measure conflicts, missing data."""

import logging
from typing import Sequence

from ..parsing.models import ParsedRow
from ..parsing.normalize import format_number
from .models import RiskFlag, RiskLevel, RiskType
from .thresholds import THRESHOLDS, RiskThresholds

logger = logging.getLogger(__name__)


def detect_duplicates(rows: Sequence[ParsedRow]) -> list[RiskFlag]:
    """Flag part numbers that appear on more than one row.

    Part numbers compare trimmed and case-insensitively; blank part
    numbers are never grouped.
    """
    groups: dict[str, list[int]] = {}
    for row in rows:
        key = row.part_number.strip().upper()
        if key:
            groups.setdefault(key, []).append(row.row_number)

    risks = []
    for part_number, row_numbers in groups.items():
        if len(row_numbers) < 2:
            continue
        risks.append(
            RiskFlag(
                id=f"duplicate-{part_number}",
                type=RiskType.DUPLICATE,
                level=RiskLevel.MEDIUM,
                title=f"Duplicate Part Number: {part_number}",
                description=(
                    f'Part number "{part_number}" appears {len(row_numbers)} times in the document.'
                ),
                affected_rows=row_numbers,
                extracted_value=part_number,
                recommendation=(
                    "Consider consolidating duplicate line items to avoid over-ordering "
                    "or pricing errors."
                ),
            )
        )
    return risks


def _mentions_any(uom: str, tokens: Sequence[str]) -> bool:
    return any(token in uom for token in tokens)


def detect_uom_conflicts(
    rows: Sequence[ParsedRow], thresholds: RiskThresholds = THRESHOLDS
) -> list[RiskFlag]:
    """Flag quantities that look wrong for their unit of measure."""
    risks = []

    for row in rows:
        if not row.unit_of_measure or row.quantity is None:
            continue

        uom = row.unit_of_measure.lower().strip()
        quantity = row.quantity
        shown = f"{format_number(quantity)} {row.unit_of_measure}"

        if quantity > thresholds.bulk_quantity_threshold and _mentions_any(
            uom, thresholds.bulk_uom_tokens
        ):
            risks.append(
                RiskFlag(
                    id=f"uom-quantity-{row.row_number}",
                    type=RiskType.UOM_CONFLICT,
                    level=RiskLevel.MEDIUM,
                    title="Unusually High Quantity for UoM",
                    description=(
                        f"Row {row.row_number}: Quantity of {shown} seems unusual. "
                        "Verify this is not a unit conversion error."
                    ),
                    affected_rows=[row.row_number],
                    extracted_value=shown,
                    recommendation=(
                        "Confirm with customer whether quantity is per unit or total. "
                        "Check if UoM conversion is needed."
                    ),
                )
            )

        if not float(quantity).is_integer() and _mentions_any(
            uom, thresholds.discrete_uom_tokens
        ):
            risks.append(
                RiskFlag(
                    id=f"uom-fraction-{row.row_number}",
                    type=RiskType.UOM_CONFLICT,
                    level=RiskLevel.LOW,
                    title="Fractional Quantity for Discrete UoM",
                    description=(
                        f"Row {row.row_number}: Quantity {format_number(quantity)} with UoM "
                        f'"{row.unit_of_measure}" - fractional quantities for discrete units '
                        "may indicate data entry error."
                    ),
                    affected_rows=[row.row_number],
                    extracted_value=shown,
                    recommendation="Verify quantity is correct. Round up if selling individual items.",
                )
            )

    return risks


def detect_missing_data(
    rows: Sequence[ParsedRow], thresholds: RiskThresholds = THRESHOLDS
) -> list[RiskFlag]:
    """Flag rows without a part number or without a quantity.

    A quantity of 0 counts as present here.
    """
    missing_part_numbers = [row.row_number for row in rows if not row.part_number.strip()]
    missing_quantities = [row.row_number for row in rows if row.quantity is None]
    shown = thresholds.missing_rows_displayed

    risks = []
    if missing_part_numbers:
        count = len(missing_part_numbers)
        risks.append(
            RiskFlag(
                id="missing-part-numbers",
                type=RiskType.MISSING_DATA,
                level=(
                    RiskLevel.HIGH
                    if count > thresholds.missing_part_number_high_count
                    else RiskLevel.MEDIUM
                ),
                title=f"Missing Part Numbers ({count} rows)",
                description=(
                    f"{count} rows are missing part numbers. "
                    "These items cannot be quoted without identification."
                ),
                affected_rows=missing_part_numbers[:shown],
                recommendation=(
                    "Contact customer to provide missing part numbers before proceeding with quote."
                ),
            )
        )

    if missing_quantities:
        count = len(missing_quantities)
        risks.append(
            RiskFlag(
                id="missing-quantities",
                type=RiskType.MISSING_DATA,
                level=RiskLevel.MEDIUM,
                title=f"Missing Quantities ({count} rows)",
                description=f"{count} rows are missing quantity information.",
                affected_rows=missing_quantities[:shown],
                recommendation="Verify quantities with customer or assume quantity of 1 for each item.",
            )
        )

    if risks:
        logger.debug(
            f"Missing data: {len(missing_part_numbers)} part numbers, "
            f"{len(missing_quantities)} quantities"
        )
    return risks
