"""Fixed thresholds used by the risk detectors."""

from dataclasses import dataclass


@dataclass(frozen=True)
class RiskThresholds:
    """Severity thresholds and unit vocabularies for the detectors."""

    # Unit-of-measure checks
    bulk_quantity_threshold: float = 10_000
    bulk_uom_tokens: tuple[str, ...] = ("reel", "roll", "drum", "pallet")
    discrete_uom_tokens: tuple[str, ...] = ("each", "ea", "pc", "pcs")

    # Liquidated damages, percent per period
    ld_critical_percent: float = 1.0
    ld_high_percent: float = 0.5
    ld_cap_critical_percent: float = 10.0  # Caps above this force critical

    # Missing data
    missing_part_number_high_count: int = 5  # More rows than this is high severity
    missing_rows_displayed: int = 10


THRESHOLDS = RiskThresholds()
