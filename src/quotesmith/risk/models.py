"""Data models for risk findings."""

from enum import Enum
from typing import Iterable, Optional

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class RiskLevel(str, Enum):
    """Severity of a finding, ordered low < medium < high < critical."""

    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"
    CRITICAL = "critical"

    @property
    def rank(self) -> int:
        """Sort rank: critical first."""
        return _LEVEL_RANK[self]


_LEVEL_RANK = {
    RiskLevel.CRITICAL: 0,
    RiskLevel.HIGH: 1,
    RiskLevel.MEDIUM: 2,
    RiskLevel.LOW: 3,
}


class RiskType(str, Enum):
    """Category of a finding."""

    INCOTERMS = "incoterms"
    LIQUIDATED_DAMAGES = "liquidated_damages"
    UOM_CONFLICT = "uom_conflict"
    DUPLICATE = "duplicate"
    MISSING_DATA = "missing_data"
    GENERAL = "general"


class RiskFlag(BaseModel):
    """A single risk finding emitted by one detector."""

    model_config = ConfigDict(frozen=True, alias_generator=to_camel, populate_by_name=True)

    id: str
    type: RiskType
    level: RiskLevel
    title: str
    description: str
    affected_rows: Optional[list[int]] = None
    extracted_value: Optional[str] = None
    recommendation: str


class RiskSummary(BaseModel):
    """Per-level tally of a set of findings."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    total_risks: int = 0
    critical_risks: int = 0
    high_risks: int = 0
    medium_risks: int = 0
    low_risks: int = 0

    @classmethod
    def from_flags(cls, flags: Iterable[RiskFlag]) -> "RiskSummary":
        counts = {level: 0 for level in RiskLevel}
        total = 0
        for flag in flags:
            counts[flag.level] += 1
            total += 1
        return cls(
            total_risks=total,
            critical_risks=counts[RiskLevel.CRITICAL],
            high_risks=counts[RiskLevel.HIGH],
            medium_risks=counts[RiskLevel.MEDIUM],
            low_risks=counts[RiskLevel.LOW],
        )
