"""Liquidated-damages clause detection in raw document text."""

import logging
import re
from typing import Optional

from ..parsing.normalize import format_number
from .models import RiskFlag, RiskLevel, RiskType
from .thresholds import THRESHOLDS, RiskThresholds

logger = logging.getLogger(__name__)

# Tried in order; the first pattern that matches produces the only finding
LD_PATTERNS = [
    re.compile(r"liquidated\s+damages", re.IGNORECASE),
    re.compile(r"penalty\s+(for|of)?\s*(late|delay)", re.IGNORECASE),
    re.compile(r"delay\s+penalty", re.IGNORECASE),
    re.compile(r"(\d+\.?\d*)\s*%\s*(per|each)\s*(day|week)", re.IGNORECASE),
    re.compile(r"per\s*diem\s*penalty", re.IGNORECASE),
    re.compile(r"late\s+delivery\s+(penalty|charge|fee)", re.IGNORECASE),
]

RATE_PATTERN = re.compile(r"(\d+\.?\d*)\s*%\s*(?:per|each)\s*(?:day|week|month)", re.IGNORECASE)
CAP_PATTERN = re.compile(
    r"(?:cap|maximum|max|up\s+to|not\s+(?:to\s+)?exceed)\s*(?:of\s*)?(\d+\.?\d*)\s*%",
    re.IGNORECASE,
)


def _level_for_rate(rate: float, thresholds: RiskThresholds) -> RiskLevel:
    if rate >= thresholds.ld_critical_percent:
        return RiskLevel.CRITICAL
    if rate >= thresholds.ld_high_percent:
        return RiskLevel.HIGH
    return RiskLevel.MEDIUM


def _first_clause_match(raw_text: str) -> Optional[re.Match]:
    for pattern in LD_PATTERNS:
        match = pattern.search(raw_text)
        if match:
            return match
    return None


def detect_liquidated_damages(
    raw_text: str, thresholds: RiskThresholds = THRESHOLDS
) -> list[RiskFlag]:
    """Emit at most one finding for late-delivery penalty clauses."""
    clause = _first_clause_match(raw_text)
    if clause is None:
        return []

    extracted_value = clause.group(0)
    level = RiskLevel.HIGH

    rate_match = RATE_PATTERN.search(raw_text)
    if rate_match:
        extracted_value = rate_match.group(0)
        level = _level_for_rate(float(rate_match.group(1)), thresholds)

    cap_info = ""
    cap_match = CAP_PATTERN.search(raw_text)
    if cap_match:
        cap = float(cap_match.group(1))
        cap_info = f" (Capped at {format_number(cap)}%)"
        if cap > thresholds.ld_cap_critical_percent:
            level = RiskLevel.CRITICAL

    if level == RiskLevel.CRITICAL:
        recommendation = (
            "CRITICAL: High-risk LD clause detected. Escalate to Deal Desk before quoting. "
            "Consider risk premium pricing."
        )
    else:
        recommendation = (
            "Review LD terms with legal/commercial team. "
            "Ensure delivery timeline is achievable with buffer."
        )

    logger.info(f"Liquidated damages clause detected ({level.value}): {extracted_value!r}")

    return [
        RiskFlag(
            id="ld-clause",
            type=RiskType.LIQUIDATED_DAMAGES,
            level=level,
            title=f"Liquidated Damages Clause Detected{cap_info}",
            description=(
                "This document contains penalty clauses for late delivery. "
                "These can significantly impact profitability."
            ),
            extracted_value=extracted_value,
            recommendation=recommendation,
        )
    ]
