"""Combine detector outputs into one ranked list of findings."""

import logging
from typing import Iterable, Sequence

from ..parsing.models import ParsedRow
from .incoterms import detect_incoterms
from .line_items import detect_duplicates, detect_missing_data, detect_uom_conflicts
from .liquidated_damages import detect_liquidated_damages
from .models import RiskFlag, RiskSummary

logger = logging.getLogger(__name__)


def rank_risks(risks: Iterable[RiskFlag]) -> list[RiskFlag]:
    """Stable sort by severity, critical first; ties keep emission order."""
    return sorted(risks, key=lambda risk: risk.level.rank)


def analyze_all_risks(raw_text: str, rows: Sequence[ParsedRow]) -> list[RiskFlag]:
    """Run every detector and rank the combined findings."""
    risks = [
        *detect_incoterms(raw_text),
        *detect_liquidated_damages(raw_text),
        *detect_duplicates(rows),
        *detect_uom_conflicts(rows),
        *detect_missing_data(rows),
    ]
    ranked = rank_risks(risks)
    logger.info(f"Risk analysis complete: {len(ranked)} findings over {len(rows)} rows")
    return ranked


def summarize_risks(risks: Iterable[RiskFlag]) -> RiskSummary:
    return RiskSummary.from_flags(risks)
