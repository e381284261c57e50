"""Incoterms detection in raw document text."""

import logging
import re
from dataclasses import dataclass
from typing import Mapping

from .models import RiskFlag, RiskLevel, RiskType

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class IncotermInfo:
    """Reference entry for one Incoterm."""

    term: str
    risk_level: RiskLevel
    description: str


INCOTERMS: dict[str, IncotermInfo] = {
    info.term: info
    for info in (
        IncotermInfo("EXW", RiskLevel.LOW, "Ex Works - Minimal seller responsibility"),
        IncotermInfo("FCA", RiskLevel.LOW, "Free Carrier - Seller delivers to carrier"),
        IncotermInfo("FAS", RiskLevel.MEDIUM, "Free Alongside Ship - Seller delivers alongside vessel"),
        IncotermInfo("FOB", RiskLevel.MEDIUM, "Free on Board - Seller loads onto vessel"),
        IncotermInfo("CFR", RiskLevel.MEDIUM, "Cost and Freight - Seller pays freight to destination"),
        IncotermInfo("CIF", RiskLevel.MEDIUM, "Cost, Insurance, Freight - Seller pays freight + insurance"),
        IncotermInfo("CPT", RiskLevel.MEDIUM, "Carriage Paid To - Seller pays carriage to destination"),
        IncotermInfo("CIP", RiskLevel.HIGH, "Carriage and Insurance Paid - Seller pays carriage + insurance"),
        IncotermInfo("DAP", RiskLevel.HIGH, "Delivered at Place - Seller delivers to named place"),
        IncotermInfo("DPU", RiskLevel.HIGH, "Delivered at Place Unloaded - Seller unloads at destination"),
        IncotermInfo("DDP", RiskLevel.CRITICAL, "Delivered Duty Paid - Seller pays ALL costs including duties"),
    )
}

DDP_PHRASE_PATTERN = re.compile(r"delivered\s+duty\s+paid", re.IGNORECASE)

_ESCALATION_LEVELS = (RiskLevel.CRITICAL, RiskLevel.HIGH)


def _term_pattern(term: str) -> re.Pattern:
    # Term plus an optional named place, e.g. "FOB - Shanghai, China"
    return re.compile(rf"\b{re.escape(term)}\b\s*[\-–:]?\s*([A-Za-z\s,]+)?", re.IGNORECASE)


def _recommendation(info: IncotermInfo) -> str:
    if info.risk_level in _ESCALATION_LEVELS:
        return (
            f"Review required. {info.term} places significant responsibility on the seller. "
            "Ensure pricing includes all associated costs."
        )
    return (
        f"Standard {info.term} terms detected. "
        "Verify alignment with your standard commercial terms."
    )


def detect_incoterms(
    raw_text: str, table: Mapping[str, IncotermInfo] = INCOTERMS
) -> list[RiskFlag]:
    """Emit one finding per Incoterm mentioned in the text."""
    risks: list[RiskFlag] = []
    upper_text = raw_text.upper()

    for term, info in table.items():
        match = _term_pattern(term).search(upper_text)
        if not match:
            continue

        risks.append(
            RiskFlag(
                id=f"incoterm-{term}",
                type=RiskType.INCOTERMS,
                level=info.risk_level,
                title=f"Incoterm Detected: {term}",
                description=info.description,
                extracted_value=match.group(0).strip(),
                recommendation=_recommendation(info),
            )
        )

    # Spelled-out DDP, unless the code itself was already reported
    if DDP_PHRASE_PATTERN.search(raw_text) and not any(
        "DDP" in (risk.extracted_value or "") for risk in risks
    ):
        risks.append(
            RiskFlag(
                id="incoterm-ddp-phrase",
                type=RiskType.INCOTERMS,
                level=RiskLevel.CRITICAL,
                title="DDP-equivalent Terms Detected",
                description=(
                    'The phrase "Delivered Duty Paid" suggests the seller is responsible '
                    "for all costs including import duties."
                ),
                extracted_value="Delivered Duty Paid",
                recommendation=(
                    "CRITICAL: This implies DDP terms. Verify your quote includes import "
                    "duties, taxes, and all delivery costs."
                ),
            )
        )

    if risks:
        logger.info(f"Detected {len(risks)} Incoterm finding(s)")
    return risks
