"""Commercial risk detectors for quote documents."""

from .models import RiskFlag, RiskLevel, RiskType, RiskSummary
from .thresholds import RiskThresholds, THRESHOLDS
from .incoterms import IncotermInfo, INCOTERMS, detect_incoterms
from .liquidated_damages import detect_liquidated_damages
from .line_items import detect_duplicates, detect_uom_conflicts, detect_missing_data
from .aggregator import analyze_all_risks, rank_risks, summarize_risks

__all__ = [
    "RiskFlag",
    "RiskLevel",
    "RiskType",
    "RiskSummary",
    "RiskThresholds",
    "THRESHOLDS",
    "IncotermInfo",
    "INCOTERMS",
    "detect_incoterms",
    "detect_liquidated_damages",
    "detect_duplicates",
    "detect_uom_conflicts",
    "detect_missing_data",
    "analyze_all_risks",
    "rank_risks",
    "summarize_risks",
]
