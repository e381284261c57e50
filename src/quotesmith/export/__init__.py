"""Exports of analysis results: CSV, JSON and the text risk report."""

from .formats import (
    CSV_HEADERS,
    rows_to_csv,
    analysis_to_dict,
    analysis_to_json,
    export_file_name,
)
from .report import generate_risk_report

__all__ = [
    "CSV_HEADERS",
    "rows_to_csv",
    "analysis_to_dict",
    "analysis_to_json",
    "export_file_name",
    "generate_risk_report",
]
