"""Document analysis pipeline."""

from .models import DocumentInput, QuoteAnalysis, QuoteSummary
from .pipeline import analyze_document, failed_analysis, build_summary, row_limit_warning

__all__ = [
    "DocumentInput",
    "QuoteAnalysis",
    "QuoteSummary",
    "analyze_document",
    "failed_analysis",
    "build_summary",
    "row_limit_warning",
]
