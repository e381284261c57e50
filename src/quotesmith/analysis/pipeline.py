"""Analysis pipeline: decoded document to rows, risks and summary."""

import logging
from typing import Optional, Sequence

from ..config import Settings, settings as default_settings
from ..parsing.materializer import materialize_rows
from ..parsing.models import ParsedRow
from ..risk.aggregator import analyze_all_risks
from ..risk.models import RiskFlag, RiskLevel, RiskSummary, RiskType
from .models import DocumentInput, QuoteAnalysis, QuoteSummary

logger = logging.getLogger(__name__)


def build_summary(rows: Sequence[ParsedRow], risks: Sequence[RiskFlag]) -> QuoteSummary:
    """Count line items and tally findings by level."""
    tally = RiskSummary.from_flags(risks)
    return QuoteSummary(
        **tally.model_dump(),
        total_rows=len(rows),
        valid_rows=sum(1 for row in rows if row.part_number.strip()),
    )


def failed_analysis(
    file_name: str,
    title: str,
    description: str,
    recommendation: str,
    finding_id: str = "error-processing",
) -> QuoteAnalysis:
    """A result with no rows and one critical general finding."""
    risk = RiskFlag(
        id=finding_id,
        type=RiskType.GENERAL,
        level=RiskLevel.CRITICAL,
        title=title,
        description=description,
        recommendation=recommendation,
    )
    return QuoteAnalysis(
        success=False,
        file_name=file_name,
        risks=[risk],
        summary=build_summary([], [risk]),
    )


def row_limit_warning(limit: int, total_rows: int) -> RiskFlag:
    return RiskFlag(
        id="warning-row-limit",
        type=RiskType.GENERAL,
        level=RiskLevel.MEDIUM,
        title=f"Row Limit Applied ({limit} rows)",
        description=(
            f"Only the first {limit} rows were processed. "
            f"Your file contains {total_rows} total rows."
        ),
        recommendation=(
            "Row processing is limited. Split the file or raise the row limit to analyze every row."
        ),
    )


def _analyze(document: DocumentInput, config: Settings) -> QuoteAnalysis:
    if config.should_enforce_limits() and (
        document.file_size is not None and document.file_size > config.max_file_size_bytes
    ):
        return failed_analysis(
            document.file_name,
            title="File Too Large",
            description=f"File too large. Maximum size is {config.max_file_size_mb}MB.",
            recommendation="Upload a smaller file or split the document.",
            finding_id="error-file-size",
        )

    if document.error is not None:
        return failed_analysis(
            document.file_name,
            title="Parse Error",
            description=document.error or "Failed to parse Excel file.",
            recommendation="Ensure the file is a valid Excel document (.xlsx, .xls) or CSV.",
            finding_id="error-parse",
        )

    limit = config.effective_row_limit()
    materialized = materialize_rows(document.rows, document.column_mapping, limit)
    risks = analyze_all_risks(document.raw_text, materialized.rows)

    if materialized.truncated and config.should_enforce_limits():
        risks.insert(0, row_limit_warning(limit, materialized.total_rows))

    return QuoteAnalysis(
        success=True,
        file_name=document.file_name,
        column_mapping=document.column_mapping,
        rows=materialized.rows,
        risks=risks,
        summary=build_summary(materialized.rows, risks),
    )


def analyze_document(
    document: Optional[DocumentInput], config: Optional[Settings] = None
) -> QuoteAnalysis:
    """
    Analyze a decoded document.

    Upstream problems (no document, undecodable file, oversize file or an
    unexpected processing error) never raise; they come back as a failed
    analysis carrying a single critical finding.

    Args:
        document: Decoded document, or None when no file was supplied
        config: Settings to use (module settings by default)

    Returns:
        QuoteAnalysis with normalized rows, ranked risks and summary
    """
    config = config or default_settings

    if document is None:
        return failed_analysis(
            "",
            title="No File Provided",
            description="Please upload an Excel file to analyze.",
            recommendation="Select a .xlsx, .xls, or .csv file to upload.",
            finding_id="error-no-file",
        )

    logger.info(f"Analyzing {document.file_name or '<unnamed>'} ({len(document.rows)} rows)")
    try:
        analysis = _analyze(document, config)
    except Exception as e:
        logger.exception(f"Processing error for {document.file_name}")
        return failed_analysis(
            document.file_name,
            title="Processing Error",
            description=str(e) or "An unexpected error occurred.",
            recommendation="Please try again or contact support if the issue persists.",
        )

    logger.info(
        f"Analysis of {document.file_name or '<unnamed>'} finished: "
        f"{analysis.summary.total_rows} rows, {analysis.summary.total_risks} risks"
    )
    return analysis
