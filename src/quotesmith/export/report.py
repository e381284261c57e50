"""Plain-text risk report."""

from typing import Optional

from ..analysis.models import QuoteAnalysis
from ..config import settings

HEAVY_RULE = "═" * 63
LIGHT_RULE = "─" * 63
WIDTH = 64


def _banner(title: str, rule: str) -> list[str]:
    return [rule, title.center(WIDTH).rstrip(), rule]


def _rows_line(rows: list[int], limit: int) -> str:
    shown = ", ".join(str(number) for number in rows[:limit])
    if len(rows) > limit:
        shown += f", ... (+{len(rows) - limit} more)"
    return shown


def generate_risk_report(analysis: QuoteAnalysis, max_rows_shown: Optional[int] = None) -> str:
    """Render the analysis as a fixed-width text report."""
    limit = max_rows_shown or settings.max_affected_rows_displayed
    summary = analysis.summary

    lines = [
        *_banner("QUOTE RISK ASSESSMENT REPORT", HEAVY_RULE),
        "",
        f"File: {analysis.file_name}",
        f"Processed: {analysis.processed_at.strftime('%Y-%m-%d %H:%M:%S %Z').strip()}",
        "",
        *_banner("SUMMARY", LIGHT_RULE),
        "",
        f"Total Line Items: {summary.total_rows}",
        f"Valid Line Items: {summary.valid_rows}",
        "",
        f"Total Risks Detected: {summary.total_risks}",
        f"  • Critical: {summary.critical_risks}",
        f"  • High: {summary.high_risks}",
        f"  • Medium: {summary.medium_risks}",
        f"  • Low: {summary.low_risks}",
        "",
    ]

    if analysis.risks:
        lines.extend(_banner("RISK DETAILS", LIGHT_RULE))
        lines.append("")
        for risk in analysis.risks:
            lines.append(f"[{risk.level.value.upper()}] {risk.title}")
            lines.append(f"Type: {risk.type.value}")
            lines.append(f"Description: {risk.description}")
            if risk.extracted_value:
                lines.append(f"Detected Value: {risk.extracted_value}")
            if risk.affected_rows:
                lines.append(f"Affected Rows: {_rows_line(risk.affected_rows, limit)}")
            lines.append(f"Recommendation: {risk.recommendation}")
            lines.append("")

    lines.append(LIGHT_RULE)
    lines.append("END OF REPORT".center(WIDTH).rstrip())
    lines.append(HEAVY_RULE)

    return "\n".join(lines)
