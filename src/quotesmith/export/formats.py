"""CSV and JSON exports of an analysis."""

import json
import re
from typing import Iterable, Optional

from ..analysis.models import QuoteAnalysis
from ..parsing.models import ParsedRow
from ..parsing.normalize import format_number

CSV_HEADERS = ["Row", "Part Number", "Description", "Quantity", "UoM", "Unit Price", "Notes"]

_EXTENSION_PATTERN = re.compile(r"\.[^/.]+$")


def export_file_name(file_name: str, suffix: str, extension: str) -> str:
    """'quote.xlsx' -> 'quote_<suffix>.<extension>'."""
    return f"{_EXTENSION_PATTERN.sub('', file_name)}_{suffix}.{extension}"


def _quote(text: str) -> str:
    return '"' + (text or "").replace('"', '""') + '"'


def _number(value: Optional[float]) -> str:
    # NaN and missing numbers both export as empty cells
    if value is None or value != value:
        return ""
    return format_number(value)


def rows_to_csv(rows: Iterable[ParsedRow]) -> str:
    """Render rows as CSV with quoted text fields."""
    lines = [",".join(CSV_HEADERS)]
    for row in rows:
        lines.append(
            ",".join(
                [
                    str(row.row_number),
                    _quote(row.part_number),
                    _quote(row.description),
                    _number(row.quantity),
                    _quote(row.unit_of_measure),
                    _number(row.unit_price),
                    _quote(row.notes),
                ]
            )
        )
    return "\n".join(lines)


def analysis_to_dict(analysis: QuoteAnalysis) -> dict:
    """JSON-safe dict of the exported analysis fields, camelCase keys."""
    data = json.loads(analysis.model_dump_json(by_alias=True))
    return {
        "fileName": data["fileName"],
        "processedAt": data["processedAt"],
        "summary": data["summary"],
        "columnMapping": data["columnMapping"],
        "rows": data["rows"],
        "risks": data["risks"],
    }


def analysis_to_json(analysis: QuoteAnalysis) -> str:
    return json.dumps(analysis_to_dict(analysis), indent=2, ensure_ascii=False)
