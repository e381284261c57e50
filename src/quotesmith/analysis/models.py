"""Data models for document analysis input and output."""

from datetime import datetime, timezone
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from ..parsing.models import ColumnMapping, ParsedRow, RawRow
from ..risk.models import RiskFlag, RiskSummary


def _utc_now() -> datetime:
    """Return current UTC time as timezone-aware datetime."""
    return datetime.now(timezone.utc)


class DocumentInput(BaseModel):
    """Decoded document handed over by the spreadsheet codec."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    file_name: str = ""
    column_mapping: ColumnMapping = Field(default_factory=ColumnMapping)
    rows: list[RawRow] = Field(default_factory=list)
    raw_text: str = ""
    file_size: Optional[int] = None  # Bytes, when known
    error: Optional[str] = None  # Set when the codec could not decode the file


class QuoteSummary(RiskSummary):
    """Risk tally plus line item counts."""

    total_rows: int = 0
    valid_rows: int = 0  # Rows with a part number


class QuoteAnalysis(BaseModel):
    """Full result of analyzing one document."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    success: bool
    file_name: str
    processed_at: datetime = Field(default_factory=_utc_now)
    column_mapping: ColumnMapping = Field(default_factory=ColumnMapping)
    rows: list[ParsedRow] = Field(default_factory=list)
    risks: list[RiskFlag] = Field(default_factory=list)
    summary: QuoteSummary = Field(default_factory=QuoteSummary)
