"""Data models for row mutation operations and their responses."""

from datetime import datetime, timezone
from typing import Any, Optional, Union

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from ..parsing.models import ColumnMapping, ParsedRow, RowField


def _utc_now() -> datetime:
    """Return current UTC time as timezone-aware datetime."""
    return datetime.now(timezone.utc)


class _CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class Remediation(_CamelModel):
    """Audit record for one corrective change.

    row_number 0 denotes a change applied to all rows; field None
    denotes a change to the whole row.
    """

    row_number: int
    field: Optional[RowField] = None
    old_value: Any = None
    new_value: Any = None
    reason: str


# Tool argument records


class FixMissingQuantitiesRequest(_CamelModel):
    default_quantity: float = Field(default=1, description="Quantity to set on each fixed row")
    affected_row_numbers: Optional[list[int]] = Field(
        default=None,
        description="Rows to fix; all rows without a quantity when omitted",
    )


class UpdateCellRequest(_CamelModel):
    row_number: int = Field(description="Row number to update")
    field: RowField = Field(description="Field to update")
    new_value: Union[float, str] = Field(description="New value to set")


class DeleteRowsRequest(_CamelModel):
    row_numbers: list[int] = Field(description="Row numbers to delete")


class ClearColumnRequest(_CamelModel):
    field: RowField = Field(description="Field to clear on every row")


class GenerateDownloadRequest(_CamelModel):
    include_remediation_notes: bool = True


# Tool responses


class OperationResponse(_CamelModel):
    """Common envelope for every mutation response."""

    success: bool
    message: str
    download_url: Optional[str] = None
    file_name: Optional[str] = None


class FixMissingQuantitiesResponse(OperationResponse):
    fixed_count: int = 0
    affected_rows: list[int] = Field(default_factory=list)


class UpdateCellResponse(OperationResponse):
    row_number: int
    field: Optional[RowField] = None
    old_value: Any = None
    new_value: Any = None


class DeleteRowsResponse(OperationResponse):
    deleted_count: int = 0
    row_numbers: list[int] = Field(default_factory=list)


class ClearColumnResponse(OperationResponse):
    field: RowField
    affected_count: int = 0


class DownloadResponse(OperationResponse):
    remediations_count: int = 0


class DownloadArtifact(_CamelModel):
    """Snapshot of corrected rows retrievable by token."""

    token: str
    rows: list[ParsedRow]
    column_mapping: ColumnMapping
    file_name: str
    remediations: list[Remediation] = Field(default_factory=list)
    created_at: datetime = Field(default_factory=_utc_now)
    expires_at: datetime
