"""Row mutation operations, remediation sessions and download artifacts."""

from .models import (
    Remediation,
    DownloadArtifact,
    FixMissingQuantitiesRequest,
    UpdateCellRequest,
    DeleteRowsRequest,
    ClearColumnRequest,
    GenerateDownloadRequest,
    OperationResponse,
    FixMissingQuantitiesResponse,
    UpdateCellResponse,
    DeleteRowsResponse,
    ClearColumnResponse,
    DownloadResponse,
)
from .rows import RowSet, RowNotFoundError
from .mutations import (
    ALL_ROWS,
    fix_missing_quantities,
    update_cell,
    delete_rows,
    clear_column,
    find_absent_quantities,
    find_missing_quantities,
)
from .cache import DownloadStore, corrected_file_name
from .session import RemediationSession, SessionStore

__all__ = [
    "Remediation",
    "DownloadArtifact",
    "FixMissingQuantitiesRequest",
    "UpdateCellRequest",
    "DeleteRowsRequest",
    "ClearColumnRequest",
    "GenerateDownloadRequest",
    "OperationResponse",
    "FixMissingQuantitiesResponse",
    "UpdateCellResponse",
    "DeleteRowsResponse",
    "ClearColumnResponse",
    "DownloadResponse",
    "RowSet",
    "RowNotFoundError",
    "ALL_ROWS",
    "fix_missing_quantities",
    "update_cell",
    "delete_rows",
    "clear_column",
    "find_absent_quantities",
    "find_missing_quantities",
    "DownloadStore",
    "corrected_file_name",
    "RemediationSession",
    "SessionStore",
]
