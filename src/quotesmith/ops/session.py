"""Remediation session: sequences row mutations over one analysis."""

import asyncio
import logging
import uuid
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from typing import Any, Callable, Iterable, Optional

from ..parsing.models import ColumnMapping, ParsedRow, RowField
from ..parsing.normalize import format_number
from .cache import DownloadStore
from .models import (
    ClearColumnResponse,
    DeleteRowsResponse,
    DownloadResponse,
    FixMissingQuantitiesResponse,
    Remediation,
    UpdateCellResponse,
)
from .mutations import (
    clear_column,
    delete_rows,
    display_value,
    fix_missing_quantities,
    update_cell,
)
from .rows import RowSet

logger = logging.getLogger(__name__)

DEFAULT_FILE_NAME = "corrected_data.xlsx"
DEFAULT_SESSION_TTL_SECONDS = 3600


class RemediationSession:
    """
    Holds the authoritative row set for one conversation.

    Each operation reads the rows left by the previous one, appends to
    the remediation log, and stores a download snapshot. Callers must
    not run operations on one session concurrently.
    """

    def __init__(
        self,
        rows: Iterable[ParsedRow],
        column_mapping: ColumnMapping,
        store: DownloadStore,
        file_name: Optional[str] = None,
        download_prefix: str = "/api/download",
    ):
        self.rows = RowSet(rows)
        self.column_mapping = column_mapping
        self.store = store
        self.file_name = file_name or DEFAULT_FILE_NAME
        self.download_prefix = download_prefix.rstrip("/")
        self._remediations: list[Remediation] = []

    @property
    def remediations(self) -> list[Remediation]:
        """Append-only log of every change made in this session."""
        return list(self._remediations)

    def _publish(self, remediations: list[Remediation]) -> dict[str, str]:
        artifact = self.store.store(
            self.rows.to_list(), self.column_mapping, self.file_name, remediations
        )
        return {
            "download_url": f"{self.download_prefix}/{artifact.token}",
            "file_name": artifact.file_name,
        }

    def _commit(self, rows: RowSet, remediations: list[Remediation]) -> dict[str, str]:
        self.rows = rows
        self._remediations.extend(remediations)
        return self._publish(remediations)

    def fix_missing_quantities(
        self, default_quantity: float = 1, affected_row_numbers: Optional[list[int]] = None
    ) -> FixMissingQuantitiesResponse:
        result = fix_missing_quantities(self.rows, default_quantity, affected_row_numbers)
        download = self._commit(result.rows, result.remediations)
        fixed = len(result.remediations)
        return FixMissingQuantitiesResponse(
            success=True,
            fixed_count=fixed,
            affected_rows=result.affected_rows,
            message=(
                f"Fixed {fixed} rows with missing quantities by setting them to "
                f"{format_number(float(default_quantity))}."
            ),
            **download,
        )

    def update_cell(
        self, row_number: int, field: RowField, new_value: Any
    ) -> UpdateCellResponse:
        result = update_cell(self.rows, row_number, field, new_value)
        if not result.success:
            return UpdateCellResponse(
                success=False, row_number=row_number, field=field, message=result.error
            )

        download = self._commit(result.rows, result.remediations)
        return UpdateCellResponse(
            success=True,
            row_number=row_number,
            field=field,
            old_value=result.old_value,
            new_value=result.new_value,
            message=(
                f"Updated {field.value} in row {row_number} from "
                f"{display_value(result.old_value)} to {display_value(new_value)}."
            ),
            **download,
        )

    def delete_rows(self, row_numbers: list[int]) -> DeleteRowsResponse:
        result = delete_rows(self.rows, row_numbers)
        download = self._commit(result.rows, result.remediations)
        return DeleteRowsResponse(
            success=True,
            deleted_count=result.deleted_count,
            row_numbers=list(row_numbers),
            message=f"Deleted {result.deleted_count} rows from the data.",
            **download,
        )

    def clear_column(self, field: RowField) -> ClearColumnResponse:
        result = clear_column(self.rows, field)
        download = self._commit(result.rows, result.remediations)
        return ClearColumnResponse(
            success=True,
            field=field,
            affected_count=result.affected_count,
            message=f"Cleared data in column '{field.value}' for {result.affected_count} rows.",
            **download,
        )

    def generate_corrected_download(
        self, include_remediation_notes: bool = True
    ) -> DownloadResponse:
        """Snapshot the current rows with every change made so far."""
        remediations = self.remediations
        if not include_remediation_notes:
            remediations = [r.model_copy(update={"reason": ""}) for r in remediations]

        download = self._publish(remediations)
        logger.info(f"Generated download link for {download['file_name']}")
        return DownloadResponse(
            success=True,
            remediations_count=len(remediations),
            message=(
                f"Created download link for corrected file with {len(remediations)} fixes applied."
            ),
            **download,
        )


def _utc_now() -> datetime:
    return datetime.now(timezone.utc)


@dataclass
class _OpenSession:
    session: RemediationSession
    last_used: datetime


class SessionStore:
    """Open remediation sessions keyed by id.

    A session expires once it has been idle for longer than the TTL;
    every lookup refreshes it. Expired sessions are swept on every open
    and whenever cleanup_expired is called.
    """

    def __init__(
        self,
        ttl_seconds: int = DEFAULT_SESSION_TTL_SECONDS,
        clock: Optional[Callable[[], datetime]] = None,
    ):
        self._sessions: dict[str, _OpenSession] = {}
        self._ttl = timedelta(seconds=ttl_seconds)
        self._now = clock or _utc_now
        self._lock = asyncio.Lock()

    def _expired(self, entry: _OpenSession, now: datetime) -> bool:
        return now - entry.last_used > self._ttl

    def open(self, session: RemediationSession) -> str:
        """Add a session and return its id."""
        self.cleanup_expired()
        session_id = str(uuid.uuid4())
        self._sessions[session_id] = _OpenSession(session=session, last_used=self._now())
        logger.info(f"Opened session {session_id} with {len(session.rows)} rows")
        return session_id

    def get(self, session_id: str) -> Optional[RemediationSession]:
        """
        Look up a session and mark it as used.

        Returns:
            The session if open and not expired, None otherwise
        """
        entry = self._sessions.get(session_id)
        if entry is None:
            return None

        now = self._now()
        if self._expired(entry, now):
            del self._sessions[session_id]
            logger.info(f"Session {session_id} expired")
            return None

        entry.last_used = now
        return entry.session

    def close(self, session_id: str) -> bool:
        """Close a session; True if it was open."""
        return self._sessions.pop(session_id, None) is not None

    def cleanup_expired(self) -> int:
        """
        Close every idle session past the TTL.

        Returns:
            Number of sessions closed
        """
        now = self._now()
        expired = [sid for sid, entry in self._sessions.items() if self._expired(entry, now)]
        for session_id in expired:
            del self._sessions[session_id]
        if expired:
            logger.info(f"Closed {len(expired)} idle sessions")
        return len(expired)

    async def cleanup_expired_async(self) -> int:
        """Thread-safe async version of cleanup_expired."""
        async with self._lock:
            return self.cleanup_expired()

    def clear(self):
        self._sessions.clear()

    def size(self) -> int:
        return len(self._sessions)
