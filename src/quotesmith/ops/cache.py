"""Download artifact store."""

import asyncio
import logging
import uuid
from datetime import datetime, timedelta, timezone
from typing import Callable, Optional

from ..export.formats import export_file_name
from ..parsing.models import ColumnMapping, ParsedRow
from .models import DownloadArtifact, Remediation

logger = logging.getLogger(__name__)

DEFAULT_TTL_SECONDS = 600


def corrected_file_name(file_name: str, extension: str = "csv") -> str:
    """Derive the corrected download name from the source file name."""
    return export_file_name(file_name, "corrected", extension)


def _utc_now() -> datetime:
    return datetime.now(timezone.utc)


class DownloadStore:
    """In-memory store of corrected-row snapshots keyed by token.

    Entries expire after the retention window; expired entries are swept
    on every insert and whenever cleanup_expired is called.
    """

    def __init__(
        self,
        ttl_seconds: int = DEFAULT_TTL_SECONDS,
        clock: Optional[Callable[[], datetime]] = None,
    ):
        self._artifacts: dict[str, DownloadArtifact] = {}
        self._ttl = timedelta(seconds=ttl_seconds)
        self._now = clock or _utc_now
        self._lock = asyncio.Lock()

    def store(
        self,
        rows: list[ParsedRow],
        column_mapping: ColumnMapping,
        file_name: str,
        remediations: list[Remediation],
    ) -> DownloadArtifact:
        """
        Store a snapshot of rows for later download.

        Args:
            rows: Corrected rows
            column_mapping: Mapping the rows were parsed with
            file_name: Source file name
            remediations: Changes included in this snapshot

        Returns:
            The stored artifact, carrying its token and download file name
        """
        self.cleanup_expired()

        now = self._now()
        artifact = DownloadArtifact(
            token=f"dl_{uuid.uuid4().hex}",
            rows=list(rows),
            column_mapping=column_mapping,
            file_name=corrected_file_name(file_name),
            remediations=list(remediations),
            created_at=now,
            expires_at=now + self._ttl,
        )
        self._artifacts[artifact.token] = artifact
        logger.debug(f"Stored download {artifact.token} ({len(artifact.rows)} rows)")
        return artifact

    async def store_async(self, *args, **kwargs) -> DownloadArtifact:
        """Thread-safe async version of store."""
        async with self._lock:
            return self.store(*args, **kwargs)

    def get(self, token: str) -> Optional[DownloadArtifact]:
        """
        Retrieve an artifact by token.

        Returns:
            The artifact if found and not expired, None otherwise
        """
        artifact = self._artifacts.get(token)
        if artifact is None:
            return None

        if self._now() > artifact.expires_at:
            del self._artifacts[token]
            return None

        return artifact

    async def get_async(self, token: str) -> Optional[DownloadArtifact]:
        """Thread-safe async version of get."""
        async with self._lock:
            return self.get(token)

    def remove(self, token: str) -> bool:
        """Remove an artifact; True if it was present."""
        if token in self._artifacts:
            del self._artifacts[token]
            return True
        return False

    def cleanup_expired(self) -> int:
        """
        Remove all expired artifacts.

        Returns:
            Number of artifacts removed
        """
        now = self._now()
        expired = [
            token for token, artifact in self._artifacts.items() if now > artifact.expires_at
        ]
        for token in expired:
            del self._artifacts[token]
        if expired:
            logger.info(f"Evicted {len(expired)} expired downloads")
        return len(expired)

    async def cleanup_expired_async(self) -> int:
        """Thread-safe async version of cleanup_expired."""
        async with self._lock:
            return self.cleanup_expired()

    def clear(self):
        """Remove all artifacts."""
        self._artifacts.clear()

    def size(self) -> int:
        return len(self._artifacts)
