"""Configuration management for QuoteSmith."""

import os
from typing import Optional

from dotenv import load_dotenv
from pydantic import BaseModel

load_dotenv()


def _parse_cors_origins() -> list[str]:
    """Parse CORS origins from environment variable."""
    cors_env = os.getenv("CORS_ALLOW_ORIGINS")
    if cors_env:
        return cors_env.split(",")
    return ["*"]


class Settings(BaseModel):
    """Application settings."""

    # Server settings
    host: str = os.getenv("HOST", "127.0.0.1")
    port: int = int(os.getenv("PORT", "8000"))
    debug: bool = os.getenv("DEBUG", "false").lower() == "true"
    log_level: str = os.getenv("LOG_LEVEL", "INFO")

    # CORS settings (comma-separated list of allowed origins, or * for all)
    cors_allow_origins: list[str] = _parse_cors_origins()

    # Admin mode bypasses all usage limits
    admin_mode: bool = os.getenv("ADMIN_MODE", "false").lower() == "true"

    # Usage limits
    max_rows: int = int(os.getenv("MAX_ROWS", "100"))  # Rows materialized per document
    max_file_size_mb: int = int(os.getenv("MAX_FILE_SIZE_MB", "2"))

    # Corrected-file downloads expire after this many seconds
    download_ttl_seconds: int = int(os.getenv("DOWNLOAD_TTL_SECONDS", "600"))

    # Idle remediation sessions are closed after this many seconds
    session_ttl_seconds: int = int(os.getenv("SESSION_TTL_SECONDS", "3600"))

    # Presentation cap for affected row lists
    max_affected_rows_displayed: int = int(os.getenv("MAX_AFFECTED_ROWS_DISPLAYED", "10"))

    @property
    def max_file_size_bytes(self) -> int:
        return self.max_file_size_mb * 1024 * 1024

    def should_enforce_limits(self) -> bool:
        """Limits are enforced unless admin mode is on."""
        return not self.admin_mode

    def effective_row_limit(self) -> Optional[int]:
        """Row ceiling for materialization, or None when unlimited."""
        return None if self.admin_mode else self.max_rows


settings = Settings()
