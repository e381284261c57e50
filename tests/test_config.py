"""Tests for the config module."""

from quotesmith.config import Settings, _parse_cors_origins


class TestParseCorsOrigins:
    """Test CORS origins parsing."""

    def test_parse_cors_origins_with_value(self, monkeypatch):
        """Test parsing CORS origins from environment variable."""
        monkeypatch.setenv("CORS_ALLOW_ORIGINS", "http://localhost:3000,http://localhost:8080")
        assert _parse_cors_origins() == ["http://localhost:3000", "http://localhost:8080"]

    def test_parse_cors_origins_without_value(self, monkeypatch):
        """Test default CORS origins when not set."""
        monkeypatch.delenv("CORS_ALLOW_ORIGINS", raising=False)
        assert _parse_cors_origins() == ["*"]

    def test_parse_cors_origins_empty_string(self, monkeypatch):
        """Test empty CORS origins defaults to wildcard."""
        monkeypatch.setenv("CORS_ALLOW_ORIGINS", "")
        assert _parse_cors_origins() == ["*"]


class TestSettings:
    """Test Settings configuration."""

    def test_explicit_values(self):
        """Test Settings with explicit values."""
        settings = Settings(
            host="0.0.0.0",
            port=9000,
            max_rows=50,
            max_file_size_mb=5,
            download_ttl_seconds=30,
        )

        assert settings.host == "0.0.0.0"
        assert settings.port == 9000
        assert settings.max_rows == 50
        assert settings.max_file_size_bytes == 5 * 1024 * 1024
        assert settings.download_ttl_seconds == 30

    def test_limits_enforced_by_default(self):
        """Test that usage limits apply outside admin mode."""
        settings = Settings(admin_mode=False, max_rows=100)

        assert settings.should_enforce_limits() is True
        assert settings.effective_row_limit() == 100

    def test_admin_mode_lifts_limits(self):
        """Test that admin mode removes the row ceiling."""
        settings = Settings(admin_mode=True, max_rows=100)

        assert settings.should_enforce_limits() is False
        assert settings.effective_row_limit() is None
