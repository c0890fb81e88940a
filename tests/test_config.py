"""Tests for environment-driven configuration."""

import pytest
from pathlib import Path

from pydantic import ValidationError

from fintrack.config import (
    AppSettings,
    GeminiSettings,
    StorageSettings,
    get_settings,
    validate_all_settings,
)


@pytest.fixture(autouse=True)
def fresh_settings():
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


class TestSettings:

    def test_storage_from_env(self, monkeypatch, tmp_path):
        """Test storage directory and key prefix overrides."""
        monkeypatch.setenv("FINTRACK_STORAGE_DATA_DIR", str(tmp_path))
        monkeypatch.setenv("FINTRACK_STORAGE_KEY_PREFIX", "demo_")
        settings = StorageSettings()
        assert settings.data_dir == tmp_path
        assert settings.key_prefix == "demo_"

    def test_invalid_key_prefix_fails(self, monkeypatch):
        """Test that the prefix must be usable as a file name."""
        monkeypatch.setenv("FINTRACK_STORAGE_KEY_PREFIX", "my fintrack:")
        with pytest.raises(ValidationError):
            StorageSettings()

    def test_data_dir_expands_home(self):
        """Test ~ expansion."""
        settings = StorageSettings(data_dir=Path("~/money"))
        assert "~" not in str(settings.data_dir)

    def test_gemini_defaults(self, monkeypatch):
        """Test Gemini defaults without a key."""
        monkeypatch.delenv("GEMINI_API_KEY", raising=False)
        settings = GeminiSettings()
        assert settings.api_key is None
        assert settings.max_attempts == 3

    def test_log_level_is_normalized(self, monkeypatch):
        """Test log level casing."""
        monkeypatch.setenv("LOG_LEVEL", " debug ")
        assert AppSettings().log_level == "DEBUG"

    def test_debug_mode_overrides_log_level(self):
        """Test the effective log level."""
        assert AppSettings(log_level="warning").effective_log_level == "WARNING"
        settings = AppSettings(log_level="warning", debug_mode=True)
        assert settings.effective_log_level == "DEBUG"

    def test_unknown_log_level_fails(self):
        """Test log level validation."""
        with pytest.raises(ValidationError):
            AppSettings(log_level="chatty")

    def test_validate_all_settings(self, monkeypatch):
        """Test the configuration report."""
        monkeypatch.setenv("GEMINI_API_KEY", "test-key")
        results = validate_all_settings()
        assert results["storage"] is True
        assert results["app"] is True
        assert results["gemini_api_key"] is True

    def test_validate_reports_bad_section(self, monkeypatch):
        """Test that a broken section is reported, not raised."""
        monkeypatch.setenv("CHART_DAYS", "0")
        results = validate_all_settings()
        assert results["app"] is False
        assert "app_error" in results


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
