"""
Tests for core.config module.
"""

import pytest
from pydantic import ValidationError


class TestSettings:
    """Tests for Settings class."""

    def test_required_token_loaded(self):
        """Test that the GitHub token is loaded from environment."""
        from packager.core.config import Settings

        settings = Settings()
        assert settings.github_token == "ghp_test_token"
        assert settings.github_user == "octocat"

    def test_progress_channel_with_topic_parsed(self):
        """Test that PROGRESS_CHANNEL_ID:TOPIC_ID format is parsed."""
        from packager.core.config import Settings

        settings = Settings()

        assert settings.progress_chat == -100123456789
        assert settings.progress_topic == 42

    def test_progress_channel_without_topic(self, monkeypatch):
        """Test PROGRESS_CHANNEL_ID without topic."""
        monkeypatch.setenv("PROGRESS_CHANNEL_ID", "-100555555555")

        from packager.core.config import Settings
        settings = Settings()

        assert settings.progress_chat == -100555555555
        assert settings.progress_topic is None

    def test_invalid_progress_channel_ignored(self, monkeypatch):
        """Test that a malformed channel value parses to None."""
        monkeypatch.setenv("PROGRESS_CHANNEL_ID", "not-a-channel")

        from packager.core.config import Settings
        settings = Settings()

        assert settings.progress_chat is None
        assert settings.progress_topic is None

    def test_default_values(self):
        """Test that default values are set correctly."""
        from packager.core.config import Settings

        settings = Settings()

        assert settings.github_api_base == "https://api.github.com"
        assert settings.template_owner == "Deep-sea-lab"
        assert settings.template_repo == "02packager-template"
        assert settings.workflow_id == "main.yml"
        assert settings.workflow_ref == "main"
        assert settings.auto_delete is False
        assert settings.poll_interval_ms == 10000
        assert settings.poll_max_attempts == 60
        assert settings.asset_delivery == "url"
        assert settings.http_timeout is None

    def test_api_base_trailing_slash_stripped(self, monkeypatch):
        monkeypatch.setenv("GITHUB_API_BASE", "https://ghe.example.com/api/v3/")

        from packager.core.config import Settings
        settings = Settings()

        assert settings.github_api_base == "https://ghe.example.com/api/v3"

    def test_boolean_and_int_from_env(self, monkeypatch):
        monkeypatch.setenv("AUTO_DELETE", "true")
        monkeypatch.setenv("POLL_MAX_ATTEMPTS", "3")
        monkeypatch.setenv("ASSET_DELIVERY", "bytes")

        from packager.core.config import Settings
        settings = Settings()

        assert settings.auto_delete is True
        assert settings.poll_max_attempts == 3
        assert settings.asset_delivery == "bytes"

    def test_invalid_delivery_raises(self, monkeypatch):
        monkeypatch.setenv("ASSET_DELIVERY", "carrier-pigeon")

        from packager.core.config import Settings

        with pytest.raises(ValidationError):
            Settings()

    def test_negative_interval_raises(self, monkeypatch):
        monkeypatch.setenv("POLL_INTERVAL_MS", "-5")

        from packager.core.config import Settings

        with pytest.raises(ValidationError):
            Settings()
