"""
Application configuration using pydantic-settings.
All environment variables are validated and typed.
"""

import os
from functools import lru_cache
from typing import Literal

from pydantic import field_validator, model_validator
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    # GitHub token, checked by BuildRequest.validate
    github_token: str = ""

    # Owner of the scratch repositories (the token's user)
    github_user: str = ""
    github_api_base: str = "https://api.github.com"

    # Template and workflow
    template_owner: str = "Deep-sea-lab"
    template_repo: str = "02packager-template"
    workflow_id: str = "main.yml"
    workflow_ref: str = "main"

    # Scratch repository
    repo_prefix: str = "packager-temp"
    repo_private: bool = False
    auto_delete: bool = False

    # Run polling
    poll_interval_ms: int = 10000
    poll_max_attempts: int = 60
    first_poll_delay_ms: int = 2000

    # "url" returns the public download link, "bytes" fetches the asset
    asset_delivery: Literal["url", "bytes"] = "url"

    # Per-request timeout in seconds, None disables it
    http_timeout: float | None = None

    # Optional Telegram progress reporting - raw value may contain "chat_id:topic_id"
    tg_token: str | None = None
    progress_channel_id: str | None = None

    # Parsed values (set by model_validator)
    _parsed_progress_chat: int | None = None
    _parsed_progress_topic: int | None = None

    @property
    def progress_chat(self) -> int | None:
        """Get parsed progress chat ID."""
        return self._parsed_progress_chat

    @property
    def progress_topic(self) -> int | None:
        """Get parsed progress topic ID."""
        return self._parsed_progress_topic

    @field_validator("github_api_base", mode="before")
    @classmethod
    def _strip_api_base(cls, value: str) -> str:
        return str(value).strip().rstrip("/")

    @field_validator("poll_interval_ms", "poll_max_attempts", "first_poll_delay_ms")
    @classmethod
    def _non_negative(cls, value: int) -> int:
        if value < 0:
            raise ValueError("must not be negative")
        return value

    @staticmethod
    def _parse_channel_with_topic(raw: str | None) -> tuple[int | None, int | None]:
        if raw is None or raw == "":
            return None, None

        if ":" in raw:
            parts = raw.split(":")
            try:
                return int(parts[0]), int(parts[1])
            except (ValueError, IndexError):
                return None, None

        try:
            return int(raw), None
        except ValueError:
            return None, None

    @model_validator(mode="after")
    def parse_progress_channel_and_topic(self):
        """Parse PROGRESS_CHANNEL_ID which may contain 'chat_id:topic_id'."""
        self._parsed_progress_chat, self._parsed_progress_topic = self._parse_channel_with_topic(
            self.progress_channel_id
        )
        return self

    model_config = {
        "env_file": os.path.join(os.path.dirname(os.path.dirname(os.path.dirname(__file__))), ".env"),
        "env_file_encoding": "utf-8",
        "extra": "ignore",
    }


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Return the process-wide settings instance."""
    return Settings()
