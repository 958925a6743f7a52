"""
Data model for a single build-via-CI invocation.
"""

from dataclasses import dataclass, replace
from enum import Enum
from typing import TYPE_CHECKING

from packager.core.exceptions import ConfigurationError

if TYPE_CHECKING:
    from packager.core.config import Settings


class AssetDelivery(str, Enum):
    """How the release asset is handed back to the caller."""

    URL = "url"
    BYTES = "bytes"


@dataclass(frozen=True)
class BuildRequest:
    """Everything needed to run one build. Immutable for the call's duration."""

    artifact: bytes
    artifact_name: str
    owner_login: str
    auth_token: str
    template_owner: str = "Deep-sea-lab"
    template_repo: str = "02packager-template"
    workflow_file: str = "main.yml"
    ref: str = "main"
    auto_delete: bool = False
    poll_interval_ms: int = 10000
    poll_max_attempts: int = 60
    first_poll_delay_ms: int = 2000
    private: bool = False
    delivery: AssetDelivery = AssetDelivery.URL
    repo_prefix: str = "packager-temp"

    def validate(self) -> None:
        """
        Check required inputs.

        Raises:
            ConfigurationError: If a required field is missing or a poll
                setting is out of range
        """
        if not self.owner_login or not self.auth_token:
            raise ConfigurationError("Missing GitHub username or token")
        if not self.artifact or not self.artifact_name:
            raise ConfigurationError("Missing artifact or artifact name")
        if not self.template_owner or not self.template_repo:
            raise ConfigurationError("Missing template owner or repository")
        if not self.workflow_file:
            raise ConfigurationError("Missing workflow file")
        if self.poll_max_attempts < 1:
            raise ConfigurationError("poll_max_attempts must be at least 1")
        if self.poll_interval_ms < 0 or self.first_poll_delay_ms < 0:
            raise ConfigurationError("Poll intervals must not be negative")

    @classmethod
    def from_settings(
        cls,
        settings: "Settings",
        artifact: bytes,
        artifact_name: str,
        **overrides,
    ) -> "BuildRequest":
        """Build a request from loaded settings, with per-call overrides."""
        request = cls(
            artifact=artifact,
            artifact_name=artifact_name,
            owner_login=settings.github_user,
            auth_token=settings.github_token,
            template_owner=settings.template_owner,
            template_repo=settings.template_repo,
            workflow_file=settings.workflow_id,
            ref=settings.workflow_ref,
            auto_delete=settings.auto_delete,
            poll_interval_ms=settings.poll_interval_ms,
            poll_max_attempts=settings.poll_max_attempts,
            first_poll_delay_ms=settings.first_poll_delay_ms,
            private=settings.repo_private,
            delivery=AssetDelivery(settings.asset_delivery),
            repo_prefix=settings.repo_prefix,
        )
        return replace(request, **overrides) if overrides else request


@dataclass(frozen=True)
class BuildResult:
    """Successful build outcome."""

    repository_url: str
    release_url: str
    asset_name: str
    run_id: int | None = None
    asset_download_url: str | None = None
    asset_bytes: bytes | None = None
    repository_deleted: bool = False
