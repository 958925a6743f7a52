"""
Data schemas for GitHub API payloads used by the build pipeline.
"""

from dataclasses import dataclass, field
from typing import Any

FAILED_CONCLUSIONS = frozenset({"failure", "cancelled", "timed_out"})


@dataclass(frozen=True)
class ScratchRepository:
    """Temporary repository hosting a build."""

    owner: str
    name: str
    html_url: str
    default_branch: str = "main"
    from_template: bool = True

    @property
    def full_name(self) -> str:
        return f"{self.owner}/{self.name}"

    @classmethod
    def from_api(cls, owner: str, name: str, data: dict[str, Any], from_template: bool) -> "ScratchRepository":
        """Create from a generate/create repository response."""
        return cls(
            owner=owner,
            name=name,
            html_url=data.get("html_url") or f"https://github.com/{owner}/{name}",
            default_branch=data.get("default_branch") or "main",
            from_template=from_template,
        )


@dataclass(frozen=True)
class TreeEntry:
    """Single entry of a recursive git tree listing."""

    path: str
    type: str
    sha: str

    @property
    def is_blob(self) -> bool:
        return self.type == "blob"


@dataclass(frozen=True)
class WorkflowRun:
    """Snapshot of a workflow run as returned by a single poll."""

    id: int
    status: str | None = None
    conclusion: str | None = None
    html_url: str = ""

    @classmethod
    def from_api(cls, data: dict[str, Any]) -> "WorkflowRun":
        return cls(
            id=data["id"],
            status=data.get("status"),
            conclusion=data.get("conclusion") or None,
            html_url=data.get("html_url") or "",
        )

    @property
    def is_pending(self) -> bool:
        return self.conclusion is None

    @property
    def succeeded(self) -> bool:
        return self.conclusion == "success"

    @property
    def failed(self) -> bool:
        return self.conclusion in FAILED_CONCLUSIONS


@dataclass(frozen=True)
class ReleaseAsset:
    """Downloadable file attached to a release."""

    id: int
    name: str
    browser_download_url: str
    size: int = 0

    @classmethod
    def from_api(cls, data: dict[str, Any]) -> "ReleaseAsset":
        return cls(
            id=data.get("id", 0),
            name=data.get("name", ""),
            browser_download_url=data.get("browser_download_url", ""),
            size=data.get("size", 0),
        )


@dataclass(frozen=True)
class Release:
    """Latest release of a repository with its assets in listed order."""

    tag_name: str = ""
    html_url: str = ""
    assets: list[ReleaseAsset] = field(default_factory=list)

    @classmethod
    def from_api(cls, data: dict[str, Any]) -> "Release":
        return cls(
            tag_name=data.get("tag_name") or "",
            html_url=data.get("html_url") or "",
            assets=[ReleaseAsset.from_api(item) for item in data.get("assets") or []],
        )
