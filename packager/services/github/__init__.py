# GitHub services - GitHub REST API integration
from .client import GitHubClient
from .schemas import Release, ReleaseAsset, ScratchRepository, TreeEntry, WorkflowRun

__all__ = ["GitHubClient", "Release", "ReleaseAsset", "ScratchRepository", "TreeEntry", "WorkflowRun"]
