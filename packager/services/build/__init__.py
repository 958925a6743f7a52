# Build pipeline - scratch repository build via GitHub Actions
from .naming import generate_repo_name
from .orchestrator import RemoteBuildOrchestrator, upload_and_build

__all__ = ["RemoteBuildOrchestrator", "generate_repo_name", "upload_and_build"]
