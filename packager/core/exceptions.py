"""
Custom application exceptions.
"""


class PackagerError(Exception):
    """Base exception for packager errors."""
    pass


class ConfigurationError(PackagerError):
    """Required build input is missing or invalid."""
    pass


class APIError(PackagerError):
    """External API call failed."""
    pass


class GitHubAPIError(APIError):
    """GitHub API call failed."""

    def __init__(self, message: str, status_code: int | None = None, body: str = ""):
        super().__init__(message)
        self.status_code = status_code
        self.body = body


class _StatusError(PackagerError):
    """Stage failure carrying the HTTP status and response body."""

    prefix = "Request failed"

    def __init__(self, status_code: int | None, body: str = ""):
        super().__init__(f"{self.prefix}: {status_code} {body}".rstrip())
        self.status_code = status_code
        self.body = body


class ProvisioningError(PackagerError):
    """Neither template generation nor plain creation produced a repository."""

    def __init__(self, generate_error: GitHubAPIError, fallback_error: GitHubAPIError):
        super().__init__(
            "Could not generate or create repository "
            f"(generate status: {generate_error.status_code} / "
            f"fallback status: {fallback_error.status_code}). "
            f"Generate error: {generate_error.body}; create error: {fallback_error.body}"
        )
        self.generate_error = generate_error
        self.fallback_error = fallback_error


class UploadError(_StatusError):
    """Artifact upload was rejected."""

    prefix = "Failed to upload artifact"


class DispatchError(_StatusError):
    """Workflow dispatch was not accepted."""

    prefix = "Failed to dispatch workflow"


class WorkflowFailedError(PackagerError):
    """Workflow run finished with a failing conclusion."""

    def __init__(self, conclusion: str):
        super().__init__(f"Workflow finished with conclusion: {conclusion}")
        self.conclusion = conclusion


class WorkflowTimeoutError(PackagerError):
    """Workflow run did not finish within the poll attempt ceiling."""

    def __init__(self, attempts: int):
        super().__init__(f"Workflow did not complete successfully after {attempts} attempts")
        self.attempts = attempts


class NoReleaseError(_StatusError):
    """Latest release could not be fetched."""

    prefix = "Failed to fetch latest release"


class NoAssetError(PackagerError):
    """Latest release has no assets."""
    pass


class AssetDownloadError(_StatusError):
    """Release asset bytes could not be downloaded."""

    prefix = "Failed to download release asset"
