"""
Artifact upload into the scratch repository.
"""

import base64

from packager.core.exceptions import GitHubAPIError, UploadError
from packager.core.logging import get_logger
from packager.services.github.client import GitHubClient
from packager.services.github.schemas import ScratchRepository

logger = get_logger(__name__)


async def upload_artifact(
    client: GitHubClient,
    repository: ScratchRepository,
    artifact: bytes,
    artifact_name: str,
) -> dict:
    """
    Write the artifact at ``artifact_name`` in a single commit.

    Not retried: the caller decides whether a failed upload is worth repeating.

    Raises:
        UploadError: If the contents API rejects the write
    """
    encoded_content = base64.b64encode(artifact).decode()

    try:
        result = await client.put_file_contents(
            repository.owner,
            repository.name,
            artifact_name,
            encoded_content,
            message=f"Upload {artifact_name} via packager",
        )
    except GitHubAPIError as e:
        raise UploadError(e.status_code, e.body or str(e)) from e

    logger.info(f"Uploaded {artifact_name} ({len(artifact)} bytes) to {repository.full_name}")
    return result
