"""
Workflow dispatch.
"""

from packager.core.exceptions import DispatchError, GitHubAPIError
from packager.core.logging import get_logger
from packager.services.github.client import GitHubClient
from packager.services.github.schemas import ScratchRepository

logger = get_logger(__name__)


async def dispatch_workflow(
    client: GitHubClient,
    repository: ScratchRepository,
    workflow_file: str,
    ref: str = "main",
) -> int:
    """
    Start ``workflow_file`` on ``ref``.

    Returns:
        Accepted status code (201, 202 or 204)

    Raises:
        DispatchError: If GitHub did not accept the dispatch
    """
    try:
        status = await client.dispatch_workflow(repository.owner, repository.name, workflow_file, ref)
    except GitHubAPIError as e:
        raise DispatchError(e.status_code, e.body or str(e)) from e

    logger.info(f"Dispatched {workflow_file} on {repository.full_name}@{ref} ({status})")
    return status
