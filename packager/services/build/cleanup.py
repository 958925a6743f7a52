"""
Scratch repository removal.
"""

from packager.core.exceptions import GitHubAPIError
from packager.core.logging import get_logger
from packager.services.github.client import GitHubClient
from packager.services.github.schemas import ScratchRepository

logger = get_logger(__name__)


async def cleanup_repository(client: GitHubClient, repository: ScratchRepository) -> bool:
    """
    Delete the scratch repository.

    Failure is logged and reported through the return value, never raised.

    Returns:
        True if the repository was deleted
    """
    try:
        await client.delete_repository(repository.owner, repository.name)
    except GitHubAPIError as e:
        logger.warning(f"Failed to delete temporary repository {repository.full_name}: {e.body or e}")
        return False

    logger.info(f"Deleted temporary repository {repository.full_name}")
    return True
