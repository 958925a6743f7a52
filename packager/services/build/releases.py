"""
Release and asset resolution.
"""

from packager.core.exceptions import AssetDownloadError, GitHubAPIError, NoAssetError, NoReleaseError
from packager.core.logging import get_logger
from packager.services.github.client import GitHubClient
from packager.services.github.schemas import Release, ReleaseAsset, ScratchRepository

logger = get_logger(__name__)


async def resolve_release(
    client: GitHubClient,
    repository: ScratchRepository,
) -> tuple[Release, ReleaseAsset]:
    """
    Fetch the latest release and pick its first asset in listed order.

    Raises:
        NoReleaseError: If the latest release cannot be fetched
        NoAssetError: If the release has no assets
    """
    try:
        release = await client.get_latest_release(repository.owner, repository.name)
    except GitHubAPIError as e:
        raise NoReleaseError(e.status_code, e.body or str(e)) from e

    if not release.assets:
        raise NoAssetError(f"No release assets found in {repository.full_name}")

    asset = release.assets[0]
    logger.info(f"Resolved release asset {asset.name} ({len(release.assets)} listed)")
    return release, asset


async def download_asset(
    client: GitHubClient,
    repository: ScratchRepository,
    asset: ReleaseAsset,
) -> bytes:
    """
    Fetch asset bytes with the client's credentials (works for private repositories).

    Raises:
        AssetDownloadError: If the download fails
    """
    try:
        content = await client.download_release_asset(repository.owner, repository.name, asset.id)
    except GitHubAPIError as e:
        raise AssetDownloadError(e.status_code, e.body or str(e)) from e

    logger.info(f"Downloaded {asset.name} ({len(content)} bytes)")
    return content
