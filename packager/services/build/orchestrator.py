"""
Build-via-CI orchestration.

Stages run strictly in order: provision, upload, dispatch, poll, resolve the
release, clean up. Any stage error aborts the build; a scratch repository
created before the failure is left in place.
"""

import asyncio
from typing import Callable

from packager.core.logging import get_logger
from packager.models.build import AssetDelivery, BuildRequest, BuildResult
from packager.services.github.client import GitHubClient
from packager.services.polling import Sleep
from packager.services.progress import ProgressSink, notify_progress
from .cleanup import cleanup_repository
from .dispatcher import dispatch_workflow
from .naming import generate_repo_name
from .provisioner import provision_repository
from .releases import download_asset, resolve_release
from .runs import wait_for_run
from .uploader import upload_artifact

logger = get_logger(__name__)


class RemoteBuildOrchestrator:
    """Run a single artifact through a CI workflow in a scratch repository."""

    def __init__(
        self,
        client: GitHubClient | None = None,
        progress: ProgressSink | None = None,
        *,
        api_base: str | None = None,
        timeout: float | None = None,
        sleep: Sleep = asyncio.sleep,
        name_factory: Callable[[str], str] = generate_repo_name,
    ):
        self._client = client
        self._progress = progress
        self._api_base = api_base
        self._timeout = timeout
        self._sleep = sleep
        self._name_factory = name_factory

    def _client_for(self, request: BuildRequest) -> GitHubClient:
        if self._client is not None:
            return self._client
        return GitHubClient(request.auth_token, base_url=self._api_base, timeout=self._timeout)

    async def _progress_update(self, message: str) -> None:
        await notify_progress(self._progress, message)

    async def run(self, request: BuildRequest) -> BuildResult:
        """
        Execute the full pipeline.

        Args:
            request: Build inputs

        Returns:
            BuildResult with the repository and release URLs and the asset
            as a download URL or bytes, depending on ``request.delivery``

        Raises:
            ConfigurationError: Before any network call, on missing inputs
            PackagerError: Subclass naming the stage that failed
        """
        request.validate()
        client = self._client_for(request)
        owner = request.owner_login
        name = self._name_factory(request.repo_prefix)
        logger.info(f"Starting build of {request.artifact_name} in {owner}/{name}")

        repository = await provision_repository(
            client,
            name=name,
            owner=owner,
            template_owner=request.template_owner,
            template_repo=request.template_repo,
            private=request.private,
            progress=self._progress,
        )

        await self._progress_update(
            f"Uploading {request.artifact_name} to {repository.full_name}..."
        )
        await upload_artifact(client, repository, request.artifact, request.artifact_name)
        await self._progress_update("Artifact upload complete")

        await dispatch_workflow(client, repository, request.workflow_file, request.ref)
        await self._progress_update("Workflow dispatched, polling run status...")

        run = await wait_for_run(
            client,
            repository,
            poll_interval_ms=request.poll_interval_ms,
            poll_max_attempts=request.poll_max_attempts,
            first_poll_delay_ms=request.first_poll_delay_ms,
            progress=self._progress,
            sleep=self._sleep,
        )
        await self._progress_update("Workflow succeeded, fetching release assets...")

        release, asset = await resolve_release(client, repository)
        await self._progress_update(f"Found release asset: {asset.name}")

        asset_bytes = None
        download_url = asset.browser_download_url
        if request.delivery is AssetDelivery.BYTES:
            download_url = None
            asset_bytes = await download_asset(client, repository, asset)
            await self._progress_update(f"Downloaded {asset.name}")

        deleted = False
        if request.auto_delete:
            if request.delivery is AssetDelivery.URL:
                logger.warning("Deleting the repository invalidates the returned asset URL")
            deleted = await cleanup_repository(client, repository)
            if deleted:
                await self._progress_update("Temporary repository deleted")

        return BuildResult(
            repository_url=repository.html_url,
            release_url=release.html_url or f"{repository.html_url}/releases/latest",
            asset_name=asset.name,
            run_id=run.id,
            asset_download_url=download_url,
            asset_bytes=asset_bytes,
            repository_deleted=deleted,
        )


async def upload_and_build(
    request: BuildRequest,
    progress: ProgressSink | None = None,
    client: GitHubClient | None = None,
) -> BuildResult:
    """Run one build with a default orchestrator."""
    return await RemoteBuildOrchestrator(client=client, progress=progress).run(request)
