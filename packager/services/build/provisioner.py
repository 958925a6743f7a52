"""
Scratch repository provisioning.

Template generation is preferred. Some tokens or accounts may not be allowed
to generate from a template (or the source is not marked as a template), so a
failed generation falls back to a plain auto-initialized repository and the
template's files are copied into it one by one.
"""

from packager.core.exceptions import GitHubAPIError, ProvisioningError
from packager.core.logging import get_logger
from packager.services.github.client import GitHubClient
from packager.services.github.schemas import ScratchRepository
from packager.services.progress import ProgressSink, notify_progress

logger = get_logger(__name__)

DEFAULT_BRANCH = "main"


async def resolve_default_branch(client: GitHubClient, owner: str, repo: str) -> str:
    """Return the repository's default branch, or ``main`` if lookup fails."""
    try:
        info = await client.get_repository(owner, repo)
    except GitHubAPIError as e:
        logger.warning(f"Could not read {owner}/{repo}, using default branch {DEFAULT_BRANCH}: {e}")
        return DEFAULT_BRANCH
    return info.get("default_branch") or DEFAULT_BRANCH


async def copy_template_contents(
    client: GitHubClient,
    template_owner: str,
    template_repo: str,
    owner: str,
    repo: str,
) -> tuple[list[str], list[str]]:
    """
    Copy every blob of the template into the target repository.

    Best effort: a file that cannot be read or written is logged and skipped.

    Returns:
        Tuple of (copied_paths, skipped_paths)
    """
    branch = await resolve_default_branch(client, template_owner, template_repo)

    try:
        tree = await client.get_tree(template_owner, template_repo, branch, recursive=True)
    except GitHubAPIError as e:
        logger.warning(f"Could not list template tree, skipping copy: {e.body or e}")
        return [], []

    copied: list[str] = []
    skipped: list[str] = []

    for entry in tree:
        if not entry.is_blob:
            continue
        try:
            content = await client.get_blob(template_owner, template_repo, entry.sha)
            await client.put_file_contents(
                owner,
                repo,
                entry.path,
                content,
                message=f"Add template file {entry.path}",
            )
        except GitHubAPIError as e:
            logger.warning(f"Failed to copy template file {entry.path}: {e.body or e}")
            skipped.append(entry.path)
            continue
        copied.append(entry.path)

    logger.info(
        f"Copied {len(copied)} template files into {owner}/{repo} ({len(skipped)} skipped)"
    )
    return copied, skipped


async def provision_repository(
    client: GitHubClient,
    *,
    name: str,
    owner: str,
    template_owner: str,
    template_repo: str,
    private: bool = False,
    progress: ProgressSink | None = None,
) -> ScratchRepository:
    """
    Create the scratch repository.

    Raises:
        ProvisioningError: If both template generation and plain creation fail
    """
    await notify_progress(progress, "Generating temporary repository from template...")
    try:
        data = await client.generate_from_template(
            template_owner,
            template_repo,
            name=name,
            owner=owner,
            private=private,
        )
    except GitHubAPIError as generate_error:
        logger.info(f"Template generation failed ({generate_error.status_code}), creating plain repository")
        await notify_progress(progress, "Template generation failed, creating temporary repository...")
        try:
            data = await client.create_repository(
                name=name,
                private=private,
                auto_init=True,
                description="Temp repo created by packager",
            )
        except GitHubAPIError as fallback_error:
            raise ProvisioningError(generate_error, fallback_error) from fallback_error

        repository = ScratchRepository.from_api(owner, name, data, from_template=False)
        await copy_template_contents(client, template_owner, template_repo, owner, name)
        await notify_progress(progress, "Template contents copied into the new repository")
        return repository

    repository = ScratchRepository.from_api(owner, name, data, from_template=True)
    await notify_progress(progress, f"Repository generated from template: {repository.html_url}")
    return repository
