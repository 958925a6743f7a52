"""
Workflow run polling.

The most recent run of the repository is fetched on every attempt. A run
without a conclusion is pending; ``success`` ends the wait, ``failure``,
``cancelled`` and ``timed_out`` fail it. HTTP errors while fetching are
transient and only consume the attempt.
"""

import asyncio

from packager.core.exceptions import GitHubAPIError, WorkflowFailedError, WorkflowTimeoutError
from packager.core.logging import get_logger
from packager.services.github.client import GitHubClient
from packager.services.github.schemas import ScratchRepository, WorkflowRun
from packager.services.polling import CheckResult, PollStatus, Sleep, poll_until
from packager.services.progress import ProgressSink, notify_progress

logger = get_logger(__name__)


async def fetch_latest_run(client: GitHubClient, repository: ScratchRepository) -> WorkflowRun | None:
    """
    Return a fresh snapshot of the most recent run, or None if none is visible.

    Raises:
        GitHubAPIError: If the list or detail fetch fails
    """
    runs = await client.list_workflow_runs(repository.owner, repository.name, per_page=1)
    if not runs:
        return None
    return await client.get_workflow_run(repository.owner, repository.name, runs[0].id)


async def wait_for_run(
    client: GitHubClient,
    repository: ScratchRepository,
    *,
    poll_interval_ms: int = 10000,
    poll_max_attempts: int = 60,
    first_poll_delay_ms: int = 2000,
    progress: ProgressSink | None = None,
    sleep: Sleep = asyncio.sleep,
) -> WorkflowRun:
    """
    Block until the latest run concludes.

    Returns:
        The successful run

    Raises:
        WorkflowFailedError: On a failure, cancelled or timed_out conclusion
        WorkflowTimeoutError: If no terminal conclusion within the attempt ceiling
    """

    async def check(attempt: int) -> CheckResult:
        try:
            run = await fetch_latest_run(client, repository)
        except (GitHubAPIError, ValueError, KeyError) as e:
            logger.debug(f"Attempt {attempt}: run fetch failed, retrying: {e}")
            return CheckResult.pending()

        if run is None:
            logger.debug(f"Attempt {attempt}: no workflow run visible yet")
            return CheckResult.pending()

        await notify_progress(
            progress,
            f"Workflow status: {run.status}, conclusion: {run.conclusion or 'pending'}",
        )
        if run.succeeded:
            return CheckResult.success(run)
        if run.failed:
            return CheckResult.failure(run.conclusion, run)
        return CheckResult.pending()

    outcome = await poll_until(
        check,
        interval=poll_interval_ms / 1000,
        max_attempts=poll_max_attempts,
        first_interval=first_poll_delay_ms / 1000,
        sleep=sleep,
    )

    if outcome.status is PollStatus.SUCCESS:
        logger.info(f"Workflow run {outcome.value.id} succeeded after {outcome.attempts} attempts")
        return outcome.value
    if outcome.status is PollStatus.FAILURE:
        raise WorkflowFailedError(outcome.reason)
    raise WorkflowTimeoutError(outcome.attempts)
