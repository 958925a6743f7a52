"""
Command line entry point: build an artifact through a scratch repository.
"""

import argparse
import logging
from contextlib import AsyncExitStack
from pathlib import Path

from pydantic import ValidationError
from telegram import Bot
from telegram.error import TelegramError

from packager.core.config import Settings, get_settings
from packager.core.exceptions import PackagerError
from packager.core.logging import get_logger, setup_logging
from packager.models.build import AssetDelivery, BuildRequest, BuildResult
from packager.services.build import RemoteBuildOrchestrator
from packager.services.progress import LoggingProgressSink, ProgressSink, TelegramProgressSink

logger = get_logger(__name__)


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(
        prog="packager",
        description="Build an artifact with GitHub Actions in a temporary repository",
    )
    p.add_argument("artifact", help="Path to the file to upload")
    p.add_argument("--name", default=None, help="File name inside the repository (default: artifact file name)")
    p.add_argument("--owner", default=None, help="GitHub login owning the temporary repository")
    p.add_argument("--template", default=None, help="Template repository as owner/repo")
    p.add_argument("--workflow", default=None, help="Workflow file to dispatch")
    p.add_argument("--ref", default=None, help="Branch to dispatch the workflow on")
    p.add_argument("--auto-delete", dest="auto_delete", action="store_true", default=None,
                   help="Delete the temporary repository when done")
    p.add_argument("--keep", dest="auto_delete", action="store_false", default=None,
                   help="Keep the temporary repository")
    p.add_argument("--download", action="store_true", help="Download the release asset instead of printing its URL")
    p.add_argument("--output", default=None, help="Where to write the downloaded asset")
    p.add_argument("--poll-interval-ms", type=int, default=None)
    p.add_argument("--poll-max-attempts", type=int, default=None)
    p.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")
    return p


def request_from_args(args: argparse.Namespace, settings: Settings) -> BuildRequest:
    """Combine settings and command line overrides into a BuildRequest."""
    path = Path(args.artifact)
    if not path.is_file():
        raise PackagerError(f"Artifact not found: {path}")

    overrides: dict = {}
    if args.owner:
        overrides["owner_login"] = args.owner
    if args.template:
        template_owner, _, template_repo = args.template.partition("/")
        overrides["template_owner"] = template_owner
        overrides["template_repo"] = template_repo
    if args.workflow:
        overrides["workflow_file"] = args.workflow
    if args.ref:
        overrides["ref"] = args.ref
    if args.auto_delete is not None:
        overrides["auto_delete"] = args.auto_delete
    if args.download:
        overrides["delivery"] = AssetDelivery.BYTES
    if args.poll_interval_ms is not None:
        overrides["poll_interval_ms"] = args.poll_interval_ms
    if args.poll_max_attempts is not None:
        overrides["poll_max_attempts"] = args.poll_max_attempts

    return BuildRequest.from_settings(
        settings,
        artifact=path.read_bytes(),
        artifact_name=args.name or path.name,
        **overrides,
    )


def report(result: BuildResult, output: str | None) -> None:
    """Print the result and store downloaded bytes."""
    print(f"Repository: {result.repository_url}")
    print(f"Release:    {result.release_url}")
    print(f"Asset:      {result.asset_name}")
    if result.asset_download_url:
        print(f"Download:   {result.asset_download_url}")
    if result.asset_bytes is not None:
        target = Path(output or result.asset_name)
        target.write_bytes(result.asset_bytes)
        print(f"Saved:      {target} ({len(result.asset_bytes)} bytes)")


async def main(argv: list[str] | None = None) -> int:
    """Main application entry point."""
    args = build_parser().parse_args(argv)
    setup_logging(logging.DEBUG if args.verbose else logging.INFO)
    try:
        settings = get_settings()
    except ValidationError as e:
        logger.error(f"Invalid configuration: {e}")
        return 1

    async with AsyncExitStack() as stack:
        progress: ProgressSink = LoggingProgressSink()
        if settings.tg_token and settings.progress_chat:
            try:
                bot = await stack.enter_async_context(Bot(settings.tg_token))
            except TelegramError as e:
                logger.warning(f"Telegram progress disabled: {e}")
            else:
                progress = TelegramProgressSink(bot, settings.progress_chat, settings.progress_topic)

        orchestrator = RemoteBuildOrchestrator(
            progress=progress,
            api_base=settings.github_api_base,
            timeout=settings.http_timeout,
        )
        try:
            request = request_from_args(args, settings)
            result = await orchestrator.run(request)
        except PackagerError as e:
            logger.error(f"Build failed: {e}")
            return 1

    report(result, args.output)
    return 0
