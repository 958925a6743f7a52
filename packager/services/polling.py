"""
Bounded polling helper.
"""

import asyncio
from dataclasses import dataclass
from enum import Enum
from typing import Any, Awaitable, Callable

from packager.core.logging import get_logger

logger = get_logger(__name__)


class PollStatus(str, Enum):
    """Exit condition of a poll loop."""

    SUCCESS = "success"
    FAILURE = "failure"
    EXHAUSTED = "exhausted"


@dataclass(frozen=True)
class CheckResult:
    """Outcome of a single check. ``done`` False means keep polling."""

    done: bool = False
    ok: bool = True
    value: Any = None
    reason: str | None = None

    @classmethod
    def pending(cls) -> "CheckResult":
        return cls()

    @classmethod
    def success(cls, value: Any = None) -> "CheckResult":
        return cls(done=True, ok=True, value=value)

    @classmethod
    def failure(cls, reason: str, value: Any = None) -> "CheckResult":
        return cls(done=True, ok=False, value=value, reason=reason)


@dataclass(frozen=True)
class PollOutcome:
    """Tagged result of ``poll_until``."""

    status: PollStatus
    attempts: int
    value: Any = None
    reason: str | None = None


Sleep = Callable[[float], Awaitable[Any]]


async def poll_until(
    check: Callable[[int], Awaitable[CheckResult]],
    interval: float,
    max_attempts: int,
    first_interval: float | None = None,
    sleep: Sleep = asyncio.sleep,
) -> PollOutcome:
    """
    Call ``check`` until it reports a terminal result or attempts run out.

    Every attempt sleeps before checking: ``first_interval`` before the
    first one (``interval`` when None), ``interval`` afterwards.

    Args:
        check: Coroutine function receiving the 1-based attempt number
        interval: Seconds between attempts
        max_attempts: Attempt ceiling
        first_interval: Seconds before the first attempt
        sleep: Awaitable sleep, replaceable in tests

    Returns:
        PollOutcome tagged SUCCESS, FAILURE or EXHAUSTED
    """
    if first_interval is None:
        first_interval = interval

    attempt = 0
    while attempt < max_attempts:
        attempt += 1
        await sleep(first_interval if attempt == 1 else interval)

        result = await check(attempt)
        if not result.done:
            continue
        if result.ok:
            return PollOutcome(PollStatus.SUCCESS, attempt, value=result.value)
        return PollOutcome(PollStatus.FAILURE, attempt, value=result.value, reason=result.reason)

    logger.debug("Polling exhausted after %d attempts", attempt)
    return PollOutcome(PollStatus.EXHAUSTED, attempt)
