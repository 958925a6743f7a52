"""
Progress notification sinks.

A sink receives human-readable status strings at every stage boundary of a
build. Sink failures never abort the build.
"""

import inspect
from typing import Any, Callable, Protocol, runtime_checkable

from telegram import Bot

from packager.core.logging import get_logger

logger = get_logger(__name__)


@runtime_checkable
class ProgressSink(Protocol):
    """Receiver of progress messages. ``notify`` may be sync or async."""

    def notify(self, message: str) -> Any: ...


class LoggingProgressSink:
    """Write progress messages to the log."""

    def __init__(self, name: str = "packager.progress"):
        self._logger = get_logger(name)

    def notify(self, message: str) -> None:
        self._logger.info(message)


class CallbackProgressSink:
    """Adapt a plain callable (sync or async) to the sink interface."""

    def __init__(self, callback: Callable[[str], Any]):
        self._callback = callback

    def notify(self, message: str) -> Any:
        return self._callback(message)


class TelegramProgressSink:
    """Send progress messages to a Telegram chat, optionally into a topic."""

    def __init__(self, bot: Bot, chat_id: int, topic_id: int | None = None):
        self._bot = bot
        self._chat_id = chat_id
        self._topic_id = topic_id

    async def notify(self, message: str) -> None:
        kwargs = {
            "chat_id": self._chat_id,
            "text": message,
        }
        if self._topic_id:
            kwargs["message_thread_id"] = self._topic_id

        await self._bot.send_message(**kwargs)


async def notify_progress(sink: ProgressSink | Callable[[str], Any] | None, message: str) -> None:
    """Deliver a message to the sink, discarding any sink failure."""
    if sink is None:
        return

    try:
        notify = sink.notify if hasattr(sink, "notify") else sink
        result = notify(message)
        if inspect.isawaitable(result):
            await result
    except Exception as e:
        logger.warning(f"Progress sink error: {e}")
