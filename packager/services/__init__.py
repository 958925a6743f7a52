# Services module - external API integrations
from .polling import PollOutcome, PollStatus, poll_until
from .progress import CallbackProgressSink, LoggingProgressSink, ProgressSink, TelegramProgressSink, notify_progress

__all__ = [
    "CallbackProgressSink",
    "LoggingProgressSink",
    "PollOutcome",
    "PollStatus",
    "ProgressSink",
    "TelegramProgressSink",
    "notify_progress",
    "poll_until",
]
