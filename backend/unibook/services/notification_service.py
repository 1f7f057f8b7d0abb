"""
Notification sinks.

Email delivery is not configured for this deployment; the logging sink
records every message so operators can see what would have been sent.
"""

from typing import Optional

from unibook.core.logging import get_logger
from unibook.services.interfaces.notification import NotificationSink

logger = get_logger(__name__)


class LoggingNotificationSink(NotificationSink):

    def send(self, recipient: str, subject: str, body: str) -> None:
        logger.info(
            "notification_sent",
            recipient=recipient,
            subject=subject,
            body=body,
        )


_sink: Optional[NotificationSink] = None


def get_notifier() -> NotificationSink:
    """Get notification sink singleton."""
    global _sink
    if _sink is None:
        _sink = LoggingNotificationSink()
    return _sink


class DeferredNotificationSink(NotificationSink):
    """
    Queues messages until flush() so handlers can notify only after the
    store write succeeded. Delivery outcomes are recorded at flush time,
    when the message actually reaches the target sink.
    """

    def __init__(self, target: NotificationSink):
        self.target = target
        self.pending: list[tuple[str, str, str, str]] = []

    def send(self, recipient: str, subject: str, body: str) -> None:
        self.deliver("message", recipient, subject, body)

    def deliver(self, kind: str, recipient: str, subject: str, body: str) -> bool:
        self.pending.append((kind, recipient, subject, body))
        return True

    def flush(self) -> None:
        pending, self.pending = self.pending, []
        for kind, recipient, subject, body in pending:
            self.target.deliver(kind, recipient, subject, body)
