"""
Notification sink interface.
"""

from abc import ABC, abstractmethod

from unibook.core.logging import get_logger
from unibook.core.metrics import record_notification

logger = get_logger(__name__)


class NotificationSink(ABC):
    """
    Accepts a message for delivery.

    Delivery is best-effort: deliver() logs and counts failures so a broken
    sink never fails the request that triggered it.
    """

    @abstractmethod
    def send(self, recipient: str, subject: str, body: str) -> None:
        pass

    def deliver(self, kind: str, recipient: str, subject: str, body: str) -> bool:
        """Send one message and record the outcome under `kind`. Never raises."""
        try:
            self.send(recipient, subject, body)
        except Exception as e:
            record_notification(kind, sent=False)
            logger.warning("notification_failed", kind=kind, recipient=recipient, error=str(e))
            return False
        record_notification(kind, sent=True)
        return True
