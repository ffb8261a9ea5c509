"""User-facing notifications emitted by the search flow."""
import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import List

logger = logging.getLogger(__name__)

DEFAULT = "default"
DESTRUCTIVE = "destructive"


@dataclass
class Notification:
    """A short toast-style message."""
    title: str
    description: str
    variant: str = DEFAULT


class Notifier(ABC):
    """Receives notifications. Subclass to route them somewhere visible."""

    @abstractmethod
    def notify(self, notification: Notification) -> None:
        """Deliver one notification."""


class LoggingNotifier(Notifier):
    """Writes notifications to the log."""

    def notify(self, notification: Notification) -> None:
        level = logging.WARNING if notification.variant == DESTRUCTIVE else logging.INFO
        logger.log(level, f"{notification.title}: {notification.description}")


class RecordingNotifier(Notifier):
    """Keeps every notification in memory, in order."""

    def __init__(self):
        self.notifications: List[Notification] = []

    def notify(self, notification: Notification) -> None:
        self.notifications.append(notification)

    @property
    def titles(self) -> List[str]:
        return [n.title for n in self.notifications]
