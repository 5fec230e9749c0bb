"""Notifier that writes notifications to the log and keeps a history."""

import logging

from onerp_admin.application.interfaces import Notifier
from onerp_admin.domain.entities import Notification

logger = logging.getLogger(__name__)


class LoggingNotifier(Notifier):
    """Logs each notification; destructive ones at WARNING level.

    The history is kept in memory so callers (CLIs, tests) can inspect what
    the user would have been shown.
    """

    def __init__(self, max_history: int = 100):
        self._history: list[Notification] = []
        self._max_history = max_history

    def notify(self, notification: Notification) -> None:
        if notification.is_error:
            logger.warning("%s: %s", notification.title, notification.description)
        else:
            logger.info("%s: %s", notification.title, notification.description)
        self._history.append(notification)
        if len(self._history) > self._max_history:
            del self._history[: len(self._history) - self._max_history]

    @property
    def history(self) -> list[Notification]:
        return list(self._history)

    def clear(self) -> None:
        self._history.clear()
