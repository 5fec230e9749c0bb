"""Notifier port: the channel mutations report success and failure through."""

from abc import ABC, abstractmethod

from onerp_admin.domain.entities import Notification


class Notifier(ABC):
    """Port: shows a notification to the user (toast, log line, ...)."""

    @abstractmethod
    def notify(self, notification: Notification) -> None:
        ...
