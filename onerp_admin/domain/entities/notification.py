"""Domain entity for user-facing notifications raised by module mutations."""

from dataclasses import dataclass
from enum import Enum


class NotificationVariant(str, Enum):
    """Visual weight of a notification."""

    DEFAULT = "default"
    DESTRUCTIVE = "destructive"


@dataclass
class Notification:
    """A short toast-like message: a title plus a description."""

    title: str
    description: str
    variant: NotificationVariant = NotificationVariant.DEFAULT

    @property
    def is_error(self) -> bool:
        return self.variant == NotificationVariant.DESTRUCTIVE
