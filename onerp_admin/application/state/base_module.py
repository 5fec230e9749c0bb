"""Shared mutation wiring for entity modules."""

import logging
from collections.abc import Hashable

from onerp_admin.application.interfaces import Notifier
from onerp_admin.application.state.mutation import Mutation, MutationMessages
from onerp_admin.application.state.query_cache import QueryCache
from onerp_admin.application.use_cases import EntityActions, EntityRecord
from onerp_admin.domain.entities import Notification, NotificationVariant

logger = logging.getLogger(__name__)


class BaseModule:
    """Create/update/delete mutations that invalidate the module's queries.

    On success every cached query under ``(module_key,)`` is marked stale and
    a success notification is sent; on failure a destructive notification
    carries the error message.
    """

    def __init__(
        self,
        module_key: str,
        actions: EntityActions,
        cache: QueryCache,
        notifier: Notifier,
        *,
        messages: MutationMessages | None = None,
    ):
        self._module_key = module_key
        self._actions = actions
        self._cache = cache
        self._notifier = notifier
        self._messages = messages or MutationMessages()

        msgs = self._messages
        self.create_mutation: Mutation[EntityRecord] = Mutation(
            actions.create,
            on_success=lambda _: self._after_mutation(msgs.created_title, msgs.created),
            on_error=self._notify_error,
        )
        self.update_mutation: Mutation[EntityRecord] = Mutation(
            actions.update,
            on_success=lambda _: self._after_mutation(msgs.updated_title, msgs.updated),
            on_error=self._notify_error,
        )
        self.delete_mutation: Mutation[None] = Mutation(
            actions.remove,
            on_success=lambda _: self._after_mutation(msgs.deleted_title, msgs.deleted),
            on_error=self._notify_error,
        )

    @property
    def module_key(self) -> str:
        return self._module_key

    @property
    def actions(self) -> EntityActions:
        return self._actions

    @property
    def invalidation_prefix(self) -> tuple[Hashable, ...]:
        return (self._module_key,)

    def invalidate(self) -> int:
        return self._cache.invalidate(self.invalidation_prefix)

    def _after_mutation(self, title: str, description: str) -> None:
        marked = self.invalidate()
        logger.debug("%s: mutation succeeded, %d queries marked stale", self._module_key, marked)
        self._notifier.notify(Notification(title=title, description=description))

    def _notify_error(self, error: Exception) -> None:
        message = str(error) or self._messages.unknown_error
        logger.info("%s: mutation failed: %s", self._module_key, message)
        self._notifier.notify(
            Notification(
                title=self._messages.error_title,
                description=message,
                variant=NotificationVariant.DESTRUCTIVE,
            )
        )
