"""Mutations: one write operation plus its pending/error/success state."""

import logging
from collections.abc import Awaitable, Callable
from dataclasses import dataclass
from typing import Any, Generic, TypeVar

from onerp_admin.domain.entities import MutationState, RequestStatus
from onerp_admin.domain.exceptions import AuthenticationError

logger = logging.getLogger(__name__)

T = TypeVar("T")


@dataclass(frozen=True)
class MutationMessages:
    """Notification texts used by module mutations."""

    created_title: str = "Created"
    created: str = "Record created successfully."
    updated_title: str = "Updated"
    updated: str = "Record updated successfully."
    deleted_title: str = "Deleted"
    deleted: str = "Record deleted successfully."
    error_title: str = "Error"
    unknown_error: str = "Unknown error"


class Mutation(Generic[T]):
    """Wraps an async write with state and success/error callbacks.

    ``mutate`` captures failures: the error is stored on ``state`` and handed
    to ``on_error``, and None is returned. The one exception is
    AuthenticationError, which is re-raised after being recorded so callers
    can send the user back to sign-in. ``mutate_async`` raises every failure.
    """

    def __init__(
        self,
        fn: Callable[..., Awaitable[T]],
        *,
        on_success: Callable[[T], None] | None = None,
        on_error: Callable[[Exception], None] | None = None,
    ):
        self._fn = fn
        self._on_success = on_success
        self._on_error = on_error
        self.state = MutationState()

    @property
    def is_pending(self) -> bool:
        return self.state.is_pending

    @property
    def is_error(self) -> bool:
        return self.state.is_error

    @property
    def is_success(self) -> bool:
        return self.state.is_success

    @property
    def error(self) -> Exception | None:
        return self.state.error

    @property
    def data(self) -> T | None:
        return self.state.data

    async def mutate_async(self, *args: Any, **kwargs: Any) -> T:
        """Run the write; callbacks fire, and failures are raised to the caller."""
        self.state = MutationState(status=RequestStatus.PENDING)
        try:
            result = await self._fn(*args, **kwargs)
        except Exception as exc:
            self.state = MutationState(status=RequestStatus.ERROR, error=exc)
            if self._on_error is not None:
                self._on_error(exc)
            raise
        self.state = MutationState(status=RequestStatus.SUCCESS, data=result)
        if self._on_success is not None:
            self._on_success(result)
        return result

    async def mutate(self, *args: Any, **kwargs: Any) -> T | None:
        """Run the write; failures end up in ``state`` and the error callback."""
        try:
            return await self.mutate_async(*args, **kwargs)
        except AuthenticationError:
            raise
        except Exception as exc:
            logger.debug("Mutation failed: %s", exc)
            return None

    def reset(self) -> None:
        self.state = MutationState()
