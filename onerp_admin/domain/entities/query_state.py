"""State of cached queries and of mutations."""

from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from typing import Any


class RequestStatus(str, Enum):
    """Lifecycle of a query or a mutation."""

    IDLE = "idle"
    PENDING = "pending"
    SUCCESS = "success"
    ERROR = "error"


@dataclass
class QueryState:
    """One entry of the query cache."""

    data: Any = None
    error: Exception | None = None
    status: RequestStatus = RequestStatus.IDLE
    is_stale: bool = True
    updated_at: datetime | None = None
    fetch_count: int = 0

    @property
    def has_data(self) -> bool:
        return self.updated_at is not None


@dataclass
class MutationState:
    """Pending/error/success state of a mutation, exposed for the UI."""

    status: RequestStatus = RequestStatus.IDLE
    data: Any = None
    error: Exception | None = None

    @property
    def is_pending(self) -> bool:
        return self.status == RequestStatus.PENDING

    @property
    def is_success(self) -> bool:
        return self.status == RequestStatus.SUCCESS

    @property
    def is_error(self) -> bool:
        return self.status == RequestStatus.ERROR
