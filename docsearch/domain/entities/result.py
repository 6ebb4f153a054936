"""Result envelope returned by every fetch operation."""

from dataclasses import dataclass
from enum import Enum
from http import HTTPStatus
from typing import Generic, TypeVar

T = TypeVar("T")


class FetchOutcome(str, Enum):
    """Whether a fetch ran to completion or was cut short by its cancellation token."""

    COMPLETED = "completed"
    CANCELLED = "cancelled"


@dataclass
class ResultDetails(Generic[T]):
    """Status, payload and diagnostics of a single fetch.

    status starts as INTERNAL_SERVER_ERROR and is replaced with the response
    status once the service answers; a fetch cancelled before that keeps the
    sentinel and is tagged with FetchOutcome.CANCELLED. payload_result is only
    set for a 200 response that carried a payload.
    """

    status: HTTPStatus | int = HTTPStatus.INTERNAL_SERVER_ERROR
    description: str | None = None
    request_url: str | None = None
    payload_result: T | None = None
    outcome: FetchOutcome = FetchOutcome.COMPLETED

    @property
    def ok(self) -> bool:
        return self.status == HTTPStatus.OK

    @property
    def cancelled(self) -> bool:
        return self.outcome is FetchOutcome.CANCELLED
