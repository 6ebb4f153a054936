"""Detection of service-specific error conditions in raw error bodies."""

from collections.abc import Iterable
from typing import Protocol

DEFAULT_ROUTING_MISSING_MARKERS: tuple[str, ...] = (
    "RoutingMissingException",
    "routing_missing_exception",
)


class RoutingMissingPredicate(Protocol):
    """Returns True when an error body reports a child document fetched without routing."""

    def __call__(self, error_body: str) -> bool: ...


class MarkerRoutingMissingPredicate:
    """Substring match of the error body against a set of markers."""

    def __init__(self, markers: Iterable[str] = DEFAULT_ROUTING_MISSING_MARKERS) -> None:
        self.markers = tuple(m for m in markers if m)
        if not self.markers:
            raise ValueError("at least one routing-missing marker is required")

    def __call__(self, error_body: str) -> bool:
        return any(marker in error_body for marker in self.markers)

    def __repr__(self) -> str:
        return f"MarkerRoutingMissingPredicate(markers={self.markers!r})"
