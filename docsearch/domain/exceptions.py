"""Domain exceptions for the docsearch client.

Defines the errors raised to callers of the document fetch API. HTTP-level
outcomes (400, 404, other statuses) are normally returned as data on the
asynchronous API; these exceptions cover the cases where the client raises
instead.
"""

from http import HTTPStatus
from typing import Any


class DocsearchException(Exception):
    """Base exception for all docsearch client errors.

    Attributes:
        message: Human-readable error description.
        error_code: Machine-readable error code.
        details: Additional error context (e.g. status, request_url).
    """

    def __init__(
        self,
        message: str,
        error_code: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        """Initialize the exception.

        Args:
            message: Human-readable error description.
            error_code: Optional machine-readable code; defaults to class name.
            details: Optional dict of extra context.
        """
        self.message = message
        self.error_code = error_code or self.__class__.__name__
        self.details = details or {}
        super().__init__(self.message)

    def to_dict(self) -> dict[str, Any]:
        """Return a JSON-serializable representation (error, message, details)."""
        return {
            "error": self.error_code,
            "message": self.message,
            "details": self.details,
        }


class ConfigurationException(DocsearchException):
    """Raised when the client is constructed with invalid configuration."""

    def __init__(self, message: str, field: str | None = None) -> None:
        details = {"field": field} if field else {}
        super().__init__(message, "CONFIGURATION_ERROR", details)


class MappingNotFoundException(DocsearchException):
    """Raised when an entity type has no registered index mapping."""

    def __init__(self, entity_type: type) -> None:
        """Initialize with the unregistered entity type.

        Args:
            entity_type: The type that was looked up in the mapping registry.
        """
        super().__init__(
            f"No document mapping registered for type: {entity_type.__qualname__}",
            "MAPPING_NOT_FOUND",
            {"entity_type": entity_type.__qualname__},
        )


class DocumentClientException(DocsearchException):
    """Raised when the document service answers a fetch with a client error.

    Attributes:
        status: HTTP status returned by the service.
        request_url: URL that was requested, when known.
    """

    def __init__(
        self,
        message: str,
        status: HTTPStatus,
        request_url: str | None = None,
        error_code: str = "DOCUMENT_CLIENT_ERROR",
        details: dict[str, Any] | None = None,
    ) -> None:
        self.status = status
        self.request_url = request_url
        merged: dict[str, Any] = {"status": int(status)}
        if request_url:
            merged["request_url"] = request_url
        merged.update(details or {})
        super().__init__(message, error_code, merged)


class DocumentNotFoundException(DocumentClientException):
    """Raised by the blocking API when the service returns 404 Not Found."""

    def __init__(self, request_url: str | None = None) -> None:
        super().__init__(
            "Document fetch failed: HTTPStatus.NOT_FOUND",
            HTTPStatus.NOT_FOUND,
            request_url,
            "DOCUMENT_NOT_FOUND",
        )


class BadRequestException(DocumentClientException):
    """Raised by the blocking API when the service returns 400 Bad Request."""

    def __init__(self, description: str | None, request_url: str | None = None) -> None:
        """Initialize with the error body returned by the service.

        Args:
            description: Raw error body; appended to the message.
            request_url: URL that was requested.
        """
        self.description = description
        super().__init__(
            f"Document fetch failed: HTTPStatus.BAD_REQUEST {description or ''}".rstrip(),
            HTTPStatus.BAD_REQUEST,
            request_url,
            "BAD_REQUEST",
            {"description": description} if description else None,
        )


class RoutingMissingException(DocumentClientException):
    """Raised as soon as the service reports a child document fetched without routing.

    Unlike other 400 responses this is raised by the asynchronous API too:
    the caller has to add the parent id / routing key and retry.
    """

    def __init__(self, description: str, request_url: str | None = None) -> None:
        self.description = description
        super().__init__(
            "HTTPStatus.BAD_REQUEST: routing key required for child document, "
            "add the parent id if this is a child item",
            HTTPStatus.BAD_REQUEST,
            request_url,
            "ROUTING_MISSING",
            {"description": description},
        )
