"""Tests for domain exceptions (error_code, message, details)."""

from http import HTTPStatus

from docsearch.domain.exceptions import (
    BadRequestException,
    ConfigurationException,
    DocsearchException,
    DocumentClientException,
    DocumentNotFoundException,
    MappingNotFoundException,
    RoutingMissingException,
)
from tests.entities import Order


def test_docsearch_exception_default_error_code() -> None:
    """Base DocsearchException uses class name as error_code when not provided."""
    exc = DocsearchException("Something failed")
    assert exc.message == "Something failed"
    assert exc.error_code == "DocsearchException"
    assert exc.details == {}


def test_to_dict() -> None:
    exc = DocsearchException("Oops", error_code="CUSTOM", details={"key": "value"})
    assert exc.to_dict() == {
        "error": "CUSTOM",
        "message": "Oops",
        "details": {"key": "value"},
    }


def test_not_found_identifies_status() -> None:
    """DocumentNotFoundException message names NOT_FOUND and carries the URL."""
    exc = DocumentNotFoundException("https://es.local:9200/orders/order/42")
    assert isinstance(exc, DocumentClientException)
    assert exc.status == HTTPStatus.NOT_FOUND
    assert "NOT_FOUND" in exc.message
    assert exc.error_code == "DOCUMENT_NOT_FOUND"
    assert exc.details == {
        "status": 404,
        "request_url": "https://es.local:9200/orders/order/42",
    }


def test_bad_request_includes_description() -> None:
    exc = BadRequestException('{"error":"parse failure"}')
    assert exc.status == HTTPStatus.BAD_REQUEST
    assert "BAD_REQUEST" in exc.message
    assert '{"error":"parse failure"}' in exc.message
    assert exc.details["description"] == '{"error":"parse failure"}'


def test_bad_request_without_description() -> None:
    exc = BadRequestException(None)
    assert exc.message == "Document fetch failed: HTTPStatus.BAD_REQUEST"
    assert "description" not in exc.details


def test_routing_missing_is_client_error() -> None:
    exc = RoutingMissingException("RoutingMissingException[routing is required]")
    assert isinstance(exc, DocumentClientException)
    assert exc.error_code == "ROUTING_MISSING"
    assert "routing key required for child document" in exc.message
    assert exc.description == "RoutingMissingException[routing is required]"


def test_mapping_not_found_names_type() -> None:
    exc = MappingNotFoundException(Order)
    assert exc.error_code == "MAPPING_NOT_FOUND"
    assert exc.details == {"entity_type": "Order"}
    assert "Order" in str(exc)


def test_configuration_exception_field() -> None:
    exc = ConfigurationException("base_url must not be empty", field="base_url")
    assert exc.error_code == "CONFIGURATION_ERROR"
    assert exc.details == {"field": "base_url"}
