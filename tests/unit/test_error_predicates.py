"""Tests for routing-missing detection on raw error bodies."""

import pytest

from docsearch.infrastructure.search.error_predicates import MarkerRoutingMissingPredicate

LEGACY_BODY = (
    '{"error":"RoutingMissingException[[orders] routing is required for '
    '[orders]/[orderline]/[3]]","status":400}'
)
CURRENT_BODY = (
    '{"error":{"root_cause":[{"type":"routing_missing_exception",'
    '"reason":"routing is required for [orders]/[orderline]/[3]"}]},"status":400}'
)


@pytest.mark.parametrize("body", [LEGACY_BODY, CURRENT_BODY])
def test_default_markers_match(body: str) -> None:
    assert MarkerRoutingMissingPredicate()(body)


def test_other_bad_request_does_not_match() -> None:
    body = '{"error":{"root_cause":[{"type":"parsing_exception"}]},"status":400}'
    assert not MarkerRoutingMissingPredicate()(body)


def test_custom_markers_replace_defaults() -> None:
    predicate = MarkerRoutingMissingPredicate(["parent_required"])
    assert predicate("error: parent_required for child")
    assert not predicate(LEGACY_BODY)


def test_blank_markers_rejected() -> None:
    with pytest.raises(ValueError, match="at least one"):
        MarkerRoutingMissingPredicate(["", ""])
