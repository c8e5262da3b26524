"""Error Hierarchy: codes, statuses and the REST envelope.

Tests cover:
    - each domain error carries its code, category and HTTP status
    - category/tag/master errors name the offending id
    - to_response() exposes context ids
"""

import pytest

from ticketing.core.errors import (
    CategoryNotFoundError, DatabaseError, ErrorCategory, MasterNotFoundError,
    RespondAlreadyExistsError, RespondNotFoundError, RespondToOwnTicketError,
    TagNotFoundError, TaxonomyServiceError, TicketAlreadyExistsError,
    TicketNotFoundError, TicketingError,
)


@pytest.mark.parametrize(
    "error, code, status",
    [
        (TicketNotFoundError(1), "TICKET_NOT_FOUND", 404),
        (TicketAlreadyExistsError(), "TICKET_ALREADY_EXISTS", 409),
        (RespondNotFoundError(1), "RESPOND_NOT_FOUND", 404),
        (RespondAlreadyExistsError(), "RESPOND_ALREADY_EXISTS", 409),
        (RespondToOwnTicketError(), "RESPOND_TO_OWN_TICKET", 400),
        (CategoryNotFoundError(5), "CATEGORY_NOT_FOUND", 404),
        (TagNotFoundError(6), "TAG_NOT_FOUND", 404),
        (MasterNotFoundError(7), "MASTER_NOT_FOUND", 404),
        (DatabaseError("boom", "commit"), "DATABASE_ERROR", 503),
        (TaxonomyServiceError("down", "connection_error"), "TAXONOMY_SERVICE_ERROR", 503),
    ],
)
def test_error_codes_and_statuses(error, code, status):
    assert isinstance(error, TicketingError)
    assert error.code == code
    assert error.http_status == status


def test_taxonomy_errors_name_the_missing_id():
    assert str(CategoryNotFoundError(42)) == "category with ID=42 not found"
    assert str(TagNotFoundError(13)) == "tag with ID=13 not found"
    assert MasterNotFoundError(8).user_id == 8


def test_database_error_message_includes_operation():
    error = DatabaseError("Integrity constraint violated", "commit")
    assert error.message == "Database commit failed: Integrity constraint violated"
    assert error.category == ErrorCategory.DATABASE


def test_to_response_envelope_carries_context_ids():
    body = TicketNotFoundError(77).to_response()["error"]
    assert body["code"] == "TICKET_NOT_FOUND"
    assert body["category"] == "resource_not_found"
    assert body["context"]["ticket_id"] == 77
    assert "timestamp" in body
