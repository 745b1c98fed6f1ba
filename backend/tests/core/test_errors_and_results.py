"""Errors & Results - tests for the error envelope and the tagged handler result.

Tests cover:
    - CommandValidationError carries every failure into the response details
    - Status codes per error type
    - Success / Failure tags
"""

from expense_tracker.core.errors import (
    CommandValidationError, DatabaseError, FieldFailure, ResourceNotFoundError,
    RouteMismatchError, UnknownRequestError,
)
from expense_tracker.core.results import (
    EXPENSE_NOT_FOUND, Failure, Success, is_success,
)


def test_command_validation_error_lists_all_failures():
    failures = [
        FieldFailure("amount", "Amount must be greater than zero."),
        FieldFailure("currency", "Currency must be a 3-letter code."),
    ]
    exc = CommandValidationError(failures, "CreateExpenseCommand")
    body = exc.to_response()["error"]
    assert exc.http_status == 400
    assert body["code"] == "VALIDATION_ERROR"
    assert body["category"] == "validation"
    assert body["details"] == [
        {"field": "amount", "message": "Amount must be greater than zero."},
        {"field": "currency", "message": "Currency must be a 3-letter code."},
    ]
    assert "CreateExpenseCommand" in exc.message


def test_error_status_codes():
    assert ResourceNotFoundError(EXPENSE_NOT_FOUND).http_status == 404
    assert RouteMismatchError("a", "b").http_status == 400
    assert UnknownRequestError("X").http_status == 500
    assert DatabaseError("boom", "commit").http_status == 500


def test_route_mismatch_names_both_ids():
    body = RouteMismatchError("route-1", "body-2").to_response()["error"]
    assert body["code"] == "ROUTE_ID_MISMATCH"
    assert body["details"] == [
        {"field": "id", "message": "Body id body-2 does not match route id route-1."},
    ]


def test_not_found_response_envelope():
    body = ResourceNotFoundError(EXPENSE_NOT_FOUND).to_response()["error"]
    assert body["code"] == "RESOURCE_NOT_FOUND"
    assert body["message"] == "Expense not found."
    assert "details" not in body


def test_success_and_failure_tags():
    assert is_success(Success(1))
    assert Success().value is None
    assert not is_success(Failure("nope"))
    assert Failure("nope").message == "nope"
