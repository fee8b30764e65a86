import json
from unittest.mock import MagicMock

import pytest

from trip_planner.shared.domain import (
    BusinessRuleViolationException,
    DuplicateResourceException,
    TransactionConflictException,
)
from trip_planner.trip.domain.enum import TripAction, ValidationErrorKind
from trip_planner.trip.domain.exception import (
    PermissionDeniedException,
    ShareTokenCollisionException,
    TokenAllocationExhaustedException,
    TripValidationException,
    UnknownRoleException,
)
from trip_planner.trip.handlers.errors import handle_errors, to_error_response


class TestToErrorResponse:
    @pytest.mark.parametrize(
        "error, status_code, error_code",
        [
            (
                TripValidationException("title", ValidationErrorKind.TITLE_TOO_SHORT),
                400,
                "VALIDATION_ERROR",
            ),
            (DuplicateResourceException("exists"), 409, "DUPLICATE_RESOURCE"),
            (TransactionConflictException("busy"), 409, "TRANSACTION_CONFLICT"),
            (TokenAllocationExhaustedException("no tokens"), 503, "TOKEN_ALLOCATION_EXHAUSTED"),
            (BusinessRuleViolationException("broken"), 400, "BUSINESS_RULE_VIOLATION"),
        ],
    )
    def test_status_codes(self, error, status_code, error_code):
        response = to_error_response(error)

        assert response["statusCode"] == status_code
        body = json.loads(response["body"])
        assert body["status"] == "error"
        assert body["error_code"] == error_code

    def test_validation_details(self):
        response = to_error_response(
            TripValidationException("end_date", ValidationErrorKind.INVALID_DATE_RANGE)
        )

        assert json.loads(response["body"])["details"] == {
            "field": "end_date",
            "kind": ValidationErrorKind.INVALID_DATE_RANGE.value,
        }

    def test_non_participant_has_no_role(self):
        response = to_error_response(PermissionDeniedException(None, TripAction.VIEW_TRIP))

        assert response["statusCode"] == 403
        details = json.loads(response["body"])["details"]
        assert details["action"] == "view_trip"
        assert details.get("role") is None

    def test_unknown_role_is_not_mapped(self):
        assert to_error_response(UnknownRoleException("admin")) is None


class TestHandleErrors:
    def test_passes_through_success(self):
        handler = handle_errors(MagicMock())(lambda event, context: {"statusCode": 200})

        assert handler({}, None) == {"statusCode": 200}

    def test_unknown_role_is_internal_error(self):
        logger = MagicMock()

        def handler(event, context):
            raise UnknownRoleException("admin")

        response = handle_errors(logger)(handler)({}, None)

        assert response["statusCode"] == 500
        logger.exception.assert_called_once()

    def test_unexpected_error_is_internal_error(self):
        def handler(event, context):
            raise RuntimeError("boom")

        response = handle_errors(MagicMock())(handler)({}, None)

        assert response["statusCode"] == 500
        assert "boom" not in response["body"]

    def test_internal_collision_maps_to_conflict(self):
        def handler(event, context):
            raise ShareTokenCollisionException("abcdefghijklmnop")

        response = handle_errors(MagicMock())(handler)({}, None)

        assert response["statusCode"] == 409
