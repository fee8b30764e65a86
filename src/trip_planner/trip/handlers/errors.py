import functools
import json
from typing import Callable

from aws_lambda_powertools import Logger
from pydantic import ValidationError

from trip_planner.shared.domain import (
    BusinessRuleViolationException,
    DomainException,
    DuplicateResourceException,
    ResourceNotFoundException,
    TransactionConflictException,
)
from trip_planner.shared.utils import api_response
from trip_planner.trip.domain.exception import (
    PermissionDeniedException,
    TokenAllocationExhaustedException,
    TripValidationException,
    UnknownActionException,
    UnknownRoleException,
)

from .identity import BadRequestError, UnauthorizedError
from .response_models import ErrorResponse


def error_response(
    status_code: int, error_code: str, message: str, details: dict | None = None
) -> dict:
    body = ErrorResponse(error_code=error_code, message=message, details=details)
    return api_response(status_code, body.model_dump(exclude_none=True))


def to_error_response(error: Exception) -> dict | None:
    """ドメイン例外を HTTP レスポンスに変換する（対応しない例外は None）"""
    if isinstance(error, TripValidationException):
        return error_response(
            400,
            "VALIDATION_ERROR",
            str(error),
            {"field": error.field, "kind": error.kind.value},
        )
    if isinstance(error, PermissionDeniedException):
        return error_response(
            403,
            "PERMISSION_DENIED",
            str(error),
            {
                "role": error.role.value if error.role is not None else None,
                "action": error.action.value,
            },
        )
    if isinstance(error, ResourceNotFoundException):
        return error_response(
            404, "NOT_FOUND", str(error), {"entity": error.entity_kind, "id": error.id}
        )
    if isinstance(error, DuplicateResourceException):
        return error_response(409, "DUPLICATE_RESOURCE", str(error))
    if isinstance(error, TransactionConflictException):
        return error_response(409, "TRANSACTION_CONFLICT", str(error))
    if isinstance(error, TokenAllocationExhaustedException):
        return error_response(503, "TOKEN_ALLOCATION_EXHAUSTED", str(error))
    if isinstance(error, (UnknownRoleException, UnknownActionException)):
        return None
    if isinstance(error, BusinessRuleViolationException):
        return error_response(400, "BUSINESS_RULE_VIOLATION", str(error))
    return None


def handle_errors(logger: Logger) -> Callable:
    """ハンドラの例外を API レスポンスに変換するデコレータ"""

    def decorator(handler: Callable) -> Callable:
        @functools.wraps(handler)
        def wrapper(event, context):
            try:
                return handler(event, context)
            except UnauthorizedError:
                return error_response(401, "UNAUTHORIZED", "Authentication required")
            except BadRequestError as e:
                return error_response(400, "INVALID_REQUEST", str(e))
            except ValidationError as e:
                return error_response(
                    400,
                    "INVALID_REQUEST",
                    "Request body is invalid",
                    {"errors": json.loads(e.json(include_url=False))},
                )
            except json.JSONDecodeError:
                return error_response(400, "INVALID_REQUEST", "Request body is not valid JSON")
            except DomainException as e:
                response = to_error_response(e)
                if response is None:
                    logger.exception("Unhandled domain error")
                    return error_response(500, "INTERNAL_ERROR", "Internal server error")
                logger.info(
                    "Request rejected",
                    extra={"error": type(e).__name__, "status_code": response["statusCode"]},
                )
                return response
            except Exception:
                logger.exception("Unexpected error")
                return error_response(500, "INTERNAL_ERROR", "Internal server error")

        return wrapper

    return decorator
