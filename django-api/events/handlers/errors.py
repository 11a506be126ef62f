"""Mapping of domain errors to HTTP responses.

Only the error code and the user-safe message leave the service.
"""

from rest_framework import status
from rest_framework.response import Response

from events.domain.errors import DomainError, ErrorCode

STATUS_BY_CODE = {
    ErrorCode.EVENT_NOT_FOUND: status.HTTP_404_NOT_FOUND,
    ErrorCode.USER_NOT_FOUND: status.HTTP_404_NOT_FOUND,
    ErrorCode.CATEGORY_NOT_FOUND: status.HTTP_404_NOT_FOUND,
    ErrorCode.COMMENT_NOT_FOUND: status.HTTP_404_NOT_FOUND,
    ErrorCode.INVALID_ID: status.HTTP_400_BAD_REQUEST,
    ErrorCode.INVALID_ARGUMENT: status.HTTP_400_BAD_REQUEST,
    ErrorCode.UNAUTHORIZED: status.HTTP_403_FORBIDDEN,
    ErrorCode.INSUFFICIENT_INVENTORY: status.HTTP_409_CONFLICT,
    ErrorCode.DUPLICATE_ORDER: status.HTTP_409_CONFLICT,
    ErrorCode.VERIFICATION_FAILED: status.HTTP_400_BAD_REQUEST,
}


def error_body(error: DomainError) -> dict[str, str]:
    return {"code": error.code.value, "message": error.message}


def error_response(error: DomainError) -> Response:
    return Response(
        error_body(error),
        status=STATUS_BY_CODE.get(error.code, status.HTTP_400_BAD_REQUEST),
    )


def validation_error_response(errors: dict) -> Response:
    """400 response for request bodies or query strings that fail validation."""
    return Response(
        {
            "code": ErrorCode.INVALID_ARGUMENT.value,
            "message": "Invalid request",
            "errors": errors,
        },
        status=status.HTTP_400_BAD_REQUEST,
    )
