"""Maps domain errors to HTTP responses.

Only the error code and the user-safe message leave the service.
"""

from rest_framework import status
from rest_framework.response import Response
from rest_framework.views import exception_handler as drf_exception_handler

from rentals.domain.errors import DomainError, ErrorCode

STATUS_BY_CODE = {
    ErrorCode.INVALID_ID: status.HTTP_400_BAD_REQUEST,
    ErrorCode.APPLICATION_NOT_FOUND: status.HTTP_404_NOT_FOUND,
    ErrorCode.EVENT_NOT_FOUND: status.HTTP_404_NOT_FOUND,
    ErrorCode.EVENT_FACILITY_NOT_FOUND: status.HTTP_404_NOT_FOUND,
    ErrorCode.BUSINESS_NOT_FOUND: status.HTTP_404_NOT_FOUND,
    ErrorCode.OWNER_NOT_FOUND: status.HTTP_404_NOT_FOUND,
    ErrorCode.INVALID_STATE_TRANSITION: status.HTTP_400_BAD_REQUEST,
    ErrorCode.QUOTA_EXCEEDED: status.HTTP_400_BAD_REQUEST,
    ErrorCode.BUSINESS_INACTIVE: status.HTTP_400_BAD_REQUEST,
    ErrorCode.DUPLICATE_PENDING_APPLICATION: status.HTTP_409_CONFLICT,
    ErrorCode.APPLICATIONS_CLOSED: status.HTTP_409_CONFLICT,
    ErrorCode.NOT_PERMITTED: status.HTTP_403_FORBIDDEN,
}


def domain_error_response(error: DomainError) -> Response:
    body = {"error": {"code": error.code.value, "message": error.message}}
    return Response(body, status=STATUS_BY_CODE.get(error.code, status.HTTP_400_BAD_REQUEST))


def exception_handler(exc, context):
    """DRF EXCEPTION_HANDLER that also understands domain errors."""
    if isinstance(exc, DomainError):
        return domain_error_response(exc)
    return drf_exception_handler(exc, context)
