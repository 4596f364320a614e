# shared/common/exceptions.py
"""
Custom Exception Classes and Exception Handler
"""

import logging
import traceback
from typing import Any, Dict, List, Optional

from django.conf import settings
from django.core.exceptions import ValidationError as DjangoValidationError
from django.http import Http404
from rest_framework import status
from rest_framework.exceptions import APIException
from rest_framework.response import Response
from rest_framework.views import exception_handler

logger = logging.getLogger(__name__)


# =============================================================================
# BASE EXCEPTIONS
# =============================================================================

class BaseAPIException(APIException):
    """Base exception class for all custom API exceptions"""

    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
    default_detail = 'An unexpected error occurred.'
    default_code = 'error'
    error_code = 'INTERNAL_ERROR'

    def __init__(
        self,
        detail: Optional[str] = None,
        code: Optional[str] = None,
        error_code: Optional[str] = None,
        extra_data: Optional[Dict] = None
    ):
        super().__init__(detail=detail, code=code)
        self.error_code = error_code or self.error_code
        self.extra_data = extra_data or {}


# =============================================================================
# CLIENT ERRORS (4xx)
# =============================================================================

class BadRequestException(BaseAPIException):
    """400 Bad Request"""
    status_code = status.HTTP_400_BAD_REQUEST
    default_detail = 'Bad request.'
    default_code = 'bad_request'
    error_code = 'BAD_REQUEST'


class ValidationException(BaseAPIException):
    """400 Validation Error"""
    status_code = status.HTTP_400_BAD_REQUEST
    default_detail = 'Validation error.'
    default_code = 'validation_error'
    error_code = 'VALIDATION_ERROR'

    def __init__(self, errors: List[str], detail: str = None, error_code: str = None):
        super().__init__(detail=detail, error_code=error_code)
        self.extra_data = {'errors': list(errors)}


class BusinessRuleException(BadRequestException):
    """400 for a request that is well-formed but breaks a business rule"""
    default_detail = 'The request violates a business rule.'
    default_code = 'business_rule'
    error_code = 'BUSINESS_RULE_VIOLATION'


class InvalidStateException(BusinessRuleException):
    """Resource exists but its current state forbids the operation"""
    default_detail = 'The resource is not in a state that allows this operation.'
    error_code = 'INVALID_STATE_TRANSITION'


class TimeSlotConflictException(BusinessRuleException):
    """Requested time slot overlaps a live booking"""
    default_detail = 'The requested time slot conflicts with an existing booking.'
    error_code = 'TIME_SLOT_CONFLICT'


class NotFoundException(BaseAPIException):
    """404 Not Found"""
    status_code = status.HTTP_404_NOT_FOUND
    default_detail = 'The requested resource was not found.'
    default_code = 'not_found'
    error_code = 'NOT_FOUND'


# =============================================================================
# EXCEPTION HANDLER
# =============================================================================

def custom_exception_handler(exc, context) -> Optional[Response]:
    """
    Custom exception handler for DRF.
    Renders every error as ``{message, code, errors?, request_id}``.
    """

    request = context.get('request')
    request_id = getattr(request, 'request_id', None) if request else None

    # Call DRF's default exception handler first
    response = exception_handler(exc, context)

    if response is not None:
        return format_error_response(exc, response, request_id)

    if isinstance(exc, DjangoValidationError):
        errors = exc.messages
        return Response(
            {
                'message': 'Validation error',
                'code': 'VALIDATION_ERROR',
                'errors': errors,
                'request_id': request_id,
            },
            status=status.HTTP_400_BAD_REQUEST
        )

    if isinstance(exc, Http404):
        return Response(status=status.HTTP_404_NOT_FOUND)

    # Storage failures and anything unexpected end up here
    logger.exception(
        f"Unhandled exception: {exc}",
        extra={
            'request_id': request_id,
            'exception_type': type(exc).__name__,
        }
    )

    if settings.DEBUG:
        return Response(
            {
                'message': str(exc),
                'code': 'INTERNAL_ERROR',
                'type': type(exc).__name__,
                'traceback': traceback.format_exc().split('\n'),
                'request_id': request_id,
            },
            status=status.HTTP_500_INTERNAL_SERVER_ERROR
        )

    return Response(
        {
            'message': 'An unexpected error occurred. Please try again later.',
            'code': 'INTERNAL_ERROR',
            'request_id': request_id,
        },
        status=status.HTTP_500_INTERNAL_SERVER_ERROR
    )


def format_error_response(exc, response: Response, request_id: str = None) -> Response:
    """Format error response in consistent structure"""

    if response.status_code == status.HTTP_404_NOT_FOUND:
        # Never reveal whether the resource exists
        response.data = None
        return response

    error_code = getattr(exc, 'error_code', None) or _code_from_exception(exc)
    extra_data = getattr(exc, 'extra_data', {})

    error_data: Dict[str, Any] = {
        'message': get_error_message(exc, response),
        'code': error_code,
        'request_id': request_id,
    }

    if extra_data.get('errors'):
        error_data['errors'] = extra_data['errors']
    elif isinstance(response.data, dict) and 'detail' not in response.data:
        # Field-level validation errors from DRF serializers
        error_data['errors'] = response.data

    response.data = error_data
    return response


def get_error_message(exc, response: Response) -> str:
    """Extract error message from exception or response"""

    detail = getattr(exc, 'detail', None)
    if isinstance(detail, str):
        return detail
    if isinstance(detail, list) and detail:
        return str(detail[0])
    if isinstance(detail, dict):
        return str(detail.get('detail', 'Validation error'))

    if isinstance(response.data, dict):
        return str(response.data.get('detail', response.data))

    return str(response.data)


def _code_from_exception(exc) -> str:
    codes = exc.get_codes() if hasattr(exc, 'get_codes') else None
    if isinstance(codes, str):
        return codes.upper()
    return 'VALIDATION_ERROR' if isinstance(codes, (dict, list)) else 'ERROR'
