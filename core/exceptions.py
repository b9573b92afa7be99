"""
exceptions.py

Error taxonomy shared by every endpoint and the DRF exception hook that turns
any failure into the ``{success: false, message, ...}`` envelope.
"""
import logging
import re

from django.conf import settings
from django.core.exceptions import ValidationError as DjangoValidationError
from django.db import IntegrityError
from django.http import Http404
from rest_framework import exceptions, status
from rest_framework.response import Response
from rest_framework.views import exception_handler

logger = logging.getLogger(__name__)


class UploadError(exceptions.APIException):
    status_code = status.HTTP_400_BAD_REQUEST
    default_detail = 'File upload error'
    default_code = 'upload_error'


class Conflict(exceptions.APIException):
    """A unique field is already taken. Reported as 400 like any bad input."""
    status_code = status.HTTP_400_BAD_REQUEST
    default_detail = 'Record already exists'
    default_code = 'conflict'


# SQLite:   UNIQUE constraint failed: departments_department.code
# Postgres: Key (code)=(ENG) already exists.
# MySQL:    Duplicate entry 'ENG' for key 'departments_department.code'
_DUPLICATE_PATTERNS = (
    re.compile(r'UNIQUE constraint failed: [\w]+\.(?P<field>\w+)'),
    re.compile(r'Key \((?P<field>\w+)\)=\(.*\) already exists'),
    re.compile(r"Duplicate entry '.*' for key '(?:[\w]+\.)?(?P<field>\w+)'"),
)


def to_camel_case(name):
    head, *rest = name.split('_')
    return head + ''.join(part.title() for part in rest)


def duplicate_field(error):
    """Name (API spelling) of the column behind a unique-constraint failure"""
    message = str(error)
    for pattern in _DUPLICATE_PATTERNS:
        match = pattern.search(message)
        if match:
            field = match.group('field')
            # MySQL reports the index name, e.g. departments_department_code_2f3c_uniq
            field = re.sub(r'_(?:[0-9a-f]+_)?uniq$', '', field)
            return to_camel_case(field)
    return None


def collect_messages(detail):
    """Flatten a DRF error detail (dict / list / str) into a list of messages"""
    if isinstance(detail, dict):
        messages = []
        for value in detail.values():
            messages.extend(collect_messages(value))
        return messages
    if isinstance(detail, (list, tuple)):
        messages = []
        for value in detail:
            messages.extend(collect_messages(value))
        return messages
    return [str(detail)]


def first_message(detail, default='Validation error'):
    messages = collect_messages(detail)
    return messages[0] if messages else default


def error_body(message, **extra):
    body = {'success': False, 'message': message}
    body.update({key: value for key, value in extra.items() if value is not None})
    return body


def api_exception_handler(exc, context):
    if isinstance(exc, IntegrityError):
        field = duplicate_field(exc)
        logger.warning('Unique constraint violated: %s', exc)
        message = f'{field} already exists' if field else 'Record already exists'
        return Response(error_body(message), status=status.HTTP_400_BAD_REQUEST)

    if isinstance(exc, DjangoValidationError):
        exc = exceptions.ValidationError(detail=exc.messages)
    elif isinstance(exc, Http404):
        exc = exceptions.NotFound()

    response = exception_handler(exc, context)

    if response is None:
        view = context.get('view')
        logger.exception(
            'Unhandled error in %s', view.__class__.__name__ if view else 'request',
            exc_info=exc,
        )
        return Response(
            error_body(
                'Internal server error',
                error=str(exc) if settings.DEBUG else None,
            ),
            status=status.HTTP_500_INTERNAL_SERVER_ERROR,
        )

    if isinstance(exc, exceptions.ValidationError):
        messages = collect_messages(exc.detail)
        response.data = error_body(first_message(exc.detail), errors=messages)
    elif isinstance(exc, exceptions.NotAuthenticated):
        response.data = error_body('Access token is required')
    else:
        response.data = error_body(first_message(exc.detail, default='Request failed'))
    return response
