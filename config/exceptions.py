"""
DRF exception handler: every API error leaves as {'error': ...} JSON.
"""

import logging

from django.db.models import ProtectedError
from rest_framework import exceptions, status
from rest_framework.response import Response
from rest_framework.views import exception_handler

logger = logging.getLogger(__name__)


def _first_message(detail):
    if isinstance(detail, dict):
        for value in detail.values():
            return _first_message(value)
        return 'Invalid input'
    if isinstance(detail, (list, tuple)):
        return _first_message(detail[0]) if detail else 'Invalid input'
    return str(detail)


def api_exception_handler(exc, context):
    view = context.get('view')
    request = context.get('request')
    path = request.path if request is not None else ''

    if isinstance(exc, ProtectedError):
        logger.info(f'Protected delete refused on {path}: {exc}')
        return Response(
            {'error': 'Resource is still referenced and cannot be deleted'},
            status=status.HTTP_409_CONFLICT,
        )

    response = exception_handler(exc, context)

    if response is None:
        logger.error(f'Unhandled error in {view.__class__.__name__ if view else "view"} at {path}: {exc}', exc_info=exc)
        return Response({'error': 'Internal server error'}, status=status.HTTP_500_INTERNAL_SERVER_ERROR)

    if isinstance(exc, exceptions.ValidationError):
        response.data = {'error': _first_message(exc.detail), 'details': exc.detail}
    else:
        payload = {'error': _first_message(getattr(exc, 'detail', str(exc)))}
        if isinstance(exc, exceptions.APIException):
            codes = exc.get_codes()
            if isinstance(codes, str):
                payload['code'] = codes
        response.data = payload

    if response.status_code >= 500:
        logger.error(f'API error {response.status_code} at {path}: {exc}')
    else:
        logger.info(f'API error {response.status_code} at {path}: {response.data["error"]}')
    return response
