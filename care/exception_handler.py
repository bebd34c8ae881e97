"""
Unified API exception handler (``REST_FRAMEWORK['EXCEPTION_HANDLER']``).

Kept out of ``care.exceptions`` because ``rest_framework.views`` resolves the
authentication classes on import, and those import the exception classes.
"""
from __future__ import annotations

import logging

from rest_framework import exceptions
from rest_framework.response import Response
from rest_framework.views import exception_handler as drf_exception_handler

from care.exceptions import Conflict, NotFound

logger = logging.getLogger(__name__)


def _error_code(exc) -> str:
    if isinstance(exc, exceptions.ValidationError):
        return 'validation_error'
    if isinstance(exc, NotFound):
        return 'not_found'
    if isinstance(exc, Conflict):
        return 'conflict'
    return getattr(exc, 'default_code', None) or 'api_error'


def api_exception_handler(exc, context):
    resp = drf_exception_handler(exc, context)
    if resp is None:
        logger.exception('Unhandled error in %s', context.get('view'))
        return Response({'ok': False, 'error': {'code': 'server_error', 'message': str(exc)}}, status=500)
    # normalize response
    if isinstance(exc, exceptions.ValidationError):
        detail = resp.data
    elif isinstance(resp.data, dict):
        detail = resp.data.get('detail') or resp.data
    else:
        detail = str(resp.data)
    error = {'code': _error_code(exc), 'message': detail}
    if getattr(exc, 'entity', None):
        error['entity'] = exc.entity
        error['id'] = exc.entity_id
    headers = {k: resp[k] for k in ('WWW-Authenticate', 'Retry-After') if resp.has_header(k)}
    return Response({'ok': False, 'error': error}, status=resp.status_code, headers=headers)
