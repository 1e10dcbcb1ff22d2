"""
DRF exception handler producing the ``{'ok': False, 'error': {...}}`` envelope.
"""
import structlog
from django.core.exceptions import PermissionDenied
from django.db.models import ProtectedError
from django.http import Http404
from rest_framework import exceptions, status
from rest_framework.response import Response
from rest_framework.views import exception_handler as drf_exception_handler

from clinic.repository import RecordNotFound

logger = structlog.get_logger(__name__)


def error_response(code: str, message, *, status_code: int, details=None) -> Response:
    error = {'code': code, 'message': message}
    if details is not None:
        error['details'] = details
    return Response({'ok': False, 'error': error}, status=status_code)


def _code_for(exc) -> str:
    if isinstance(exc, exceptions.ValidationError):
        return 'validation_error'
    if isinstance(exc, (exceptions.NotFound, Http404)):
        return 'not_found'
    if isinstance(exc, (exceptions.NotAuthenticated, exceptions.AuthenticationFailed)):
        return 'not_authenticated'
    if isinstance(exc, (exceptions.PermissionDenied, PermissionDenied)):
        return 'permission_denied'
    if isinstance(exc, exceptions.Throttled):
        return 'throttled'
    return 'api_error'


def api_exception_handler(exc, context):
    if isinstance(exc, RecordNotFound):
        return error_response('not_found', str(exc), status_code=status.HTTP_404_NOT_FOUND)
    if isinstance(exc, ProtectedError):
        return error_response('conflict', 'Record is referenced by other records and cannot be deleted',
                              status_code=status.HTTP_409_CONFLICT)

    resp = drf_exception_handler(exc, context)
    if resp is None:
        view = context.get('view')
        logger.exception('unhandled_api_error', view=getattr(view, '__name__', type(view).__name__))
        return error_response('server_error', 'Internal server error',
                              status_code=status.HTTP_500_INTERNAL_SERVER_ERROR)

    code = _code_for(exc)
    if code == 'validation_error':
        return error_response(code, 'Invalid input', status_code=resp.status_code, details=resp.data)
    if isinstance(resp.data, dict):
        message = resp.data.get('detail') or resp.data
    else:
        message = str(resp.data)
    error = error_response(code, message, status_code=resp.status_code)
    # keep WWW-Authenticate / Retry-After set by DRF
    for header, value in resp.items():
        error[header] = value
    return error
