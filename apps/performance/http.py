import functools
import logging

from django.http import JsonResponse
from django.views.decorators.http import require_GET

logger = logging.getLogger(__name__)

INTERNAL_ERROR_MESSAGE = 'An internal server error occurred'


def error_response(message, status):
    return JsonResponse({'msg': message}, status=status)


def json_api(view):
    """GET-only JSON view; unexpected errors become a generic 500"""

    @require_GET
    @functools.wraps(view)
    def wrapper(request, *args, **kwargs):
        try:
            return view(request, *args, **kwargs)
        except Exception:
            logger.exception(f"Error handling {request.method} {request.path}")
            return error_response(INTERNAL_ERROR_MESSAGE, status=500)

    return wrapper
