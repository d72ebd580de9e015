# jobboard/middleware.py
import logging

from django.db import DatabaseError
from django.http import JsonResponse

logger = logging.getLogger(__name__)


class StoreErrorMiddleware:
    """
    Turn store failures escaping a view into a generic 500 JSON body.
    The underlying error is logged, never sent to the client.
    """

    def __init__(self, get_response):
        self.get_response = get_response

    def __call__(self, request):
        return self.get_response(request)

    def process_exception(self, request, exception):
        if isinstance(exception, DatabaseError):
            logger.exception("Store error on %s %s", request.method, request.path)
            return JsonResponse({'message': 'Internal server error'}, status=500)
        return None
