import logging
from functools import wraps

from django.conf import settings
from django.http import JsonResponse

from .tokens import InvalidToken, verify_token

logger = logging.getLogger(__name__)


def token_required(view_func):
    @wraps(view_func)
    def _wrapped(request, *args, **kwargs):
        token = request.COOKIES.get(settings.AUTH_COOKIE_NAME)
        if not token:
            return JsonResponse({'message': 'unauthorized access'}, status=401)
        try:
            payload = verify_token(token)
        except InvalidToken as e:
            logger.warning("Rejected auth token on %s: %s", request.path, e)
            return JsonResponse({'message': 'unauthorized access'}, status=401)
        email = payload.get('email')
        if not email:
            logger.warning("Auth token without email claim on %s", request.path)
            return JsonResponse({'message': 'unauthorized access'}, status=401)
        request.auth_email = email
        request.auth_payload = payload
        return view_func(request, *args, **kwargs)
    return _wrapped


def identity_mismatch(request, email):
    """
    Forbidden response when the verified identity is not `email`, else None.
    Only meaningful inside a @token_required view.
    """
    if getattr(request, 'auth_email', None) != email:
        logger.warning("Identity %s tried to read data of %s", getattr(request, 'auth_email', None), email)
        return JsonResponse({'message': 'forbidden access'}, status=403)
    return None
