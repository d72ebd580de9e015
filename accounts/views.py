# accounts/views.py
import json
import logging

from django.http import JsonResponse
from django.views.decorators.csrf import csrf_exempt
from django.views.decorators.http import require_http_methods

from .tokens import issue_token, set_token_cookie, clear_token_cookie

logger = logging.getLogger(__name__)


@csrf_exempt
@require_http_methods(["POST"])
def issue_jwt(request):
    try:
        payload = json.loads(request.body.decode('utf-8') or '{}')
    except (UnicodeDecodeError, ValueError):
        return JsonResponse({'message': 'Invalid JSON'}, status=400)
    if not isinstance(payload, dict):
        return JsonResponse({'message': 'Token payload must be a JSON object'}, status=400)

    token = issue_token(payload)
    logger.info("Issued auth token for %s", payload.get('email', '<no email>'))
    return set_token_cookie(JsonResponse({'success': True}), token)


@csrf_exempt
@require_http_methods(["POST"])
def logout(request):
    return clear_token_cookie(JsonResponse({'success': True}))
