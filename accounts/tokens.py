# accounts/tokens.py
from django.conf import settings
from django.core import signing

TOKEN_SALT = 'accounts.auth-token'


class InvalidToken(Exception):
    pass


def issue_token(payload):
    """
    Sign an identity payload (any JSON object) with the token secret.
    The signature carries a timestamp; verify_token enforces the max age.
    """
    return signing.dumps(payload, key=settings.AUTH_TOKEN_SECRET, salt=TOKEN_SALT, compress=True)


def verify_token(token):
    """
    Return the payload of a valid token.
    Raises InvalidToken for a bad signature, a garbled value or an expired token.
    """
    try:
        payload = signing.loads(
            token,
            key=settings.AUTH_TOKEN_SECRET,
            salt=TOKEN_SALT,
            max_age=settings.AUTH_TOKEN_MAX_AGE,
        )
    except signing.SignatureExpired as exc:
        raise InvalidToken("Token expired") from exc
    except signing.BadSignature as exc:
        raise InvalidToken("Bad token signature") from exc
    except ValueError as exc:
        raise InvalidToken("Malformed token") from exc
    if not isinstance(payload, dict):
        raise InvalidToken("Token payload is not an object")
    return payload


def set_token_cookie(response, token):
    response.set_cookie(
        settings.AUTH_COOKIE_NAME,
        token,
        max_age=settings.AUTH_TOKEN_MAX_AGE,
        httponly=True,
        secure=settings.AUTH_COOKIE_SECURE,
        samesite=settings.AUTH_COOKIE_SAMESITE,
    )
    return response


def clear_token_cookie(response):
    # delete_cookie sends max-age=0 with a past expiry
    response.delete_cookie(settings.AUTH_COOKIE_NAME, samesite=settings.AUTH_COOKIE_SAMESITE)
    return response
