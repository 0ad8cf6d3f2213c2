"""
Session authentication for the API.

The access token travels either in the ``Authorization: Bearer`` header or
in the HttpOnly session cookie set at login. Cookie-borne tokens are subject
to CSRF checks, exactly like Django sessions.
"""

import logging

from django.conf import settings
from rest_framework import exceptions
from rest_framework.authentication import CSRFCheck
from rest_framework_simplejwt.authentication import JWTAuthentication


logger = logging.getLogger(__name__)


def _enforce_csrf(request):
    def dummy_get_response(request):  # pragma: no cover
        return None

    check = CSRFCheck(dummy_get_response)
    check.process_request(request)
    reason = check.process_view(request, None, (), {})
    if reason:
        raise exceptions.PermissionDenied(f"CSRF Failed: {reason}")


class CookieJWTAuthentication(JWTAuthentication):
    def authenticate(self, request):
        header = self.get_header(request)
        if header is not None:
            return super().authenticate(request)

        raw_token = request.COOKIES.get(settings.AUTH_COOKIE_NAME)
        if not raw_token:
            return None

        validated_token = self.get_validated_token(raw_token)
        user = self.get_user(validated_token)
        _enforce_csrf(request)
        return user, validated_token


def set_session_cookie(response, access_token: str):
    lifetime = settings.SIMPLE_JWT["ACCESS_TOKEN_LIFETIME"]
    response.set_cookie(
        settings.AUTH_COOKIE_NAME,
        access_token,
        max_age=int(lifetime.total_seconds()),
        httponly=True,
        secure=settings.AUTH_COOKIE_SECURE,
        samesite="Lax",
    )
    return response


def clear_session_cookie(response):
    response.delete_cookie(settings.AUTH_COOKIE_NAME, samesite="Lax")
    return response
