# backend/bm_core/iam/auth.py

from __future__ import annotations

from django.conf import settings
from rest_framework_simplejwt.authentication import JWTAuthentication
from rest_framework.exceptions import AuthenticationFailed
from rest_framework_simplejwt.exceptions import InvalidToken

from bm_core.common.scope import attach_scope


class CookieOrHeaderJWTAuthentication(JWTAuthentication):
    """
    Authenticate using:
      1) Authorization: Bearer <access>
      2) HttpOnly cookie containing access token

    ALSO attaches the caller's company scope (request.scope) once the user is known.
    """

    def authenticate(self, request):
        # 1) Prefer Authorization header
        header = self.get_header(request)
        if header:
            auth_result = super().authenticate(request)
            if auth_result is None:
                return None
            user, token = auth_result
            attach_scope(request, user=user)
            return user, token

        # 2) Cookie access token
        cookie_name = settings.SIMPLE_JWT.get("AUTH_COOKIE", "bm_access")
        raw_token = request.COOKIES.get(cookie_name)
        if not raw_token:
            return None

        # A stale cookie must not block /auth/login/ or /auth/refresh/: treat it as anonymous.
        # That includes a valid token whose user was removed or deactivated.
        try:
            validated_token = self.get_validated_token(raw_token)
            user = self.get_user(validated_token)
        except (InvalidToken, AuthenticationFailed):
            return None

        attach_scope(request, user=user)
        return user, validated_token
