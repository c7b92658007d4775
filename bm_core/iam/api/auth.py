# backend/bm_core/iam/api/auth.py

from __future__ import annotations

import logging
from datetime import timedelta
from typing import Any

from django.conf import settings
from django.contrib.auth import authenticate
from drf_spectacular.utils import extend_schema
from rest_framework import status
from rest_framework.exceptions import AuthenticationFailed
from rest_framework.permissions import AllowAny, IsAuthenticated
from rest_framework.response import Response
from rest_framework.views import APIView
from rest_framework_simplejwt.serializers import TokenRefreshSerializer
from rest_framework_simplejwt.tokens import RefreshToken

from bm_core.iam.api.serializers import (
    AdminRegistrationSerializer,
    CollaboratorRegistrationSerializer,
    DetailResponseSerializer,
    LoginRequestSerializer,
    SessionSerializer,
)
from bm_core.iam.services.registration import RegistrationService, normalize_email

logger = logging.getLogger(__name__)

INVALID_LOGIN_MSG = "Invalid email or password"


def _seconds(value: Any) -> int:
    """
    Convert a JWT lifetime setting into seconds.
    Supports timedelta OR int/float (already seconds).
    """
    if isinstance(value, timedelta):
        return int(value.total_seconds())
    try:
        return int(value)
    except (TypeError, ValueError):
        # 0 means "session cookie"
        return 0


def _set_auth_cookies(response: Response, *, access: str, refresh: str) -> None:
    jwt_cfg = getattr(settings, "SIMPLE_JWT", {}) or {}

    access_name = jwt_cfg.get("AUTH_COOKIE", "bm_access")
    refresh_name = jwt_cfg.get("AUTH_COOKIE_REFRESH", "bm_refresh")

    access_lifetime = _seconds(jwt_cfg.get("ACCESS_TOKEN_LIFETIME", timedelta(minutes=30)))
    refresh_lifetime = _seconds(jwt_cfg.get("REFRESH_TOKEN_LIFETIME", timedelta(days=7)))

    secure = bool(jwt_cfg.get("AUTH_COOKIE_SECURE", False))
    samesite = jwt_cfg.get("AUTH_COOKIE_SAMESITE", "Lax")

    response.set_cookie(
        access_name,
        access,
        max_age=access_lifetime,
        httponly=True,
        secure=secure,
        samesite=samesite,
        path="/",
    )
    response.set_cookie(
        refresh_name,
        refresh,
        max_age=refresh_lifetime,
        httponly=True,
        secure=secure,
        samesite=samesite,
        path="/",
    )


def _clear_auth_cookies(response: Response) -> None:
    jwt_cfg = getattr(settings, "SIMPLE_JWT", {}) or {}
    access_name = jwt_cfg.get("AUTH_COOKIE", "bm_access")
    refresh_name = jwt_cfg.get("AUTH_COOKIE_REFRESH", "bm_refresh")
    response.delete_cookie(access_name, path="/")
    response.delete_cookie(refresh_name, path="/")


def _session_response(*, user, profile, company, http_status: int) -> Response:
    """
    Registration and login both start a session: user + company in the body, JWT in cookies.
    """
    refresh = RefreshToken.for_user(user)
    body = SessionSerializer(
        {"user": profile, "company": company},
        context={"show_invite_code": profile.role == "admin"},
    ).data
    res = Response(body, status=http_status)
    _set_auth_cookies(res, access=str(refresh.access_token), refresh=str(refresh))
    return res


class RegisterAdminView(APIView):
    permission_classes = [AllowAny]

    @extend_schema(
        request=AdminRegistrationSerializer,
        responses={201: SessionSerializer},
        tags=["IAM"],
    )
    def post(self, request):
        ser = AdminRegistrationSerializer(data=request.data)
        ser.is_valid(raise_exception=True)

        company_data = ser.validated_data["company"]
        user_data = ser.validated_data["user"]

        reg = RegistrationService.register_admin(
            company_name=company_data["name"],
            name=user_data["name"],
            email=user_data["email"],
            password=user_data["password"],
            phone=user_data.get("phone", ""),
        )
        return _session_response(
            user=reg.user,
            profile=reg.profile,
            company=reg.company,
            http_status=status.HTTP_201_CREATED,
        )


class RegisterCollaboratorView(APIView):
    permission_classes = [AllowAny]

    @extend_schema(
        request=CollaboratorRegistrationSerializer,
        responses={201: SessionSerializer},
        tags=["IAM"],
    )
    def post(self, request):
        ser = CollaboratorRegistrationSerializer(data=request.data)
        ser.is_valid(raise_exception=True)

        reg = RegistrationService.register_collaborator(**ser.validated_data)
        return _session_response(
            user=reg.user,
            profile=reg.profile,
            company=reg.company,
            http_status=status.HTTP_201_CREATED,
        )


class LoginView(APIView):
    permission_classes = [AllowAny]

    @extend_schema(
        request=LoginRequestSerializer,
        responses={200: SessionSerializer},
        tags=["IAM"],
    )
    def post(self, request):
        ser = LoginRequestSerializer(data=request.data)
        ser.is_valid(raise_exception=True)

        email = normalize_email(ser.validated_data["email"])
        user = authenticate(request, username=email, password=ser.validated_data["password"])
        profile = getattr(user, "profile", None) if user is not None else None
        if user is None or profile is None:
            logger.info("login failed")
            raise AuthenticationFailed(INVALID_LOGIN_MSG)

        return _session_response(
            user=user,
            profile=profile,
            company=profile.company,
            http_status=status.HTTP_200_OK,
        )


class RefreshView(APIView):
    permission_classes = [AllowAny]

    @extend_schema(
        request=None,
        responses={200: DetailResponseSerializer},
        tags=["IAM"],
    )
    def post(self, request):
        jwt_cfg = getattr(settings, "SIMPLE_JWT", {}) or {}
        refresh_cookie_name = jwt_cfg.get("AUTH_COOKIE_REFRESH", "bm_refresh")
        refresh = request.COOKIES.get(refresh_cookie_name) or request.data.get("refresh")

        serializer = TokenRefreshSerializer(data={"refresh": refresh})
        serializer.is_valid(raise_exception=True)

        access = serializer.validated_data["access"]
        new_refresh = serializer.validated_data.get("refresh", refresh)

        res = Response({"detail": "refreshed"}, status=status.HTTP_200_OK)
        _set_auth_cookies(res, access=access, refresh=new_refresh)
        return res


class LogoutView(APIView):
    permission_classes = [IsAuthenticated]

    @extend_schema(
        request=None,
        responses={200: DetailResponseSerializer},
        tags=["IAM"],
    )
    def post(self, request):
        res = Response({"detail": "logged out"}, status=status.HTTP_200_OK)
        _clear_auth_cookies(res)
        return res
