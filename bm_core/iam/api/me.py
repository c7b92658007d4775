# backend/bm_core/iam/api/me.py

from __future__ import annotations

from drf_spectacular.utils import extend_schema
from rest_framework import status
from rest_framework.response import Response
from rest_framework.views import APIView

from bm_core.common.permissions import IsCompanyMember
from bm_core.common.scope import require_scope
from bm_core.companies.selectors import get_company
from bm_core.iam.api.serializers import CompanySerializer, UserProfileSerializer
from bm_core.iam.selectors import get_company_user_profile


class MeView(APIView):
    """
    The logged-in user with profile (role, phone, function).
    """
    permission_classes = [IsCompanyMember]

    @extend_schema(responses={200: UserProfileSerializer}, tags=["IAM"])
    def get(self, request):
        scope = require_scope(request)
        profile = get_company_user_profile(company_id=scope.company_id, user_id=scope.user_id)
        return Response(UserProfileSerializer(profile).data, status=status.HTTP_200_OK)


class CompanyView(APIView):
    """
    The caller's company. The invite code is only shown to admins.
    """
    permission_classes = [IsCompanyMember]

    @extend_schema(responses={200: CompanySerializer}, tags=["IAM"])
    def get(self, request):
        scope = require_scope(request)
        company = get_company(company_id=scope.company_id)
        data = CompanySerializer(company, context={"show_invite_code": scope.is_admin}).data
        return Response(data, status=status.HTTP_200_OK)
