# backend/bm_core/iam/api/collaborators.py
from __future__ import annotations

from drf_spectacular.utils import extend_schema
from rest_framework import status, viewsets
from rest_framework.response import Response

from bm_core.common.permissions import CollaboratorPermission
from bm_core.common.scope import require_scope
from bm_core.iam.api.serializers import UserProfileSerializer
from bm_core.iam.models import UserProfile
from bm_core.iam.selectors import list_company_users
from bm_core.iam.services.collaborators import CollaboratorService


class CollaboratorViewSet(viewsets.ViewSet):
    """
    Company users (admins and collaborators). Anyone can list, only admins remove.
    """
    permission_classes = [CollaboratorPermission]

    serializer_class = UserProfileSerializer
    queryset = UserProfile.objects.none()
    lookup_value_regex = r"\d+"

    @extend_schema(responses={200: UserProfileSerializer(many=True)}, tags=["Collaborators"])
    def list(self, request):
        scope = require_scope(request)
        qs = list_company_users(company_id=scope.company_id)
        return Response(UserProfileSerializer(qs, many=True).data, status=status.HTTP_200_OK)

    @extend_schema(responses={204: None}, tags=["Collaborators"])
    def destroy(self, request, pk=None):
        scope = require_scope(request)
        CollaboratorService.remove(
            company_id=scope.company_id,
            actor_user_id=scope.user_id,
            user_id=int(pk),
        )
        return Response(status=status.HTTP_204_NO_CONTENT)
