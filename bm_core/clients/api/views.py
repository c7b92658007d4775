# backend/bm_core/clients/api/views.py
from __future__ import annotations

from drf_spectacular.types import OpenApiTypes
from drf_spectacular.utils import OpenApiParameter, extend_schema
from rest_framework import status, viewsets
from rest_framework.response import Response

from bm_core.clients.api.serializers import ClientSerializer, ClientUpdateSerializer, ClientWriteSerializer
from bm_core.clients.models import Client
from bm_core.clients.selectors import get_client, list_clients
from bm_core.clients.services import ClientService
from bm_core.common.permissions import ClientPermission
from bm_core.common.scope import require_scope


class ClientViewSet(viewsets.ViewSet):
    permission_classes = [ClientPermission]

    serializer_class = ClientSerializer
    queryset = Client.objects.none()

    @extend_schema(
        tags=["Clients"],
        responses={200: ClientSerializer(many=True)},
        parameters=[
            OpenApiParameter(
                name="q",
                type=OpenApiTypes.STR,
                location=OpenApiParameter.QUERY,
                required=False,
                description="Search by name or phone.",
            ),
        ],
    )
    def list(self, request):
        scope = require_scope(request)
        q = request.query_params.get("q", "").strip()
        qs = list_clients(company_id=scope.company_id, q=q)
        return Response(ClientSerializer(qs, many=True).data, status=status.HTTP_200_OK)

    @extend_schema(tags=["Clients"], request=ClientWriteSerializer, responses={201: ClientSerializer})
    def create(self, request):
        scope = require_scope(request)

        ser = ClientWriteSerializer(data=request.data)
        ser.is_valid(raise_exception=True)

        client = ClientService.create(
            company_id=scope.company_id,
            actor_user_id=scope.user_id,
            **ser.validated_data,
        )
        return Response(ClientSerializer(client).data, status=status.HTTP_201_CREATED)

    @extend_schema(tags=["Clients"], responses={200: ClientSerializer})
    def retrieve(self, request, pk=None):
        scope = require_scope(request)
        client = get_client(company_id=scope.company_id, client_id=pk)
        return Response(ClientSerializer(client).data, status=status.HTTP_200_OK)

    @extend_schema(tags=["Clients"], request=ClientUpdateSerializer, responses={200: ClientSerializer})
    def update(self, request, pk=None):
        scope = require_scope(request)

        ser = ClientUpdateSerializer(data=request.data)
        ser.is_valid(raise_exception=True)

        client = ClientService.update(
            company_id=scope.company_id,
            actor_user_id=scope.user_id,
            client_id=pk,
            data=ser.validated_data,
        )
        return Response(ClientSerializer(client).data, status=status.HTTP_200_OK)

    @extend_schema(tags=["Clients"], request=ClientUpdateSerializer, responses={200: ClientSerializer})
    def partial_update(self, request, pk=None):
        return self.update(request, pk=pk)

    @extend_schema(tags=["Clients"], responses={204: None})
    def destroy(self, request, pk=None):
        scope = require_scope(request)
        ClientService.delete(company_id=scope.company_id, actor_user_id=scope.user_id, client_id=pk)
        return Response(status=status.HTTP_204_NO_CONTENT)
