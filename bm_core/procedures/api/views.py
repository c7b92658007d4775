# backend/bm_core/procedures/api/views.py
from __future__ import annotations

from drf_spectacular.utils import extend_schema
from rest_framework import status, viewsets
from rest_framework.response import Response

from bm_core.common.permissions import ProcedurePermission
from bm_core.common.scope import require_scope
from bm_core.procedures.api.serializers import (
    ProcedureSerializer,
    ProcedureUpdateSerializer,
    ProcedureWriteSerializer,
)
from bm_core.procedures.models import Procedure
from bm_core.procedures.selectors import get_procedure, list_procedures
from bm_core.procedures.services import ProcedureService


class ProcedureViewSet(viewsets.ViewSet):
    """
    The company's procedure catalog. Everyone reads, admins write.
    """
    permission_classes = [ProcedurePermission]

    serializer_class = ProcedureSerializer
    queryset = Procedure.objects.none()

    @extend_schema(tags=["Procedures"], responses={200: ProcedureSerializer(many=True)})
    def list(self, request):
        scope = require_scope(request)
        qs = list_procedures(company_id=scope.company_id)
        return Response(ProcedureSerializer(qs, many=True).data, status=status.HTTP_200_OK)

    @extend_schema(tags=["Procedures"], request=ProcedureWriteSerializer, responses={201: ProcedureSerializer})
    def create(self, request):
        scope = require_scope(request)

        ser = ProcedureWriteSerializer(data=request.data)
        ser.is_valid(raise_exception=True)

        procedure = ProcedureService.create(
            company_id=scope.company_id,
            actor_user_id=scope.user_id,
            **ser.validated_data,
        )
        return Response(ProcedureSerializer(procedure).data, status=status.HTTP_201_CREATED)

    @extend_schema(tags=["Procedures"], responses={200: ProcedureSerializer})
    def retrieve(self, request, pk=None):
        scope = require_scope(request)
        procedure = get_procedure(company_id=scope.company_id, procedure_id=pk)
        return Response(ProcedureSerializer(procedure).data, status=status.HTTP_200_OK)

    @extend_schema(tags=["Procedures"], request=ProcedureUpdateSerializer, responses={200: ProcedureSerializer})
    def update(self, request, pk=None):
        scope = require_scope(request)

        ser = ProcedureUpdateSerializer(data=request.data)
        ser.is_valid(raise_exception=True)

        procedure = ProcedureService.update(
            company_id=scope.company_id,
            actor_user_id=scope.user_id,
            procedure_id=pk,
            data=ser.validated_data,
        )
        return Response(ProcedureSerializer(procedure).data, status=status.HTTP_200_OK)

    @extend_schema(tags=["Procedures"], request=ProcedureUpdateSerializer, responses={200: ProcedureSerializer})
    def partial_update(self, request, pk=None):
        return self.update(request, pk=pk)

    @extend_schema(tags=["Procedures"], responses={204: None})
    def destroy(self, request, pk=None):
        scope = require_scope(request)
        ProcedureService.delete(company_id=scope.company_id, actor_user_id=scope.user_id, procedure_id=pk)
        return Response(status=status.HTTP_204_NO_CONTENT)
