# backend/bm_core/appointments/api/views.py
from __future__ import annotations

from uuid import UUID

from drf_spectacular.types import OpenApiTypes
from drf_spectacular.utils import OpenApiParameter, extend_schema
from rest_framework import status, viewsets
from rest_framework.decorators import action
from rest_framework.exceptions import ValidationError
from rest_framework.response import Response

from bm_core.appointments.api.serializers import AppointmentSerializer, AppointmentWriteSerializer
from bm_core.appointments.models import Appointment
from bm_core.appointments.selectors import get_appointment, list_appointments
from bm_core.appointments.services import AppointmentService
from bm_core.common.dates import parse_datetime_param
from bm_core.common.permissions import AppointmentPermission
from bm_core.common.scope import require_scope
from bm_core.procedures.api.serializers import ProcedureSerializer


def _query_param(request, *names: str) -> str | None:
    """
    First non-empty value among snake_case and legacy camelCase names.
    """
    for name in names:
        value = request.query_params.get(name)
        if value not in (None, ""):
            return value
    return None


class AppointmentViewSet(viewsets.ViewSet):
    permission_classes = [AppointmentPermission]

    serializer_class = AppointmentSerializer
    queryset = Appointment.objects.none()

    @extend_schema(
        tags=["Appointments"],
        responses={200: AppointmentSerializer(many=True)},
        parameters=[
            OpenApiParameter(
                name="start_date",
                type=OpenApiTypes.DATETIME,
                location=OpenApiParameter.QUERY,
                required=False,
                description="Range start (inclusive). Used together with end_date.",
            ),
            OpenApiParameter(
                name="end_date",
                type=OpenApiTypes.DATETIME,
                location=OpenApiParameter.QUERY,
                required=False,
                description="Range end (inclusive). A plain date covers the whole day.",
            ),
            OpenApiParameter(
                name="collaborator",
                type=OpenApiTypes.INT,
                location=OpenApiParameter.QUERY,
                required=False,
                description="Collaborator user id (only applied with a date range).",
            ),
            OpenApiParameter(
                name="client",
                type=OpenApiTypes.UUID,
                location=OpenApiParameter.QUERY,
                required=False,
                description="Client id (ignored when a date range is given).",
            ),
        ],
    )
    def list(self, request):
        scope = require_scope(request)

        start_raw = _query_param(request, "start_date", "startDate")
        end_raw = _query_param(request, "end_date", "endDate")
        collaborator_raw = _query_param(request, "collaborator", "collaborator_id", "collaboratorId")
        client_raw = _query_param(request, "client", "client_id", "clientId")

        start = end = None
        if start_raw and end_raw:
            start = parse_datetime_param(start_raw, field_name="start_date")
            end = parse_datetime_param(end_raw, field_name="end_date", end_of_day=True)

        collaborator_id = None
        if collaborator_raw is not None:
            try:
                collaborator_id = int(collaborator_raw)
            except ValueError:
                raise ValidationError({"collaborator": "Invalid collaborator (int expected)"})

        client_id = None
        if client_raw is not None:
            try:
                client_id = UUID(str(client_raw))
            except ValueError:
                raise ValidationError({"client": "Invalid client (UUID expected)"})

        qs = list_appointments(
            company_id=scope.company_id,
            start=start,
            end=end,
            collaborator_id=collaborator_id,
            client_id=client_id,
        )
        return Response(AppointmentSerializer(qs, many=True).data, status=status.HTTP_200_OK)

    @extend_schema(tags=["Appointments"], request=AppointmentWriteSerializer, responses={201: AppointmentSerializer})
    def create(self, request):
        scope = require_scope(request)

        ser = AppointmentWriteSerializer(data=request.data)
        ser.is_valid(raise_exception=True)
        data = ser.validated_data

        appointment = AppointmentService.create(
            company_id=scope.company_id,
            actor_user_id=scope.user_id,
            client_id=data["client_id"],
            collaborator_id=data["collaborator_id"],
            procedure_ids=data["procedure_ids"],
            date=data["date"],
            status=data.get("status"),
            notes=data.get("notes") or "",
        )
        appointment = get_appointment(company_id=scope.company_id, appointment_id=appointment.id)
        return Response(AppointmentSerializer(appointment).data, status=status.HTTP_201_CREATED)

    @extend_schema(tags=["Appointments"], responses={200: AppointmentSerializer})
    def retrieve(self, request, pk=None):
        scope = require_scope(request)
        appointment = get_appointment(company_id=scope.company_id, appointment_id=pk)
        return Response(AppointmentSerializer(appointment).data, status=status.HTTP_200_OK)

    @extend_schema(tags=["Appointments"], request=AppointmentWriteSerializer, responses={200: AppointmentSerializer})
    def update(self, request, pk=None):
        scope = require_scope(request)

        ser = AppointmentWriteSerializer(data=request.data)
        ser.is_valid(raise_exception=True)
        data = ser.validated_data

        appointment = AppointmentService.update(
            company_id=scope.company_id,
            actor_user_id=scope.user_id,
            appointment_id=pk,
            client_id=data["client_id"],
            collaborator_id=data["collaborator_id"],
            procedure_ids=data["procedure_ids"],
            date=data["date"],
            status=data.get("status"),
            notes=data.get("notes"),
        )
        appointment = get_appointment(company_id=scope.company_id, appointment_id=appointment.id)
        return Response(AppointmentSerializer(appointment).data, status=status.HTTP_200_OK)

    @extend_schema(tags=["Appointments"], responses={204: None})
    def destroy(self, request, pk=None):
        scope = require_scope(request)
        AppointmentService.delete(company_id=scope.company_id, actor_user_id=scope.user_id, appointment_id=pk)
        return Response(status=status.HTTP_204_NO_CONTENT)

    @extend_schema(tags=["Appointments"], responses={200: ProcedureSerializer(many=True)})
    @action(detail=True, methods=["get"], url_path="procedures")
    def procedures(self, request, pk=None):
        scope = require_scope(request)
        procedures = AppointmentService.procedures_for(company_id=scope.company_id, appointment_id=pk)
        return Response(ProcedureSerializer(procedures, many=True).data, status=status.HTTP_200_OK)
