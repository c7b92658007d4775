# backend/bm_core/dashboard/api/views.py
from __future__ import annotations

from dataclasses import asdict

from drf_spectacular.types import OpenApiTypes
from drf_spectacular.utils import OpenApiParameter, extend_schema
from rest_framework import serializers, status
from rest_framework.response import Response
from rest_framework.views import APIView

from bm_core.common.permissions import IsCompanyMember
from bm_core.common.scope import require_scope
from bm_core.dashboard.selectors import DEFAULT_TIME_FILTER, TIME_FILTERS, dashboard_stats


class DashboardStatsSerializer(serializers.Serializer):
    appointments = serializers.IntegerField()
    clients = serializers.IntegerField()
    revenue = serializers.CharField()
    occupation = serializers.IntegerField()
    clients_served = serializers.IntegerField()
    weekly_appointments = serializers.IntegerField()
    # camelCase copies read by the existing web client
    clientsServed = serializers.IntegerField(source="clients_served")
    weeklyAppointments = serializers.IntegerField(source="weekly_appointments")


class DashboardStatsView(APIView):
    permission_classes = [IsCompanyMember]

    @extend_schema(
        tags=["Dashboard"],
        responses={200: DashboardStatsSerializer},
        parameters=[
            OpenApiParameter(
                name="time_filter",
                type=OpenApiTypes.STR,
                location=OpenApiParameter.QUERY,
                required=False,
                enum=list(TIME_FILTERS),
                description="day (default), week, month or year. `timeFilter` is accepted too.",
            ),
        ],
    )
    def get(self, request):
        scope = require_scope(request)
        time_filter = (
            request.query_params.get("time_filter")
            or request.query_params.get("timeFilter")
            or DEFAULT_TIME_FILTER
        )

        stats = dashboard_stats(
            company_id=scope.company_id,
            user_id=scope.user_id,
            is_admin=scope.is_admin,
            time_filter=time_filter,
        )
        return Response(DashboardStatsSerializer(asdict(stats)).data, status=status.HTTP_200_OK)
