# backend/bm_core/finance/api/views.py
from __future__ import annotations

from drf_spectacular.types import OpenApiTypes
from drf_spectacular.utils import OpenApiParameter, extend_schema
from rest_framework import status, viewsets
from rest_framework.decorators import action
from rest_framework.response import Response

from bm_core.common.dates import parse_datetime_param
from bm_core.common.permissions import FinancePermission
from bm_core.common.scope import require_scope
from bm_core.finance.api.serializers import (
    FinanceSummarySerializer,
    FinancialGoalCreateSerializer,
    FinancialGoalSerializer,
    FinancialRecordCreateSerializer,
    FinancialRecordSerializer,
    GoalProgressSerializer,
)
from bm_core.finance.models import FinancialGoal, FinancialRecord, RecordType
from bm_core.finance.selectors import current_goal, finance_summary, list_financial_goals, list_financial_records
from bm_core.finance.services import FinanceService

RANGE_PARAMETERS = [
    OpenApiParameter(
        name="start_date",
        type=OpenApiTypes.DATETIME,
        location=OpenApiParameter.QUERY,
        required=False,
        description="Window start (inclusive). Used together with end_date.",
    ),
    OpenApiParameter(
        name="end_date",
        type=OpenApiTypes.DATETIME,
        location=OpenApiParameter.QUERY,
        required=False,
        description="Window end (inclusive). A plain date covers the whole day.",
    ),
]


def _range_from_query(request):
    start_raw = request.query_params.get("start_date") or request.query_params.get("startDate")
    end_raw = request.query_params.get("end_date") or request.query_params.get("endDate")
    if not (start_raw and end_raw):
        return None, None
    return (
        parse_datetime_param(start_raw, field_name="start_date"),
        parse_datetime_param(end_raw, field_name="end_date", end_of_day=True),
    )


class FinancialRecordViewSet(viewsets.ViewSet):
    permission_classes = [FinancePermission]

    serializer_class = FinancialRecordSerializer
    queryset = FinancialRecord.objects.none()

    @extend_schema(
        tags=["Finance"],
        responses={200: FinancialRecordSerializer(many=True)},
        parameters=[
            *RANGE_PARAMETERS,
            OpenApiParameter(
                name="type",
                type=OpenApiTypes.STR,
                location=OpenApiParameter.QUERY,
                required=False,
                enum=list(RecordType.values),
                description="income or expense.",
            ),
        ],
    )
    def list(self, request):
        scope = require_scope(request)
        start, end = _range_from_query(request)
        record_type = request.query_params.get("type") or None

        qs = list_financial_records(company_id=scope.company_id, start=start, end=end, record_type=record_type)
        return Response(FinancialRecordSerializer(qs, many=True).data, status=status.HTTP_200_OK)

    @extend_schema(tags=["Finance"], request=FinancialRecordCreateSerializer, responses={201: FinancialRecordSerializer})
    def create(self, request):
        scope = require_scope(request)

        ser = FinancialRecordCreateSerializer(data=request.data)
        ser.is_valid(raise_exception=True)

        record = FinanceService.create_record(
            company_id=scope.company_id,
            actor_user_id=scope.user_id,
            **ser.validated_data,
        )
        return Response(FinancialRecordSerializer(record).data, status=status.HTTP_201_CREATED)

    @extend_schema(tags=["Finance"], responses={200: FinanceSummarySerializer}, parameters=RANGE_PARAMETERS)
    @action(detail=False, methods=["get"], url_path="summary")
    def summary(self, request):
        scope = require_scope(request)
        start, end = _range_from_query(request)

        s = finance_summary(company_id=scope.company_id, start=start, end=end)
        data = FinanceSummarySerializer({"income": s.income, "expense": s.expense, "balance": s.balance}).data
        return Response(data, status=status.HTTP_200_OK)


class FinancialGoalViewSet(viewsets.ViewSet):
    permission_classes = [FinancePermission]

    serializer_class = FinancialGoalSerializer
    queryset = FinancialGoal.objects.none()

    @extend_schema(tags=["Finance"], responses={200: FinancialGoalSerializer(many=True)})
    def list(self, request):
        scope = require_scope(request)
        qs = list_financial_goals(company_id=scope.company_id)
        return Response(FinancialGoalSerializer(qs, many=True).data, status=status.HTTP_200_OK)

    @extend_schema(tags=["Finance"], request=FinancialGoalCreateSerializer, responses={201: FinancialGoalSerializer})
    def create(self, request):
        scope = require_scope(request)

        ser = FinancialGoalCreateSerializer(data=request.data)
        ser.is_valid(raise_exception=True)

        goal = FinanceService.create_goal(
            company_id=scope.company_id,
            actor_user_id=scope.user_id,
            **ser.validated_data,
        )
        return Response(FinancialGoalSerializer(goal).data, status=status.HTTP_201_CREATED)

    @extend_schema(tags=["Finance"], responses={200: GoalProgressSerializer, 204: None})
    @action(detail=False, methods=["get"], url_path="current")
    def current(self, request):
        """
        204 when no goal covers today.
        """
        scope = require_scope(request)
        progress = current_goal(company_id=scope.company_id)
        if progress is None:
            return Response(status=status.HTTP_204_NO_CONTENT)

        data = GoalProgressSerializer(
            {"goal": progress.goal, "achieved": progress.achieved, "progress": progress.progress}
        ).data
        return Response(data, status=status.HTTP_200_OK)
