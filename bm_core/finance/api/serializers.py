# backend/bm_core/finance/api/serializers.py
from __future__ import annotations

from decimal import Decimal

from rest_framework import serializers

from bm_core.common.dates import DateTimeInputField
from bm_core.finance.models import FinancialGoal, FinancialRecord, GoalPeriod, RecordCategory, RecordType


class FinancialRecordCreateSerializer(serializers.Serializer):
    type = serializers.ChoiceField(choices=RecordType.choices)
    category = serializers.ChoiceField(choices=RecordCategory.choices)
    description = serializers.CharField(max_length=255)
    value = serializers.DecimalField(max_digits=12, decimal_places=2, min_value=Decimal("0.01"))
    date = DateTimeInputField()


class FinancialRecordSerializer(serializers.ModelSerializer):
    company_id = serializers.UUIDField(read_only=True)
    appointment_id = serializers.UUIDField(read_only=True, allow_null=True)

    class Meta:
        model = FinancialRecord
        fields = [
            "id",
            "company_id",
            "type",
            "category",
            "description",
            "value",
            "date",
            "appointment_id",
            "created_at",
        ]
        read_only_fields = fields


class FinanceSummarySerializer(serializers.Serializer):
    income = serializers.DecimalField(max_digits=14, decimal_places=2)
    expense = serializers.DecimalField(max_digits=14, decimal_places=2)
    balance = serializers.DecimalField(max_digits=14, decimal_places=2)


class FinancialGoalCreateSerializer(serializers.Serializer):
    target = serializers.DecimalField(max_digits=12, decimal_places=2, min_value=Decimal("0.01"))
    period = serializers.ChoiceField(choices=GoalPeriod.choices, required=False, default=GoalPeriod.MONTHLY)
    start_date = DateTimeInputField()
    end_date = DateTimeInputField()


class FinancialGoalSerializer(serializers.ModelSerializer):
    company_id = serializers.UUIDField(read_only=True)

    class Meta:
        model = FinancialGoal
        fields = ["id", "company_id", "target", "period", "start_date", "end_date", "created_at"]
        read_only_fields = fields


class GoalProgressSerializer(serializers.Serializer):
    goal = FinancialGoalSerializer()
    achieved = serializers.DecimalField(max_digits=14, decimal_places=2)
    progress = serializers.IntegerField()
