# backend/bm_core/procedures/api/serializers.py
from __future__ import annotations

from decimal import Decimal

from rest_framework import serializers

from bm_core.procedures.models import Procedure


class ProcedureWriteSerializer(serializers.Serializer):
    name = serializers.CharField(max_length=255)
    # accepts "30.00" or 30; never a float internally
    price = serializers.DecimalField(max_digits=10, decimal_places=2, min_value=Decimal("0.00"))


class ProcedureUpdateSerializer(serializers.Serializer):
    name = serializers.CharField(max_length=255, required=False)
    price = serializers.DecimalField(max_digits=10, decimal_places=2, min_value=Decimal("0.00"), required=False)

    def validate(self, attrs):
        if not attrs:
            raise serializers.ValidationError("At least one field is required.")
        return attrs


class ProcedureSerializer(serializers.ModelSerializer):
    company_id = serializers.UUIDField(read_only=True)

    class Meta:
        model = Procedure
        fields = ["id", "company_id", "name", "price", "created_at", "updated_at"]
        read_only_fields = fields
