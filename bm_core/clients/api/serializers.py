# backend/bm_core/clients/api/serializers.py
from __future__ import annotations

from rest_framework import serializers

from bm_core.clients.models import Client


class ClientWriteSerializer(serializers.Serializer):
    name = serializers.CharField(max_length=255)
    phone = serializers.CharField(max_length=32)
    notes = serializers.CharField(required=False, allow_blank=True, allow_null=True, default="")


class ClientUpdateSerializer(serializers.Serializer):
    """
    PUT/PATCH contract: any subset of fields.
    """
    name = serializers.CharField(max_length=255, required=False)
    phone = serializers.CharField(max_length=32, required=False)
    notes = serializers.CharField(required=False, allow_blank=True, allow_null=True)

    def validate(self, attrs):
        if not attrs:
            raise serializers.ValidationError("At least one field is required.")
        return attrs


class ClientSerializer(serializers.ModelSerializer):
    company_id = serializers.UUIDField(read_only=True)

    class Meta:
        model = Client
        fields = [
            "id",
            "company_id",
            "name",
            "phone",
            "notes",
            "created_at",
            "updated_at",
        ]
        read_only_fields = fields
