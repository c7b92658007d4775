# backend/bm_core/audit/api/serializers.py
from rest_framework import serializers

from bm_core.audit.models import AuditEvent


class AuditEventSerializer(serializers.ModelSerializer):
    company_id = serializers.UUIDField(read_only=True)
    actor_user_id = serializers.IntegerField(read_only=True, allow_null=True)
    # null once the acting user has been removed
    actor_name = serializers.CharField(source="actor_user.first_name", read_only=True, default=None)
    timestamp = serializers.DateTimeField(source="occurred_at", read_only=True)

    class Meta:
        model = AuditEvent
        fields = [
            "id",
            "company_id",
            "event_code",
            "entity_type",
            "entity_id",
            "actor_user_id",
            "actor_name",
            "timestamp",
            "metadata",
        ]
        read_only_fields = fields
