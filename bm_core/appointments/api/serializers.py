# backend/bm_core/appointments/api/serializers.py
from __future__ import annotations

from rest_framework import serializers

from bm_core.appointments.models import Appointment, AppointmentStatus
from bm_core.common.dates import DateTimeInputField


class AppointmentWriteSerializer(serializers.Serializer):
    """
    Create and update share one contract: PUT replaces the whole procedure list.
    `value` is not accepted; it is always computed from the procedures.
    Ids stay strings here so unknown and malformed ids both end up as invalid_reference.
    """
    client_id = serializers.CharField()
    collaborator_id = serializers.IntegerField()
    procedure_ids = serializers.ListField(child=serializers.CharField(), allow_empty=True)
    date = DateTimeInputField()
    status = serializers.ChoiceField(choices=AppointmentStatus.choices, required=False)
    notes = serializers.CharField(required=False, allow_blank=True, allow_null=True)


class AppointmentSerializer(serializers.ModelSerializer):
    company_id = serializers.UUIDField(read_only=True)
    client_id = serializers.UUIDField(read_only=True)
    client_name = serializers.CharField(source="client.name", read_only=True)
    collaborator_id = serializers.IntegerField(read_only=True)
    collaborator_name = serializers.CharField(source="collaborator.first_name", read_only=True)
    primary_procedure_id = serializers.UUIDField(read_only=True)
    procedure_ids = serializers.SerializerMethodField()

    class Meta:
        model = Appointment
        fields = [
            "id",
            "company_id",
            "client_id",
            "client_name",
            "collaborator_id",
            "collaborator_name",
            "date",
            "status",
            "value",
            "notes",
            "primary_procedure_id",
            "procedure_ids",
            "created_at",
            "updated_at",
        ]
        read_only_fields = fields

    def get_procedure_ids(self, obj) -> list[str]:
        return [str(link.procedure_id) for link in obj.procedure_links.all()]
