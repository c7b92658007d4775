# backend/bm_core/audit/models.py
from django.conf import settings
from django.db import models

from bm_core.common.models import CompanyScopedModel


class AuditEventCode(models.TextChoices):
    CLIENT_CREATED = "client.created", "Client created"
    CLIENT_UPDATED = "client.updated", "Client updated"
    CLIENT_DELETED = "client.deleted", "Client deleted"

    PROCEDURE_CREATED = "procedure.created", "Procedure created"
    PROCEDURE_UPDATED = "procedure.updated", "Procedure updated"
    PROCEDURE_DELETED = "procedure.deleted", "Procedure deleted"

    APPOINTMENT_CREATED = "appointment.created", "Appointment created"
    APPOINTMENT_UPDATED = "appointment.updated", "Appointment updated"
    APPOINTMENT_COMPLETED = "appointment.completed", "Appointment completed"
    APPOINTMENT_DELETED = "appointment.deleted", "Appointment deleted"

    FINANCE_RECORD_CREATED = "finance.record.created", "Financial record created"
    FINANCE_GOAL_CREATED = "finance.goal.created", "Financial goal created"

    COLLABORATOR_REMOVED = "collaborator.removed", "Collaborator removed"


class AuditEvent(CompanyScopedModel):
    """
    Who booked, changed, completed or removed what, and when. Rows are never updated.

    entity_id is a plain UUID (not a FK) so the trail outlives the entity:
    a deleted appointment still has its appointment.deleted row.
    """
    event_code = models.CharField(max_length=64, choices=AuditEventCode.choices, db_index=True)
    entity_type = models.CharField(max_length=64, db_index=True)  # model name, e.g. "Appointment"
    entity_id = models.UUIDField(db_index=True)

    # a removed collaborator keeps the history, without the link
    actor_user = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.SET_NULL,
        related_name="audit_events",
        null=True,
        blank=True,
    )

    occurred_at = models.DateTimeField(auto_now_add=True, db_index=True)
    metadata = models.JSONField(default=dict, blank=True)

    class Meta:
        db_table = "audit_event"
        ordering = ["-occurred_at"]
        indexes = [
            models.Index(fields=["company", "-occurred_at"]),
            models.Index(fields=["company", "entity_type", "entity_id"]),
        ]

    def __str__(self) -> str:
        return f"{self.event_code} {self.entity_type}:{self.entity_id}"
