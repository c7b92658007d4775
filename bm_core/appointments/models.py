# backend/bm_core/appointments/models.py
from django.conf import settings
from django.db import models

from bm_core.clients.models import Client
from bm_core.common.models import CompanyScopedModel
from bm_core.procedures.models import Procedure


class AppointmentStatus(models.TextChoices):
    SCHEDULED = "scheduled", "Scheduled"
    CONFIRMED = "confirmed", "Confirmed"
    COMPLETED = "completed", "Completed"
    CANCELLED = "cancelled", "Cancelled"


class Appointment(CompanyScopedModel):
    """
    A booking of a client with a collaborator for an ordered list of procedures.

    `value` is always the sum of the linked procedure prices at the last create/update.
    `primary_procedure` mirrors the first linked procedure for older clients that read
    a single procedure; only AppointmentService writes it.
    """
    client = models.ForeignKey(Client, on_delete=models.PROTECT, related_name="appointments")
    collaborator = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.PROTECT,
        related_name="appointments",
    )

    date = models.DateTimeField(db_index=True)
    status = models.CharField(
        max_length=16,
        choices=AppointmentStatus.choices,
        default=AppointmentStatus.SCHEDULED,
        db_index=True,
    )
    value = models.DecimalField(max_digits=12, decimal_places=2)
    notes = models.TextField(blank=True)

    primary_procedure = models.ForeignKey(
        Procedure,
        on_delete=models.PROTECT,
        related_name="+",
        editable=False,
    )

    class Meta:
        db_table = "appointments_appointment"
        indexes = [
            models.Index(fields=["company", "date"]),
            models.Index(fields=["company", "collaborator", "date"]),
            models.Index(fields=["company", "client"]),
        ]

    def __str__(self) -> str:
        return f"{self.client_id} @ {self.date:%Y-%m-%d %H:%M} ({self.status})"


class AppointmentProcedure(models.Model):
    """
    Junction row. `position` keeps the submitted order; the same procedure may appear twice.
    """
    appointment = models.ForeignKey(Appointment, on_delete=models.PROTECT, related_name="procedure_links")
    procedure = models.ForeignKey(Procedure, on_delete=models.PROTECT, related_name="appointment_links")
    position = models.PositiveSmallIntegerField(default=0)

    class Meta:
        db_table = "appointments_appointment_procedure"
        ordering = ["position"]
        indexes = [
            models.Index(fields=["appointment", "position"]),
        ]
