# backend/bm_core/appointments/selectors.py
from __future__ import annotations

from datetime import datetime
from uuid import UUID

from django.db.models import QuerySet

from bm_core.appointments.models import Appointment
from bm_core.common.ownership import get_owned_or_error


def appointment_qs() -> QuerySet[Appointment]:
    return Appointment.objects.select_related("client", "collaborator", "primary_procedure").prefetch_related(
        "procedure_links"
    )


def get_appointment(*, company_id: UUID, appointment_id) -> Appointment:
    return get_owned_or_error(appointment_qs(), pk=appointment_id, company_id=company_id, label="Appointment")


def list_appointments(
    *,
    company_id: UUID,
    start: datetime | None = None,
    end: datetime | None = None,
    collaborator_id: int | None = None,
    client_id: UUID | None = None,
) -> QuerySet[Appointment]:
    """
    Filter precedence:
    1) start + end      -> inclusive range, oldest first, optional collaborator
    2) client           -> that client's appointments, newest first
    3) otherwise        -> everything, newest first
    """
    qs = appointment_qs().filter(company_id=company_id)

    if start is not None and end is not None:
        qs = qs.filter(date__gte=start, date__lte=end)
        if collaborator_id is not None:
            qs = qs.filter(collaborator_id=collaborator_id)
        return qs.order_by("date", "created_at")

    if client_id is not None:
        qs = qs.filter(client_id=client_id)

    return qs.order_by("-date", "-created_at")


def appointments_in_window(
    *,
    company_id: UUID,
    start: datetime,
    end: datetime,
    collaborator_id: int | None = None,
) -> QuerySet[Appointment]:
    qs = Appointment.objects.filter(company_id=company_id, date__gte=start, date__lte=end)
    if collaborator_id is not None:
        qs = qs.filter(collaborator_id=collaborator_id)
    return qs
