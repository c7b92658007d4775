# backend/bm_core/clients/services.py
from __future__ import annotations

import logging
from uuid import UUID

from django.db import transaction

from bm_core.audit.models import AuditEventCode
from bm_core.audit.services import AuditService
from bm_core.clients.models import Client
from bm_core.common.ownership import get_owned_or_error

logger = logging.getLogger(__name__)


class ClientService:
    @staticmethod
    @transaction.atomic
    def create(
        *,
        company_id: UUID,
        actor_user_id: int | None,
        name: str,
        phone: str,
        notes: str = "",
    ) -> Client:
        client = Client.objects.create(
            company_id=company_id,
            name=name,
            phone=phone,
            notes=notes or "",
        )

        AuditService.log(
            event_code=AuditEventCode.CLIENT_CREATED,
            entity_type="Client",
            entity_id=client.id,
            company_id=company_id,
            actor_user_id=actor_user_id,
        )
        return client

    @staticmethod
    @transaction.atomic
    def update(
        *,
        company_id: UUID,
        actor_user_id: int | None,
        client_id,
        data: dict,
    ) -> Client:
        client = get_owned_or_error(
            Client.objects.select_for_update(), pk=client_id, company_id=company_id, label="Client"
        )

        allowed = {"name", "phone", "notes"}
        updates = {k: v for k, v in (data or {}).items() if k in allowed}

        for k, v in updates.items():
            setattr(client, k, v if v is not None else "")
        client.save()

        AuditService.log(
            event_code=AuditEventCode.CLIENT_UPDATED,
            entity_type="Client",
            entity_id=client.id,
            company_id=company_id,
            actor_user_id=actor_user_id,
            metadata={"updated_fields": sorted(updates.keys())},
        )
        return client

    @staticmethod
    @transaction.atomic
    def delete(*, company_id: UUID, actor_user_id: int | None, client_id) -> None:
        """
        Removes the client and every appointment booked for it.
        Each appointment goes through AppointmentService.delete so its financial
        record and procedure links are removed first.
        """
        from bm_core.appointments.models import Appointment
        from bm_core.appointments.services import AppointmentService

        client = get_owned_or_error(
            Client.objects.select_for_update(), pk=client_id, company_id=company_id, label="Client"
        )

        appointment_ids = list(
            Appointment.objects.filter(company_id=company_id, client_id=client.id).values_list("id", flat=True)
        )
        for appointment_id in appointment_ids:
            AppointmentService.delete(
                company_id=company_id,
                actor_user_id=actor_user_id,
                appointment_id=appointment_id,
            )

        pk = client.id
        client.delete()

        AuditService.log(
            event_code=AuditEventCode.CLIENT_DELETED,
            entity_type="Client",
            entity_id=pk,
            company_id=company_id,
            actor_user_id=actor_user_id,
            metadata={"appointments_deleted": len(appointment_ids)},
        )
        logger.info(
            "client deleted company_id=%s client_id=%s appointments_deleted=%s",
            company_id,
            pk,
            len(appointment_ids),
        )
