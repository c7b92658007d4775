# backend/bm_core/appointments/services.py

from __future__ import annotations

import logging
from typing import List, Optional, Sequence
from uuid import UUID

from django.core.exceptions import ValidationError as DjangoValidationError
from django.db import transaction
from django.utils import timezone

from bm_core.appointments.models import Appointment, AppointmentProcedure, AppointmentStatus
from bm_core.audit.models import AuditEventCode
from bm_core.audit.services import AuditService
from bm_core.clients.models import Client
from bm_core.common.api.exceptions import InvalidReference
from bm_core.common.money import format_amount
from bm_core.common.ownership import get_owned_or_error
from bm_core.finance.models import FinancialRecord, RecordCategory, RecordType
from bm_core.iam.selectors import is_company_user
from bm_core.procedures.models import Procedure
from bm_core.procedures.pricing import ResolvedProcedures, resolve_procedures

logger = logging.getLogger(__name__)

INVALID_CLIENT_MSG = "Invalid client or it does not belong to your company."
INVALID_COLLABORATOR_MSG = "Invalid collaborator or it does not belong to your company."


class AppointmentService:
    """
    Appointment write-model operations.

    Keeps three things consistent, always inside one transaction:
    - the Appointment row (value = sum of procedure prices, primary_procedure = first procedure)
    - its AppointmentProcedure rows (fully replaced on update)
    - its mirrored FinancialRecord (income/appointment, one per appointment)
    """

    # -------------------------
    # Internal helpers
    # -------------------------
    @staticmethod
    def _check_client(*, company_id: UUID, client_id) -> UUID:
        try:
            client = Client.objects.only("id", "company_id").get(pk=client_id)
        except (Client.DoesNotExist, DjangoValidationError, ValueError, TypeError):
            # DjangoValidationError: malformed UUID
            raise InvalidReference(INVALID_CLIENT_MSG)
        if client.company_id != company_id:
            raise InvalidReference(INVALID_CLIENT_MSG)
        return client.id

    @staticmethod
    def _check_collaborator(*, company_id: UUID, collaborator_id) -> int:
        if not is_company_user(company_id=company_id, user_id=collaborator_id):
            raise InvalidReference(INVALID_COLLABORATOR_MSG)
        return int(collaborator_id)

    @staticmethod
    def _write_links(*, appointment: Appointment, resolved: ResolvedProcedures) -> None:
        AppointmentProcedure.objects.bulk_create(
            [
                AppointmentProcedure(appointment=appointment, procedure=proc, position=i)
                for i, proc in enumerate(resolved.procedures)
            ]
        )

    @staticmethod
    def _record_description(appointment: Appointment) -> str:
        return f"Appointment {appointment.id}"

    # -------------------------
    # Create
    # -------------------------
    @staticmethod
    @transaction.atomic
    def create(
        *,
        company_id: UUID,
        actor_user_id: int | None,
        client_id,
        collaborator_id,
        procedure_ids: Sequence,
        date,
        status: Optional[str] = None,
        notes: Optional[str] = "",
    ) -> Appointment:
        resolved = resolve_procedures(company_id=company_id, procedure_ids=procedure_ids)
        client_pk = AppointmentService._check_client(company_id=company_id, client_id=client_id)
        collaborator_pk = AppointmentService._check_collaborator(company_id=company_id, collaborator_id=collaborator_id)

        appointment = Appointment.objects.create(
            company_id=company_id,
            client_id=client_pk,
            collaborator_id=collaborator_pk,
            date=date,
            status=status or AppointmentStatus.SCHEDULED,
            value=resolved.total,
            notes=notes or "",
            primary_procedure=resolved.primary,
        )

        AppointmentService._write_links(appointment=appointment, resolved=resolved)

        FinancialRecord.objects.create(
            company_id=company_id,
            type=RecordType.INCOME,
            category=RecordCategory.APPOINTMENT,
            description=AppointmentService._record_description(appointment),
            value=appointment.value,
            date=appointment.date,
            appointment=appointment,
        )

        AuditService.log(
            event_code=AuditEventCode.APPOINTMENT_CREATED,
            entity_type="Appointment",
            entity_id=appointment.id,
            company_id=company_id,
            actor_user_id=actor_user_id,
            metadata={
                "value": format_amount(appointment.value),
                "procedure_ids": [str(p.id) for p in resolved.procedures],
                "status": appointment.status,
            },
        )
        logger.info(
            "appointment created company_id=%s appointment_id=%s value=%s procedures=%s",
            company_id,
            appointment.id,
            format_amount(appointment.value),
            len(resolved.procedures),
        )
        return appointment

    # -------------------------
    # Update
    # -------------------------
    @staticmethod
    @transaction.atomic
    def update(
        *,
        company_id: UUID,
        actor_user_id: int | None,
        appointment_id,
        client_id,
        collaborator_id,
        procedure_ids: Sequence,
        date,
        status: Optional[str] = None,
        notes: Optional[str] = None,
    ) -> Appointment:
        """
        Whole-list procedure replacement. A transition *into* completed re-syncs the
        financial record (value = new appointment value, date = now); completed -> completed does not.
        """
        appointment = get_owned_or_error(
            Appointment.objects.select_for_update(),
            pk=appointment_id,
            company_id=company_id,
            label="Appointment",
        )
        previous_status = appointment.status

        resolved = resolve_procedures(company_id=company_id, procedure_ids=procedure_ids)
        client_pk = AppointmentService._check_client(company_id=company_id, client_id=client_id)
        collaborator_pk = AppointmentService._check_collaborator(company_id=company_id, collaborator_id=collaborator_id)

        appointment.client_id = client_pk
        appointment.collaborator_id = collaborator_pk
        appointment.date = date
        appointment.value = resolved.total
        appointment.primary_procedure = resolved.primary
        if status:
            appointment.status = status
        if notes is not None:
            appointment.notes = notes
        appointment.save()

        AppointmentProcedure.objects.filter(appointment_id=appointment.id).delete()
        AppointmentService._write_links(appointment=appointment, resolved=resolved)

        became_completed = (
            appointment.status == AppointmentStatus.COMPLETED
            and previous_status != AppointmentStatus.COMPLETED
        )
        if became_completed:
            AppointmentService._sync_completed_record(appointment=appointment)

        AuditService.log(
            event_code=AuditEventCode.APPOINTMENT_UPDATED,
            entity_type="Appointment",
            entity_id=appointment.id,
            company_id=company_id,
            actor_user_id=actor_user_id,
            metadata={
                "value": format_amount(appointment.value),
                "procedure_ids": [str(p.id) for p in resolved.procedures],
                "from_status": previous_status,
                "to_status": appointment.status,
            },
        )
        if became_completed:
            AuditService.log(
                event_code=AuditEventCode.APPOINTMENT_COMPLETED,
                entity_type="Appointment",
                entity_id=appointment.id,
                company_id=company_id,
                actor_user_id=actor_user_id,
                metadata={"value": format_amount(appointment.value)},
            )

        logger.info(
            "appointment updated company_id=%s appointment_id=%s status=%s->%s value=%s",
            company_id,
            appointment.id,
            previous_status,
            appointment.status,
            format_amount(appointment.value),
        )
        return Appointment.objects.get(pk=appointment.pk)

    @staticmethod
    def _sync_completed_record(*, appointment: Appointment) -> FinancialRecord:
        """
        Record date becomes the completion time, not the appointment date.
        A missing record (legacy data) is recreated.
        """
        completed_at = timezone.now()
        record = FinancialRecord.objects.select_for_update().filter(appointment_id=appointment.id).first()
        if record is None:
            logger.warning(
                "financial record missing for completed appointment, recreating appointment_id=%s",
                appointment.id,
            )
            return FinancialRecord.objects.create(
                company_id=appointment.company_id,
                type=RecordType.INCOME,
                category=RecordCategory.APPOINTMENT,
                description=AppointmentService._record_description(appointment),
                value=appointment.value,
                date=completed_at,
                appointment=appointment,
            )

        record.value = appointment.value
        record.date = completed_at
        record.save(update_fields=["value", "date", "updated_at"])
        return record

    # -------------------------
    # Delete
    # -------------------------
    @staticmethod
    @transaction.atomic
    def delete(*, company_id: UUID, actor_user_id: int | None, appointment_id) -> None:
        """
        Child-first: financial record, then procedure links, then the appointment.
        """
        appointment = get_owned_or_error(
            Appointment.objects.select_for_update(),
            pk=appointment_id,
            company_id=company_id,
            label="Appointment",
        )
        pk = appointment.id

        records_deleted, _ = FinancialRecord.objects.filter(appointment_id=pk).delete()
        links_deleted, _ = AppointmentProcedure.objects.filter(appointment_id=pk).delete()
        appointment.delete()

        AuditService.log(
            event_code=AuditEventCode.APPOINTMENT_DELETED,
            entity_type="Appointment",
            entity_id=pk,
            company_id=company_id,
            actor_user_id=actor_user_id,
            metadata={"financial_records_deleted": records_deleted, "procedure_links_deleted": links_deleted},
        )
        logger.info(
            "appointment deleted company_id=%s appointment_id=%s records=%s links=%s",
            company_id,
            pk,
            records_deleted,
            links_deleted,
        )

    # -------------------------
    # Reads that need the tenant check
    # -------------------------
    @staticmethod
    def procedures_for(*, company_id: UUID, appointment_id) -> List[Procedure]:
        appointment = get_owned_or_error(
            Appointment.objects.all(),
            pk=appointment_id,
            company_id=company_id,
            label="Appointment",
        )
        links = (
            AppointmentProcedure.objects.select_related("procedure")
            .filter(appointment_id=appointment.id)
            .order_by("position", "id")
        )
        return [link.procedure for link in links]
