# backend/bm_core/procedures/services.py
from __future__ import annotations

import logging
from uuid import UUID

from django.db import transaction
from django.db.models import ProtectedError
from rest_framework.exceptions import ValidationError

from bm_core.audit.models import AuditEventCode
from bm_core.audit.services import AuditService
from bm_core.common.money import format_amount, to_decimal
from bm_core.common.ownership import get_owned_or_error
from bm_core.procedures.models import Procedure

logger = logging.getLogger(__name__)

PROCEDURE_IN_USE_MSG = "Procedure is used by appointments and cannot be deleted."


class ProcedureService:
    @staticmethod
    @transaction.atomic
    def create(*, company_id: UUID, actor_user_id: int | None, name: str, price) -> Procedure:
        procedure = Procedure.objects.create(
            company_id=company_id,
            name=name,
            price=to_decimal(price, field_name="price"),
        )

        AuditService.log(
            event_code=AuditEventCode.PROCEDURE_CREATED,
            entity_type="Procedure",
            entity_id=procedure.id,
            company_id=company_id,
            actor_user_id=actor_user_id,
            metadata={"price": format_amount(procedure.price)},
        )
        return procedure

    @staticmethod
    @transaction.atomic
    def update(*, company_id: UUID, actor_user_id: int | None, procedure_id, data: dict) -> Procedure:
        """
        Price changes apply to future bookings; existing appointments keep their value.
        """
        procedure = get_owned_or_error(
            Procedure.objects.select_for_update(), pk=procedure_id, company_id=company_id, label="Procedure"
        )

        updates = {k: v for k, v in (data or {}).items() if k in {"name", "price"}}
        if "price" in updates:
            updates["price"] = to_decimal(updates["price"], field_name="price")

        for k, v in updates.items():
            setattr(procedure, k, v)
        procedure.save()

        AuditService.log(
            event_code=AuditEventCode.PROCEDURE_UPDATED,
            entity_type="Procedure",
            entity_id=procedure.id,
            company_id=company_id,
            actor_user_id=actor_user_id,
            metadata={"updated_fields": sorted(updates.keys()), "price": format_amount(procedure.price)},
        )
        return procedure

    @staticmethod
    @transaction.atomic
    def delete(*, company_id: UUID, actor_user_id: int | None, procedure_id) -> None:
        procedure = get_owned_or_error(
            Procedure.objects.select_for_update(), pk=procedure_id, company_id=company_id, label="Procedure"
        )
        pk = procedure.id

        try:
            # savepoint: a refused delete must not poison the outer transaction
            with transaction.atomic():
                procedure.delete()
        except ProtectedError:
            logger.info("procedure delete refused (in use) company_id=%s procedure_id=%s", company_id, pk)
            raise ValidationError({"detail": PROCEDURE_IN_USE_MSG})

        AuditService.log(
            event_code=AuditEventCode.PROCEDURE_DELETED,
            entity_type="Procedure",
            entity_id=pk,
            company_id=company_id,
            actor_user_id=actor_user_id,
        )
