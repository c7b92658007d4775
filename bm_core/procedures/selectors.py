# backend/bm_core/procedures/selectors.py
from __future__ import annotations

from uuid import UUID

from django.db.models import QuerySet

from bm_core.common.ownership import get_owned_or_error
from bm_core.procedures.models import Procedure


def list_procedures(*, company_id: UUID) -> QuerySet[Procedure]:
    return Procedure.objects.filter(company_id=company_id).order_by("name", "created_at")


def get_procedure(*, company_id: UUID, procedure_id) -> Procedure:
    return get_owned_or_error(Procedure.objects.all(), pk=procedure_id, company_id=company_id, label="Procedure")
