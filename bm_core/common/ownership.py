# backend/bm_core/common/ownership.py
from __future__ import annotations

from uuid import UUID

from django.core.exceptions import ValidationError as DjangoValidationError
from django.db.models import Model, QuerySet
from rest_framework.exceptions import NotFound, PermissionDenied

ACCESS_DENIED_MSG = "Access denied"


def get_owned_or_error(qs: QuerySet, *, pk, company_id: UUID, label: str) -> Model:
    """
    Loads one company-scoped row for a detail endpoint.
    - unknown or malformed id -> 404 "<label> not found"
    - row of another company  -> 403 "Access denied"

    Pass a select_for_update() queryset to lock the row.
    """
    try:
        obj = qs.get(pk=pk)
    except (qs.model.DoesNotExist, DjangoValidationError, ValueError):
        raise NotFound(f"{label} not found")

    if obj.company_id != company_id:
        raise PermissionDenied(ACCESS_DENIED_MSG)
    return obj
