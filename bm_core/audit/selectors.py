# backend/bm_core/audit/selectors.py
from __future__ import annotations

from datetime import datetime
from uuid import UUID

from django.db.models import QuerySet

from bm_core.audit.models import AuditEvent


def list_audit_events(
    *,
    company_id: UUID,
    entity_type: str | None = None,
    entity_id: UUID | None = None,
    event_code: str | None = None,
    actor_user_id: int | None = None,
    since: datetime | None = None,
) -> QuerySet[AuditEvent]:
    """
    Newest first. entity_type matches case-insensitively ("appointment" == "Appointment").
    """
    qs = AuditEvent.objects.select_related("actor_user").filter(company_id=company_id)

    if entity_type:
        qs = qs.filter(entity_type__iexact=entity_type)
    if entity_id:
        qs = qs.filter(entity_id=entity_id)
    if event_code:
        qs = qs.filter(event_code=event_code)
    if actor_user_id is not None:
        qs = qs.filter(actor_user_id=actor_user_id)
    if since is not None:
        qs = qs.filter(occurred_at__gte=since)

    return qs.order_by("-occurred_at")
