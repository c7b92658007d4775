# backend/bm_core/clients/selectors.py
from __future__ import annotations

from uuid import UUID

from django.db.models import Q, QuerySet

from bm_core.clients.models import Client
from bm_core.common.ownership import get_owned_or_error


def get_client(*, company_id: UUID, client_id) -> Client:
    return get_owned_or_error(Client.objects.all(), pk=client_id, company_id=company_id, label="Client")


def list_clients(*, company_id: UUID, q: str | None = None) -> QuerySet[Client]:
    qs = Client.objects.filter(company_id=company_id)

    qv = (q or "").strip()
    if qv:
        qs = qs.filter(Q(name__icontains=qv) | Q(phone__icontains=qv))

    return qs.order_by("name", "created_at")


def count_clients(*, company_id: UUID) -> int:
    return Client.objects.filter(company_id=company_id).count()
