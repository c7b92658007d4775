# backend/bm_core/companies/selectors.py
from __future__ import annotations

from typing import Optional
from uuid import UUID

from bm_core.companies.models import Company


def get_company(*, company_id: UUID) -> Company:
    return Company.objects.get(id=company_id)


def get_company_by_invite_code_or_none(*, invite_code: str) -> Optional[Company]:
    code = (invite_code or "").strip().upper()
    if not code:
        return None
    return Company.objects.filter(invite_code=code).first()
