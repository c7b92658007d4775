# backend/bm_core/companies/services.py
from __future__ import annotations

import logging

from django.db import transaction
from rest_framework.exceptions import ValidationError

from bm_core.companies.models import Company, generate_invite_code

logger = logging.getLogger(__name__)

# 32 bits of randomness; a handful of retries is plenty
_INVITE_CODE_ATTEMPTS = 5


class CompanyService:
    """
    All Company mutations live here (write-model boundary).
    """

    @staticmethod
    @transaction.atomic
    def create(*, name: str) -> Company:
        name = (name or "").strip()
        if not name:
            raise ValidationError({"company_name": "This field is required."})

        for _ in range(_INVITE_CODE_ATTEMPTS):
            code = generate_invite_code()
            if not Company.objects.filter(invite_code=code).exists():
                break
        else:
            raise RuntimeError("Could not generate a unique invite code.")

        company = Company.objects.create(name=name, invite_code=code)
        logger.info("company created company_id=%s", company.id)
        return company
