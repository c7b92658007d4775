# backend/bm_core/companies/models.py
import secrets
import uuid

from django.db import models


def generate_invite_code() -> str:
    """
    8 upper-case hex characters, e.g. "3FA94C1B".
    """
    return secrets.token_hex(4).upper()


class Company(models.Model):
    """
    Top-level organization (the tenant).
    Root of all scoping in the system.
    NOT a CompanyScopedModel (it *is* the company).
    """

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)

    name = models.CharField(max_length=255)

    # shared with collaborators so they can join; never changes after creation
    invite_code = models.CharField(max_length=16, unique=True, editable=False)

    created_at = models.DateTimeField(auto_now_add=True, db_index=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = "companies_company"
        verbose_name_plural = "companies"

    def __str__(self) -> str:
        return self.name
