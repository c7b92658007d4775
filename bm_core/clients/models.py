# backend/bm_core/clients/models.py
from django.db import models

from bm_core.common.models import CompanyScopedModel


class Client(CompanyScopedModel):
    """
    A customer of the salon/barbershop.
    """
    name = models.CharField(max_length=255)
    phone = models.CharField(max_length=32)
    notes = models.TextField(blank=True)

    class Meta:
        db_table = "clients_client"
        indexes = [
            models.Index(fields=["company", "name"]),
            models.Index(fields=["company", "phone"]),
        ]

    def __str__(self) -> str:
        return self.name
