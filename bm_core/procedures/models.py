# backend/bm_core/procedures/models.py
from decimal import Decimal

from django.core.validators import MinValueValidator
from django.db import models

from bm_core.common.models import CompanyScopedModel


class Procedure(CompanyScopedModel):
    """
    A priced service on the company's menu ("Corte", "Escova", "Barba").
    """
    name = models.CharField(max_length=255)
    price = models.DecimalField(max_digits=10, decimal_places=2, validators=[MinValueValidator(Decimal("0.00"))])

    class Meta:
        db_table = "procedures_procedure"
        indexes = [
            models.Index(fields=["company", "name"]),
        ]

    def __str__(self) -> str:
        return f"{self.name} ({self.price})"
