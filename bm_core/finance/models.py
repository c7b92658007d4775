# backend/bm_core/finance/models.py
from django.db import models

from bm_core.common.models import CompanyScopedModel


class RecordType(models.TextChoices):
    INCOME = "income", "Income"
    EXPENSE = "expense", "Expense"


class RecordCategory(models.TextChoices):
    APPOINTMENT = "appointment", "Appointment"
    FIXED_COST = "fixed_cost", "Fixed cost"
    VARIABLE_COST = "variable_cost", "Variable cost"


class GoalPeriod(models.TextChoices):
    MONTHLY = "monthly", "Monthly"
    QUARTERLY = "quarterly", "Quarterly"
    YEARLY = "yearly", "Yearly"


class FinancialRecord(CompanyScopedModel):
    """
    One line of the company's cash book.

    Rows with category=appointment mirror an appointment (one per appointment)
    and are written only by AppointmentService.
    """
    type = models.CharField(max_length=16, choices=RecordType.choices, db_index=True)
    category = models.CharField(max_length=32, choices=RecordCategory.choices, db_index=True)
    description = models.CharField(max_length=255)
    value = models.DecimalField(max_digits=12, decimal_places=2)
    date = models.DateTimeField(db_index=True)

    appointment = models.OneToOneField(
        "appointments.Appointment",
        on_delete=models.PROTECT,
        related_name="financial_record",
        null=True,
        blank=True,
    )

    class Meta:
        db_table = "finance_financial_record"
        indexes = [
            models.Index(fields=["company", "date"]),
            models.Index(fields=["company", "type", "date"]),
        ]

    def __str__(self) -> str:
        return f"{self.type} {self.value} ({self.description})"


class FinancialGoal(CompanyScopedModel):
    """
    Income target for a date window.
    """
    target = models.DecimalField(max_digits=12, decimal_places=2)
    period = models.CharField(max_length=16, choices=GoalPeriod.choices, default=GoalPeriod.MONTHLY)
    start_date = models.DateTimeField()
    end_date = models.DateTimeField()

    class Meta:
        db_table = "finance_financial_goal"
        indexes = [
            models.Index(fields=["company", "start_date"]),
        ]

    def __str__(self) -> str:
        return f"{self.period} {self.target}"
