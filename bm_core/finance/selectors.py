# backend/bm_core/finance/selectors.py
from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from decimal import ROUND_HALF_UP, Decimal
from typing import Optional
from uuid import UUID

from django.db.models import QuerySet
from django.utils import timezone

from bm_core.common.money import ZERO, sum_amounts
from bm_core.finance.models import FinancialGoal, FinancialRecord, RecordType


def list_financial_records(
    *,
    company_id: UUID,
    start: datetime | None = None,
    end: datetime | None = None,
    record_type: str | None = None,
) -> QuerySet[FinancialRecord]:
    qs = FinancialRecord.objects.filter(company_id=company_id)

    if start is not None and end is not None:
        qs = qs.filter(date__gte=start, date__lte=end)
    if record_type:
        qs = qs.filter(type=record_type)

    return qs.order_by("-date", "-created_at")


def total_value(
    *,
    company_id: UUID,
    record_type: str,
    start: datetime | None = None,
    end: datetime | None = None,
) -> Decimal:
    """
    Exact sum in cents. Not a DB aggregate: SQLite sums decimals as floats.
    """
    qs = list_financial_records(company_id=company_id, start=start, end=end, record_type=record_type)
    return sum_amounts(qs.values_list("value", flat=True))


@dataclass(frozen=True)
class FinanceSummary:
    income: Decimal
    expense: Decimal

    @property
    def balance(self) -> Decimal:
        return self.income - self.expense


def finance_summary(
    *,
    company_id: UUID,
    start: datetime | None = None,
    end: datetime | None = None,
) -> FinanceSummary:
    return FinanceSummary(
        income=total_value(company_id=company_id, record_type=RecordType.INCOME, start=start, end=end),
        expense=total_value(company_id=company_id, record_type=RecordType.EXPENSE, start=start, end=end),
    )


def list_financial_goals(*, company_id: UUID) -> QuerySet[FinancialGoal]:
    return FinancialGoal.objects.filter(company_id=company_id).order_by("-start_date", "-created_at")


@dataclass(frozen=True)
class GoalProgress:
    goal: FinancialGoal
    achieved: Decimal
    progress: int  # percent, 0..100


def _progress_percent(achieved: Decimal, target: Decimal) -> int:
    if target <= ZERO:
        return 100 if achieved > ZERO else 0
    pct = (achieved * 100 / target).quantize(Decimal("1"), rounding=ROUND_HALF_UP)
    return int(min(max(pct, Decimal("0")), Decimal("100")))


def current_goal(*, company_id: UUID, now: Optional[datetime] = None) -> GoalProgress | None:
    """
    The goal whose window contains `now` (latest start wins), with the income booked in it.
    """
    now = now or timezone.now()
    goal = (
        FinancialGoal.objects.filter(company_id=company_id, start_date__lte=now, end_date__gte=now)
        .order_by("-start_date", "-created_at")
        .first()
    )
    if goal is None:
        return None

    achieved = total_value(
        company_id=company_id,
        record_type=RecordType.INCOME,
        start=goal.start_date,
        end=goal.end_date,
    )
    return GoalProgress(goal=goal, achieved=achieved, progress=_progress_percent(achieved, goal.target))
