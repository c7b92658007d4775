# backend/bm_core/dashboard/selectors.py
from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, time, timedelta
from decimal import ROUND_HALF_UP, Decimal
from typing import Optional
from uuid import UUID

from django.utils import timezone

from bm_core.appointments.models import AppointmentStatus
from bm_core.appointments.selectors import appointments_in_window
from bm_core.clients.selectors import count_clients
from bm_core.common.money import ZERO, format_amount
from bm_core.finance.models import RecordType
from bm_core.finance.selectors import total_value

TIME_FILTERS = ("day", "week", "month", "year")
DEFAULT_TIME_FILTER = "day"


@dataclass(frozen=True)
class TimeWindow:
    start: datetime
    end: datetime


def _start_of_day(dt: datetime) -> datetime:
    return dt.replace(hour=0, minute=0, second=0, microsecond=0)


def _end_of_day(dt: datetime) -> datetime:
    return datetime.combine(dt.date(), time.max, tzinfo=dt.tzinfo)


def resolve_time_window(time_filter: str | None, now: Optional[datetime] = None) -> TimeWindow:
    """
    Windows are computed on the server clock (settings.TIME_ZONE) and all end today at 23:59:59.999999.

      day   -> today 00:00
      week  -> 7 days ago 00:00
      month -> 1st of this month 00:00
      year  -> Jan 1st 00:00

    Unknown or missing filters fall back to day.
    """
    local_now = timezone.localtime(now or timezone.now())
    end = _end_of_day(local_now)

    if time_filter == "week":
        start = _start_of_day(local_now - timedelta(days=7))
    elif time_filter == "month":
        start = _start_of_day(local_now.replace(day=1))
    elif time_filter == "year":
        start = _start_of_day(local_now.replace(month=1, day=1))
    else:
        start = _start_of_day(local_now)

    return TimeWindow(start=start, end=end)


def upcoming_week_window(now: Optional[datetime] = None) -> TimeWindow:
    """
    now -> end of the day seven days from now.
    """
    local_now = timezone.localtime(now or timezone.now())
    return TimeWindow(start=local_now, end=_end_of_day(local_now + timedelta(days=7)))


def occupation_rate(*, completed: int, total: int) -> int:
    """
    Percent of appointments completed, rounded half up. No appointments -> 0.
    """
    pct = Decimal(completed * 100) / Decimal(total or 1)
    return int(pct.quantize(Decimal("1"), rounding=ROUND_HALF_UP))


@dataclass(frozen=True)
class DashboardStats:
    appointments: int
    clients: int
    revenue: str
    occupation: int
    clients_served: int
    weekly_appointments: int


def dashboard_stats(
    *,
    company_id: UUID,
    user_id: int,
    is_admin: bool,
    time_filter: str | None,
    now: Optional[datetime] = None,
) -> DashboardStats:
    """
    Collaborators only see their own appointments and never see revenue.
    Pure read.
    """
    window = resolve_time_window(time_filter, now=now)
    collaborator_id = None if is_admin else user_id

    in_window = appointments_in_window(
        company_id=company_id,
        start=window.start,
        end=window.end,
        collaborator_id=collaborator_id,
    )
    total = in_window.count()
    completed = in_window.filter(status=AppointmentStatus.COMPLETED).count()

    revenue = ZERO
    if is_admin:
        revenue = total_value(
            company_id=company_id,
            record_type=RecordType.INCOME,
            start=window.start,
            end=window.end,
        )

    week = upcoming_week_window(now=now)
    weekly = appointments_in_window(
        company_id=company_id,
        start=week.start,
        end=week.end,
        collaborator_id=collaborator_id,
    ).count()

    return DashboardStats(
        appointments=total,
        clients=count_clients(company_id=company_id),
        revenue=format_amount(revenue),
        occupation=occupation_rate(completed=completed, total=total),
        clients_served=completed,
        weekly_appointments=weekly,
    )
