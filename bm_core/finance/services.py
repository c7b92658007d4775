# backend/bm_core/finance/services.py
from __future__ import annotations

import logging
from datetime import datetime
from uuid import UUID

from django.db import transaction
from rest_framework.exceptions import ValidationError

from bm_core.audit.models import AuditEventCode
from bm_core.audit.services import AuditService
from bm_core.common.money import format_amount, to_decimal
from bm_core.finance.models import FinancialGoal, FinancialRecord, GoalPeriod, RecordCategory, RecordType

logger = logging.getLogger(__name__)

RESERVED_CATEGORY_MSG = "Category 'appointment' is reserved for appointment records."


class FinanceService:
    """
    Manual cash-book entries and goals.
    Appointment-linked records are owned by AppointmentService, never created here.
    """

    @staticmethod
    @transaction.atomic
    def create_record(
        *,
        company_id: UUID,
        actor_user_id: int | None,
        type: str,
        category: str,
        description: str,
        value,
        date: datetime,
    ) -> FinancialRecord:
        if type not in RecordType.values:
            raise ValidationError({"type": f"Invalid type. Allowed: {list(RecordType.values)}"})
        if category not in RecordCategory.values:
            raise ValidationError({"category": f"Invalid category. Allowed: {list(RecordCategory.values)}"})
        if category == RecordCategory.APPOINTMENT:
            raise ValidationError({"category": RESERVED_CATEGORY_MSG})

        amount = to_decimal(value, field_name="value")
        if amount <= 0:
            raise ValidationError({"value": "Value must be greater than zero."})

        record = FinancialRecord.objects.create(
            company_id=company_id,
            type=type,
            category=category,
            description=description,
            value=amount,
            date=date,
        )

        AuditService.log(
            event_code=AuditEventCode.FINANCE_RECORD_CREATED,
            entity_type="FinancialRecord",
            entity_id=record.id,
            company_id=company_id,
            actor_user_id=actor_user_id,
            metadata={"type": type, "category": category, "value": format_amount(amount)},
        )
        logger.info("financial record created company_id=%s record_id=%s type=%s", company_id, record.id, type)
        return record

    @staticmethod
    @transaction.atomic
    def create_goal(
        *,
        company_id: UUID,
        actor_user_id: int | None,
        target,
        period: str,
        start_date: datetime,
        end_date: datetime,
    ) -> FinancialGoal:
        if period not in GoalPeriod.values:
            raise ValidationError({"period": f"Invalid period. Allowed: {list(GoalPeriod.values)}"})
        if end_date < start_date:
            raise ValidationError({"end_date": "end_date must not be before start_date."})

        amount = to_decimal(target, field_name="target")
        if amount <= 0:
            raise ValidationError({"target": "Target must be greater than zero."})

        goal = FinancialGoal.objects.create(
            company_id=company_id,
            target=amount,
            period=period,
            start_date=start_date,
            end_date=end_date,
        )

        AuditService.log(
            event_code=AuditEventCode.FINANCE_GOAL_CREATED,
            entity_type="FinancialGoal",
            entity_id=goal.id,
            company_id=company_id,
            actor_user_id=actor_user_id,
            metadata={"period": period, "target": format_amount(amount)},
        )
        return goal
