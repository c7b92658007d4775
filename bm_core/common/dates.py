# backend/bm_core/common/dates.py
from __future__ import annotations

import logging
from datetime import datetime, time

from django.utils import timezone
from django.utils.dateparse import parse_date, parse_datetime
from rest_framework import serializers

from bm_core.common.api.exceptions import INVALID_DATE_MSG, InvalidDateFormat

logger = logging.getLogger(__name__)


def parse_datetime_param(value, *, field_name: str, end_of_day: bool = False) -> datetime | None:
    """
    Parses a query-string date.

    Accepts ISO datetimes ("2026-10-19T14:00:00-03:00") and plain dates ("2026-10-19").
    A plain date maps to the start of that day, or to its last microsecond when
    end_of_day is set, so "start_date=2026-10-01&end_date=2026-10-31" covers the whole month.
    Naive values are read in the server time zone.
    """
    if value is None or str(value).strip() == "":
        return None

    raw = str(value).strip()
    try:
        d = parse_date(raw)
        if d is not None:
            dt = datetime.combine(d, time.max if end_of_day else time.min)
        else:
            dt = parse_datetime(raw)
    except ValueError:
        dt = None

    if dt is None:
        logger.warning("invalid date format field=%s value=%r", field_name, raw)
        raise InvalidDateFormat({field_name: INVALID_DATE_MSG})

    if timezone.is_naive(dt):
        dt = timezone.make_aware(dt)
    return dt


class DateTimeInputField(serializers.DateTimeField):
    """
    DateTimeField whose parse failures surface as "Invalid date format".
    """
    default_error_messages = {
        **serializers.DateTimeField.default_error_messages,
        "invalid": INVALID_DATE_MSG,
    }

    def to_internal_value(self, value):
        try:
            return super().to_internal_value(value)
        except serializers.ValidationError:
            logger.warning("invalid date format field=%s value=%r", self.field_name, value)
            raise
