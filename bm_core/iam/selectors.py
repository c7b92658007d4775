# backend/bm_core/iam/selectors.py
from __future__ import annotations

from uuid import UUID

from django.db.models import QuerySet

from bm_core.iam.models import UserProfile


def list_company_users(*, company_id: UUID) -> QuerySet[UserProfile]:
    """
    Everyone who can be booked: admins and collaborators alike.
    """
    return (
        UserProfile.objects.select_related("user")
        .filter(company_id=company_id, user__is_active=True)
        .order_by("user__first_name", "user__id")
    )


def get_company_user_profile(*, company_id: UUID, user_id: int) -> UserProfile:
    return UserProfile.objects.select_related("user").get(company_id=company_id, user_id=user_id)


def is_company_user(*, company_id: UUID, user_id) -> bool:
    """
    Same rule as list_company_users: only active users can be booked.
    """
    try:
        uid = int(user_id)
    except (TypeError, ValueError):
        return False
    return UserProfile.objects.filter(company_id=company_id, user_id=uid, user__is_active=True).exists()
