# backend/bm_core/common/scope.py
from __future__ import annotations

from dataclasses import dataclass
from uuid import UUID

from rest_framework.exceptions import NotAuthenticated, PermissionDenied

ROLE_ADMIN = "admin"
ROLE_COLLABORATOR = "collaborator"

NO_COMPANY_MSG = "Your account is not linked to a company."


@dataclass(frozen=True)
class CompanyScope:
    """
    Who is calling and on behalf of which company.
    Every read and write in the API is filtered by company_id.
    """
    company_id: UUID
    user_id: int
    role: str

    @property
    def is_admin(self) -> bool:
        return self.role == ROLE_ADMIN


def scope_for_user(user) -> CompanyScope | None:
    """
    Builds the scope from user.profile. Returns None for anonymous users
    and for users without a profile (e.g. a bare superuser created by createsuperuser).
    """
    if not user or not getattr(user, "is_authenticated", False):
        return None

    # reverse one-to-one raises RelatedObjectDoesNotExist (an AttributeError) when missing
    profile = getattr(user, "profile", None)
    if profile is None:
        return None

    return CompanyScope(company_id=profile.company_id, user_id=user.id, role=profile.role)


def attach_scope(request, user=None) -> CompanyScope | None:
    """
    Used by the auth layer once the user is known.
    Sets request.scope and request.company_id.
    """
    scope = scope_for_user(user or getattr(request, "user", None))
    request.scope = scope
    request.company_id = scope.company_id if scope else None
    return scope


def require_scope(request) -> CompanyScope:
    """
    Returns the caller's scope or raises.
    - anonymous -> 401
    - authenticated but no company profile -> 403

    APIClient.force_authenticate() skips authentication classes, so the
    scope is resolved lazily here when the auth layer did not attach it.
    """
    scope = getattr(request, "scope", None)
    if isinstance(scope, CompanyScope):
        return scope

    user = getattr(request, "user", None)
    if not user or not getattr(user, "is_authenticated", False):
        raise NotAuthenticated()

    scope = attach_scope(request, user=user)
    if scope is None:
        raise PermissionDenied(NO_COMPANY_MSG)
    return scope
