# backend/bm_core/common/permissions.py

from __future__ import annotations

from rest_framework.permissions import SAFE_METHODS, BasePermission

from bm_core.common.scope import ROLE_ADMIN, ROLE_COLLABORATOR, attach_scope, CompanyScope

ALL_ROLES = {ROLE_ADMIN, ROLE_COLLABORATOR}


def _scope_for(request) -> CompanyScope | None:
    """
    Reuse the scope attached by the auth layer, resolve it otherwise.
    Permissions must not raise (a raised ValidationError would become a 400).
    """
    scope = getattr(request, "scope", None)
    if isinstance(scope, CompanyScope):
        return scope
    return attach_scope(request, user=getattr(request, "user", None))


class BaseRolePermission(BasePermission):
    """
    Base permission class for role-based access control.

    Key behavior:
    - Requires an authenticated user linked to a company (403 otherwise).
    - ADMIN bypass.
    - Uses allowed_roles_per_action for strict RBAC.
    - If action is unknown and request is SAFE, fall back to list/retrieve
      so @action read endpoints are not denied by accident.
    """
    message = "You do not have permission to perform this action."

    # Override in subclasses: dict of action -> set of allowed roles
    allowed_roles_per_action = {
        "list": ALL_ROLES,
        "retrieve": ALL_ROLES,
        "create": {ROLE_ADMIN},
        "update": {ROLE_ADMIN},
        "partial_update": {ROLE_ADMIN},
        "destroy": {ROLE_ADMIN},
    }

    def _infer_action(self, request, view) -> str | None:
        action = getattr(view, "action", None)
        if action:
            return action

        kwargs = getattr(view, "kwargs", {}) or {}
        is_detail = "pk" in kwargs or "id" in kwargs

        method = request.method.upper()
        if method in ("GET", "HEAD", "OPTIONS"):
            return "retrieve" if is_detail else "list"
        if method == "POST":
            return "create"
        if method == "PUT":
            return "update"
        if method == "PATCH":
            return "partial_update"
        if method == "DELETE":
            return "destroy"
        return None

    def has_permission(self, request, view) -> bool:
        user = request.user
        if not user or not getattr(user, "is_authenticated", False):
            return False

        scope = _scope_for(request)
        if scope is None:
            return False

        if scope.role == ROLE_ADMIN:
            return True

        action = self._infer_action(request, view)
        allowed = self.allowed_roles_per_action.get(action)

        if allowed is None and request.method in SAFE_METHODS:
            kwargs = getattr(view, "kwargs", {}) or {}
            is_detail = "pk" in kwargs or "id" in kwargs
            allowed = self.allowed_roles_per_action.get("retrieve" if is_detail else "list")

        if allowed is not None:
            return scope.role in allowed

        # Unknown action => deny by default
        return False

    def has_object_permission(self, request, view, obj) -> bool:
        return self.has_permission(request, view)


class IsCompanyMember(BaseRolePermission):
    """Any admin or collaborator of a company"""
    def has_permission(self, request, view) -> bool:
        user = request.user
        if not user or not getattr(user, "is_authenticated", False):
            return False
        return _scope_for(request) is not None


class ClientPermission(BaseRolePermission):
    """Permissions for Client management"""
    allowed_roles_per_action = {
        "list": ALL_ROLES,
        "retrieve": ALL_ROLES,
        "create": ALL_ROLES,
        "update": ALL_ROLES,
        "partial_update": ALL_ROLES,
        "destroy": {ROLE_ADMIN},
    }


class ProcedurePermission(BaseRolePermission):
    """Permissions for Procedure catalog"""
    message = "Admin access required."
    allowed_roles_per_action = {
        "list": ALL_ROLES,
        "retrieve": ALL_ROLES,
        "create": {ROLE_ADMIN},
        "update": {ROLE_ADMIN},
        "partial_update": {ROLE_ADMIN},
        "destroy": {ROLE_ADMIN},
    }


class AppointmentPermission(BaseRolePermission):
    """Permissions for Appointment management"""
    allowed_roles_per_action = {
        "list": ALL_ROLES,
        "retrieve": ALL_ROLES,
        "create": ALL_ROLES,
        "update": ALL_ROLES,
        "partial_update": ALL_ROLES,
        "destroy": ALL_ROLES,
        "procedures": ALL_ROLES,
    }


class CollaboratorPermission(BaseRolePermission):
    """Permissions for company users"""
    message = "Admin access required."
    allowed_roles_per_action = {
        "list": ALL_ROLES,
        "retrieve": ALL_ROLES,
        "destroy": {ROLE_ADMIN},
    }


class FinancePermission(BaseRolePermission):
    """Permissions for financial records and goals"""
    message = "Admin access required."
    allowed_roles_per_action = {
        "list": ALL_ROLES,
        "retrieve": ALL_ROLES,
        "summary": ALL_ROLES,
        "current": ALL_ROLES,
        "create": {ROLE_ADMIN},
    }


class AuditPermission(BaseRolePermission):
    """Permissions for Audit log access"""
    allowed_roles_per_action = {
        "list": {ROLE_ADMIN},
        "retrieve": {ROLE_ADMIN},
    }
