# backend/bm_core/api/urls.py
from __future__ import annotations

from django.urls import path
from rest_framework.routers import DefaultRouter

from bm_core.appointments.api.views import AppointmentViewSet
from bm_core.audit.api.views import AuditEventViewSet
from bm_core.clients.api.views import ClientViewSet
from bm_core.dashboard.api.views import DashboardStatsView
from bm_core.finance.api.views import FinancialGoalViewSet, FinancialRecordViewSet
from bm_core.iam.api.auth import (
    LoginView,
    LogoutView,
    RefreshView,
    RegisterAdminView,
    RegisterCollaboratorView,
)
from bm_core.iam.api.collaborators import CollaboratorViewSet
from bm_core.iam.api.me import CompanyView, MeView
from bm_core.procedures.api.views import ProcedureViewSet

router = DefaultRouter()

router.register(r"clients", ClientViewSet, basename="clients")
router.register(r"procedures", ProcedureViewSet, basename="procedures")
router.register(r"collaborators", CollaboratorViewSet, basename="collaborators")
router.register(r"appointments", AppointmentViewSet, basename="appointments")
router.register(r"financial-records", FinancialRecordViewSet, basename="financial-records")
router.register(r"financial-goals", FinancialGoalViewSet, basename="financial-goals")
router.register(r"audit/events", AuditEventViewSet, basename="audit-events")

urlpatterns = [
    # Registration + auth
    path("register/admin/", RegisterAdminView.as_view(), name="register-admin"),
    path("register/collaborator/", RegisterCollaboratorView.as_view(), name="register-collaborator"),
    path("auth/login/", LoginView.as_view(), name="login"),
    path("auth/refresh/", RefreshView.as_view(), name="refresh"),
    path("auth/logout/", LogoutView.as_view(), name="logout"),

    # Session context
    path("user/", MeView.as_view(), name="me"),
    path("company/", CompanyView.as_view(), name="company"),

    path("dashboard/stats/", DashboardStatsView.as_view(), name="dashboard-stats"),

    # Router URLs last (so explicit paths win if ever overlapping)
    *router.urls,
]
