# backend/bm_core/iam/tests/test_collaborators.py
from datetime import timedelta

import pytest
from django.contrib.auth import get_user_model
from django.utils import timezone

from bm_core.appointments.services import AppointmentService
from bm_core.audit.models import AuditEvent
from bm_core.iam.models import UserProfile

pytestmark = pytest.mark.django_db

URL = "/api/v1/collaborators/"


def test_list_company_users(collaborator_client, admin_user, collaborator, other_admin):
    r = collaborator_client.get(URL)
    assert r.status_code == 200, r.data

    assert [u["name"] for u in r.data] == ["Ana Admin", "Carla Cabeleireira"]
    assert {u["id"] for u in r.data} == {admin_user.id, collaborator.id}


def test_me_returns_profile(collaborator_client, collaborator, company):
    r = collaborator_client.get("/api/v1/user/")
    assert r.status_code == 200, r.data
    assert r.data["id"] == collaborator.id
    assert r.data["role"] == "collaborator"
    assert r.data["company_id"] == str(company.id)


def test_company_hides_invite_code_from_collaborators(collaborator_client, api_client):
    r = collaborator_client.get("/api/v1/company/")
    assert r.status_code == 200, r.data
    assert "invite_code" not in r.data

    r = api_client.get("/api/v1/company/")
    assert r.status_code == 200, r.data
    assert r.data["invite_code"] == "ABCD1234"


def test_admin_removes_collaborator(api_client, collaborator):
    r = api_client.delete(f"{URL}{collaborator.id}/")
    assert r.status_code == 204

    assert not get_user_model().objects.filter(pk=collaborator.id).exists()
    assert not UserProfile.objects.filter(user_id=collaborator.id).exists()
    assert AuditEvent.objects.filter(event_code="collaborator.removed").count() == 1


def test_collaborator_cannot_remove(collaborator_client, admin_user):
    r = collaborator_client.delete(f"{URL}{admin_user.id}/")
    assert r.status_code == 403, r.data


def test_admin_cannot_remove_self(api_client, admin_user):
    r = api_client.delete(f"{URL}{admin_user.id}/")
    assert r.status_code == 400, r.data
    assert r.data["error"]["message"] == "You cannot remove yourself."


def test_remove_other_company_user_is_404(api_client, other_admin):
    r = api_client.delete(f"{URL}{other_admin.id}/")
    assert r.status_code == 404, r.data
    assert get_user_model().objects.filter(pk=other_admin.id).exists()


def test_collaborator_with_appointments_is_kept(
    api_client, company, admin_user, client_obj, collaborator, procedures
):
    AppointmentService.create(
        company_id=company.id,
        actor_user_id=admin_user.id,
        client_id=client_obj.id,
        collaborator_id=collaborator.id,
        procedure_ids=[procedures[0].id],
        date=timezone.now() + timedelta(days=1),
    )

    r = api_client.delete(f"{URL}{collaborator.id}/")
    assert r.status_code == 400, r.data
    assert get_user_model().objects.filter(pk=collaborator.id).exists()
