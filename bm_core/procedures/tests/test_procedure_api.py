# backend/bm_core/procedures/tests/test_procedure_api.py
from datetime import timedelta

import pytest
from django.utils import timezone

from bm_core.appointments.services import AppointmentService
from bm_core.procedures.models import Procedure

pytestmark = pytest.mark.django_db


def test_admin_creates_and_lists_procedures(api_client, company):
    r = api_client.post("/api/v1/procedures/", {"name": "Corte", "price": "30.00"}, format="json")
    assert r.status_code == 201, r.data
    assert r.data["price"] == "30.00"
    assert r.data["company_id"] == str(company.id)

    r = api_client.get("/api/v1/procedures/")
    assert r.status_code == 200, r.data
    assert [p["name"] for p in r.data] == ["Corte"]


def test_collaborator_reads_but_cannot_write(collaborator_client, procedures):
    r = collaborator_client.get("/api/v1/procedures/")
    assert r.status_code == 200, r.data
    assert len(r.data) == 3

    r = collaborator_client.post("/api/v1/procedures/", {"name": "Corte", "price": "30.00"}, format="json")
    assert r.status_code == 403, r.data
    assert r.data["error"]["code"] == "permission_denied"


def test_negative_price_is_rejected(api_client):
    r = api_client.post("/api/v1/procedures/", {"name": "Corte", "price": "-1.00"}, format="json")
    assert r.status_code == 400, r.data
    assert r.data["error"]["code"] == "validation_error"
    assert "price" in r.data["error"]["details"]


def test_update_price_keeps_existing_appointment_value(
    api_client, company, admin_user, client_obj, collaborator, procedures
):
    appt = AppointmentService.create(
        company_id=company.id,
        actor_user_id=admin_user.id,
        client_id=client_obj.id,
        collaborator_id=collaborator.id,
        procedure_ids=[procedures[0].id],
        date=timezone.now() + timedelta(days=1),
    )

    r = api_client.patch(f"/api/v1/procedures/{procedures[0].id}/", {"price": "25.00"}, format="json")
    assert r.status_code == 200, r.data
    assert r.data["price"] == "25.00"

    appt.refresh_from_db()
    assert str(appt.value) == "19.90"


def test_delete_unused_procedure(api_client, procedures):
    r = api_client.delete(f"/api/v1/procedures/{procedures[2].id}/")
    assert r.status_code == 204
    assert not Procedure.objects.filter(pk=procedures[2].id).exists()


def test_delete_procedure_in_use_is_refused(api_client, company, admin_user, client_obj, collaborator, procedures):
    AppointmentService.create(
        company_id=company.id,
        actor_user_id=admin_user.id,
        client_id=client_obj.id,
        collaborator_id=collaborator.id,
        procedure_ids=[procedures[0].id, procedures[1].id],
        date=timezone.now() + timedelta(days=1),
    )

    # linked but not primary
    r = api_client.delete(f"/api/v1/procedures/{procedures[1].id}/")
    assert r.status_code == 400, r.data
    assert r.data["error"]["message"] == "Procedure is used by appointments and cannot be deleted."
    assert Procedure.objects.filter(pk=procedures[1].id).exists()


def test_other_company_procedure_is_forbidden(other_client_api, procedures):
    r = other_client_api.get(f"/api/v1/procedures/{procedures[0].id}/")
    assert r.status_code == 403, r.data

    r = other_client_api.get("/api/v1/procedures/")
    assert r.status_code == 200, r.data
    assert r.data == []
