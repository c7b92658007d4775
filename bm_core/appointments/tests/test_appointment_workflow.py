# backend/bm_core/appointments/tests/test_appointment_workflow.py
from datetime import timedelta
from decimal import Decimal

import pytest
from django.utils import timezone
from rest_framework.exceptions import NotFound, PermissionDenied, ValidationError

from bm_core.appointments.models import Appointment, AppointmentProcedure, AppointmentStatus
from bm_core.appointments.services import AppointmentService
from bm_core.audit.models import AuditEvent
from bm_core.common.api.exceptions import InvalidReference
from bm_core.finance.models import FinancialRecord, RecordCategory, RecordType
from bm_core.procedures.models import Procedure

pytestmark = pytest.mark.django_db


def _book(company, admin_user, client_obj, collaborator, procedure_ids, **kwargs):
    return AppointmentService.create(
        company_id=company.id,
        actor_user_id=admin_user.id,
        client_id=client_obj.id,
        collaborator_id=collaborator.id,
        procedure_ids=procedure_ids,
        date=kwargs.pop("date", timezone.now() + timedelta(days=1)),
        **kwargs,
    )


def test_create_sums_prices_exactly(company, admin_user, client_obj, collaborator, procedures):
    appt = _book(company, admin_user, client_obj, collaborator, [p.id for p in procedures])

    appt.refresh_from_db()
    assert appt.value == Decimal("65.40")
    assert str(appt.value) == "65.40"
    assert appt.status == AppointmentStatus.SCHEDULED
    assert appt.primary_procedure_id == procedures[0].id


def test_create_writes_links_in_order_and_one_income_record(company, admin_user, client_obj, collaborator, procedures):
    ids = [procedures[2].id, procedures[0].id]
    appt = _book(company, admin_user, client_obj, collaborator, ids)

    links = list(AppointmentProcedure.objects.filter(appointment=appt).order_by("position"))
    assert [link.procedure_id for link in links] == ids

    records = FinancialRecord.objects.filter(appointment=appt)
    assert records.count() == 1
    record = records.get()
    assert record.type == RecordType.INCOME
    assert record.category == RecordCategory.APPOINTMENT
    assert record.value == Decimal("29.90")
    assert record.date == appt.date

    assert AuditEvent.objects.filter(entity_id=appt.id, event_code="appointment.created").count() == 1


def test_create_allows_the_same_procedure_twice(company, admin_user, client_obj, collaborator, procedures):
    p = procedures[0]
    appt = _book(company, admin_user, client_obj, collaborator, [p.id, p.id])

    assert appt.value == Decimal("39.80")
    assert AppointmentProcedure.objects.filter(appointment=appt).count() == 2


def test_corte_scenario(company, admin_user, client_obj, collaborator):
    corte = Procedure.objects.create(company=company, name="Corte", price=Decimal("30.00"))

    appt = _book(company, admin_user, client_obj, collaborator, [corte.id])

    appt.refresh_from_db()
    assert str(appt.value) == "30.00"
    records = FinancialRecord.objects.filter(company=company)
    assert records.count() == 1
    record = records.get()
    assert (record.type, record.category, str(record.value)) == ("income", "appointment", "30.00")


def test_create_requires_procedures(company, admin_user, client_obj, collaborator):
    with pytest.raises(ValidationError):
        _book(company, admin_user, client_obj, collaborator, [])
    assert Appointment.objects.count() == 0


def test_create_rejects_other_company_procedure(
    company, admin_user, client_obj, collaborator, procedures, other_procedure
):
    with pytest.raises(InvalidReference):
        _book(company, admin_user, client_obj, collaborator, [procedures[0].id, other_procedure.id])

    assert Appointment.objects.count() == 0
    assert FinancialRecord.objects.count() == 0


def test_create_rejects_malformed_procedure_id(company, admin_user, client_obj, collaborator):
    with pytest.raises(InvalidReference):
        _book(company, admin_user, client_obj, collaborator, ["not-a-uuid"])


def test_create_rejects_other_company_collaborator(company, admin_user, client_obj, other_admin, procedures):
    with pytest.raises(InvalidReference):
        _book(company, admin_user, client_obj, other_admin, [procedures[0].id])
    assert Appointment.objects.count() == 0


def test_update_replaces_procedure_links(company, admin_user, client_obj, collaborator, procedures):
    p1, p2, p3 = procedures
    appt = _book(company, admin_user, client_obj, collaborator, [p1.id, p2.id])

    updated = AppointmentService.update(
        company_id=company.id,
        actor_user_id=admin_user.id,
        appointment_id=appt.id,
        client_id=client_obj.id,
        collaborator_id=collaborator.id,
        procedure_ids=[p3.id],
        date=appt.date,
    )

    links = AppointmentProcedure.objects.filter(appointment=appt)
    assert links.count() == 1
    assert links.get().procedure_id == p3.id
    assert updated.value == Decimal("10.00")
    assert updated.primary_procedure_id == p3.id


def test_update_keeps_status_and_notes_when_omitted(company, admin_user, client_obj, collaborator, procedures):
    appt = _book(
        company,
        admin_user,
        client_obj,
        collaborator,
        [procedures[0].id],
        status=AppointmentStatus.CONFIRMED,
        notes="Cliente prefere água gelada",
    )

    updated = AppointmentService.update(
        company_id=company.id,
        actor_user_id=admin_user.id,
        appointment_id=appt.id,
        client_id=client_obj.id,
        collaborator_id=collaborator.id,
        procedure_ids=[procedures[1].id],
        date=appt.date,
    )
    assert updated.status == AppointmentStatus.CONFIRMED
    assert updated.notes == "Cliente prefere água gelada"


def test_transition_into_completed_syncs_financial_record(
    company, admin_user, client_obj, collaborator, procedures
):
    appt = _book(company, admin_user, client_obj, collaborator, [procedures[0].id])
    before = timezone.now()

    AppointmentService.update(
        company_id=company.id,
        actor_user_id=admin_user.id,
        appointment_id=appt.id,
        client_id=client_obj.id,
        collaborator_id=collaborator.id,
        procedure_ids=[procedures[0].id, procedures[1].id],
        date=appt.date,
        status=AppointmentStatus.COMPLETED,
    )

    record = FinancialRecord.objects.get(appointment=appt)
    assert record.value == Decimal("55.40")
    # completion time, not the appointment date
    assert record.date >= before
    assert record.date != appt.date
    assert AuditEvent.objects.filter(entity_id=appt.id, event_code="appointment.completed").count() == 1


def test_completed_to_completed_does_not_resync(company, admin_user, client_obj, collaborator, procedures):
    appt = _book(company, admin_user, client_obj, collaborator, [procedures[0].id])

    AppointmentService.update(
        company_id=company.id,
        actor_user_id=admin_user.id,
        appointment_id=appt.id,
        client_id=client_obj.id,
        collaborator_id=collaborator.id,
        procedure_ids=[procedures[0].id],
        date=appt.date,
        status=AppointmentStatus.COMPLETED,
    )
    record = FinancialRecord.objects.get(appointment=appt)
    synced_value, synced_date = record.value, record.date

    AppointmentService.update(
        company_id=company.id,
        actor_user_id=admin_user.id,
        appointment_id=appt.id,
        client_id=client_obj.id,
        collaborator_id=collaborator.id,
        procedure_ids=[procedures[1].id],
        date=appt.date,
        status=AppointmentStatus.COMPLETED,
    )

    record.refresh_from_db()
    assert record.value == synced_value
    assert record.date == synced_date
    assert Appointment.objects.get(pk=appt.pk).value == Decimal("35.50")
    assert AuditEvent.objects.filter(entity_id=appt.id, event_code="appointment.completed").count() == 1


def test_completion_recreates_missing_financial_record(company, admin_user, client_obj, collaborator, procedures):
    appt = _book(company, admin_user, client_obj, collaborator, [procedures[0].id])
    FinancialRecord.objects.filter(appointment=appt).delete()

    AppointmentService.update(
        company_id=company.id,
        actor_user_id=admin_user.id,
        appointment_id=appt.id,
        client_id=client_obj.id,
        collaborator_id=collaborator.id,
        procedure_ids=[procedures[0].id],
        date=appt.date,
        status=AppointmentStatus.COMPLETED,
    )

    record = FinancialRecord.objects.get(appointment=appt)
    assert record.value == Decimal("19.90")
    assert record.category == RecordCategory.APPOINTMENT


def test_update_other_company_is_forbidden(company, admin_user, client_obj, collaborator, procedures, other_company):
    appt = _book(company, admin_user, client_obj, collaborator, [procedures[0].id])

    with pytest.raises(PermissionDenied):
        AppointmentService.update(
            company_id=other_company.id,
            actor_user_id=None,
            appointment_id=appt.id,
            client_id=client_obj.id,
            collaborator_id=collaborator.id,
            procedure_ids=[procedures[0].id],
            date=appt.date,
        )


def test_update_unknown_appointment_is_not_found(company, admin_user, client_obj, collaborator, procedures):
    with pytest.raises(NotFound):
        AppointmentService.update(
            company_id=company.id,
            actor_user_id=admin_user.id,
            appointment_id="5b8f4a4e-0000-4000-8000-000000000000",
            client_id=client_obj.id,
            collaborator_id=collaborator.id,
            procedure_ids=[procedures[0].id],
            date=timezone.now(),
        )


def test_failed_update_rolls_back(company, admin_user, client_obj, collaborator, procedures, other_procedure):
    appt = _book(company, admin_user, client_obj, collaborator, [procedures[0].id, procedures[1].id])

    with pytest.raises(InvalidReference):
        AppointmentService.update(
            company_id=company.id,
            actor_user_id=admin_user.id,
            appointment_id=appt.id,
            client_id=client_obj.id,
            collaborator_id=collaborator.id,
            procedure_ids=[other_procedure.id],
            date=appt.date,
        )

    appt.refresh_from_db()
    assert appt.value == Decimal("55.40")
    assert AppointmentProcedure.objects.filter(appointment=appt).count() == 2


def test_delete_removes_record_links_and_appointment(company, admin_user, client_obj, collaborator, procedures):
    appt = _book(company, admin_user, client_obj, collaborator, [p.id for p in procedures])

    AppointmentService.delete(company_id=company.id, actor_user_id=admin_user.id, appointment_id=appt.id)

    assert not Appointment.objects.filter(pk=appt.pk).exists()
    assert not FinancialRecord.objects.filter(appointment_id=appt.pk).exists()
    assert not AppointmentProcedure.objects.filter(appointment_id=appt.pk).exists()

    event = AuditEvent.objects.get(entity_id=appt.id, event_code="appointment.deleted")
    assert event.metadata == {"financial_records_deleted": 1, "procedure_links_deleted": 3}

    with pytest.raises(NotFound):
        AppointmentService.delete(company_id=company.id, actor_user_id=admin_user.id, appointment_id=appt.id)


def test_delete_other_company_is_forbidden(company, admin_user, client_obj, collaborator, procedures, other_company):
    appt = _book(company, admin_user, client_obj, collaborator, [procedures[0].id])

    with pytest.raises(PermissionDenied):
        AppointmentService.delete(company_id=other_company.id, actor_user_id=None, appointment_id=appt.id)

    assert Appointment.objects.filter(pk=appt.pk).exists()


def test_procedures_for_keeps_order(company, admin_user, client_obj, collaborator, procedures):
    p1, p2, p3 = procedures
    appt = _book(company, admin_user, client_obj, collaborator, [p3.id, p1.id, p3.id])

    result = AppointmentService.procedures_for(company_id=company.id, appointment_id=appt.id)
    assert [p.id for p in result] == [p3.id, p1.id, p3.id]


def test_create_rejects_inactive_collaborator(company, admin_user, client_obj, collaborator, procedures):
    collaborator.is_active = False
    collaborator.save(update_fields=["is_active"])

    with pytest.raises(InvalidReference):
        _book(company, admin_user, client_obj, collaborator, [procedures[0].id])
    assert Appointment.objects.count() == 0
