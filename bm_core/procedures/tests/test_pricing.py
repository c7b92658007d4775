# backend/bm_core/procedures/tests/test_pricing.py
from decimal import Decimal

import pytest
from rest_framework.exceptions import ValidationError

from bm_core.common.api.exceptions import InvalidReference
from bm_core.procedures.pricing import resolve_procedures

pytestmark = pytest.mark.django_db


def test_total_is_exact(company, procedures):
    resolved = resolve_procedures(company_id=company.id, procedure_ids=[p.id for p in procedures])

    assert resolved.total == Decimal("65.40")
    assert resolved.primary == procedures[0]


def test_accepts_string_ids_and_keeps_order(company, procedures):
    p1, p2, p3 = procedures
    resolved = resolve_procedures(company_id=company.id, procedure_ids=[str(p3.id), str(p1.id)])

    assert [p.id for p in resolved.procedures] == [p3.id, p1.id]
    assert resolved.primary == p3


def test_repeated_ids_are_priced_per_occurrence(company, procedures):
    p1 = procedures[0]
    resolved = resolve_procedures(company_id=company.id, procedure_ids=[p1.id, p1.id, p1.id])

    assert len(resolved.procedures) == 3
    assert resolved.total == Decimal("59.70")


def test_empty_list_is_rejected(company):
    with pytest.raises(ValidationError) as exc:
        resolve_procedures(company_id=company.id, procedure_ids=[])
    assert "procedure_ids" in exc.value.detail


def test_other_company_procedure_is_invalid(company, procedures, other_procedure):
    with pytest.raises(InvalidReference):
        resolve_procedures(company_id=company.id, procedure_ids=[procedures[0].id, other_procedure.id])


def test_malformed_id_is_invalid(company):
    with pytest.raises(InvalidReference):
        resolve_procedures(company_id=company.id, procedure_ids=["abc"])
