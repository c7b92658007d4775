# backend/bm_core/companies/tests/test_company_service.py
import itertools

import pytest
from rest_framework.exceptions import ValidationError

from bm_core.companies.models import Company
from bm_core.companies.selectors import get_company_by_invite_code_or_none
from bm_core.companies.services import CompanyService

pytestmark = pytest.mark.django_db


def test_create_generates_invite_code():
    company = CompanyService.create(name="  Studio Novo ")
    assert company.name == "Studio Novo"
    assert len(company.invite_code) == 8
    assert company.invite_code == company.invite_code.upper()


def test_create_retries_on_invite_collision(company, monkeypatch):
    codes = itertools.chain(["ABCD1234", "ABCD1234"], itertools.repeat("BEEF0001"))
    monkeypatch.setattr("bm_core.companies.services.generate_invite_code", lambda: next(codes))

    created = CompanyService.create(name="Outro Salão")
    assert created.invite_code == "BEEF0001"


def test_create_gives_up_after_repeated_collisions(company, monkeypatch):
    monkeypatch.setattr("bm_core.companies.services.generate_invite_code", lambda: "ABCD1234")

    with pytest.raises(RuntimeError):
        CompanyService.create(name="Outro Salão")
    assert Company.objects.count() == 1


def test_blank_name_is_rejected():
    with pytest.raises(ValidationError):
        CompanyService.create(name="   ")


def test_lookup_by_invite_code_is_case_insensitive(company):
    assert get_company_by_invite_code_or_none(invite_code=" abcd1234 ") == company
    assert get_company_by_invite_code_or_none(invite_code="") is None
    assert get_company_by_invite_code_or_none(invite_code="NOPE0000") is None
