# backend/bm_core/conftest.py
from decimal import Decimal

import pytest
from django.contrib.auth import get_user_model
from rest_framework.test import APIClient

from bm_core.clients.models import Client
from bm_core.companies.models import Company
from bm_core.iam.models import Role, UserProfile
from bm_core.procedures.models import Procedure


def make_user(*, company, email, name="Test User", role=Role.COLLABORATOR, password="testpass123"):
    """
    Creates auth user + profile the same way registration does (username == email).
    """
    User = get_user_model()
    user = User.objects.create_user(username=email, email=email, password=password, first_name=name)
    UserProfile.objects.create(user=user, company=company, role=role, phone="11999990000")
    return user


@pytest.fixture
def company(db):
    return Company.objects.create(name="Salão Bela", invite_code="ABCD1234")


@pytest.fixture
def other_company(db):
    return Company.objects.create(name="Barbearia Outra", invite_code="FFFF0000")


@pytest.fixture
def admin_user(company):
    return make_user(company=company, email="admin@bela.com", name="Ana Admin", role=Role.ADMIN)


@pytest.fixture
def collaborator(company):
    return make_user(company=company, email="carla@bela.com", name="Carla Cabeleireira")


@pytest.fixture
def other_admin(other_company):
    return make_user(company=other_company, email="admin@outra.com", name="Otto", role=Role.ADMIN)


@pytest.fixture
def api_client(admin_user):
    c = APIClient()
    c.force_authenticate(user=admin_user)
    return c


@pytest.fixture
def collaborator_client(collaborator):
    c = APIClient()
    c.force_authenticate(user=collaborator)
    return c


@pytest.fixture
def other_client_api(other_admin):
    c = APIClient()
    c.force_authenticate(user=other_admin)
    return c


@pytest.fixture
def client_obj(company):
    """
    Named client_obj: pytest-django already owns the `client` fixture.
    """
    return Client.objects.create(company=company, name="Maria Silva", phone="11988887777")


@pytest.fixture
def procedures(company):
    """
    19.90 + 35.50 + 10.00 == 65.40
    """
    return [
        Procedure.objects.create(company=company, name="Escova", price=Decimal("19.90")),
        Procedure.objects.create(company=company, name="Coloração", price=Decimal("35.50")),
        Procedure.objects.create(company=company, name="Hidratação", price=Decimal("10.00")),
    ]


@pytest.fixture
def other_procedure(other_company):
    return Procedure.objects.create(company=other_company, name="Barba", price=Decimal("25.00"))
