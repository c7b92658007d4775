# backend/bm_core/iam/services/registration.py
from __future__ import annotations

import logging
from dataclasses import dataclass

from django.contrib.auth import get_user_model
from django.db import IntegrityError, transaction
from rest_framework.exceptions import ValidationError

from bm_core.companies.models import Company
from bm_core.companies.selectors import get_company_by_invite_code_or_none
from bm_core.companies.services import CompanyService
from bm_core.iam.models import Role, UserProfile

logger = logging.getLogger(__name__)

EMAIL_TAKEN_MSG = "Email already registered"
INVALID_INVITE_MSG = "Invalid invite code"


@dataclass(frozen=True)
class Registration:
    user: object
    profile: UserProfile
    company: Company


def normalize_email(email: str) -> str:
    return (email or "").strip().lower()


def email_taken(email: str) -> bool:
    User = get_user_model()
    return User.objects.filter(username__iexact=normalize_email(email)).exists()


def _create_user_with_profile(
    *,
    company: Company,
    role: str,
    name: str,
    email: str,
    password: str,
    phone: str = "",
    function: str = "",
):
    """
    The e-mail is the login: it is stored both as username (unique) and email.
    """
    email = normalize_email(email)
    if email_taken(email):
        raise ValidationError({"email": EMAIL_TAKEN_MSG})

    User = get_user_model()
    try:
        # savepoint: a concurrent sign-up with the same e-mail trips the unique username
        with transaction.atomic():
            user = User.objects.create_user(
                username=email,
                email=email,
                password=password,
                first_name=(name or "").strip()[:150],
            )
    except IntegrityError:
        logger.info("registration lost e-mail race")
        raise ValidationError({"email": EMAIL_TAKEN_MSG})

    profile = UserProfile.objects.create(
        user=user,
        company=company,
        role=role,
        phone=phone or "",
        function=function or "",
    )
    return user, profile


class RegistrationService:
    @staticmethod
    @transaction.atomic
    def register_admin(
        *,
        company_name: str,
        name: str,
        email: str,
        password: str,
        phone: str = "",
    ) -> Registration:
        """
        Creates a company and its first admin together.
        The e-mail check runs first so a duplicate never leaves an orphan company behind.
        """
        if email_taken(email):
            raise ValidationError({"email": EMAIL_TAKEN_MSG})

        company = CompanyService.create(name=company_name)
        user, profile = _create_user_with_profile(
            company=company,
            role=Role.ADMIN,
            name=name,
            email=email,
            password=password,
            phone=phone,
        )
        logger.info("admin registered company_id=%s user_id=%s", company.id, user.id)
        return Registration(user=user, profile=profile, company=company)

    @staticmethod
    @transaction.atomic
    def register_collaborator(
        *,
        invite_code: str,
        name: str,
        email: str,
        password: str,
        phone: str = "",
        function: str = "",
    ) -> Registration:
        company = get_company_by_invite_code_or_none(invite_code=invite_code)
        if company is None:
            logger.info("collaborator registration rejected: unknown invite code")
            raise ValidationError({"invite_code": INVALID_INVITE_MSG})

        user, profile = _create_user_with_profile(
            company=company,
            role=Role.COLLABORATOR,
            name=name,
            email=email,
            password=password,
            phone=phone,
            function=function,
        )
        logger.info("collaborator registered company_id=%s user_id=%s", company.id, user.id)
        return Registration(user=user, profile=profile, company=company)
