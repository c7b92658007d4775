# backend/bm_core/iam/models.py
import uuid

from django.conf import settings
from django.db import models

from bm_core.common.scope import ROLE_ADMIN, ROLE_COLLABORATOR
from bm_core.companies.models import Company


class Role(models.TextChoices):
    ADMIN = ROLE_ADMIN, "Admin"
    COLLABORATOR = ROLE_COLLABORATOR, "Collaborator"


class UserProfile(models.Model):
    """
    Beauty Manager profile anchored to Django's AUTH_USER_MODEL.
    Binds a login to exactly one company with a role.
    """
    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)

    user = models.OneToOneField(settings.AUTH_USER_MODEL, on_delete=models.CASCADE, related_name="profile")
    company = models.ForeignKey(Company, on_delete=models.PROTECT, related_name="user_profiles")

    phone = models.CharField(max_length=32, blank=True)
    role = models.CharField(max_length=16, choices=Role.choices, default=Role.COLLABORATOR, db_index=True)

    # free-text job title shown in the team list ("Cabeleireira", "Barbeiro")
    function = models.CharField(max_length=128, blank=True)

    created_at = models.DateTimeField(auto_now_add=True, db_index=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = "iam_user_profile"
        indexes = [
            models.Index(fields=["company", "role"]),
        ]

    def __str__(self) -> str:
        return f"{self.user.username} ({self.role})"
