# backend/bm_core/iam/services/collaborators.py
from __future__ import annotations

import logging
from uuid import UUID

from django.db import transaction
from rest_framework.exceptions import NotFound, ValidationError

from bm_core.audit.models import AuditEventCode
from bm_core.audit.services import AuditService
from bm_core.iam.models import UserProfile

logger = logging.getLogger(__name__)


class CollaboratorService:
    @staticmethod
    @transaction.atomic
    def remove(*, company_id: UUID, actor_user_id: int, user_id: int) -> None:
        """
        Deletes a company user (login + profile).
        Refused for the caller themself and for anyone still booked on appointments.
        """
        from bm_core.appointments.models import Appointment

        if int(user_id) == int(actor_user_id):
            raise ValidationError({"detail": "You cannot remove yourself."})

        profile = (
            UserProfile.objects.select_related("user")
            .filter(company_id=company_id, user_id=user_id)
            .first()
        )
        if profile is None:
            raise NotFound("Collaborator not found")

        if Appointment.objects.filter(collaborator_id=profile.user_id).exists():
            raise ValidationError({"detail": "Collaborator has appointments and cannot be removed."})

        profile_id = profile.id
        email = profile.user.email
        profile.user.delete()  # cascades to the profile

        AuditService.log(
            event_code=AuditEventCode.COLLABORATOR_REMOVED,
            entity_type="UserProfile",
            entity_id=profile_id,
            company_id=company_id,
            actor_user_id=actor_user_id,
            metadata={"user_id": int(user_id), "email": email},
        )
        logger.info("collaborator removed company_id=%s user_id=%s", company_id, user_id)
