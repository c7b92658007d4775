# backend/bm_core/audit/services.py
from __future__ import annotations

import logging
from typing import Any, Dict, Optional
from uuid import UUID

from bm_core.audit.models import AuditEvent

logger = logging.getLogger(__name__)


class AuditService:
    """
    Writes the company's audit trail.

    Called from inside the caller's transaction.atomic block: a rolled back
    booking leaves no audit row behind.
    """

    @staticmethod
    def log(
        *,
        event_code: str,
        entity_type: str,
        entity_id: UUID,
        company_id: UUID,
        actor_user_id: int | None,
        metadata: Optional[Dict[str, Any]] = None,
    ) -> AuditEvent:
        event = AuditEvent.objects.create(
            company_id=company_id,
            event_code=event_code,
            entity_type=entity_type,
            entity_id=entity_id,
            actor_user_id=actor_user_id,
            metadata=metadata or {},
        )
        logger.debug(
            "audit %s %s:%s company_id=%s actor=%s",
            event_code,
            entity_type,
            entity_id,
            company_id,
            actor_user_id,
        )
        return event
