# backend/bm_core/procedures/pricing.py
from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal
from typing import List, Sequence
from uuid import UUID

from rest_framework.exceptions import ValidationError

from bm_core.common.api.exceptions import InvalidReference
from bm_core.common.money import sum_amounts
from bm_core.procedures.models import Procedure

PROCEDURES_REQUIRED_MSG = "At least one procedure is required."
INVALID_PROCEDURE_MSG = "Invalid procedure or it does not belong to your company."


@dataclass(frozen=True)
class ResolvedProcedures:
    procedures: List[Procedure]
    total: Decimal

    @property
    def primary(self) -> Procedure:
        return self.procedures[0]


def _parse_ids(procedure_ids: Sequence) -> list[UUID]:
    parsed: list[UUID] = []
    for raw in procedure_ids:
        if isinstance(raw, UUID):
            parsed.append(raw)
            continue
        try:
            parsed.append(UUID(str(raw)))
        except (TypeError, ValueError, AttributeError):
            raise InvalidReference(INVALID_PROCEDURE_MSG)
    return parsed


def resolve_procedures(*, company_id: UUID, procedure_ids: Sequence) -> ResolvedProcedures:
    """
    Validates an ordered list of procedure ids against the company and prices it.

    - empty list -> ValidationError on procedure_ids
    - unknown id, malformed id or a procedure of another company -> InvalidReference
    - order is kept and repeated ids are priced once per occurrence
    - the total is summed in integer cents (19.90 + 35.50 + 10.00 == 65.40 exactly)

    Read only: one query regardless of list length.
    """
    if not procedure_ids:
        raise ValidationError({"procedure_ids": PROCEDURES_REQUIRED_MSG})

    ids = _parse_ids(procedure_ids)
    by_id = {p.id: p for p in Procedure.objects.filter(company_id=company_id, id__in=set(ids))}

    ordered: list[Procedure] = []
    for pid in ids:
        proc = by_id.get(pid)
        if proc is None:
            raise InvalidReference(INVALID_PROCEDURE_MSG)
        ordered.append(proc)

    return ResolvedProcedures(procedures=ordered, total=sum_amounts(p.price for p in ordered))
