"""Automated audit endpoints."""

import logging
from typing import Annotated

from fastapi import APIRouter, Depends
from pydantic import BaseModel, ConfigDict, Field

from ...audit import AutomatedAuditService
from ...errors import ValidationFailureError
from ..dependencies import get_audit_service, get_owner_id

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/audits", tags=["audits"])


class AutomatedAuditRequest(BaseModel):
    """Request to start an automated audit."""

    model_config = ConfigDict(populate_by_name=True)

    audit_id: str | None = Field(default=None, alias="auditId")


@router.post("/automated")
async def run_automated_audit(
    request: AutomatedAuditRequest,
    owner_id: Annotated[str, Depends(get_owner_id)],
    service: Annotated[AutomatedAuditService, Depends(get_audit_service)],
) -> dict:
    """
    Run the automated audit and return the composite report.

    ``persisted`` is false when the report could not be saved; the audit
    then keeps its previous automated analysis.
    """
    if not request.audit_id:
        raise ValidationFailureError("auditId is required")

    outcome = await service.run(owner_id, request.audit_id)

    return {
        "success": True,
        **outcome.report.model_dump(mode="json", by_alias=True),
        "persisted": outcome.persisted,
        "persistenceError": outcome.persistence_error,
    }
