"""Document analysis endpoints."""

import logging
from typing import Annotated

from fastapi import APIRouter, Depends
from pydantic import BaseModel, ConfigDict, Field

from ...core.pipeline import DocumentAnalysisPipeline
from ...errors import ValidationFailureError
from ..dependencies import get_document_pipeline, get_owner_id

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/documents", tags=["documents"])


class AnalyzeDocumentRequest(BaseModel):
    """Request to analyze an uploaded document."""

    model_config = ConfigDict(populate_by_name=True)

    document_id: str | None = Field(default=None, alias="documentId")


class AnalyzeDocumentResponse(BaseModel):
    """Response for a document analysis."""

    success: bool
    data: dict  # Full DocumentAnalysisResult


@router.post("/analyze", response_model=AnalyzeDocumentResponse)
async def analyze_document(
    request: AnalyzeDocumentRequest,
    owner_id: Annotated[str, Depends(get_owner_id)],
    pipeline: Annotated[DocumentAnalysisPipeline, Depends(get_document_pipeline)],
) -> AnalyzeDocumentResponse:
    """
    Analyze a stored document and write its ledger records.

    Re-running the analysis for the same document inserts its records again.
    """
    if not request.document_id:
        raise ValidationFailureError("documentId is required")

    logger.info(f"Analysis requested for document {request.document_id}")
    result = await pipeline.run(owner_id, request.document_id)

    return AnalyzeDocumentResponse(
        success=True,
        data=result.model_dump(mode="json", by_alias=True),
    )
