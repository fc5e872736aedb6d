"""Advice text for completed analyses."""

import logging

from ..core.models import DocumentAnalysisResult
from ..errors import with_timeout
from .client import TextInferenceClient
from .prompts import get_document_advice_prompt

logger = logging.getLogger(__name__)


class AdviceGenerator:
    """Ask the inference service for short advice on an analysis."""

    def __init__(self, client: TextInferenceClient, timeout_seconds: float = 30.0):
        self.client = client
        self.timeout_seconds = timeout_seconds

    async def document_advice(self, filename: str, result: DocumentAnalysisResult) -> str:
        prompt = get_document_advice_prompt(
            filename=filename,
            risk_level=result.risk_level.value,
            transaction_count=len(result.transactions),
            net_amount=str(result.net_amount),
            findings=result.findings,
        )
        advice = await with_timeout(
            self.client.complete(prompt),
            self.timeout_seconds,
            "advice inference",
        )
        return advice.strip()
