"""Inference collaborators and prompts."""

from .advice import AdviceGenerator
from .client import OpenAIInferenceClient, StaticInferenceClient, TextInferenceClient
from .prompts import DOCUMENT_ADVICE_PROMPT, get_document_advice_prompt

__all__ = [
    "AdviceGenerator",
    "DOCUMENT_ADVICE_PROMPT",
    "OpenAIInferenceClient",
    "StaticInferenceClient",
    "TextInferenceClient",
    "get_document_advice_prompt",
]
