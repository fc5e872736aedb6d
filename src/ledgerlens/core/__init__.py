"""Core module - models and pipeline."""

from .models import (
    AnomalyResult,
    AuditData,
    AuditItem,
    AuditItemStatus,
    AuditRunOutcome,
    AuditSummary,
    AutomatedAuditReport,
    BalanceSheetItem,
    ControlEffectivenessResult,
    DocumentAnalysisResult,
    ExtractedTuple,
    ExtractionMode,
    RawDocument,
    RevenueRecord,
    RiskLevel,
    RiskScoreResult,
    TaxCategory,
    TransactionKind,
    WriteOffRecord,
    WriteOffStatus,
)

__all__ = [
    "AnomalyResult",
    "AuditData",
    "AuditItem",
    "AuditItemStatus",
    "AuditRunOutcome",
    "AuditSummary",
    "AutomatedAuditReport",
    "BalanceSheetItem",
    "ControlEffectivenessResult",
    "DocumentAnalysisResult",
    "ExtractedTuple",
    "ExtractionMode",
    "RawDocument",
    "RevenueRecord",
    "RiskLevel",
    "RiskScoreResult",
    "TaxCategory",
    "TransactionKind",
    "WriteOffRecord",
    "WriteOffStatus",
]
