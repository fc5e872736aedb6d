"""Pydantic models for documents, ledger records and audit reports."""

import logging
from datetime import date, datetime, timezone
from decimal import Decimal
from enum import Enum
from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field, computed_field, field_validator
from pydantic.alias_generators import to_camel

logger = logging.getLogger(__name__)


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


# Alias for fields named "date", which would otherwise shadow the type
LedgerDate = date


class ExtractionMode(str, Enum):
    """How a document body is read."""

    TABULAR = "tabular"
    TEXT = "text"


class TransactionKind(str, Enum):
    """Direction of an extracted transaction."""

    EXPENSE = "expense"
    INCOME = "income"


class RiskLevel(str, Enum):
    """Risk flag attached to a document analysis."""

    LOW = "low"
    HIGH = "high"


class WriteOffStatus(str, Enum):
    """Review status of a write-off. Only PENDING is set by this service."""

    PENDING = "pending"
    APPROVED = "approved"
    REJECTED = "rejected"


class AuditItemStatus(str, Enum):
    """Status of a single audit line."""

    PENDING = "pending"
    FLAGGED = "flagged"
    CLEARED = "cleared"


class TaxCategory(str, Enum):
    """Closed set of expense categories, in matching order."""

    TRANSPORTATION = "Transportation"
    OFFICE = "Office"
    MARKETING = "Marketing"
    TRAVEL = "Travel"
    EQUIPMENT = "Equipment"
    SERVICES = "Services"


# Meta-labels recorded on write-offs from the free-text path
CATEGORIZED = "Categorized"
UNCATEGORIZED = "Uncategorized"
DOCUMENT_IMPORT = "Document Import"


# ---------------------------------------------------------------------------
# Document pipeline
# ---------------------------------------------------------------------------


class RawDocument(BaseModel):
    """An uploaded document row from ``processed_documents``."""

    model_config = ConfigDict(extra="ignore", frozen=True)

    id: str
    user_id: str
    original_filename: str
    storage_path: str | None = None
    processing_status: str | None = None


class ExtractedTuple(BaseModel):
    """A single (amount, description, date) tuple pulled from a document."""

    model_config = ConfigDict(frozen=True)

    amount: Decimal = Field(..., description="Amount as it appeared in the source")
    description: str = ""
    date: LedgerDate = Field(default_factory=date.today)
    kind: TransactionKind

    @property
    def signed_amount(self) -> Decimal:
        """Amount with expenses negative and income positive."""
        if self.kind == TransactionKind.EXPENSE:
            return -abs(self.amount)
        return self.amount


class WriteOffRecord(BaseModel):
    """Deductible expense candidate."""

    amount: Decimal = Field(..., gt=0)
    description: str = ""
    tax_code_id: str | None = None
    category: str = UNCATEGORIZED
    tax_category: TaxCategory | None = Field(
        default=None,
        description="Underlying tax category when the keyword matcher found one",
    )
    date: LedgerDate = Field(default_factory=date.today)
    status: WriteOffStatus = WriteOffStatus.PENDING


class RevenueRecord(BaseModel):
    """Income record imported from a document."""

    amount: Decimal = Field(..., gt=0)
    description: str = ""
    category: str = DOCUMENT_IMPORT
    date: LedgerDate = Field(default_factory=date.today)


class BalanceSheetItem(BaseModel):
    """Aggregate balance-sheet row produced by a document import."""

    category: Literal["asset", "liability"]
    name: str = DOCUMENT_IMPORT
    amount: Decimal = Field(..., gt=0)
    description: str = "Automatically generated from document analysis"


class DocumentAnalysisResult(BaseModel):
    """Sole output of one document analysis run."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    transactions: list[ExtractedTuple] = Field(default_factory=list)
    findings: list[str] = Field(default_factory=list)
    risk_level: RiskLevel = RiskLevel.LOW
    recommendations: list[str] = Field(default_factory=list)
    write_offs: list[WriteOffRecord] = Field(default_factory=list, alias="writeOffs")

    @property
    def revenue_transactions(self) -> list[ExtractedTuple]:
        """Positive income tuples that are not already write-offs."""
        return [
            t for t in self.transactions
            if t.kind == TransactionKind.INCOME and t.amount > 0
        ]

    @property
    def net_amount(self) -> Decimal:
        return sum((t.signed_amount for t in self.transactions), Decimal("0"))


# ---------------------------------------------------------------------------
# Automated audit
# ---------------------------------------------------------------------------


class AuditItem(BaseModel):
    """One line of an audit engagement."""

    model_config = ConfigDict(extra="ignore", frozen=True)

    id: str
    audit_id: str | None = None
    category: str = ""
    description: str = ""
    amount: Decimal | None = None
    status: AuditItemStatus = AuditItemStatus.PENDING

    @field_validator("status", mode="before")
    @classmethod
    def default_status(cls, value: Any) -> Any:
        """Rows stored with a null or unrecognised status are pending."""
        if value is None or value == "":
            return AuditItemStatus.PENDING
        if isinstance(value, AuditItemStatus):
            return value
        normalized = str(value).strip().lower()
        if normalized not in {status.value for status in AuditItemStatus}:
            logger.warning(f"Unknown audit item status {value!r}, treating as pending")
            return AuditItemStatus.PENDING
        return normalized


class AuditData(BaseModel):
    """Audit header plus its item snapshot."""

    model_config = ConfigDict(extra="ignore", frozen=True)

    id: str
    user_id: str | None = None
    title: str = ""
    description: str | None = None
    status: str | None = None
    audit_items: list[AuditItem] = Field(default_factory=list)

    @property
    def items(self) -> list[AuditItem]:
        return self.audit_items


class _ReportModel(BaseModel):
    """Report models serialize with camelCase keys."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class CategoryRisk(_ReportModel):
    category: str
    item_count: int = Field(..., ge=0)
    flagged_count: int = Field(..., ge=0)
    score: float = Field(..., ge=0.0, le=1.0)


class RiskScoreResult(_ReportModel):
    """Normalized overall risk plus a per-category breakdown."""

    overall_score: float = Field(..., ge=0.0, le=1.0)
    breakdown: list[CategoryRisk] = Field(default_factory=list)


class CategoryControl(_ReportModel):
    category: str
    tested: int = Field(..., ge=0)
    exceptions: float = Field(..., ge=0.0)
    effectiveness: float = Field(..., ge=0.0, le=1.0)


class ControlEffectivenessResult(_ReportModel):
    """Normalized control effectiveness plus a per-category breakdown."""

    overall_effectiveness: float = Field(..., ge=0.0, le=1.0)
    breakdown: list[CategoryControl] = Field(default_factory=list)


class AnomalyResult(_ReportModel):
    """Flagged subset of the audit items."""

    items: list[AuditItem] = Field(default_factory=list)
    reasons: dict[str, list[str]] = Field(default_factory=dict)

    @computed_field
    @property
    def count(self) -> int:
        return len(self.items)


class AuditSummary(_ReportModel):
    overall_risk: Literal["High", "Low"]
    control_status: Literal["Effective", "Needs Improvement"]
    anomaly_count: int = Field(..., ge=0)
    timestamp: datetime = Field(default_factory=_utcnow)


class AutomatedAuditReport(_ReportModel):
    """Composite result of one automated audit run."""

    audit_id: str
    summary: AuditSummary
    recommendations: list[str] = Field(default_factory=list)
    risk_scores: RiskScoreResult
    control_effectiveness: ControlEffectivenessResult
    anomaly_detection: AnomalyResult
    status: Literal["completed"] = "completed"
    completed_at: datetime = Field(default_factory=_utcnow)

    def to_storage_update(self) -> dict[str, Any]:
        """Column values written back onto the ``audit_reports`` row."""
        dumped = self.model_dump(mode="json", by_alias=True)
        return {
            "automated_analysis": {
                "completed_at": dumped["completedAt"],
                "summary": dumped["summary"],
                "recommendations": dumped["recommendations"],
            },
            "risk_scores": dumped["riskScores"],
            "control_effectiveness": dumped["controlEffectiveness"],
            "anomaly_detection": dumped["anomalyDetection"],
            "status": self.status,
        }


class AuditRunOutcome(BaseModel):
    """Report plus the outcome of the durable write."""

    report: AutomatedAuditReport
    persisted: bool
    persistence_error: str | None = None
