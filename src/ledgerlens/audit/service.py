"""Automated audit orchestration."""

import asyncio
import logging

from ..config import RuntimeConfig
from ..core.models import (
    AnomalyResult,
    AuditData,
    AuditRunOutcome,
    AuditSummary,
    AutomatedAuditReport,
    ControlEffectivenessResult,
    RiskScoreResult,
)
from ..errors import LedgerLensError, NotFoundError, ValidationFailureError, with_timeout
from ..storage import StorageService
from .anomalies import AnomalyDetector
from .controls import ControlEffectivenessTester
from .risk import RiskAssessor

logger = logging.getLogger(__name__)

RISK_MONITORING_ADVICE = "Implement additional risk monitoring procedures"
CONTROL_STRENGTHENING_ADVICE = "Strengthen internal control framework"
ANOMALY_REVIEW_ADVICE = "Review and investigate identified anomalies"


class AutomatedAuditService:
    """
    Run risk, control and anomaly analysis over one audit.

    A run loads the audit and its items, scores the snapshot, and writes
    the composite report back onto the audit row, replacing any earlier
    automated analysis. Nothing is written when loading or scoring fails.
    """

    AUDITS_TABLE = "audit_reports"
    ITEMS_TABLE = "audit_items"

    def __init__(
        self,
        settings: RuntimeConfig,
        storage: StorageService,
        risk_assessor: RiskAssessor | None = None,
        control_tester: ControlEffectivenessTester | None = None,
        anomaly_detector: AnomalyDetector | None = None,
    ):
        self.settings = settings
        self.storage = storage
        self.risk_assessor = risk_assessor or RiskAssessor()
        self.control_tester = control_tester or ControlEffectivenessTester()
        self.anomaly_detector = anomaly_detector or AnomalyDetector(
            zscore_threshold=settings.anomaly_zscore_threshold
        )
        self.timeout = settings.storage_timeout_seconds

    async def run(self, owner_id: str, audit_id: str) -> AuditRunOutcome:
        """
        Run the automated audit for one audit id.

        Returns:
            AuditRunOutcome; ``persisted`` is False when the final write
            failed, in which case the audit row keeps its previous state

        Raises:
            ValidationFailureError: If owner or audit id is missing
            NotFoundError: If the audit does not exist for the owner
            DependencyUnavailableError: If the audit cannot be loaded
        """
        if not owner_id or not audit_id:
            raise ValidationFailureError("Both owner id and audit id are required")

        logger.info(f"Starting automated audit for audit {audit_id}")
        audit = await self.load_audit(owner_id, audit_id)

        risk_scores, control_effectiveness, anomalies = await asyncio.gather(
            asyncio.to_thread(self.risk_assessor.assess, audit),
            asyncio.to_thread(self.control_tester.test, audit),
            asyncio.to_thread(self.anomaly_detector.detect, audit),
        )

        report = self.build_report(audit, risk_scores, control_effectiveness, anomalies)

        try:
            await with_timeout(
                self.storage.update(self.AUDITS_TABLE, audit.id, report.to_storage_update()),
                self.timeout,
                "audit report update",
            )
        except LedgerLensError as e:
            logger.error(f"Automated audit {audit_id} computed but not saved: {e}")
            return AuditRunOutcome(report=report, persisted=False, persistence_error=str(e))

        logger.info(
            f"Automated audit {audit_id} completed: risk {report.summary.overall_risk}, "
            f"controls {report.summary.control_status}, {report.summary.anomaly_count} anomalies"
        )
        return AuditRunOutcome(report=report, persisted=True)

    async def load_audit(self, owner_id: str, audit_id: str) -> AuditData:
        """Load the audit header and a snapshot of its items."""
        rows = await with_timeout(
            self.storage.select(self.AUDITS_TABLE, {"id": audit_id, "user_id": owner_id}, limit=1),
            self.timeout,
            "audit lookup",
        )
        if not rows:
            raise NotFoundError(f"Audit {audit_id} not found")

        items = await with_timeout(
            self.storage.select(self.ITEMS_TABLE, {"audit_id": audit_id}, order_by="created_at"),
            self.timeout,
            "audit items lookup",
        )
        return AuditData.model_validate({**rows[0], "audit_items": items})

    def build_report(
        self,
        audit: AuditData,
        risk_scores: RiskScoreResult,
        control_effectiveness: ControlEffectivenessResult,
        anomalies: AnomalyResult,
    ) -> AutomatedAuditReport:
        """Derive the summary and recommendations from the three analyses."""
        high_risk = risk_scores.overall_score > self.settings.risk_threshold
        threshold = self.settings.control_effectiveness_threshold
        effectiveness = control_effectiveness.overall_effectiveness

        summary = AuditSummary(
            overall_risk="High" if high_risk else "Low",
            control_status="Effective" if effectiveness > threshold else "Needs Improvement",
            anomaly_count=anomalies.count,
        )

        recommendations = []
        if high_risk:
            recommendations.append(RISK_MONITORING_ADVICE)
        if effectiveness < threshold:
            recommendations.append(CONTROL_STRENGTHENING_ADVICE)
        if anomalies.count > 0:
            recommendations.append(ANOMALY_REVIEW_ADVICE)

        return AutomatedAuditReport(
            audit_id=audit.id,
            summary=summary,
            recommendations=recommendations,
            risk_scores=risk_scores,
            control_effectiveness=control_effectiveness,
            anomaly_detection=anomalies,
        )
