"""Audit risk assessment."""

import logging
from abc import ABC, abstractmethod

from ..core.models import AuditData, AuditItemStatus, CategoryRisk, RiskScoreResult
from .frames import clamp, items_frame

logger = logging.getLogger(__name__)

# Contribution of each item status to risk
STATUS_RISK_WEIGHTS = {
    AuditItemStatus.FLAGGED.value: 1.0,
    AuditItemStatus.PENDING.value: 0.5,
    AuditItemStatus.CLEARED.value: 0.0,
}


class RiskScoringStrategy(ABC):
    """Pluggable risk heuristic.

    Implementations must be deterministic and must not decrease the
    score when a flagged item is added.
    """

    @abstractmethod
    def score(self, audit: AuditData) -> RiskScoreResult:
        pass


class StatusWeightedRiskStrategy(RiskScoringStrategy):
    """
    Blend of status-weighted item share and status-weighted amount share.

    Each item contributes its status weight (flagged 1.0, pending 0.5,
    cleared 0.0). The count share is the mean weight; the amount share
    weights each item by its absolute amount. When no item carries an
    amount only the count share is used.
    """

    COUNT_WEIGHT = 0.6
    AMOUNT_WEIGHT = 0.4

    def score(self, audit: AuditData) -> RiskScoreResult:
        if not audit.items:
            return RiskScoreResult(overall_score=0.0)

        frame = items_frame(audit.items)
        frame["risk"] = frame["status"].map(STATUS_RISK_WEIGHTS)

        count_share = frame["risk"].mean()
        total_amount = frame["amount"].sum()
        if total_amount > 0:
            amount_share = (frame["risk"] * frame["amount"]).sum() / total_amount
            overall = self.COUNT_WEIGHT * count_share + self.AMOUNT_WEIGHT * amount_share
        else:
            overall = count_share

        breakdown = [
            CategoryRisk(
                category=str(category),
                item_count=int(len(group)),
                flagged_count=int((group["status"] == AuditItemStatus.FLAGGED.value).sum()),
                score=clamp(group["risk"].mean()),
            )
            for category, group in frame.groupby("category", sort=True)
        ]

        return RiskScoreResult(overall_score=clamp(overall), breakdown=breakdown)


class RiskAssessor:
    """Compute the overall risk of an audit from its items."""

    def __init__(self, strategy: RiskScoringStrategy | None = None):
        self.strategy = strategy or StatusWeightedRiskStrategy()

    def assess(self, audit: AuditData) -> RiskScoreResult:
        result = self.strategy.score(audit)
        logger.info(f"Audit {audit.id}: risk score {result.overall_score}")
        return result
