"""Internal control effectiveness testing."""

import logging
from abc import ABC, abstractmethod

from ..core.models import AuditData, AuditItemStatus, CategoryControl, ControlEffectivenessResult
from .frames import clamp, items_frame

logger = logging.getLogger(__name__)

# Control exception charged for each item status
STATUS_EXCEPTION_WEIGHTS = {
    AuditItemStatus.FLAGGED.value: 1.0,
    AuditItemStatus.PENDING.value: 0.5,
    AuditItemStatus.CLEARED.value: 0.0,
}

# Extra exception for an item missing its description or amount
DOCUMENTATION_EXCEPTION = 0.5


class ControlScoringStrategy(ABC):
    """Pluggable control-effectiveness heuristic.

    Implementations must be deterministic and must not increase the
    score when a flagged item is added.
    """

    @abstractmethod
    def score(self, audit: AuditData) -> ControlEffectivenessResult:
        pass


class ExceptionRateControlStrategy(ControlScoringStrategy):
    """
    Effectiveness is one minus the mean control exception per item.

    An item's exception is its status weight plus a documentation
    exception when it lacks a description or amount, capped at 1.0.
    An audit with no items has no evidence of working controls and
    scores 0.0.
    """

    def score(self, audit: AuditData) -> ControlEffectivenessResult:
        if not audit.items:
            return ControlEffectivenessResult(overall_effectiveness=0.0)

        frame = items_frame(audit.items)
        undocumented = ~frame["has_description"] | ~frame["has_amount"]
        frame["exception"] = (
            frame["status"].map(STATUS_EXCEPTION_WEIGHTS)
            + undocumented.astype(float) * DOCUMENTATION_EXCEPTION
        ).clip(upper=1.0)

        breakdown = [
            CategoryControl(
                category=str(category),
                tested=int(len(group)),
                exceptions=round(float(group["exception"].sum()), 4),
                effectiveness=clamp(1.0 - group["exception"].mean()),
            )
            for category, group in frame.groupby("category", sort=True)
        ]

        return ControlEffectivenessResult(
            overall_effectiveness=clamp(1.0 - frame["exception"].mean()),
            breakdown=breakdown,
        )


class ControlEffectivenessTester:
    """Compute control effectiveness of an audit from its items."""

    def __init__(self, strategy: ControlScoringStrategy | None = None):
        self.strategy = strategy or ExceptionRateControlStrategy()

    def test(self, audit: AuditData) -> ControlEffectivenessResult:
        result = self.strategy.score(audit)
        logger.info(f"Audit {audit.id}: control effectiveness {result.overall_effectiveness}")
        return result
