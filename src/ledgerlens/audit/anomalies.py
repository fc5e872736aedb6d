"""Anomaly detection over audit items."""

import logging

import pandas as pd

from ..core.models import AnomalyResult, AuditData, AuditItem, AuditItemStatus

logger = logging.getLogger(__name__)

FLAGGED_REASON = "Item is flagged for review"


class AnomalyDetector:
    """
    Flag unusual audit items.

    Rules:
      - an item whose status is flagged
      - an item whose amount lies more than ``zscore_threshold`` population
        standard deviations from the mean amount (needs at least
        ``MIN_ITEMS_FOR_STATISTICS`` items with amounts)

    The result references the input items, in input order.
    """

    MIN_ITEMS_FOR_STATISTICS = 3

    def __init__(self, zscore_threshold: float = 2.0):
        self.zscore_threshold = zscore_threshold

    def detect(self, audit: AuditData) -> AnomalyResult:
        items = audit.items
        reasons: dict[int, list[str]] = {}

        for position, item in enumerate(items):
            if item.status == AuditItemStatus.FLAGGED:
                reasons.setdefault(position, []).append(FLAGGED_REASON)

        for position, zscore in self._amount_outliers(items):
            reasons.setdefault(position, []).append(
                f"Amount deviates {abs(zscore):.1f} standard deviations from the audit mean"
            )

        positions = sorted(reasons)
        reasons_by_id: dict[str, list[str]] = {}
        for position in positions:
            reasons_by_id.setdefault(items[position].id, []).extend(reasons[position])

        result = AnomalyResult(items=[items[p] for p in positions], reasons=reasons_by_id)
        logger.info(f"Audit {audit.id}: {result.count} anomalies")
        return result

    def _amount_outliers(self, items: list[AuditItem]) -> list[tuple[int, float]]:
        amounts = pd.Series(
            {
                position: float(item.amount)
                for position, item in enumerate(items)
                if item.amount is not None
            },
            dtype=float,
        )
        if len(amounts) < self.MIN_ITEMS_FOR_STATISTICS:
            return []

        std = amounts.std(ddof=0)
        if pd.isna(std) or std == 0:
            return []

        zscores = (amounts - amounts.mean()) / std
        return [
            (int(position), float(zscore))
            for position, zscore in zscores.items()
            if abs(zscore) > self.zscore_threshold
        ]
