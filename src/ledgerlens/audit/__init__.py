"""Automated audit analysis."""

from .anomalies import AnomalyDetector
from .controls import (
    ControlEffectivenessTester,
    ControlScoringStrategy,
    ExceptionRateControlStrategy,
)
from .risk import RiskAssessor, RiskScoringStrategy, StatusWeightedRiskStrategy
from .service import AutomatedAuditService

__all__ = [
    "AnomalyDetector",
    "AutomatedAuditService",
    "ControlEffectivenessTester",
    "ControlScoringStrategy",
    "ExceptionRateControlStrategy",
    "RiskAssessor",
    "RiskScoringStrategy",
    "StatusWeightedRiskStrategy",
]
