"""Tabular view of an audit item snapshot."""

import pandas as pd

from ..core.models import AuditItem

UNCATEGORIZED = "Uncategorized"


def items_frame(items: list[AuditItem]) -> pd.DataFrame:
    """
    Build one row per audit item.

    Columns: category, status, amount (absolute, 0 when missing),
    has_amount, has_description.
    """
    return pd.DataFrame(
        {
            "category": [item.category.strip() or UNCATEGORIZED for item in items],
            "status": [item.status.value for item in items],
            "amount": [float(abs(item.amount)) if item.amount is not None else 0.0 for item in items],
            "has_amount": [item.amount is not None for item in items],
            "has_description": [bool(item.description.strip()) for item in items],
        }
    )


def clamp(value: float) -> float:
    return round(min(1.0, max(0.0, float(value))), 4)
