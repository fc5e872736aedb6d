"""Classify extracted tuples into write-offs and revenue."""

import logging
from dataclasses import dataclass
from decimal import ROUND_HALF_UP, Decimal, localcontext

from ..core.models import (
    CATEGORIZED,
    UNCATEGORIZED,
    ExtractedTuple,
    ExtractionMode,
    RevenueRecord,
    TransactionKind,
    WriteOffRecord,
)
from .tax_codes import TaxCodeMatcher

logger = logging.getLogger(__name__)

FINDING_TEMPLATE = "Potential write-off detected: ${amount} - {label}"


def format_amount(amount: Decimal) -> str:
    """
    Format an amount with thousands grouping and up to three decimals.

    Trailing zeros are dropped: 1250.00 -> "1,250", 12.50 -> "12.5".
    """
    with localcontext() as ctx:
        # Room for every integer digit plus three decimals
        ctx.prec = max(ctx.prec, amount.adjusted() + 5)
        quantized = amount.quantize(Decimal("0.001"), rounding=ROUND_HALF_UP)
        text = f"{quantized:,.3f}"
    return text.rstrip("0").rstrip(".")


@dataclass
class ClassificationOutcome:
    """What one tuple turned into."""

    write_off: WriteOffRecord | None = None
    revenue: RevenueRecord | None = None
    finding: str | None = None


class WriteOffClassifier:
    """
    Decide, per tuple, between write-off and revenue.

    The tabular and free-text paths label write-offs differently:
    tabular expenses are always "Uncategorized" and their finding names
    the description; free-text expenses go through the tax code matcher
    and their finding names the "Categorized"/"Uncategorized" label.
    """

    def __init__(self, matcher: TaxCodeMatcher):
        self.matcher = matcher

    async def classify(self, transaction: ExtractedTuple, mode: ExtractionMode) -> ClassificationOutcome:
        if mode == ExtractionMode.TABULAR:
            return self.classify_tabular(transaction)
        return await self.classify_text(transaction)

    def classify_tabular(self, transaction: ExtractedTuple) -> ClassificationOutcome:
        if transaction.kind == TransactionKind.INCOME:
            if transaction.amount <= 0:
                return ClassificationOutcome()
            return ClassificationOutcome(
                revenue=RevenueRecord(
                    amount=transaction.amount,
                    description=transaction.description,
                    date=transaction.date,
                )
            )

        amount = abs(transaction.amount)
        write_off = WriteOffRecord(
            amount=amount,
            description=transaction.description,
            category=UNCATEGORIZED,
            date=transaction.date,
        )
        return ClassificationOutcome(
            write_off=write_off,
            finding=FINDING_TEMPLATE.format(
                amount=format_amount(amount), label=transaction.description
            ),
        )

    async def classify_text(self, transaction: ExtractedTuple) -> ClassificationOutcome:
        amount = abs(transaction.amount)
        if amount == 0:
            logger.debug(f"Ignoring zero amount on line: {transaction.description!r}")
            return ClassificationOutcome()

        match = await self.matcher.find_tax_code(transaction.description, amount)
        label = CATEGORIZED if match.has_code else UNCATEGORIZED

        write_off = WriteOffRecord(
            amount=amount,
            description=transaction.description,
            tax_code_id=match.tax_code_id,
            category=label,
            tax_category=match.category,
            date=transaction.date,
        )
        return ClassificationOutcome(
            write_off=write_off,
            finding=FINDING_TEMPLATE.format(amount=format_amount(amount), label=label),
        )
