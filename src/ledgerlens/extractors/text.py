"""Free-text extractor for documents with embedded amounts."""

import logging
import re
from decimal import Decimal, InvalidOperation

from ..core.models import ExtractedTuple, ExtractionMode, TransactionKind
from ..utils.file_handlers import decode_content
from .base import BaseExtractor, ExtractionResult

logger = logging.getLogger(__name__)

# Integer or two-place decimal, optional "$", optional comma thousands groups
AMOUNT_PATTERN = re.compile(r"\$?(?:\d{1,3}(?:,\d{3})+|\d+)(?:\.\d{2})?")

EXPENSE_KEYWORDS = ("expense", "payment", "purchase", "cost", "fee", "charge")


def is_expense_line(line: str) -> bool:
    lowered = line.lower()
    return any(keyword in lowered for keyword in EXPENSE_KEYWORDS)


class TextExtractor(BaseExtractor):
    """
    Extract expense tuples from line-oriented text.

    Only the first amount on a line is considered, and only lines that
    mention an expense keyword are emitted. Income lines are left to
    other collaborators.
    """

    mode = ExtractionMode.TEXT

    def extract(self, content: bytes, filename: str | None = None) -> ExtractionResult:
        text = decode_content(content, strict=False)
        result = ExtractionResult(mode=self.mode)

        for line in text.split("\n"):
            if not line.strip():
                continue
            result.lines_read += 1

            match = AMOUNT_PATTERN.search(line)
            if match is None:
                continue

            try:
                amount = Decimal(match.group().replace("$", "").replace(",", ""))
            except InvalidOperation:
                result.skipped_lines += 1
                continue

            if not is_expense_line(line):
                continue

            result.transactions.append(
                ExtractedTuple(
                    amount=amount,
                    description=line.strip(),
                    kind=TransactionKind.EXPENSE,
                )
            )

        logger.info(
            f"{filename}: {len(result.transactions)} expense lines out of {result.lines_read}"
        )
        return result
