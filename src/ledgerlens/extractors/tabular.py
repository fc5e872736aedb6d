"""Comma-delimited tabular extractor."""

import logging
from datetime import date
from decimal import Decimal, InvalidOperation

import pandas as pd

from ..core.models import ExtractedTuple, ExtractionMode, TransactionKind
from ..errors import UnsupportedInputError
from ..utils.file_handlers import decode_content
from .base import BaseExtractor, ExtractionResult

logger = logging.getLogger(__name__)

# Dates outside this range are treated as unreadable
MIN_YEAR = 1900
MAX_YEAR = 2100


def parse_amount(value: str) -> Decimal | None:
    """Parse a cell as a finite decimal, or return None."""
    if not value:
        return None
    try:
        amount = Decimal(value)
    except InvalidOperation:
        return None
    if not amount.is_finite():
        return None
    return amount


def parse_date(value: str) -> date:
    """Parse a date cell, falling back to today when absent or unreadable."""
    if not value:
        return date.today()
    parsed = pd.to_datetime(value, errors="coerce")
    if pd.isna(parsed) or not MIN_YEAR <= parsed.year <= MAX_YEAR:
        return date.today()
    return parsed.date()


class TabularExtractor(BaseExtractor):
    """
    Extract tuples from simple comma-delimited files.

    The first line names the fields. Each following line is split on
    commas positionally; quoted cells and embedded commas are not
    supported. The sign of the amount decides the kind: negative is an
    expense, anything else is income.
    """

    mode = ExtractionMode.TABULAR

    AMOUNT_FIELDS = ("amount", "Amount")
    DESCRIPTION_FIELDS = ("description", "Description")
    DATE_FIELDS = ("date", "Date")

    def extract(self, content: bytes, filename: str | None = None) -> ExtractionResult:
        """
        Extract tuples from a tabular document.

        Raises:
            UnsupportedInputError: If the file is binary or has no header row
        """
        text = decode_content(content)
        lines = text.split("\n")

        headers = [header.strip() for header in lines[0].split(",")]
        if not any(headers):
            raise UnsupportedInputError("Tabular document has no header row")

        result = ExtractionResult(mode=self.mode)

        for line_number, line in enumerate(lines[1:], start=2):
            if not line.strip():
                continue
            result.lines_read += 1

            row = self._to_row(headers, line)
            amount = parse_amount(self._first(row, self.AMOUNT_FIELDS))
            if amount is None:
                logger.debug(f"{filename}: skipping row {line_number}, amount is not a number")
                result.skipped_lines += 1
                continue

            result.transactions.append(
                ExtractedTuple(
                    amount=amount,
                    description=self._first(row, self.DESCRIPTION_FIELDS),
                    date=parse_date(self._first(row, self.DATE_FIELDS)),
                    kind=TransactionKind.EXPENSE if amount < 0 else TransactionKind.INCOME,
                )
            )

        logger.info(
            f"{filename}: {len(result.transactions)} tuples from {result.lines_read} rows "
            f"({result.skipped_lines} skipped)"
        )
        return result

    def _to_row(self, headers: list[str], line: str) -> dict[str, str]:
        cells = line.split(",")
        return {
            header: cells[idx].strip() if idx < len(cells) else ""
            for idx, header in enumerate(headers)
        }

    def _first(self, row: dict[str, str], aliases: tuple[str, ...]) -> str:
        """Return the first non-empty value among the field aliases."""
        for alias in aliases:
            if row.get(alias):
                return row[alias]
        return ""
