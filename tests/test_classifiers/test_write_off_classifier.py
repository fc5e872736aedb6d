"""Tests for write-off classification."""

import asyncio
from decimal import Decimal

from ledgerlens.classifiers import TaxCodeMatcher, WriteOffClassifier
from ledgerlens.classifiers.write_offs import format_amount
from ledgerlens.core.models import (
    CATEGORIZED,
    UNCATEGORIZED,
    ExtractedTuple,
    ExtractionMode,
    TaxCategory,
    TransactionKind,
)


def expense(amount: str, description: str) -> ExtractedTuple:
    return ExtractedTuple(amount=Decimal(amount), description=description, kind=TransactionKind.EXPENSE)


def income(amount: str, description: str) -> ExtractedTuple:
    return ExtractedTuple(amount=Decimal(amount), description=description, kind=TransactionKind.INCOME)


class TestFormatAmount:
    def test_drops_trailing_zeros(self):
        assert format_amount(Decimal("45.00")) == "45"
        assert format_amount(Decimal("12.50")) == "12.5"

    def test_groups_thousands(self):
        assert format_amount(Decimal("1250.00")) == "1,250"
        assert format_amount(Decimal("1234567.891")) == "1,234,567.891"

    def test_rounds_to_three_decimals(self):
        assert format_amount(Decimal("0.0049")) == "0.005"

    def test_formats_amounts_beyond_default_precision(self):
        assert format_amount(Decimal("12345678901234567890123456")) == "12,345,678,901,234,567,890,123,456"
        assert format_amount(Decimal("1E+30")) == "1" + ",000" * 10


class TestWriteOffClassifier:
    """Test cases for WriteOffClassifier."""

    def make_classifier(self, storage) -> WriteOffClassifier:
        return WriteOffClassifier(TaxCodeMatcher(storage))

    def test_tabular_expense_is_uncategorized_write_off(self, storage):
        classifier = self.make_classifier(storage)

        outcome = asyncio.run(
            classifier.classify(expense("-45.00", "Office Depot supplies"), ExtractionMode.TABULAR)
        )

        assert outcome.write_off.amount == Decimal("45.00")
        assert outcome.write_off.category == UNCATEGORIZED
        assert outcome.write_off.tax_code_id is None
        assert outcome.revenue is None
        assert outcome.finding == "Potential write-off detected: $45 - Office Depot supplies"

    def test_tabular_path_never_resolves_tax_codes(self, storage):
        classifier = self.make_classifier(storage)

        outcome = asyncio.run(classifier.classify(expense("-60", "Fuel"), ExtractionMode.TABULAR))

        assert outcome.write_off.tax_code_id is None
        assert outcome.write_off.tax_category is None

    def test_tabular_income_is_revenue(self, storage):
        classifier = self.make_classifier(storage)

        outcome = asyncio.run(classifier.classify(income("120.00", "Client payment"), ExtractionMode.TABULAR))

        assert outcome.write_off is None
        assert outcome.finding is None
        assert outcome.revenue.amount == Decimal("120.00")
        assert outcome.revenue.category == "Document Import"

    def test_tabular_zero_is_ignored(self, storage):
        classifier = self.make_classifier(storage)

        outcome = asyncio.run(classifier.classify(income("0", "Nothing"), ExtractionMode.TABULAR))

        assert outcome.write_off is None
        assert outcome.revenue is None

    def test_text_expense_with_tax_code_is_categorized(self, storage):
        classifier = self.make_classifier(storage)
        line = "Paid fuel expense of $1,250.00 for delivery van"

        outcome = asyncio.run(classifier.classify(expense("1250.00", line), ExtractionMode.TEXT))

        write_off = outcome.write_off
        assert write_off.amount == Decimal("1250.00")
        assert write_off.tax_code_id == "tc-transportation"
        assert write_off.category == CATEGORIZED
        assert write_off.tax_category == TaxCategory.TRANSPORTATION
        assert outcome.finding == "Potential write-off detected: $1,250 - Categorized"

    def test_text_expense_without_keyword_is_uncategorized(self, storage):
        classifier = self.make_classifier(storage)

        outcome = asyncio.run(classifier.classify(expense("15", "Late fee 15"), ExtractionMode.TEXT))

        assert outcome.write_off.category == UNCATEGORIZED
        assert outcome.write_off.tax_code_id is None
        assert outcome.finding == "Potential write-off detected: $15 - Uncategorized"

    def test_text_zero_amount_is_ignored(self, storage):
        classifier = self.make_classifier(storage)

        outcome = asyncio.run(classifier.classify(expense("0", "Fee 0"), ExtractionMode.TEXT))

        assert outcome.write_off is None
        assert outcome.finding is None
