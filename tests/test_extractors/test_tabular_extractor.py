"""Tests for the tabular extractor."""

from datetime import date
from decimal import Decimal

import pytest

from ledgerlens.core.models import TransactionKind
from ledgerlens.errors import UnsupportedInputError
from ledgerlens.extractors import TabularExtractor
from ledgerlens.extractors.tabular import parse_amount, parse_date


class TestParseAmount:
    """Test cases for amount cell parsing."""

    def test_parses_signed_decimals(self):
        assert parse_amount("-45.00") == Decimal("-45.00")
        assert parse_amount("120") == Decimal("120")

    def test_rejects_non_numbers(self):
        assert parse_amount("") is None
        assert parse_amount("abc") is None
        assert parse_amount("12abc") is None

    def test_rejects_non_finite_values(self):
        assert parse_amount("NaN") is None
        assert parse_amount("Infinity") is None


class TestParseDate:
    """Test cases for date cell parsing."""

    def test_parses_iso_date(self):
        assert parse_date("2024-03-01") == date(2024, 3, 1)

    def test_missing_or_invalid_date_is_today(self):
        assert parse_date("") == date.today()
        assert parse_date("not a date") == date.today()

    def test_out_of_range_year_is_today(self):
        assert parse_date("2999-01-01") == date.today()
        assert parse_date("0001-01-05") == date.today()

    def test_date_without_year_is_within_range(self):
        assert 1900 <= parse_date("Jan 5").year <= 2100


class TestTabularExtractor:
    """Test cases for TabularExtractor."""

    def setup_method(self):
        """Setup test fixtures."""
        self.extractor = TabularExtractor()

    def test_sign_decides_kind(self):
        """Negative amounts are expenses, the rest income."""
        content = b"amount,description\n-45.00,Office Depot supplies\n120.00,Client payment"

        result = self.extractor.extract(content, "statement.csv")

        assert len(result.transactions) == 2
        expense, income = result.transactions
        assert expense.kind == TransactionKind.EXPENSE
        assert expense.amount == Decimal("-45.00")
        assert expense.description == "Office Depot supplies"
        assert income.kind == TransactionKind.INCOME
        assert income.amount == Decimal("120.00")

    def test_zero_amount_is_income(self):
        result = self.extractor.extract(b"amount\n0")

        assert result.transactions[0].kind == TransactionKind.INCOME

    def test_capitalized_headers(self):
        content = b"Date,Amount,Description\n2024-03-01,-12.50,Parking"

        result = self.extractor.extract(content)

        transaction = result.transactions[0]
        assert transaction.date == date(2024, 3, 1)
        assert transaction.amount == Decimal("-12.50")
        assert transaction.description == "Parking"

    def test_lowercase_field_wins_when_present(self):
        content = b"amount,Amount\n5,7\n,9"

        result = self.extractor.extract(content)

        assert [t.amount for t in result.transactions] == [Decimal("5"), Decimal("9")]

    def test_rows_without_numeric_amount_are_skipped(self):
        content = b"amount,description\nabc,Nope\nNaN,Also nope\n10,Kept"

        result = self.extractor.extract(content)

        assert len(result.transactions) == 1
        assert result.transactions[0].description == "Kept"
        assert result.skipped_lines == 2
        assert result.lines_read == 3

    def test_blank_lines_are_ignored(self):
        content = b"amount,description\n\n5,Fee\n\n"

        result = self.extractor.extract(content)

        assert len(result.transactions) == 1
        assert result.lines_read == 1

    def test_missing_cells_are_empty(self):
        result = self.extractor.extract(b"amount,description,date\n7")

        transaction = result.transactions[0]
        assert transaction.description == ""
        assert transaction.date == date.today()

    def test_windows_line_endings(self):
        result = self.extractor.extract(b"amount,description\r\n-5,Bank fee\r\n")

        assert len(result.transactions) == 1
        assert result.transactions[0].description == "Bank fee"

    def test_header_only_file_has_no_content(self):
        result = self.extractor.extract(b"amount,description\n")

        assert not result.has_content

    def test_binary_content_is_rejected(self):
        with pytest.raises(UnsupportedInputError):
            self.extractor.extract(b"amount\x00,description\n1,2")

    def test_undecodable_content_is_rejected(self):
        with pytest.raises(UnsupportedInputError, match="Could not decode"):
            self.extractor.extract(b"amount,description\n\x81\x8d,x")

    def test_missing_header_is_rejected(self):
        with pytest.raises(UnsupportedInputError):
            self.extractor.extract(b"")

        with pytest.raises(UnsupportedInputError):
            self.extractor.extract(b" , \n1,2")
