"""Tests for CSV exporter."""

from datetime import date
from decimal import Decimal

from ledgerlens.core.models import WriteOffRecord
from ledgerlens.exporters import WriteOffCSVExporter, records_from_rows


class TestWriteOffCSVExporter:
    """Test cases for WriteOffCSVExporter."""

    def setup_method(self):
        """Setup test fixtures."""
        self.exporter = WriteOffCSVExporter()
        self.write_offs = [
            WriteOffRecord(
                amount=Decimal("1250.00"),
                description="Paid fuel expense of $1,250.00 for delivery van",
                tax_code_id="tc-transportation",
                date=date(2024, 3, 1),
            ),
            WriteOffRecord(
                amount=Decimal("45.00"),
                description="Office Depot supplies",
                date=date(2024, 3, 2),
            ),
        ]

    def test_header_row(self):
        result = self.exporter.export([])

        assert result == "Date,Description,Amount,Tax Code\n"

    def test_rows_with_resolved_and_missing_codes(self):
        result = self.exporter.export(self.write_offs, {"tc-transportation": "TC-01"})

        lines = result.splitlines()
        assert lines[1] == '2024-03-01,"Paid fuel expense of $1,250.00 for delivery van",1250.00,TC-01'
        assert lines[2] == "2024-03-02,Office Depot supplies,45.00,"

    def test_unknown_code_is_empty(self):
        result = self.exporter.export(self.write_offs[:1])

        assert result.splitlines()[1].endswith(",1250.00,")

    def test_format_properties(self):
        """Test exporter format properties."""
        assert self.exporter.format_name == "CSV"
        assert self.exporter.file_extension == ".csv"
        assert self.exporter.mime_type == "text/csv"


class TestRecordsFromRows:
    def test_rebuilds_stored_write_offs(self):
        rows = [
            {"id": "w-1", "user_id": "owner-1", "amount": "45.00", "description": None,
             "tax_code_id": None, "date": "2024-03-02", "status": "pending"},
        ]

        records = records_from_rows(rows)

        assert records[0].amount == Decimal("45.00")
        assert records[0].description is None
        assert records[0].date == date(2024, 3, 2)

    def test_zero_amount_row_is_exported(self):
        rows = [
            {"id": "w-1", "user_id": "owner-1", "amount": 0, "description": None,
             "tax_code_id": None, "date": "2024-03-02", "status": "pending"},
        ]

        result = WriteOffCSVExporter().export(records_from_rows(rows))

        assert result.splitlines()[1] == "2024-03-02,,0,"

    def test_missing_values_export_empty(self):
        rows = [{"id": "w-1", "amount": None, "date": None}]

        result = WriteOffCSVExporter().export(records_from_rows(rows))

        assert result.splitlines()[1] == ",,,"
