"""Write-off exporters."""

from .csv_exporter import HEADER, WriteOffCSVExporter, WriteOffExportRow, records_from_rows

__all__ = ["HEADER", "WriteOffCSVExporter", "WriteOffExportRow", "records_from_rows"]
