"""CSV export of write-offs."""

import csv
import io
from decimal import Decimal
from typing import Iterable, Sequence

from pydantic import BaseModel, ConfigDict

from ..core.models import LedgerDate, WriteOffRecord
from ..storage import Row

# Column order downstream consumers rely on
HEADER = ["Date", "Description", "Amount", "Tax Code"]


class WriteOffExportRow(BaseModel):
    """
    A stored ``write_offs`` row as read for export.

    The table also holds rows entered by other workflows, so nothing
    beyond the column types is enforced here.
    """

    model_config = ConfigDict(extra="ignore")

    date: LedgerDate | None = None
    description: str | None = None
    amount: Decimal | None = None
    tax_code_id: str | None = None


def records_from_rows(rows: Iterable[Row]) -> list[WriteOffExportRow]:
    """Read stored ``write_offs`` rows for export."""
    return [WriteOffExportRow.model_validate(row) for row in rows]


class WriteOffCSVExporter:
    """Export write-offs as ``Date,Description,Amount,Tax Code`` rows."""

    format_name = "CSV"
    file_extension = ".csv"
    mime_type = "text/csv"

    def export(
        self,
        write_offs: Sequence[WriteOffRecord | WriteOffExportRow],
        tax_codes: dict[str, str] | None = None,
    ) -> str:
        """
        Export write-offs to a CSV string.

        Args:
            write_offs: Records to export, in output order
            tax_codes: Tax code id -> printable code; unresolved ids export empty

        Returns:
            CSV content as string
        """
        tax_codes = tax_codes or {}
        output = io.StringIO()
        writer = csv.writer(output, lineterminator="\n")

        writer.writerow(HEADER)
        for write_off in write_offs:
            code = tax_codes.get(write_off.tax_code_id, "") if write_off.tax_code_id else ""
            writer.writerow([
                write_off.date.isoformat() if write_off.date else "",
                write_off.description or "",
                str(write_off.amount) if write_off.amount is not None else "",
                code,
            ])

        return output.getvalue()
