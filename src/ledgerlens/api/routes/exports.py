"""Write-off export endpoints."""

from typing import Annotated

from fastapi import APIRouter, Depends
from fastapi.responses import Response

from ...config import RuntimeConfig
from ...errors import with_timeout
from ...exporters import WriteOffCSVExporter, records_from_rows
from ...storage import StorageService
from ..dependencies import get_owner_id, get_runtime_config, get_storage

router = APIRouter(tags=["exports"])


@router.get("/write-offs.csv")
async def export_write_offs(
    owner_id: Annotated[str, Depends(get_owner_id)],
    settings: Annotated[RuntimeConfig, Depends(get_runtime_config)],
    storage: Annotated[StorageService, Depends(get_storage)],
) -> Response:
    """Download the owner's write-offs, oldest first."""
    rows = await with_timeout(
        storage.select("write_offs", {"user_id": owner_id}, order_by="date"),
        settings.storage_timeout_seconds,
        "write-off export",
    )
    codes = await with_timeout(
        storage.select("tax_codes"),
        settings.storage_timeout_seconds,
        "tax code lookup",
    )
    tax_codes = {str(code["id"]): str(code.get("code") or "") for code in codes if code.get("id")}

    exporter = WriteOffCSVExporter()
    return Response(
        content=exporter.export(records_from_rows(rows), tax_codes),
        media_type=exporter.mime_type,
        headers={"Content-Disposition": f'attachment; filename="write-offs{exporter.file_extension}"'},
    )
