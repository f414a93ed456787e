from __future__ import annotations

from pathlib import Path

from fastapi import APIRouter, File, HTTPException, UploadFile, status

from sheetmark.application import get_file_service
from sheetmark.core.errors import IOFailure
from sheetmark.core.schema import UploadFileEntry
from sheetmark.core.storage import discard_upload, save_upload
from sheetmark.infrastructure import xlsx

router = APIRouter(tags=["upload"])


@router.post("/upload", status_code=status.HTTP_201_CREATED, response_model=UploadFileEntry)
async def upload_file(file: UploadFile = File(...)) -> UploadFileEntry:
    """Store an uploaded workbook and return the id used by later requests."""
    try:
        if not file.filename:
            raise HTTPException(status_code=400, detail="Expected a file but none was uploaded")

        safe_name = Path(file.filename).name
        try:
            path = save_upload(safe_name, file.file)
        except OSError as exc:
            raise HTTPException(status_code=500, detail=f"Error writing uploaded file {safe_name} to disk") from exc
    finally:
        await file.close()

    try:
        xlsx.check_workbook(path)
    except IOFailure as exc:
        discard_upload(path)
        raise HTTPException(status_code=400, detail=f"Invalid excel file: {exc}") from exc

    entry_id = get_file_service().add_file_entry(path)
    return UploadFileEntry(id=entry_id)
