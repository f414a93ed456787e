from __future__ import annotations

from fastapi import APIRouter, HTTPException

from sheetmark.application import get_file_service
from sheetmark.core.errors import EntryNotFound, IOFailure
from sheetmark.core.schema import RowsPayload
from sheetmark.infrastructure import xlsx

router = APIRouter(tags=["header"])


@router.get("/getHeader/{entry_id}", response_model=RowsPayload)
async def get_header_row(entry_id: str) -> RowsPayload:
    """Return the header row of an uploaded workbook, one string per column."""
    try:
        entry = get_file_service().get_file_entry(entry_id)
    except EntryNotFound as exc:
        raise HTTPException(status_code=404, detail=str(exc)) from exc
    try:
        columns = xlsx.read_header(entry.file_path)
    except IOFailure as exc:
        raise HTTPException(status_code=400, detail=str(exc)) from exc
    return RowsPayload(columns=columns)
