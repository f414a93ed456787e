from __future__ import annotations

from fastapi import APIRouter, HTTPException, Request
from fastapi.responses import FileResponse
from starlette.background import BackgroundTask
from starlette.datastructures import UploadFile

from sheetmark.application import get_file_service
from sheetmark.core.errors import (
    EntryNotFound,
    InvalidSearchSpec,
    InvalidSortSpec,
    SheetmarkError,
    ValidationFailed,
)
from sheetmark.core.jobspec import decode_job_spec
from sheetmark.core.schema import JobList, JobRecordModel
from sheetmark.core.storage import discard_result
from sheetmark.workers.jobs import get_job_worker

router = APIRouter(tags=["jobs"])

XLSX_MEDIA_TYPE = "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet"


def _status_for(exc: SheetmarkError) -> int:
    if isinstance(exc, EntryNotFound):
        return 404
    if isinstance(exc, (ValidationFailed, InvalidSortSpec, InvalidSearchSpec)):
        return 400
    return 500


async def _form_fields(request: Request) -> list[tuple[str, str | bytes]]:
    form = await request.form()
    fields: list[tuple[str, str | bytes]] = []
    for name, value in form.multi_items():
        if isinstance(value, UploadFile):
            try:
                fields.append((name, await value.read()))
            finally:
                await value.close()
        else:
            fields.append((name, value))
    return fields


@router.post("/runJob")
async def run_job(request: Request) -> FileResponse:
    """Sort and highlight an uploaded workbook and stream back the result."""
    try:
        spec = decode_job_spec(await _form_fields(request))
        output = await get_job_worker().run(spec)
    except SheetmarkError as exc:
        raise HTTPException(status_code=_status_for(exc), detail=str(exc)) from exc

    return FileResponse(
        output.output_path,
        media_type=XLSX_MEDIA_TYPE,
        filename=output.download_name,
        background=BackgroundTask(discard_result, output.output_path),
    )


@router.get("/jobs", response_model=JobList)
async def list_jobs() -> JobList:
    jobs = get_file_service().list_jobs()
    return JobList(
        items=[
            JobRecordModel(job_id=job.job_id, file_id=job.file_id, status=job.status, error=job.error)
            for job in jobs
        ]
    )
