from __future__ import annotations

from pydantic import BaseModel, Field


class UploadFileEntry(BaseModel):
    id: str


class RowsPayload(BaseModel):
    columns: list[str] = Field(default_factory=list)


class JobRecordModel(BaseModel):
    job_id: str
    file_id: str
    status: str
    error: str | None = None


class JobList(BaseModel):
    items: list[JobRecordModel] = Field(default_factory=list)
