"""Application service layer for uploaded files and job bookkeeping."""
from __future__ import annotations

import os
from pathlib import Path

from sheetmark.core.errors import EntryNotFound
from sheetmark.core.storage import ensure_data_root
from sheetmark.domain import FileEntry, JobRecord
from sheetmark.infrastructure import DuckDBFileRepository, FileRepository, InMemoryFileRepository


class FileService:
    """Coordinates the file registry use cases."""

    def __init__(self, repository: FileRepository) -> None:
        self._repository = repository

    # ------------------------------------------------------------------
    # uploads
    # ------------------------------------------------------------------
    def add_file_entry(self, file_path: Path | str) -> str:
        return self._repository.add_file_entry(file_path)

    def get_file_entry(self, entry_id: str) -> FileEntry:
        entry = self._repository.get_file_entry(entry_id)
        if entry is None:
            raise EntryNotFound(f"No entry found with the id {entry_id}")
        return entry

    def remove_file_entry(self, entry_id: str) -> None:
        self._repository.remove_file_entry(entry_id)

    # ------------------------------------------------------------------
    # job runs
    # ------------------------------------------------------------------
    def start_job(self, file_id: str) -> str:
        job_id = self._repository.register_job(file_id)
        self._repository.update_job_status(job_id, "processing")
        return job_id

    def complete_job(self, job_id: str, output_path: Path | str) -> None:
        self._repository.update_job_status(job_id, "completed", output_path=str(output_path))

    def fail_job(self, job_id: str, error: str) -> None:
        self._repository.update_job_status(job_id, "failed", error=error)

    def list_jobs(self) -> list[JobRecord]:
        return self._repository.list_jobs()

    # ------------------------------------------------------------------
    # testing helpers
    # ------------------------------------------------------------------
    def reset(self) -> None:
        self._repository.reset()


def _build_repository() -> FileRepository:
    if os.getenv("SHEETMARK_REGISTRY", "duckdb").lower() == "memory":
        return InMemoryFileRepository()
    return DuckDBFileRepository(ensure_data_root() / "registry.duckdb")


_service: FileService | None = None


def get_file_service() -> FileService:
    """Return the singleton file service for the process."""

    global _service
    if _service is None:
        _service = FileService(_build_repository())
    return _service


def reset_file_state() -> None:
    """Drop the registry singleton (used in tests)."""

    global _service
    if _service is not None:
        _service.reset()
    _service = None
