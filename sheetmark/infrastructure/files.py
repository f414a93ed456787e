"""Infrastructure layer for the uploaded file registry."""
from __future__ import annotations

import threading
import uuid
from pathlib import Path
from typing import Protocol

import duckdb

from sheetmark.domain import FileEntry, JobRecord

UPLOAD_TABLE = "upload_entries"
JOB_TABLE = "job_runs"


class FileRepository(Protocol):
    """Persistence contract for uploads and job runs."""

    def add_file_entry(self, file_path: Path | str) -> str: ...

    def get_file_entry(self, entry_id: str) -> FileEntry | None: ...

    def remove_file_entry(self, entry_id: str) -> None: ...

    def register_job(self, file_id: str) -> str: ...

    def update_job_status(
        self,
        job_id: str,
        status: str,
        *,
        output_path: str | None = None,
        error: str | None = None,
    ) -> None: ...

    def list_jobs(self) -> list[JobRecord]: ...

    def reset(self) -> None: ...


def _new_entry_id() -> str:
    return str(uuid.uuid4())


def _job_id(seq: int) -> str:
    return f"job-{seq:05d}"


class InMemoryFileRepository:
    """Simple in-memory repository for fast iteration and tests."""

    def __init__(self) -> None:
        self._entries: dict[str, FileEntry] = {}
        self._jobs: dict[str, JobRecord] = {}
        self._job_counter = 0
        self._lock = threading.Lock()

    def add_file_entry(self, file_path: Path | str) -> str:
        entry_id = _new_entry_id()
        self._entries[entry_id] = FileEntry(id=entry_id, file_path=str(file_path))
        return entry_id

    def get_file_entry(self, entry_id: str) -> FileEntry | None:
        return self._entries.get(entry_id)

    def remove_file_entry(self, entry_id: str) -> None:
        self._entries.pop(entry_id, None)

    def register_job(self, file_id: str) -> str:
        with self._lock:
            self._job_counter += 1
            job_id = _job_id(self._job_counter)
            self._jobs[job_id] = JobRecord(job_id=job_id, file_id=file_id, status="queued")
        return job_id

    def update_job_status(
        self,
        job_id: str,
        status: str,
        *,
        output_path: str | None = None,
        error: str | None = None,
    ) -> None:
        job = self._jobs.get(job_id)
        if job is None:
            return
        job.status = status
        job.output_path = output_path
        job.error = error

    def list_jobs(self) -> list[JobRecord]:
        with self._lock:
            return list(self._jobs.values())

    def reset(self) -> None:
        with self._lock:
            self._entries.clear()
            self._jobs.clear()
            self._job_counter = 0


class DuckDBFileRepository:
    """Registry persisted in a DuckDB database file."""

    def __init__(self, database: Path | str = ":memory:") -> None:
        self._database = str(database)
        self._lock = threading.Lock()
        self._connection = duckdb.connect(self._database)
        self._init_tables()

    def _init_tables(self) -> None:
        with self._lock:
            self._connection.execute(
                f"CREATE TABLE IF NOT EXISTS {UPLOAD_TABLE} (id VARCHAR PRIMARY KEY, file_path VARCHAR NOT NULL)"
            )
            self._connection.execute(
                f"CREATE TABLE IF NOT EXISTS {JOB_TABLE} ("
                "job_id VARCHAR PRIMARY KEY, file_id VARCHAR NOT NULL, status VARCHAR NOT NULL, "
                "output_path VARCHAR, error VARCHAR, seq INTEGER NOT NULL)"
            )

    def add_file_entry(self, file_path: Path | str) -> str:
        entry_id = _new_entry_id()
        with self._lock:
            self._connection.execute(
                f"INSERT INTO {UPLOAD_TABLE} (id, file_path) VALUES (?, ?)",
                [entry_id, str(file_path)],
            )
        return entry_id

    def get_file_entry(self, entry_id: str) -> FileEntry | None:
        with self._lock:
            row = self._connection.execute(
                f"SELECT id, file_path FROM {UPLOAD_TABLE} WHERE id = ?",
                [entry_id],
            ).fetchone()
        if row is None:
            return None
        return FileEntry(id=row[0], file_path=row[1])

    def remove_file_entry(self, entry_id: str) -> None:
        with self._lock:
            self._connection.execute(f"DELETE FROM {UPLOAD_TABLE} WHERE id = ?", [entry_id])

    def register_job(self, file_id: str) -> str:
        with self._lock:
            (seq,) = self._connection.execute(f"SELECT coalesce(max(seq), 0) + 1 FROM {JOB_TABLE}").fetchone()
            job_id = _job_id(seq)
            self._connection.execute(
                f"INSERT INTO {JOB_TABLE} (job_id, file_id, status, seq) VALUES (?, ?, ?, ?)",
                [job_id, file_id, "queued", seq],
            )
        return job_id

    def update_job_status(
        self,
        job_id: str,
        status: str,
        *,
        output_path: str | None = None,
        error: str | None = None,
    ) -> None:
        with self._lock:
            self._connection.execute(
                f"UPDATE {JOB_TABLE} SET status = ?, output_path = ?, error = ? WHERE job_id = ?",
                [status, output_path, error, job_id],
            )

    def list_jobs(self) -> list[JobRecord]:
        with self._lock:
            rows = self._connection.execute(
                f"SELECT job_id, file_id, status, output_path, error FROM {JOB_TABLE} ORDER BY seq"
            ).fetchall()
        return [
            JobRecord(job_id=row[0], file_id=row[1], status=row[2], output_path=row[3], error=row[4])
            for row in rows
        ]

    def close(self) -> None:
        with self._lock:
            self._connection.close()

    def reset(self) -> None:
        with self._lock:
            self._connection.execute(f"DELETE FROM {UPLOAD_TABLE}")
            self._connection.execute(f"DELETE FROM {JOB_TABLE}")
