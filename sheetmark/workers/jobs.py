from __future__ import annotations

import asyncio
import logging

from sheetmark.application import JobOutput, JobService, get_file_service
from sheetmark.domain import JobSpec

logger = logging.getLogger(__name__)


class JobWorker:
    """Runs jobs off the event loop; each job owns its grid and palette."""

    async def run(self, spec: JobSpec) -> JobOutput:
        service = JobService(get_file_service())
        logger.debug("Job details: %s", spec)
        return await asyncio.to_thread(service.run_job, spec)


_worker: JobWorker | None = None


def get_job_worker() -> JobWorker:
    global _worker
    if _worker is None:
        _worker = JobWorker()
    return _worker
