"""Application services."""

from .files import FileService, get_file_service, reset_file_state
from .jobs import JobOrchestrator, JobOutput, JobResult, JobService

__all__ = [
    "FileService",
    "JobOrchestrator",
    "JobOutput",
    "JobResult",
    "JobService",
    "get_file_service",
    "reset_file_state",
]
