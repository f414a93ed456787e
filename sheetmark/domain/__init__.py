"""Domain layer definitions."""

from .grid import Cell, Grid, MatchSpan
from .jobs import FileEntry, JobRecord, JobSpec, JobState, SortDirection, SortKey

__all__ = [
    "Cell",
    "FileEntry",
    "Grid",
    "JobRecord",
    "JobSpec",
    "JobState",
    "MatchSpan",
    "SortDirection",
    "SortKey",
]
