"""Domain entities describing a highlighting job."""
from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum


class SortDirection(str, Enum):
    ASC = "asc"
    DESC = "desc"


class JobState(str, Enum):
    PENDING = "pending"
    VALIDATING = "validating"
    SORTING = "sorting"
    ANNOTATING = "annotating"
    DONE = "done"
    FAILED = "failed"


@dataclass(frozen=True, slots=True)
class SortKey:
    """One level of the hierarchical sort; ``column_index`` is 1-based."""

    direction: SortDirection
    column_index: int

    @property
    def offset(self) -> int:
        return self.column_index - 1


@dataclass(slots=True)
class JobSpec:
    """Decoded job request."""

    file_id: str
    search_terms: list[str] = field(default_factory=list)
    date_check_columns: list[int] = field(default_factory=list)
    sort_keys: list[SortKey] = field(default_factory=list)
    contraction_payload: bytes | None = field(default=None, repr=False)

    def pop_contraction_payload(self) -> bytes | None:
        payload = self.contraction_payload
        self.contraction_payload = None
        return payload


@dataclass(slots=True)
class FileEntry:
    """Uploaded workbook registered under an opaque id."""

    id: str
    file_path: str


@dataclass(slots=True)
class JobRecord:
    """Bookkeeping for one run of a job."""

    job_id: str
    file_id: str
    status: str = "pending"
    output_path: str | None = None
    error: str | None = None
