"""Job orchestration: validate, sort, then match and annotate every cell."""
from __future__ import annotations

import logging
from concurrent.futures import Future, ThreadPoolExecutor
from dataclasses import dataclass
from pathlib import Path

from sheetmark.core.annotate import annotate_cell
from sheetmark.core.colors import Palette
from sheetmark.core.contractions import ContractionSet
from sheetmark.core.errors import SheetmarkError
from sheetmark.core.matcher import PatternMatcher
from sheetmark.core.overlap import resolve_overlaps
from sheetmark.core.sorting import sort_rows
from sheetmark.core.storage import download_name, scratch_path
from sheetmark.core.validation import validate_sheet
from sheetmark.domain import Grid, JobSpec, JobState
from sheetmark.infrastructure import xlsx

from .files import FileService

logger = logging.getLogger(__name__)


@dataclass
class JobResult:
    grid: Grid
    state: JobState


class JobOrchestrator:
    """Runs one job over an in-memory grid.

    The input grid is never touched; all work happens on a copy that is only
    handed back once every stage succeeded.
    """

    def __init__(self, spec: JobSpec, palette: Palette | None = None) -> None:
        self.spec = spec
        self.palette = palette or Palette.default()
        self.state = JobState.PENDING
        self.error: str | None = None

    def _enter(self, state: JobState) -> None:
        logger.debug("Job %s: %s -> %s", self.spec.file_id, self.state.value, state.value)
        self.state = state

    def validate(self, grid: Grid) -> None:
        self._enter(JobState.VALIDATING)
        validate_sheet(grid, self.spec.date_check_columns)

    def sort(self, grid: Grid) -> None:
        self._enter(JobState.SORTING)
        grid.rows = sort_rows(grid.rows, self.spec.sort_keys, grid.column_count)

    def annotate(self, grid: Grid, contractions: ContractionSet | None) -> None:
        self._enter(JobState.ANNOTATING)
        matcher = PatternMatcher(self.spec.search_terms)
        for row in grid.rows:
            for cell in row:
                spans = resolve_overlaps(matcher.find_all_overlapping(cell.text))
                profile = self.palette.select(cell.text, contractions)
                annotate_cell(cell, spans, profile)

    def run(self, grid: Grid, contractions: ContractionSet | Future[ContractionSet] | None = None) -> JobResult:
        """Run every stage; ``contractions`` may still be loading when sorting starts."""

        working = grid.copy()
        try:
            self.validate(working)
            self.sort(working)
            if isinstance(contractions, Future):
                contractions = contractions.result()
            self.annotate(working, contractions)
        except SheetmarkError as exc:
            self.error = str(exc)
            self._enter(JobState.FAILED)
            raise
        self._enter(JobState.DONE)
        return JobResult(grid=working, state=self.state)


@dataclass
class JobOutput:
    job_id: str
    output_path: Path
    download_name: str


class JobService:
    """Loads the uploaded workbook, runs the job and writes the result workbook."""

    def __init__(self, files: FileService) -> None:
        self._files = files

    def run_job(self, spec: JobSpec) -> JobOutput:
        entry = self._files.get_file_entry(spec.file_id)
        job_id = self._files.start_job(spec.file_id)
        try:
            output_path = self._process(spec, entry.file_path)
        except SheetmarkError as exc:
            logger.error("Job %s failed: %s", job_id, exc)
            self._files.fail_job(job_id, str(exc))
            raise
        self._files.complete_job(job_id, output_path)
        logger.info("Job %s completed: %s", job_id, output_path)
        return JobOutput(job_id=job_id, output_path=output_path, download_name=download_name(entry.file_path))

    def _process(self, spec: JobSpec, source_path: str) -> Path:
        grid = xlsx.load_grid(source_path)
        orchestrator = JobOrchestrator(spec)
        payload = spec.pop_contraction_payload()

        with ThreadPoolExecutor(max_workers=1) as executor:
            pending_contractions = executor.submit(xlsx.load_contractions, payload)
            result = orchestrator.run(grid, pending_contractions)

        target = scratch_path("results")
        logger.debug("Saving result workbook %s", target)
        return xlsx.write_grid(source_path, result.grid, target)
