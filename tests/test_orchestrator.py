import sys
from concurrent.futures import Future
from pathlib import Path

import pytest

sys.path.append(str(Path(__file__).resolve().parents[1]))

from sheetmark.application import JobOrchestrator
from sheetmark.core.annotate import strip_markup
from sheetmark.core.colors import LIGHT_COLOR_POOL
from sheetmark.core.contractions import ContractionSet
from sheetmark.core.errors import InvalidSortSpec, ValidationFailed
from sheetmark.domain import Grid, JobSpec, JobState, SortDirection, SortKey


def _grid():
    return Grid.from_values(
        ["Name", "Code"],
        [["Apple", "A1"], ["apple", "A2"], ["Banana", "B1"]],
    )


def test_sorts_and_annotates_grid():
    spec = JobSpec(file_id="f", search_terms=["an"], sort_keys=[SortKey(SortDirection.ASC, 1)])
    orchestrator = JobOrchestrator(spec)
    result = orchestrator.run(_grid())

    assert result.state is JobState.DONE
    assert orchestrator.state is JobState.DONE
    names = [strip_markup(row[0].text) for row in result.grid.rows]
    assert names == ["Apple", "Banana", "apple"]
    assert [row[1].text for row in result.grid.rows] == ["A1", "B1", "A2"]

    banana = result.grid.rows[1][0]
    assert banana.runs == [("B", None), ("an", LIGHT_COLOR_POOL[0]), ("an", LIGHT_COLOR_POOL[1]), ("a", None)]
    assert banana.text.index("<font") == 1
    assert all(cell.annotated for row in result.grid.rows for cell in row)
    assert all(cell.background_color == "#ffffff" for row in result.grid.rows for cell in row)


def test_highlight_colors_restart_for_each_cell():
    spec = JobSpec(file_id="f", search_terms=["a"])
    grid = Grid.from_values(["Text"], [["banana"], ["papaya"]])
    result = JobOrchestrator(spec).run(grid)
    first = [color for _, color in result.grid.rows[0][0].runs if color]
    second = [color for _, color in result.grid.rows[1][0].runs if color]
    assert first == second == list(LIGHT_COLOR_POOL[:3])


def test_contraction_cells_get_their_own_profile():
    spec = JobSpec(file_id="f", search_terms=["A"])
    contractions = ContractionSet(["b1", "a2"])
    result = JobOrchestrator(spec).run(_grid(), contractions)
    backgrounds = [row[1].background_color for row in result.grid.rows]
    assert backgrounds == ["#ffffff", "#F5F5DC", "#ffff00"]


def test_contractions_may_arrive_as_future():
    future: Future = Future()
    future.set_result(ContractionSet(["apple"]))
    spec = JobSpec(file_id="f")
    result = JobOrchestrator(spec).run(_grid(), future)
    assert [row[0].background_color for row in result.grid.rows] == ["#ffff00", "#ffff00", "#ffffff"]


def test_validation_failure_leaves_input_untouched():
    grid = Grid.from_values(["Name", "Date"], [["b", "010124"], ["a", "13ABYY"]])
    spec = JobSpec(
        file_id="f",
        search_terms=["a"],
        date_check_columns=[2],
        sort_keys=[SortKey(SortDirection.ASC, 1)],
    )
    orchestrator = JobOrchestrator(spec)
    with pytest.raises(ValidationFailed):
        orchestrator.run(grid)
    assert orchestrator.state is JobState.FAILED
    assert orchestrator.error
    assert grid.values() == [["b", "010124"], ["a", "13ABYY"]]
    assert not any(cell.annotated for row in grid.rows for cell in row)


def test_bad_sort_column_fails_job():
    spec = JobSpec(file_id="f", sort_keys=[SortKey(SortDirection.DESC, 9)])
    orchestrator = JobOrchestrator(spec)
    with pytest.raises(InvalidSortSpec):
        orchestrator.run(_grid())
    assert orchestrator.state is JobState.FAILED


def test_empty_grid_passes_through():
    spec = JobSpec(file_id="f", search_terms=["x"], sort_keys=[SortKey(SortDirection.ASC, 1)])
    result = JobOrchestrator(spec).run(Grid(header=["Only"]))
    assert result.grid.rows == []
