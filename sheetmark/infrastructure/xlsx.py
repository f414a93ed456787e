"""Workbook adapters: grid source, header lookup, contraction list and write-back."""
from __future__ import annotations

import io
import logging
from copy import copy
from pathlib import Path
from typing import Any
from zipfile import BadZipFile

from openpyxl import Workbook, load_workbook
from openpyxl.cell.rich_text import CellRichText, TextBlock
from openpyxl.cell.text import InlineFont
from openpyxl.styles import PatternFill
from openpyxl.styles.colors import Color
from openpyxl.utils.exceptions import InvalidFileException
from openpyxl.worksheet.worksheet import Worksheet

from sheetmark.core.annotate import Run
from sheetmark.core.colors import to_argb
from sheetmark.core.contractions import ContractionSet
from sheetmark.core.errors import IOFailure
from sheetmark.domain import Cell, Grid

logger = logging.getLogger(__name__)

HEADER_ROW = 1
FIRST_DATA_ROW = 2
FIRST_COLUMN = 1

_READ_ERRORS = (InvalidFileException, BadZipFile, KeyError, OSError, ValueError)


def cell_text(value: Any) -> str:
    if value is None:
        return ""
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value)


def _open(source: Path | str | io.BytesIO) -> Workbook:
    try:
        return load_workbook(source)
    except _READ_ERRORS as exc:
        raise IOFailure(f"Could not read workbook: {exc}") from exc


def _first_sheet(workbook: Workbook) -> Worksheet:
    if not workbook.worksheets:
        raise IOFailure("No sheet found in excel file")
    return workbook.worksheets[0]


def _is_blank(sheet: Worksheet) -> bool:
    return sheet.max_row == 1 and sheet.max_column == 1 and sheet.cell(row=1, column=1).value is None


def check_workbook(path: Path | str) -> None:
    """Raise :class:`IOFailure` when ``path`` is not a readable workbook."""

    _first_sheet(_open(path))


def read_header(path: Path | str) -> list[str]:
    sheet = _first_sheet(_open(path))
    if _is_blank(sheet):
        return []
    return [cell_text(sheet.cell(row=HEADER_ROW, column=col).value) for col in range(1, sheet.max_column + 1)]


def load_grid(path: Path | str) -> Grid:
    """Read the first sheet: row 1 is the header, rows 2.. are data."""

    sheet = _first_sheet(_open(path))
    if _is_blank(sheet):
        return Grid(header=[])

    last_col, last_row = sheet.max_column, sheet.max_row
    header = [cell_text(sheet.cell(row=HEADER_ROW, column=col).value) for col in range(1, last_col + 1)]
    rows = [
        [
            Cell(
                row_index=row - FIRST_DATA_ROW,
                col_index=col - FIRST_COLUMN,
                text=cell_text(sheet.cell(row=row, column=col).value),
            )
            for col in range(1, last_col + 1)
        ]
        for row in range(FIRST_DATA_ROW, last_row + 1)
    ]
    logger.debug("Loaded %d row(s) x %d column(s) from %s", len(rows), last_col, path)
    return Grid(header=header, rows=rows)


def load_contractions(payload: bytes | None) -> ContractionSet:
    """Read contraction strings column by column, skipping each column's header."""

    contractions = ContractionSet()
    if not payload:
        return contractions

    sheet = _first_sheet(_open(io.BytesIO(payload)))
    for col in range(1, sheet.max_column + 1):
        for row in range(FIRST_DATA_ROW, sheet.max_row + 1):
            contractions.add(cell_text(sheet.cell(row=row, column=col).value))
    logger.debug("Loaded %d contraction(s)", len(contractions))
    return contractions


def rich_value(runs: list[Run]) -> str | CellRichText:
    """Turn annotation runs into a rich-text value with bold colored runs."""

    if not any(color for _, color in runs):
        return "".join(segment for segment, _ in runs)
    blocks: list[str | TextBlock] = []
    for segment, color in runs:
        if color is None:
            blocks.append(segment)
        else:
            blocks.append(TextBlock(InlineFont(color=Color(rgb=to_argb(color)), b=True), segment))
    return CellRichText(blocks)


def write_grid(source_path: Path | str, grid: Grid, target_path: Path | str) -> Path:
    """Write ``grid`` back over the data rows of a copy of ``source_path``.

    Each cell keeps the number format, alignment and border it had at its
    original position, and takes its fill and font color from its profile.
    """

    workbook = _open(source_path)
    sheet = _first_sheet(workbook)

    originals = {
        (cell.row_index, cell.col_index): sheet.cell(row=cell.row_index + FIRST_DATA_ROW, column=cell.col_index + FIRST_COLUMN)
        for row in grid.rows
        for cell in row
    }
    styles = {
        key: (copy(source.font), source.number_format, copy(source.alignment), copy(source.border))
        for key, source in originals.items()
    }

    for row_offset, row in enumerate(grid.rows):
        for col_offset, cell in enumerate(row):
            target = sheet.cell(row=row_offset + FIRST_DATA_ROW, column=col_offset + FIRST_COLUMN)
            font, number_format, alignment, border = styles[(cell.row_index, cell.col_index)]
            if cell.text_color:
                font.color = Color(rgb=to_argb(cell.text_color))
            if cell.background_color:
                argb = to_argb(cell.background_color)
                target.fill = PatternFill(fill_type="solid", start_color=argb, end_color=argb)
            target.font = font
            target.number_format = number_format
            target.alignment = alignment
            target.border = border
            target.value = rich_value(cell.runs) if cell.annotated else cell.text

    target_path = Path(target_path)
    target_path.parent.mkdir(parents=True, exist_ok=True)
    try:
        workbook.save(target_path)
    except OSError as exc:
        logger.error("Error writing result workbook %s: %s", target_path, exc)
        raise IOFailure(f"Could not write workbook: {exc}") from exc
    return target_path
