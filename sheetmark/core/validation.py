from __future__ import annotations

from typing import Iterable

from sheetmark.core.errors import ValidationFailed
from sheetmark.domain import Grid

# The header occupies row 1; data rows start at row 2.
FIRST_DATA_ROW = 2


def validate_header(header: list[str]) -> None:
    for position, value in enumerate(header, start=1):
        if not str(value).strip():
            raise ValidationFailed(f"Incomplete title bar, column {position} is empty")


def _is_number(token: str) -> bool:
    return token.isascii() and token.isdigit()


def validate_date(value: str, column: int, row: int) -> None:
    """Check an ``MMDDYY`` value; the year is parsed but not range-checked."""

    if len(value) < 6:
        raise ValidationFailed(f"Invalid date value at column: {column}, row: {row}")

    month, day, year = value[0:2], value[2:4], value[4:6]
    if not _is_number(month) or not 1 <= int(month) <= 12:
        raise ValidationFailed(
            f"Invalid month value for date field. Value = {month}, column: {column}, row: {row}"
        )
    if not _is_number(day) or not 1 <= int(day) <= 31:
        raise ValidationFailed(
            f"Invalid day value for date field. Value = {day}, column: {column}, row: {row}"
        )
    if not _is_number(year):
        raise ValidationFailed(
            f"Invalid year value for date field. Value = {year}, column: {column}, row: {row}"
        )


def validate_sheet(grid: Grid, date_columns: Iterable[int]) -> None:
    validate_header(grid.header)
    for column in date_columns:
        if not 1 <= column <= grid.column_count:
            raise ValidationFailed(
                f"Date column {column} out of range, sheet has {grid.column_count} column(s)"
            )
        for offset, row in enumerate(grid.rows):
            validate_date(row[column - 1].text, column, offset + FIRST_DATA_ROW)
