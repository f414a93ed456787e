"""Hierarchical multi-key row sorting.

The first key orders every row. Each following key only reorders runs of
adjacent rows that share a value in the column of the key right before it;
grouping is chained from the previous level, not the composite of all
previous levels, so three or more keys can leave rows that agree on the first
column but differ on the second interleaved with others.
"""
from __future__ import annotations

import logging
from functools import cmp_to_key
from typing import Sequence, TypeVar

from sheetmark.core.errors import InvalidSortSpec
from sheetmark.domain import Cell, SortDirection, SortKey

logger = logging.getLogger(__name__)

Row = TypeVar("Row", bound=Sequence[Cell])


def _check_columns(sort_keys: Sequence[SortKey], column_count: int) -> None:
    for key in sort_keys:
        if not 1 <= key.column_index <= column_count:
            raise InvalidSortSpec(
                f"Sort column {key.column_index} out of range, sheet has {column_count} column(s)"
            )


def _compare(key: SortKey):
    column = key.offset

    def compare(left: Sequence[Cell], right: Sequence[Cell]) -> int:
        a, b = left[column].text, right[column].text
        if key.direction is SortDirection.DESC:
            a, b = b, a
        return (a > b) - (a < b)

    return cmp_to_key(compare)


def sort_range(rows: list[Row], start: int, stop: int, key: SortKey) -> None:
    """Stable-sort ``rows[start:stop]`` in place by ``key``."""

    rows[start:stop] = sorted(rows[start:stop], key=_compare(key))


def equal_runs(rows: Sequence[Row], column: int) -> list[tuple[int, int]]:
    """Maximal ``[start, stop)`` runs of adjacent rows sharing a value in ``column``."""

    runs: list[tuple[int, int]] = []
    start = 0
    for index in range(1, len(rows) + 1):
        if index == len(rows) or rows[index][column].text != rows[start][column].text:
            runs.append((start, index))
            start = index
    return runs


def sort_rows(rows: Sequence[Row], sort_keys: Sequence[SortKey], column_count: int | None = None) -> list[Row]:
    """Return ``rows`` ordered by ``sort_keys``, first key highest priority."""

    ordered = list(rows)
    if not sort_keys:
        logger.debug("No columns to sort")
        return ordered

    if column_count is None:
        column_count = len(ordered[0]) if ordered else max(key.column_index for key in sort_keys)
    _check_columns(sort_keys, column_count)
    if not ordered:
        return ordered

    first, *rest = sort_keys
    sort_range(ordered, 0, len(ordered), first)
    active_column = first.offset
    logger.debug("First sort done on column %d", first.column_index)

    for level, key in enumerate(rest, start=1):
        for start, stop in equal_runs(ordered, active_column):
            if stop - start > 1:
                sort_range(ordered, start, stop, key)
        logger.debug("Sub sort #%d done on column %d", level, key.column_index)
        active_column = key.offset

    return ordered
