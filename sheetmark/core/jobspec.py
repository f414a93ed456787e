"""Decode the multipart job form into a :class:`~sheetmark.domain.JobSpec`.

Field contract:

* ``fileId`` – required id of a previously uploaded workbook.
* ``contractionFile`` – optional workbook listing contractions.
* ``searchTerm`` – repeated; only the first five are kept.
* ``checkDate`` – repeated 1-based column indices holding ``MMDDYY`` dates.
* ``sortCol`` – repeated ``"<asc|desc>,<column index>"`` entries, in priority order.
"""
from __future__ import annotations

from typing import Iterable

from sheetmark.core.errors import InvalidSearchSpec, InvalidSortSpec
from sheetmark.domain import JobSpec, SortDirection, SortKey

FILE_ID_FIELD = "fileId"
CONTRACTION_FILE_FIELD = "contractionFile"
SEARCH_TERM_FIELD = "searchTerm"
CHECK_DATE_FIELD = "checkDate"
SORT_COL_FIELD = "sortCol"
SEARCH_TERM_LIMIT = 5


def parse_sort_key(text: str) -> SortKey:
    text = text.strip()
    parts = text.split(",")
    if len(parts) < 2:
        raise InvalidSortSpec(
            "sortCol data has to be of form order,index Where order can take as value "
            f"either asc or desc. Got: {text}"
        )
    order, index = parts[0].strip().lower(), parts[1].strip()
    if not (index.isascii() and index.isdigit()):
        raise InvalidSortSpec(f"Invalid value passed as column index. Got {index}, expected a valid number")
    try:
        direction = SortDirection(order)
    except ValueError as exc:
        raise InvalidSortSpec(f"Invalid sort order value: Got {order}, Expected: asc / desc") from exc
    column_index = int(index)
    if column_index < 1:
        raise InvalidSortSpec(f"Sort column index must be 1 or greater. Got {column_index}")
    return SortKey(direction=direction, column_index=column_index)


def parse_column(text: str) -> int:
    value = text.strip()
    if not (value.isascii() and value.isdigit()) or int(value) < 1:
        raise InvalidSearchSpec(f"Invalid column index: {value}")
    return int(value)


def decode_job_spec(fields: Iterable[tuple[str, str | bytes]]) -> JobSpec:
    """Build a job spec from ``(name, value)`` form fields in submission order."""

    file_id: str | None = None
    contraction_payload: bytes | None = None
    search_terms: list[str] = []
    date_columns: list[int] = []
    sort_keys: list[SortKey] = []

    for name, value in fields:
        if name == CONTRACTION_FILE_FIELD:
            payload = value.encode("utf-8") if isinstance(value, str) else value
            contraction_payload = payload or None
            continue

        text = value.decode("utf-8") if isinstance(value, bytes) else value
        if name == FILE_ID_FIELD:
            file_id = text.strip()
        elif name == SEARCH_TERM_FIELD:
            if len(search_terms) < SEARCH_TERM_LIMIT:
                search_terms.append(text)
        elif name == CHECK_DATE_FIELD:
            date_columns.append(parse_column(text))
        elif name == SORT_COL_FIELD:
            sort_keys.append(parse_sort_key(text))

    if not file_id:
        raise InvalidSearchSpec("fileId not present in formdata")

    return JobSpec(
        file_id=file_id,
        search_terms=search_terms,
        date_check_columns=date_columns,
        sort_keys=sort_keys,
        contraction_payload=contraction_payload,
    )
