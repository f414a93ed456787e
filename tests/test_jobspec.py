import sys
from pathlib import Path

import pytest

sys.path.append(str(Path(__file__).resolve().parents[1]))

from sheetmark.core.errors import InvalidSearchSpec, InvalidSortSpec
from sheetmark.core.jobspec import decode_job_spec, parse_sort_key
from sheetmark.domain import SortDirection, SortKey


def test_decode_full_form():
    fields = [
        ("fileId", "abc"),
        ("searchTerm", "an"),
        ("sortCol", "asc,1"),
        ("checkDate", " 3 "),
        ("sortCol", "DESC, 2"),
        ("contractionFile", b"PK\x03\x04"),
        ("unknown", "ignored"),
    ]
    spec = decode_job_spec(fields)
    assert spec.file_id == "abc"
    assert spec.search_terms == ["an"]
    assert spec.date_check_columns == [3]
    assert spec.sort_keys == [SortKey(SortDirection.ASC, 1), SortKey(SortDirection.DESC, 2)]
    assert spec.pop_contraction_payload() == b"PK\x03\x04"
    assert spec.contraction_payload is None


def test_only_first_five_search_terms_are_kept():
    fields = [("fileId", "abc")] + [("searchTerm", f"t{i}") for i in range(7)]
    spec = decode_job_spec(fields)
    assert spec.search_terms == ["t0", "t1", "t2", "t3", "t4"]


def test_empty_contraction_file_is_ignored():
    spec = decode_job_spec([("fileId", "abc"), ("contractionFile", b"")])
    assert spec.contraction_payload is None


def test_missing_file_id():
    with pytest.raises(InvalidSearchSpec, match="fileId"):
        decode_job_spec([("searchTerm", "an")])


@pytest.mark.parametrize("value", ["asc", "up,1", "asc,x", "desc,", "asc,0"])
def test_bad_sort_fields(value):
    with pytest.raises(InvalidSortSpec):
        parse_sort_key(value)


def test_bad_date_column():
    with pytest.raises(InvalidSearchSpec):
        decode_job_spec([("fileId", "abc"), ("checkDate", "abc")])
