import sys
from pathlib import Path

sys.path.append(str(Path(__file__).resolve().parents[1]))

from sheetmark.core.matcher import PatternMatcher, find_all_overlapping


def _pairs(spans):
    return sorted((span.start, span.end, span.pattern_id) for span in spans)


def test_finds_every_occurrence():
    assert _pairs(find_all_overlapping("Banana", ["an"])) == [(1, 2, 0), (3, 4, 0)]


def test_reports_overlapping_hits():
    assert _pairs(find_all_overlapping("banana", ["ana"])) == [(1, 3, 0), (3, 5, 0)]


def test_reports_hits_of_each_pattern():
    spans = find_all_overlapping("banana", ["an", "nan"])
    assert _pairs(spans) == [(1, 2, 0), (2, 4, 1), (3, 4, 0)]


def test_no_patterns_or_empty_text():
    assert find_all_overlapping("Banana", []) == []
    assert find_all_overlapping("Banana", [""]) == []
    assert PatternMatcher(["an"]).find_all_overlapping("") == []


def test_search_is_case_sensitive():
    assert find_all_overlapping("AN an", ["an"])[0].start == 3
