"""Reduce overlapping search hits to a disjoint, ascending set.

The earliest-starting hit always keeps its full extent. A later hit that
starts inside it is dropped when it also ends inside it, and otherwise
clipped to begin right after it (or collapsed to its last character when the
clipped start would not fall strictly inside the hit).
"""
from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Iterable

from sheetmark.domain import MatchSpan

logger = logging.getLogger(__name__)


@dataclass(slots=True)
class _Candidate:
    start: int
    end: int
    pattern_id: int
    discarded: bool = False


def resolve_overlaps(spans: Iterable[MatchSpan]) -> list[MatchSpan]:
    ordered = sorted(spans, key=lambda span: span.start)
    candidates = [_Candidate(span.start, span.end, span.pattern_id) for span in ordered]

    for i, first in enumerate(ordered):
        for j in range(i + 1, len(ordered)):
            second = ordered[j]
            candidate = candidates[j]
            if not first.start <= second.start <= first.end:
                continue
            if first.start <= second.end <= first.end:
                logger.debug("Span %d (%d, %d) lies inside span %d, discarding", j, second.start, second.end, i)
                candidate.discarded = True
                continue
            new_start = first.end + 1
            if candidate.start < new_start < candidate.end:
                candidate.start = new_start
            else:
                candidate.start = candidate.end
            logger.debug("Span %d clipped by span %d to (%d, %d)", j, i, candidate.start, candidate.end)

    resolved = [
        MatchSpan(start=candidate.start, end=candidate.end, pattern_id=candidate.pattern_id)
        for candidate in candidates
        if not candidate.discarded
    ]
    resolved.sort(key=lambda span: span.start)
    logger.debug("Resolved %d of %d spans", len(resolved), len(candidates))
    return resolved
