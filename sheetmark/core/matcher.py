"""Multi-pattern substring search backed by an Aho-Corasick automaton."""
from __future__ import annotations

import logging
from typing import Sequence

import ahocorasick

from sheetmark.core.errors import MatcherFailure
from sheetmark.domain import MatchSpan

logger = logging.getLogger(__name__)


class PatternMatcher:
    """Finds every, possibly overlapping, occurrence of a fixed set of patterns."""

    def __init__(self, patterns: Sequence[str]) -> None:
        self.patterns = list(patterns)
        self._automaton: ahocorasick.Automaton | None = None

        terms = [(pattern_id, pattern) for pattern_id, pattern in enumerate(self.patterns) if pattern]
        if not terms:
            return
        automaton = ahocorasick.Automaton()
        try:
            for pattern_id, pattern in terms:
                automaton.add_word(pattern, (pattern_id, len(pattern)))
            automaton.make_automaton()
        except (TypeError, ValueError, AttributeError) as exc:
            raise MatcherFailure(f"Could not build search automaton: {exc}") from exc
        self._automaton = automaton

    def find_all_overlapping(self, text: str) -> list[MatchSpan]:
        if self._automaton is None or not text:
            return []
        try:
            hits = [
                MatchSpan(start=end - length + 1, end=end, pattern_id=pattern_id)
                for end, (pattern_id, length) in self._automaton.iter(text)
            ]
        except (TypeError, ValueError, AttributeError) as exc:
            raise MatcherFailure(f"Search failed for cell value {text!r}: {exc}") from exc
        logger.debug("Found %d match(es) in %r", len(hits), text)
        return hits


def find_all_overlapping(text: str, patterns: Sequence[str]) -> list[MatchSpan]:
    return PatternMatcher(patterns).find_all_overlapping(text)
