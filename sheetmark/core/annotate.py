"""Rewrite cell text with inline color markup around resolved spans."""
from __future__ import annotations

import logging
import re
from typing import Iterator, Sequence

from sheetmark.core.colors import ColorProfile
from sheetmark.domain import Cell, MatchSpan

logger = logging.getLogger(__name__)

Run = tuple[str, str | None]

MARKUP_TEMPLATE = '<font color="{color}"><b>{value}</b></font>'
# Characters the wrapper adds around a value, for a 7 character ``#RRGGBB`` color.
MARKUP_OVERHEAD = len(MARKUP_TEMPLATE.format(color="#000000", value=""))

_MARKUP_PATTERN = re.compile(r'<font color="(?P<color>#[0-9A-Fa-f]{6})"><b>(?P<value>.*?)</b></font>', re.DOTALL)


def wrap(value: str, color: str) -> str:
    return MARKUP_TEMPLATE.format(color=color, value=value)


def _annotate(text: str, spans: Sequence[MatchSpan], profile: ColorProfile) -> tuple[str, list[Run]]:
    runs: list[Run] = []
    source = text
    position = 0
    offset = 0
    for span in spans:
        value = source[span.start : span.end + 1]
        color = profile.get_color()
        if span.start > position:
            runs.append((source[position : span.start], None))
        runs.append((value, color))
        position = span.end + 1

        start = span.start + offset
        wrapped = wrap(value, color)
        text = text[:start] + wrapped + text[span.end + offset + 1 :]
        offset += len(wrapped) - len(value)
        logger.debug("New text: %s (offset=%d)", text, offset)
    if position < len(source) or not runs:
        runs.append((source[position:], None))
    return text, runs


def annotate_text(text: str, spans: Sequence[MatchSpan], profile: ColorProfile) -> str:
    """Wrap each span of ``text``; spans must be disjoint and ascending."""

    return _annotate(text, spans, profile)[0]


def annotate_cell(cell: Cell, spans: Sequence[MatchSpan], profile: ColorProfile) -> str:
    """Apply ``profile`` colors to ``cell`` and rewrite its text in place."""

    cell.background_color = profile.background_color
    cell.text_color = profile.default_text_color
    cell.text, cell.runs = _annotate(cell.text, spans, profile)
    cell.annotated = True
    return cell.text


def iter_runs(text: str) -> Iterator[Run]:
    """Split freshly wrapped text into ``(segment, color)`` runs; plain runs have no color.

    Source text that already looks like markup is ambiguous here; use
    :attr:`Cell.runs` for annotated cells.
    """

    position = 0
    for match in _MARKUP_PATTERN.finditer(text):
        if match.start() > position:
            yield text[position : match.start()], None
        yield match.group("value"), match.group("color")
        position = match.end()
    if position < len(text):
        yield text[position:], None


def strip_markup(text: str) -> str:
    return "".join(segment for segment, _ in iter_runs(text))
