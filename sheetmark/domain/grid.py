"""Domain entities for the cell grid."""
from __future__ import annotations

import copy
from dataclasses import dataclass, field


@dataclass(slots=True)
class Cell:
    """A single data cell; ``text`` is rewritten once by the annotator.

    ``runs`` keeps the annotated cell as ``(segment, color)`` pairs over the
    original text so writers never have to parse ``text`` back.
    """

    row_index: int
    col_index: int
    text: str = ""
    background_color: str | None = None
    text_color: str | None = None
    annotated: bool = False
    runs: list[tuple[str, str | None]] = field(default_factory=list)


@dataclass(slots=True)
class MatchSpan:
    """Inclusive ``[start, end]`` range of a search term hit inside a cell."""

    start: int
    end: int
    pattern_id: int = 0

    def __post_init__(self) -> None:
        if self.start < 0 or self.end < self.start:
            raise ValueError(f"invalid span ({self.start}, {self.end})")

    def value(self, text: str) -> str:
        return text[self.start : self.end + 1]


@dataclass(slots=True)
class Grid:
    """Header row plus data rows of identical width."""

    header: list[str]
    rows: list[list[Cell]] = field(default_factory=list)

    def __post_init__(self) -> None:
        width = len(self.header)
        for position, row in enumerate(self.rows):
            if len(row) != width:
                raise ValueError(f"row {position} has {len(row)} cells, expected {width}")

    @classmethod
    def from_values(cls, header: list[str], values: list[list[str]]) -> "Grid":
        rows = [
            [Cell(row_index=r, col_index=c, text=str(text)) for c, text in enumerate(row)]
            for r, row in enumerate(values)
        ]
        return cls(header=list(header), rows=rows)

    @property
    def column_count(self) -> int:
        return len(self.header)

    @property
    def row_count(self) -> int:
        return len(self.rows)

    def values(self) -> list[list[str]]:
        return [[cell.text for cell in row] for row in self.rows]

    def copy(self) -> "Grid":
        return copy.deepcopy(self)
