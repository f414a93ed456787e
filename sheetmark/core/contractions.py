from __future__ import annotations

from typing import Iterable, Iterator


def normalize(value: str) -> str:
    return value.strip().casefold()


class ContractionSet:
    """Ordered contraction strings with trimmed, case-insensitive lookup."""

    def __init__(self, values: Iterable[str] | None = None) -> None:
        self._values: list[str] = []
        self._positions: dict[str, int] = {}
        for value in values or ():
            self.add(value)

    def add(self, value: str) -> None:
        text = str(value).strip()
        if not text:
            return
        self._positions.setdefault(normalize(text), len(self._values))
        self._values.append(text)

    def index_of(self, cell_text: str) -> int | None:
        """Position of the first entry equal to ``cell_text``, if any."""

        return self._positions.get(normalize(cell_text))

    def __contains__(self, cell_text: object) -> bool:
        return isinstance(cell_text, str) and self.index_of(cell_text) is not None

    def __iter__(self) -> Iterator[str]:
        return iter(self._values)

    def __len__(self) -> int:
        return len(self._values)

    def __repr__(self) -> str:
        return f"ContractionSet({self._values!r})"
