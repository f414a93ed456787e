"""Cell color profiles.

Each profile pairs a background color with a default text color that reads
well on it, plus a pool of highlight colors handed out in order by
:meth:`ColorProfile.get_color`. Profiles are selected per cell by
:meth:`Palette.select`: plain cells use the neutral profile, cells whose whole
value is a known contraction use the profile after the contraction's position.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import Sequence

from sheetmark.core.contractions import ContractionSet

logger = logging.getLogger(__name__)

# Red, Purple, Cyan, Green, Gray
DARK_COLOR_POOL: tuple[str, ...] = ("#ff0000", "#D49BF8", "#00FFFF", "#90EE90", "#B0B0B0")
LIGHT_COLOR_POOL: tuple[str, ...] = ("#AD0000", "#780DBA", "#006161", "#0F610F", "#474747")
DARK_BG_TEXT_COLOR = "#ffffff"
LIGHT_BG_TEXT_COLOR = "#000000"


class ProfileKind(str, Enum):
    NEUTRAL = "neutral"
    YELLOW = "yellow"
    BEIGE = "beige"
    LAVENDER = "lavender"
    NAVY_BLUE = "navy_blue"
    BLACK = "black"


# kind -> (background, default text color, highlight pool)
PROFILE_COLORS: dict[ProfileKind, tuple[str, str, tuple[str, ...]]] = {
    ProfileKind.NEUTRAL: ("#ffffff", LIGHT_BG_TEXT_COLOR, LIGHT_COLOR_POOL),
    ProfileKind.YELLOW: ("#ffff00", LIGHT_BG_TEXT_COLOR, LIGHT_COLOR_POOL),
    ProfileKind.BEIGE: ("#F5F5DC", LIGHT_BG_TEXT_COLOR, LIGHT_COLOR_POOL),
    ProfileKind.LAVENDER: ("#E6E6FA", LIGHT_BG_TEXT_COLOR, LIGHT_COLOR_POOL),
    ProfileKind.NAVY_BLUE: ("#000080", DARK_BG_TEXT_COLOR, DARK_COLOR_POOL),
    ProfileKind.BLACK: ("#000000", DARK_BG_TEXT_COLOR, DARK_COLOR_POOL),
}

PALETTE_ORDER: tuple[ProfileKind, ...] = (
    ProfileKind.NEUTRAL,
    ProfileKind.YELLOW,
    ProfileKind.BEIGE,
    ProfileKind.LAVENDER,
    ProfileKind.NAVY_BLUE,
    ProfileKind.BLACK,
)


def to_argb(color: str) -> str:
    """Convert ``#RRGGBB`` into the opaque ``FFRRGGBB`` form used by xlsx styles."""

    return color.replace("#", "FF")


@dataclass(slots=True)
class ColorProfile:
    kind: ProfileKind
    background_color: str
    default_text_color: str
    highlight_pool: tuple[str, ...]
    cursor: int = 0

    @classmethod
    def of(cls, kind: ProfileKind) -> "ColorProfile":
        background, text_color, pool = PROFILE_COLORS[kind]
        return cls(kind=kind, background_color=background, default_text_color=text_color, highlight_pool=pool)

    def get_color(self) -> str:
        """Return the next highlight color, wrapping around the pool."""

        if not 0 <= self.cursor < len(self.highlight_pool):
            self.cursor = 0
        color = self.highlight_pool[self.cursor]
        self.cursor += 1
        return color

    def reset(self) -> None:
        self.cursor = 0


@dataclass(slots=True)
class Palette:
    """Ordered set of profiles owned by one job."""

    profiles: list[ColorProfile] = field(default_factory=list)

    @classmethod
    def default(cls, kinds: Sequence[ProfileKind] = PALETTE_ORDER) -> "Palette":
        return cls(profiles=[ColorProfile.of(kind) for kind in kinds])

    def __len__(self) -> int:
        return len(self.profiles)

    def profile_index(self, cell_text: str, contractions: ContractionSet | None) -> int:
        if not contractions:
            return 0
        idx = contractions.index_of(cell_text)
        if idx is None:
            return 0
        # Operator precedence makes this ``idx + 1`` for any palette larger than one.
        return idx + 1 % len(self.profiles)

    def select(self, cell_text: str, contractions: ContractionSet | None = None) -> ColorProfile:
        """Pick the profile for a cell and reset its highlight cursor."""

        index = self.profile_index(cell_text, contractions)
        if index >= len(self.profiles):
            logger.warning(
                "Contraction profile index %d out of range for %d profiles, using the last one",
                index,
                len(self.profiles),
            )
            index = len(self.profiles) - 1
        elif index:
            logger.debug("Contraction found for cell value=%r, choosing color at idx=%d", cell_text, index)
        profile = self.profiles[index]
        profile.reset()
        return profile
