"""Region cover colors."""

from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Mapping, Optional, Tuple

from .alea_prng import AleaPRNG

PRESET_COLORS: Tuple[str, ...] = (
    "#FF6B6B",  # red
    "#4ECDC4",  # teal
    "#45B7D1",  # blue
    "#96CEB4",  # green
    "#FFEAA7",  # yellow
    "#DDA0DD",  # plum
    "#98D8C8",  # mint
    "#F7DC6F",  # gold
    "#BB8FCE",  # lavender
    "#85C1E9",  # sky
    "#F8C471",  # orange
    "#82E0AA",  # light green
)

DIFFICULTY_COLORS: Mapping[str, str] = MappingProxyType({
    "easy": "#52c41a",
    "medium": "#1890ff",
    "hard": "#f5222d",
})


@dataclass(frozen=True)
class Palette:
    """
    Immutable color configuration handed to a RegionStore.

    Regions bound to a task take the color of the task's difficulty;
    unbound regions draw from the preset colors.
    """

    preset_colors: Tuple[str, ...] = PRESET_COLORS
    difficulty_colors: Mapping[str, str] = field(default_factory=lambda: DIFFICULTY_COLORS)
    fallback_color: str = "#666"

    def __post_init__(self):
        if not self.preset_colors:
            raise ValueError("Palette needs at least one preset color")
        # Freeze caller-supplied containers
        object.__setattr__(self, "preset_colors", tuple(self.preset_colors))
        object.__setattr__(
            self, "difficulty_colors", MappingProxyType(dict(self.difficulty_colors))
        )

    def random_color(self, prng: AleaPRNG) -> str:
        return prng.choice(self.preset_colors)

    def color_for_difficulty(self, difficulty: Optional[str]) -> str:
        return self.difficulty_colors.get(difficulty, self.fallback_color)


DEFAULT_PALETTE = Palette()
