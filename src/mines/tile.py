"""
Tile module for Minesweeper game.

Represents individual tiles on the minefield with their visibility,
content (mine/danger count) and player flag.
"""
from dataclasses import dataclass, field
from enum import Enum, auto
from typing import Optional, Union


# ============================================================================
# Content and Flag Variants
# ============================================================================

@dataclass(frozen=True)
class Mine:
    """Content of a tile holding a mine."""

    def to_observation(self) -> int:
        return 9


@dataclass(frozen=True)
class Danger:
    """
    Content of a safe tile.

    Attributes:
        count: Number of mines among the neighbouring tiles (0-8).
    """

    count: int = 0

    def __post_init__(self) -> None:
        if not 0 <= self.count <= 8:
            raise ValueError(f"Danger count out of range: {self.count}")

    def to_observation(self) -> int:
        return self.count


TileContent = Union[Mine, Danger]


class Flag(Enum):
    """Markers a player can put on a hidden tile."""

    MINE = auto()
    QUESTION = auto()


# ============================================================================
# Tile Data Class
# ============================================================================

@dataclass
class Tile:
    """
    Represents a single tile in the minefield.

    Attributes:
        hidden: Whether the tile is still covered.
        content: Mine, or Danger with the adjacent mine count.
        flag: Player marker, only meaningful while hidden.
    """

    hidden: bool = True
    content: TileContent = field(default_factory=Danger)
    flag: Optional[Flag] = None

    def reset(self) -> None:
        """Cover the tile and forget its content and flag."""
        self.hidden = True
        self.content = Danger(0)
        self.flag = None

    @property
    def is_mine(self) -> bool:
        """Check if tile holds a mine."""
        return isinstance(self.content, Mine)

    @property
    def is_empty(self) -> bool:
        """Check if tile is safe with no adjacent mines."""
        return self.content == Danger(0)

    def to_observation(self) -> int:
        """
        Convert tile to observation value.

        Returns:
            -1: Hidden tile
            -2: Hidden tile flagged as mine
            -3: Hidden tile flagged with a question mark
            0-8: Visible tile with adjacent mine count
            9: Visible mine
        """
        if self.hidden:
            if self.flag is Flag.MINE:
                return -2
            if self.flag is Flag.QUESTION:
                return -3
            return -1
        return self.content.to_observation()
