"""
Minefield module for Minesweeper game.

Implements the grid of tiles with mine placement, danger computation,
reveal/cascade logic, flag cycling and win detection.

Tiles are addressed by a column-major linear index:
``index = col * rows + row``.
"""
import math
import random
from collections import deque
from dataclasses import dataclass, field
from enum import Enum, auto
from typing import Iterable, Iterator, List, Optional, Set, Tuple

import numpy as np

from .tile import Danger, Flag, Mine, Tile, TileContent


# ============================================================================
# Constants
# ============================================================================

class GameState(Enum):
    """Possible states of the game."""

    PLAYING = auto()
    WON = auto()
    LOST = auto()


@dataclass
class MinefieldConfig:
    """
    Configuration for a minefield.

    Attributes:
        rows: Number of rows.
        cols: Number of columns.
        mines_percent: Share of tiles seeded as mines, 0-100.
    """

    rows: int = 16
    cols: int = 30
    mines_percent: float = 20.0

    def __post_init__(self) -> None:
        """Validate configuration after initialization."""
        self._validate()

    def _validate(self) -> None:
        """Ensure configuration values are valid."""
        if self.rows < 1 or self.cols < 1:
            raise ValueError("Board dimensions must be positive")
        if not 0 <= self.mines_percent <= 100:
            raise ValueError("Mines percent must be between 0 and 100")

    @property
    def num_tiles(self) -> int:
        return self.rows * self.cols

    @property
    def num_mines(self) -> int:
        """Mines seeded on each generation."""
        return math.floor(self.num_tiles * self.mines_percent / 100)


# Preset difficulty levels (10, 40 and 99 mines)
BEGINNER = MinefieldConfig(9, 9, 12.5)
INTERMEDIATE = MinefieldConfig(16, 16, 15.625)
EXPERT = MinefieldConfig(16, 30, 20.625)


# ============================================================================
# Minefield Class
# ============================================================================

@dataclass
class Minefield:
    """
    Minesweeper minefield.

    Owns the grid of tiles and the mine locations. Mutators are
    ``reset``, ``uncover_tile`` and ``flag_tile``; everything else is a
    query. Hitting a mine is reported through ``state``, never raised.
    """

    rows: int = 16
    cols: int = 30
    mines_percent: float = 20.0
    seed: Optional[int] = None
    tiles: List[List[Tile]] = field(default_factory=list, init=False, repr=False)
    mine_locations: Set[int] = field(default_factory=set, init=False, repr=False)
    flagged_mine_count: int = field(default=0, init=False)
    _lost: bool = field(default=False, init=False, repr=False)
    _rng: random.Random = field(init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        """Validate dimensions, then lay out the first game."""
        self.config = MinefieldConfig(self.rows, self.cols, self.mines_percent)
        self._rng = random.Random(self.seed)
        self.tiles = [
            [Tile() for _ in range(self.cols)]
            for _ in range(self.rows)
        ]
        self.reset()

    @classmethod
    def from_config(
        cls, config: MinefieldConfig, seed: Optional[int] = None
    ) -> "Minefield":
        """Build a minefield from a validated configuration."""
        return cls(config.rows, config.cols, config.mines_percent, seed)

    # ========================================================================
    # Indexing (Low-level)
    # ========================================================================

    @property
    def num_tiles(self) -> int:
        return self.rows * self.cols

    def index_of(self, row: int, col: int) -> int:
        """Convert (row, col) to the linear tile index."""
        if not self._is_valid_position(row, col):
            raise IndexError(
                f"Position ({row}, {col}) outside {self.rows}x{self.cols} board"
            )
        return col * self.rows + row

    def position_of(self, index: int) -> Tuple[int, int]:
        """Convert a linear tile index to (row, col)."""
        self._check_index(index)
        col, row = divmod(index, self.rows)
        return row, col

    def _check_index(self, index: int) -> None:
        if not 0 <= index < self.num_tiles:
            raise IndexError(
                f"Tile index {index} outside board of {self.num_tiles} tiles"
            )

    def _is_valid_position(self, row: int, col: int) -> bool:
        """Check if position is within board bounds."""
        return 0 <= row < self.rows and 0 <= col < self.cols

    def _tile(self, index: int) -> Tile:
        row, col = self.position_of(index)
        return self.tiles[row][col]

    def _neighbors(self, index: int) -> Iterator[int]:
        """Yield linear indices of the in-bounds Moore neighbours."""
        row, col = self.position_of(index)
        for delta_row in (-1, 0, 1):
            for delta_col in (-1, 0, 1):
                if delta_row == 0 and delta_col == 0:
                    continue
                new_row = row + delta_row
                new_col = col + delta_col
                if self._is_valid_position(new_row, new_col):
                    yield new_col * self.rows + new_row

    # ========================================================================
    # Board Generation
    # ========================================================================

    def reseed(self, seed: Optional[int]) -> None:
        """Reseed mine placement; takes effect on the next reset."""
        self.seed = seed
        self._rng.seed(seed)

    def reset(self, mine_locations: Optional[Iterable[int]] = None) -> None:
        """
        Start a new game on the same grid.

        Args:
            mine_locations: Fixed linear indices to mine. When omitted,
                ``floor(rows * cols * mines_percent / 100)`` distinct
                indices are drawn at random.
        """
        for line in self.tiles:
            for tile in line:
                tile.reset()
        self._lost = False
        self.flagged_mine_count = self._count_mine_flags()

        self.mine_locations = self._choose_mines(mine_locations)
        for index in self.mine_locations:
            self._tile(index).content = Mine()
        self._calculate_danger()

    def _choose_mines(self, mine_locations: Optional[Iterable[int]]) -> Set[int]:
        if mine_locations is None:
            return set(self._rng.sample(range(self.num_tiles), self.config.num_mines))

        chosen = list(mine_locations)
        for index in chosen:
            self._check_index(index)
        if len(set(chosen)) != len(chosen):
            raise ValueError("Mine locations must be distinct")
        return set(chosen)

    def _calculate_danger(self) -> None:
        """Compute the adjacent mine count of every safe tile."""
        for index in range(self.num_tiles):
            tile = self._tile(index)
            if tile.is_mine:
                continue
            count = sum(
                1 for neighbor in self._neighbors(index)
                if neighbor in self.mine_locations
            )
            tile.content = Danger(count)

    def _count_mine_flags(self) -> int:
        return sum(
            1 for line in self.tiles for tile in line
            if tile.flag is Flag.MINE
        )

    # ========================================================================
    # Game Actions
    # ========================================================================

    def uncover_tile(self, index: int) -> GameState:
        """
        Uncover a tile.

        A hidden mine loses the game and reveals the whole board. A hidden
        empty tile floods outwards. A visible numbered tile whose
        neighbouring mine flags match its count reveals its unflagged
        hidden neighbours (chord).
        A won or lost board ignores moves until the next reset.

        Args:
            index: Linear tile index.

        Returns:
            Game state after the move.
        """
        tile = self._tile(index)
        state = self.state
        if state != GameState.PLAYING:
            return state

        if tile.hidden:
            self._reveal(index)
        elif isinstance(tile.content, Danger) and tile.content.count > 0:
            self._chord(index)

        return self.state

    def _reveal(self, index: int) -> None:
        """Uncover a hidden tile and handle consequences."""
        self._uncover_one(index)
        tile = self._tile(index)

        if tile.is_mine:
            self._lose()
        elif tile.is_empty:
            self._flood(index)

    def _uncover_one(self, index: int) -> None:
        tile = self._tile(index)
        tile.hidden = False
        if tile.flag is Flag.MINE:
            self.flagged_mine_count -= 1
        tile.flag = None

    def _flood(self, start: int) -> None:
        """Uncover the connected empty region around ``start`` and its border."""
        pending = deque([start])
        while pending:
            index = pending.popleft()
            for neighbor in self._neighbors(index):
                if not self._tile(neighbor).hidden:
                    continue
                self._uncover_one(neighbor)
                if self._tile(neighbor).is_empty:
                    pending.append(neighbor)

    def _chord(self, index: int) -> None:
        """Reveal unflagged hidden neighbours once the mine flags add up."""
        tile = self._tile(index)
        neighbors = list(self._neighbors(index))
        flags = sum(
            1 for neighbor in neighbors
            if self._tile(neighbor).flag is Flag.MINE
        )
        if flags != tile.content.count:
            return

        for neighbor in neighbors:
            candidate = self._tile(neighbor)
            if candidate.hidden and candidate.flag is None:
                self._reveal(neighbor)

    def _lose(self) -> None:
        self._lost = True
        for line in self.tiles:
            for tile in line:
                tile.hidden = False

    def flag_tile(self, index: int) -> bool:
        """
        Cycle the flag on a hidden tile: none -> mine -> question -> none.

        Mine flags are capped at the number of mines; past the cap an
        unflagged tile goes straight to question.

        Args:
            index: Linear tile index.

        Returns:
            True if the flag changed, False if the tile is visible or
            the game is over.
        """
        tile = self._tile(index)
        if self._lost:
            return False
        # A board of nothing but mines keeps its flags cycling
        if self.check_win() and len(self.mine_locations) < self.num_tiles:
            return False
        if not tile.hidden:
            return False

        if tile.flag is None:
            if self.flagged_mine_count < len(self.mine_locations):
                tile.flag = Flag.MINE
                self.flagged_mine_count += 1
            else:
                tile.flag = Flag.QUESTION
        elif tile.flag is Flag.MINE:
            tile.flag = Flag.QUESTION
            self.flagged_mine_count -= 1
        else:
            tile.flag = None
        return True

    # ========================================================================
    # Queries
    # ========================================================================

    def tile_is_hidden(self, index: int) -> bool:
        return self._tile(index).hidden

    def get_tile_content(self, index: int) -> TileContent:
        return self._tile(index).content

    def get_tile_flag(self, index: int) -> Optional[Flag]:
        return self._tile(index).flag

    def check_win(self) -> bool:
        """Every mine carries a mine flag and every safe tile is visible."""
        for index in range(self.num_tiles):
            tile = self._tile(index)
            if tile.is_mine:
                if tile.flag is not Flag.MINE:
                    return False
            elif tile.hidden:
                return False
        return True

    @property
    def state(self) -> GameState:
        """Get current game state."""
        if self._lost:
            return GameState.LOST
        if self.check_win():
            return GameState.WON
        return GameState.PLAYING

    @property
    def is_playing(self) -> bool:
        return self.state == GameState.PLAYING

    @property
    def is_won(self) -> bool:
        return self.state == GameState.WON

    @property
    def is_lost(self) -> bool:
        return self._lost

    @property
    def mines_remaining(self) -> int:
        """Mines not yet accounted for by a mine flag."""
        return len(self.mine_locations) - self.flagged_mine_count

    def hidden_tiles(self) -> List[int]:
        """Linear indices of tiles still covered."""
        return [
            index for index in range(self.num_tiles)
            if self._tile(index).hidden
        ]

    def get_observation(self) -> np.ndarray:
        """
        Get board state as a numpy array indexed [row, col].

        Returns:
            2D int8 array where:
                -1 = hidden
                -2 = hidden, flagged as mine
                -3 = hidden, flagged with a question mark
                0-8 = visible with adjacent count
                9 = visible mine
        """
        obs = np.zeros((self.rows, self.cols), dtype=np.int8)
        for row in range(self.rows):
            for col in range(self.cols):
                obs[row, col] = self.tiles[row][col].to_observation()
        return obs
