"""
Minesweeper game module.

Provides the minefield engine, tile model, text rendering and a
Gymnasium environment.
"""
from .tile import Tile, TileContent, Mine, Danger, Flag
from .minefield import (
    Minefield,
    MinefieldConfig,
    GameState,
    BEGINNER,
    INTERMEDIATE,
    EXPERT,
)
from .render import render_text
from .environment import MinesweeperEnv, make_vec_env

__all__ = [
    "Tile",
    "TileContent",
    "Mine",
    "Danger",
    "Flag",
    "Minefield",
    "MinefieldConfig",
    "GameState",
    "BEGINNER",
    "INTERMEDIATE",
    "EXPERT",
    "render_text",
    "MinesweeperEnv",
    "make_vec_env",
]
