"""
Text rendering for a minefield.

Draws the board through the public tile queries only.
"""
from .minefield import Minefield
from .tile import Danger, Flag


HIDDEN = "."
MINE_FLAG = "F"
QUESTION_FLAG = "?"
MINE = "*"
EMPTY = " "


def tile_symbol(minefield: Minefield, index: int) -> str:
    """Single-character symbol for one tile."""
    if minefield.tile_is_hidden(index):
        flag = minefield.get_tile_flag(index)
        if flag is Flag.MINE:
            return MINE_FLAG
        if flag is Flag.QUESTION:
            return QUESTION_FLAG
        return HIDDEN

    content = minefield.get_tile_content(index)
    if not isinstance(content, Danger):
        return MINE
    if content.count == 0:
        return EMPTY
    return str(content.count)


def render_text(
    minefield: Minefield, tile_width: int = 2, with_axes: bool = False
) -> str:
    """
    Render the board as text, one line per row.

    Args:
        minefield: Board to draw.
        tile_width: Characters used per tile.
        with_axes: Prefix rows and columns with their numbers.

    Returns:
        Multi-line string.
    """
    tile_width = max(tile_width, 1)
    lines = []

    if with_axes:
        label_width = len(str(minefield.rows - 1))
        header = "".join(
            str(col % 10).ljust(tile_width) for col in range(minefield.cols)
        )
        lines.append(" " * (label_width + 1) + header.rstrip())

    for row in range(minefield.rows):
        row_str = "".join(
            tile_symbol(minefield, minefield.index_of(row, col)).ljust(tile_width)
            for col in range(minefield.cols)
        )
        if with_axes:
            row_str = f"{row:>{label_width}} " + row_str
        lines.append(row_str.rstrip())

    return "\n".join(lines)
