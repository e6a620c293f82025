"""
Pytest configuration and shared fixtures.
"""
import pytest
import sys
from pathlib import Path

# Add src to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from mines import Minefield, MinefieldConfig, Tile, Danger


# ============================================================================
# Minefield Fixtures
# ============================================================================

@pytest.fixture
def default_minefield() -> Minefield:
    """Create a default 16x30 minefield with a fixed seed."""
    return Minefield(seed=1234)


@pytest.fixture
def empty_minefield() -> Minefield:
    """Create a minefield with no mines for cascade testing."""
    return Minefield(5, 5, 0)


@pytest.fixture
def corner_mine_minefield() -> Minefield:
    """2x2 board whose only mine sits at index 0."""
    minefield = Minefield(2, 2, 25)
    minefield.reset([0])
    return minefield


@pytest.fixture
def chord_minefield() -> Minefield:
    """
    3x3 board with mines at (0, 0) and (0, 2).

    Index layout (col * 3 + row):
        0 3 6
        1 4 7
        2 5 8
    The centre tile (index 4) reads Danger(2).
    """
    minefield = Minefield(3, 3, 22)
    minefield.reset([0, 6])
    return minefield


# ============================================================================
# Tile Fixtures
# ============================================================================

@pytest.fixture
def hidden_tile() -> Tile:
    """Create a hidden tile."""
    return Tile()


@pytest.fixture
def numbered_tile() -> Tile:
    """Create a visible tile with adjacent mines."""
    return Tile(hidden=False, content=Danger(3))


# ============================================================================
# Configuration Fixtures
# ============================================================================

@pytest.fixture
def valid_config() -> MinefieldConfig:
    """Create a valid board configuration."""
    return MinefieldConfig(9, 9, 12.5)
