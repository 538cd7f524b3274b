"""
Pytest configuration and shared fixtures.
"""
import random
import sys
from pathlib import Path
from typing import Callable, Iterable, Tuple

import pytest

# Add src to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from minesweeper import Board, BoardConfig, Cell, GameSession


# ============================================================================
# Board Fixtures
# ============================================================================

@pytest.fixture
def rng() -> random.Random:
    """Seeded random source for reproducible placement."""
    return random.Random(1234)


@pytest.fixture
def default_board(rng: random.Random) -> Board:
    """Create a default 9x9 board with 10 mines."""
    return Board(9, 9, 10, rng=rng)


@pytest.fixture
def small_board(rng: random.Random) -> Board:
    """Create a small 3x3 board with 1 mine for testing."""
    return Board(3, 3, 1, rng=rng)


@pytest.fixture
def empty_board() -> Board:
    """Create a board with no mines for cascade testing."""
    return Board(5, 5, 0)


@pytest.fixture
def board_with_mines() -> Callable[..., Board]:
    """
    Factory for boards with mines at fixed positions.

    Usage: board_with_mines(rows, cols, [(r, c), ...])
    """
    def make(
        rows: int, cols: int, mines: Iterable[Tuple[int, int]]
    ) -> Board:
        positions = list(mines)

        def placer(config, exclude, rng):
            return positions

        return Board(rows, cols, len(positions), mine_placer=placer)

    return make


@pytest.fixture
def corner_mine_board(board_with_mines) -> Board:
    """3x3 board with its only mine at (2, 2)."""
    return board_with_mines(3, 3, [(2, 2)])


# ============================================================================
# Cell Fixtures
# ============================================================================

@pytest.fixture
def hidden_cell() -> Cell:
    """Create a hidden cell."""
    return Cell(0, 0)


@pytest.fixture
def mine_cell() -> Cell:
    """Create a cell containing a mine."""
    cell = Cell(1, 1)
    cell.set_mine(True)
    return cell


# ============================================================================
# Configuration Fixtures
# ============================================================================

@pytest.fixture
def valid_config() -> BoardConfig:
    """Create a valid board configuration."""
    return BoardConfig(9, 9, 10)


@pytest.fixture
def session(rng: random.Random) -> GameSession:
    """Session on a small beginner-sized board."""
    return GameSession(BoardConfig(9, 9, 10), rng=rng)
