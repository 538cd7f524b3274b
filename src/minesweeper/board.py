"""
Board module for Minesweeper game.

Implements the game board with deferred mine placement, flood-fill
revealing, flag accounting and game state management. All interaction
goes through ``Board.activate``, which reports the cells it changed so a
presentation layer can redraw incrementally.
"""
import logging
import random
from dataclasses import dataclass
from enum import Enum, auto
from typing import Callable, Iterable, Iterator, List, Optional, Tuple

import numpy as np

from .cell import MINE_VALUE, Cell, CellState, CellView
from .errors import InvalidConfiguration, InvalidTransition, OutOfBounds

logger = logging.getLogger(__name__)

Position = Tuple[int, int]


# ============================================================================
# Constants
# ============================================================================

class GameState(Enum):
    """Possible states of the game."""

    PLAYING = auto()
    WON = auto()
    LOST = auto()


@dataclass(frozen=True)
class BoardConfig:
    """
    Configuration for a Minesweeper board.

    Attributes:
        rows: Number of rows.
        cols: Number of columns.
        mine_count: Total mines to place.
    """

    rows: int = 9
    cols: int = 9
    mine_count: int = 10

    def __post_init__(self) -> None:
        """Validate configuration after initialization."""
        self._validate()

    def _validate(self) -> None:
        """Ensure configuration values are valid."""
        if self.rows < 1 or self.cols < 1:
            raise InvalidConfiguration("Board dimensions must be positive")
        if self.mine_count < 0:
            raise InvalidConfiguration("Number of mines cannot be negative")
        max_mines = self.rows * self.cols - 1
        if self.mine_count > max_mines:
            raise InvalidConfiguration(f"Too many mines (max {max_mines})")

    @property
    def total_cells(self) -> int:
        return self.rows * self.cols

    @property
    def safe_cells(self) -> int:
        return self.total_cells - self.mine_count


# Preset difficulty levels
BEGINNER = BoardConfig(9, 9, 10)
INTERMEDIATE = BoardConfig(16, 16, 40)
EXPERT = BoardConfig(16, 30, 99)


@dataclass(frozen=True)
class ActivationResult:
    """
    Outcome of a single activation.

    Attributes:
        status: Game state after the activation.
        changed_cells: Views of every cell whose visible state changed.
    """

    status: GameState
    changed_cells: Tuple[CellView, ...] = ()

    @property
    def changed(self) -> bool:
        """Check if the activation mutated the board."""
        return bool(self.changed_cells)

    @property
    def ended(self) -> bool:
        """Check if the game is over."""
        return self.status != GameState.PLAYING


MinePlacer = Callable[[BoardConfig, Position, random.Random], Iterable[Position]]


def random_mine_positions(
    config: BoardConfig, exclude: Position, rng: random.Random
) -> List[Position]:
    """
    Pick mine positions uniformly, keeping one cell mine-free.

    Args:
        config: Board configuration.
        exclude: (row, col) position to keep mine-free.
        rng: Random source.

    Returns:
        List of ``config.mine_count`` distinct positions.
    """
    positions = [
        (row, col)
        for row in range(config.rows)
        for col in range(config.cols)
        if (row, col) != exclude
    ]
    return rng.sample(positions, config.mine_count)


# ============================================================================
# Board Class
# ============================================================================

class Board:
    """
    Minesweeper game board.

    Manages the grid of cells, mine placement, revealing logic,
    flag accounting and win/lose conditions. A board plays exactly one
    game; start a new game by constructing a new board.

    Out-of-bounds activations and activations after the game ended are
    ignored and reported as results with no changed cells.

    Cells returned by ``cell``, ``get_cell`` and iteration are the live
    grid cells; treat them as read-only and mutate only via ``activate``.
    """

    def __init__(
        self,
        rows: int,
        cols: int,
        mine_count: int,
        *,
        rng: Optional[random.Random] = None,
        mine_placer: Optional[MinePlacer] = None,
    ) -> None:
        """
        Create a board with every cell hidden and no mines placed.

        Args:
            rows: Number of rows (at least 1).
            cols: Number of columns (at least 1).
            mine_count: Mines to place, less than rows * cols.
            rng: Random source for mine placement.
            mine_placer: Override for choosing mine positions.

        Raises:
            InvalidConfiguration: If the dimensions or mine count are invalid.
        """
        self._config = BoardConfig(rows, cols, mine_count)
        self._rng = rng if rng is not None else random.Random()
        self._mine_placer = mine_placer or random_mine_positions
        self._grid: List[List[Cell]] = [
            [Cell(row, col) for col in range(cols)] for row in range(rows)
        ]
        self._game_state = GameState.PLAYING
        self._mines_placed = False
        self._flag_count = 0
        self._revealed_count = 0

    @classmethod
    def from_config(
        cls,
        config: BoardConfig,
        *,
        rng: Optional[random.Random] = None,
        mine_placer: Optional[MinePlacer] = None,
    ) -> "Board":
        """Create a board from an existing configuration."""
        return cls(
            config.rows,
            config.cols,
            config.mine_count,
            rng=rng,
            mine_placer=mine_placer,
        )

    def __repr__(self) -> str:
        return (
            f"Board(rows={self.rows}, cols={self.cols}, "
            f"mine_count={self.mine_count}, state={self._game_state.name})"
        )

    # ========================================================================
    # Mine Placement (Low-level)
    # ========================================================================

    def _place_mines(self, exclude: Position) -> None:
        """
        Place mines, keeping the first activated cell mine-free.

        Args:
            exclude: (row, col) position to keep mine-free.
        """
        positions = list(self._mine_placer(self._config, exclude, self._rng))
        self._check_mine_positions(positions, exclude)
        for row, col in positions:
            self._grid[row][col].set_mine(True)
        self._mines_placed = True
        logger.debug(
            "Placed %d mines on %dx%d board, excluding %s",
            len(positions), self.rows, self.cols, exclude,
        )

    def _check_mine_positions(
        self, positions: List[Position], exclude: Position
    ) -> None:
        """Reject placer output that would break the board invariants."""
        if len(positions) != self.mine_count:
            raise InvalidTransition(
                f"Mine placer returned {len(positions)} positions, "
                f"expected {self.mine_count}"
            )
        if len(set(positions)) != len(positions):
            raise InvalidTransition("Mine placer returned duplicate positions")
        for row, col in positions:
            if not self.in_bounds(row, col):
                raise InvalidTransition(
                    f"Mine placer returned out-of-bounds position ({row}, {col})"
                )
            if (row, col) == exclude:
                raise InvalidTransition(
                    f"Mine placer used the excluded position {exclude}"
                )

    def _count_adjacent_mines(self, row: int, col: int) -> int:
        """Count mines adjacent to a specific cell."""
        count = 0
        for neighbor_row, neighbor_col in self.get_neighbors(row, col):
            if self._grid[neighbor_row][neighbor_col].is_mine:
                count += 1
        return count

    # ========================================================================
    # Neighbor Utilities (Low-level)
    # ========================================================================

    def get_neighbors(self, row: int, col: int) -> List[Position]:
        """
        Get valid neighboring cell positions.

        Args:
            row: Row index of center cell.
            col: Column index of center cell.

        Returns:
            List of (row, col) tuples for valid neighbors: 3 at a corner,
            5 on an edge and 8 in the interior.
        """
        neighbors = []
        for delta_row in (-1, 0, 1):
            for delta_col in (-1, 0, 1):
                if delta_row == 0 and delta_col == 0:
                    continue
                new_row = row + delta_row
                new_col = col + delta_col
                if self.in_bounds(new_row, new_col):
                    neighbors.append((new_row, new_col))
        return neighbors

    def in_bounds(self, row: int, col: int) -> bool:
        """Check if position is within board bounds."""
        return 0 <= row < self.rows and 0 <= col < self.cols

    # ========================================================================
    # Game Actions (Mid-level)
    # ========================================================================

    def activate(
        self, row: int, col: int, secondary: bool = False
    ) -> ActivationResult:
        """
        Apply a player activation to a cell.

        The first activation of a game places the mines, never on the
        activated cell. A primary activation reveals; a secondary one
        toggles a flag.

        Args:
            row: Row index.
            col: Column index.
            secondary: True for a flag toggle, False for a reveal.

        Returns:
            The game state and the cells whose visible state changed.
        """
        if self._game_state != GameState.PLAYING or not self.in_bounds(row, col):
            return ActivationResult(self._game_state)

        if not self._mines_placed:
            self._place_mines((row, col))

        if secondary:
            return self._toggle_flag(row, col)
        return self._reveal(row, col)

    def _toggle_flag(self, row: int, col: int) -> ActivationResult:
        """Toggle a flag, never letting flags outnumber mines."""
        cell = self._grid[row][col]
        if cell.is_revealed:
            return ActivationResult(self._game_state)

        delta = cell.toggle_flag()
        if delta > 0 and self._flag_count + delta > self.mine_count:
            cell.toggle_flag()
            return ActivationResult(self._game_state)

        self._flag_count += delta
        return ActivationResult(self._game_state, (cell.view(),))

    def _reveal(self, row: int, col: int) -> ActivationResult:
        """Reveal a cell and evaluate the game outcome."""
        cell = self._grid[row][col]
        if not cell.is_hidden:
            return ActivationResult(self._game_state)

        changed = self._flood_fill(row, col)

        if cell.is_mine:
            self._game_state = GameState.LOST
            changed.extend(self._reveal_all_mines())
            logger.info("Game lost at (%d, %d)", row, col)
        elif self._revealed_count == self._config.safe_cells:
            self._game_state = GameState.WON
            logger.info("Game won after revealing %d cells", self._revealed_count)

        return ActivationResult(
            self._game_state, tuple(changed_cell.view() for changed_cell in changed)
        )

    def _flood_fill(self, row: int, col: int) -> List[Cell]:
        """
        Reveal a cell and cascade through connected zero-count cells.

        Flagged cells block the cascade and revealed cells are skipped,
        so the revealed set does not depend on visiting order.

        Returns:
            Cells revealed by this call, in reveal order.
        """
        revealed: List[Cell] = []
        pending = [(row, col)]
        while pending:
            current_row, current_col = pending.pop()
            cell = self._grid[current_row][current_col]
            if not cell.is_hidden:
                continue

            is_mine = cell.reveal()
            revealed.append(cell)
            if is_mine:
                continue

            self._revealed_count += 1
            count = self._count_adjacent_mines(current_row, current_col)
            cell.record_adjacent_mines(count)
            if count == 0:
                pending.extend(self.get_neighbors(current_row, current_col))
        return revealed

    def _reveal_all_mines(self) -> List[Cell]:
        """Expose every remaining mine once the game is lost."""
        exposed = []
        for cell in self:
            if not cell.is_mine or cell.is_revealed:
                continue
            if cell.is_flagged:
                self._flag_count += cell.toggle_flag()
            cell.reveal()
            exposed.append(cell)
        return exposed

    # ========================================================================
    # State Accessors (High-level)
    # ========================================================================

    @property
    def config(self) -> BoardConfig:
        """Board configuration."""
        return self._config

    @property
    def rows(self) -> int:
        return self._config.rows

    @property
    def cols(self) -> int:
        return self._config.cols

    @property
    def mine_count(self) -> int:
        return self._config.mine_count

    @property
    def flag_count(self) -> int:
        """Number of flagged cells."""
        return self._flag_count

    @property
    def remaining_mines(self) -> int:
        """Mine count minus placed flags, as shown on the mine counter."""
        return self.mine_count - self._flag_count

    @property
    def revealed_count(self) -> int:
        """Number of revealed safe cells."""
        return self._revealed_count

    @property
    def mines_placed(self) -> bool:
        """Check if the first activation has placed the mines."""
        return self._mines_placed

    @property
    def game_state(self) -> GameState:
        """Get current game state."""
        return self._game_state

    @property
    def is_playing(self) -> bool:
        """Check if game is still in progress."""
        return self._game_state == GameState.PLAYING

    @property
    def is_ended(self) -> bool:
        """Check if game has finished."""
        return self._game_state != GameState.PLAYING

    @property
    def has_won(self) -> bool:
        """Check if game was won."""
        return self._game_state == GameState.WON

    @property
    def is_lost(self) -> bool:
        """Check if game was lost."""
        return self._game_state == GameState.LOST

    def get_cell(self, row: int, col: int) -> Optional[Cell]:
        """Get cell at position, or None if invalid."""
        if not self.in_bounds(row, col):
            return None
        return self._grid[row][col]

    def cell(self, row: int, col: int) -> Cell:
        """
        Get cell at position.

        Raises:
            OutOfBounds: If the position is outside the board.
        """
        if not self.in_bounds(row, col):
            raise OutOfBounds(row, col, self.rows, self.cols)
        return self._grid[row][col]

    def __iter__(self) -> Iterator[Cell]:
        """Iterate over cells in row-major order."""
        for grid_row in self._grid:
            yield from grid_row

    def views(self) -> List[CellView]:
        """Snapshot every cell in row-major order."""
        return [cell.view() for cell in self]

    def get_observation(self, reveal_all: bool = False) -> np.ndarray:
        """
        Get board state as a numpy array of display codes.

        Args:
            reveal_all: Show every cell as if revealed (mines as 9,
                numbers elsewhere) without changing the board.

        Returns:
            2D numpy array where:
                -1 = hidden
                -2 = flagged
                0-8 = revealed with adjacent count
                9 = revealed mine
        """
        obs = np.zeros((self.rows, self.cols), dtype=np.int8)
        for cell in self:
            if reveal_all and not cell.is_revealed:
                value = (
                    MINE_VALUE if cell.is_mine
                    else self._count_adjacent_mines(cell.row, cell.col)
                )
            else:
                value = cell.to_observation()
            obs[cell.row, cell.col] = value
        return obs

    def get_valid_actions(self) -> List[Position]:
        """
        Get list of cells that a reveal would change.

        Returns:
            List of hidden (row, col) positions, empty once the game ended.
        """
        if self.is_ended:
            return []
        return [cell.position for cell in self if cell.state == CellState.HIDDEN]
