"""
Cell module for Minesweeper game.

Represents individual cells on the game board with their state
(hidden/revealed/flagged) and content (mine/number). A cell knows nothing
about its neighbours; the board computes and records adjacency counts.
"""
from dataclasses import dataclass, field
from enum import Enum, auto
from typing import Optional, Tuple

from .errors import InvalidTransition


# ============================================================================
# Constants
# ============================================================================

class CellState(Enum):
    """Possible visual states of a cell."""

    HIDDEN = auto()
    REVEALED = auto()
    FLAGGED = auto()


HIDDEN_VALUE = -1
FLAGGED_VALUE = -2
MINE_VALUE = 9
MAX_ADJACENT = 8


@dataclass(frozen=True)
class CellView:
    """
    Snapshot of what a presentation layer should draw for one cell.

    Attributes:
        row: Row index.
        col: Column index.
        state: Visual state at the time of the snapshot.
        value: Display code: -1 hidden, -2 flagged, 0-8 number, 9 mine.
    """

    row: int
    col: int
    state: CellState
    value: int


# ============================================================================
# Cell Data Class
# ============================================================================

@dataclass
class Cell:
    """
    Represents a single cell in the Minesweeper grid.

    State changes only through ``set_mine``, ``reveal``, ``toggle_flag``
    and ``record_adjacent_mines``; ``state`` and ``adjacent_mines`` are
    read-only.

    Attributes:
        row: Row index (identity, never changes).
        col: Column index (identity, never changes).
    """

    row: int
    col: int
    _state: CellState = field(default=CellState.HIDDEN, init=False)
    _adjacent_mines: Optional[int] = field(default=None, init=False)
    _is_mine: bool = field(default=False, init=False, repr=False)
    _mine_assigned: bool = field(default=False, init=False, repr=False)

    @property
    def position(self) -> Tuple[int, int]:
        """Grid coordinates as (row, col)."""
        return self.row, self.col

    @property
    def state(self) -> CellState:
        """Current visual state (hidden, revealed, or flagged)."""
        return self._state

    @property
    def adjacent_mines(self) -> Optional[int]:
        """Neighbour mine count, None until the cell is revealed."""
        return self._adjacent_mines

    @property
    def is_mine(self) -> bool:
        """Check if cell holds a mine."""
        return self._is_mine

    def set_mine(self, is_mine: bool = True) -> None:
        """
        Assign mine membership during placement.

        Raises:
            InvalidTransition: If membership was already assigned or the
                cell has been revealed.
        """
        if self._mine_assigned:
            raise InvalidTransition(
                f"Mine already assigned to cell ({self.row}, {self.col})"
            )
        if self.state == CellState.REVEALED:
            raise InvalidTransition(
                f"Cannot place a mine on revealed cell ({self.row}, {self.col})"
            )
        self._is_mine = is_mine
        self._mine_assigned = True

    def reveal(self) -> bool:
        """
        Reveal this cell.

        Returns:
            True if the revealed cell is a mine.

        Raises:
            InvalidTransition: If the cell is not hidden.
        """
        if self.state != CellState.HIDDEN:
            raise InvalidTransition(
                f"Cannot reveal {self.state.name.lower()} cell "
                f"({self.row}, {self.col})"
            )
        self._state = CellState.REVEALED
        return self._is_mine

    def toggle_flag(self) -> int:
        """
        Toggle flag on this cell.

        Returns:
            +1 if the cell is now flagged, -1 if the flag was removed.

        Raises:
            InvalidTransition: If the cell is revealed.
        """
        if self.state == CellState.REVEALED:
            raise InvalidTransition(
                f"Cannot flag revealed cell ({self.row}, {self.col})"
            )
        if self.state == CellState.HIDDEN:
            self._state = CellState.FLAGGED
            return 1
        self._state = CellState.HIDDEN
        return -1

    def record_adjacent_mines(self, count: int) -> None:
        """Store the neighbour mine count computed at reveal time."""
        if self.state != CellState.REVEALED:
            raise InvalidTransition(
                f"Cell ({self.row}, {self.col}) must be revealed first"
            )
        if not 0 <= count <= MAX_ADJACENT:
            raise InvalidTransition(f"Invalid adjacent mine count: {count}")
        self._adjacent_mines = count

    @property
    def is_hidden(self) -> bool:
        """Check if cell is hidden."""
        return self.state == CellState.HIDDEN

    @property
    def is_revealed(self) -> bool:
        """Check if cell is revealed."""
        return self.state == CellState.REVEALED

    @property
    def is_flagged(self) -> bool:
        """Check if cell is flagged."""
        return self.state == CellState.FLAGGED

    def to_observation(self) -> int:
        """
        Convert cell to its display code.

        Returns:
            -1: Hidden cell
            -2: Flagged cell
            0-8: Revealed cell with adjacent mine count
            9: Revealed mine
        """
        if self.state == CellState.HIDDEN:
            return HIDDEN_VALUE
        if self.state == CellState.FLAGGED:
            return FLAGGED_VALUE
        if self._is_mine:
            return MINE_VALUE
        return self.adjacent_mines or 0

    def view(self) -> CellView:
        """Snapshot this cell for the presentation layer."""
        return CellView(self.row, self.col, self.state, self.to_observation())
