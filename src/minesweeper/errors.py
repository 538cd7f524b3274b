"""
Exception hierarchy for the Minesweeper engine.

Gameplay inputs (clicking a revealed cell, flagging after the game ended)
are never errors; these exceptions signal bad configuration or a caller
that broke the cell state machine.
"""


class MinesweeperError(Exception):
    """Base class for all engine errors."""


class InvalidConfiguration(MinesweeperError, ValueError):
    """Board dimensions or mine count are out of range."""


class OutOfBounds(MinesweeperError, IndexError):
    """A strict cell lookup targeted a position outside the grid."""

    def __init__(self, row: int, col: int, rows: int, cols: int) -> None:
        super().__init__(
            f"Position ({row}, {col}) is outside a {rows}x{cols} board"
        )
        self.row = row
        self.col = col


class InvalidTransition(MinesweeperError, RuntimeError):
    """A cell was asked to make a state change it does not allow."""
