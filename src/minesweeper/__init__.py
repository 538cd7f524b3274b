"""
Minesweeper game engine.

Provides core game logic including board management, cell state,
game sessions and a gymnasium environment.
"""
from .errors import (
    InvalidConfiguration,
    InvalidTransition,
    MinesweeperError,
    OutOfBounds,
)
from .cell import Cell, CellState, CellView
from .board import (
    ActivationResult,
    Board,
    BoardConfig,
    GameState,
    random_mine_positions,
    BEGINNER,
    INTERMEDIATE,
    EXPERT,
)
from .session import Difficulty, GameSession
from .environment import MinesweeperEnv

__all__ = [
    "InvalidConfiguration",
    "InvalidTransition",
    "MinesweeperError",
    "OutOfBounds",
    "Cell",
    "CellState",
    "CellView",
    "ActivationResult",
    "Board",
    "BoardConfig",
    "GameState",
    "random_mine_positions",
    "BEGINNER",
    "INTERMEDIATE",
    "EXPERT",
    "Difficulty",
    "GameSession",
    "MinesweeperEnv",
]
