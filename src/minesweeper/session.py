"""
Game session management.

A session owns the board of the game in progress. Restarting throws the
board away and builds a new one, so no half-reset state can leak between
games.
"""
import logging
import random
from enum import Enum
from typing import Optional

from .board import (
    ActivationResult,
    BEGINNER,
    Board,
    BoardConfig,
    EXPERT,
    INTERMEDIATE,
    MinePlacer,
)

logger = logging.getLogger(__name__)


class Difficulty(Enum):
    """Preset board sizes."""

    BEGINNER = BEGINNER
    INTERMEDIATE = INTERMEDIATE
    EXPERT = EXPERT

    @property
    def config(self) -> BoardConfig:
        return self.value

    @classmethod
    def from_name(cls, name: str) -> "Difficulty":
        """Look up a difficulty by case-insensitive name."""
        try:
            return cls[name.upper()]
        except KeyError:
            choices = ", ".join(member.name.lower() for member in cls)
            raise ValueError(
                f"Unknown difficulty {name!r} (choose from {choices})"
            ) from None


class GameSession:
    """
    Runs consecutive games on a fixed or changing board configuration.

    Attributes:
        games_started: Number of boards created by this session.
    """

    def __init__(
        self,
        config: Optional[BoardConfig] = None,
        rng: Optional[random.Random] = None,
        mine_placer: Optional[MinePlacer] = None,
    ) -> None:
        self._config = config or Difficulty.INTERMEDIATE.config
        self._rng = rng if rng is not None else random.Random()
        self._mine_placer = mine_placer
        self.games_started = 0
        self._board = self._new_board()

    def _new_board(self) -> Board:
        self.games_started += 1
        logger.debug(
            "Starting game %d on %dx%d board with %d mines",
            self.games_started,
            self._config.rows,
            self._config.cols,
            self._config.mine_count,
        )
        return Board.from_config(
            self._config, rng=self._rng, mine_placer=self._mine_placer
        )

    @property
    def board(self) -> Board:
        """Board of the current game."""
        return self._board

    @property
    def config(self) -> BoardConfig:
        return self._config

    def activate(
        self, row: int, col: int, secondary: bool = False
    ) -> ActivationResult:
        """Forward an activation to the current board."""
        return self._board.activate(row, col, secondary)

    def restart(self, config: Optional[BoardConfig] = None) -> Board:
        """
        Discard the current board and start a new game.

        Args:
            config: New board configuration; keeps the current one if None.

        Returns:
            The new board.
        """
        if config is not None:
            self._config = config
        self._board = self._new_board()
        return self._board

    def outcome_message(self) -> Optional[str]:
        """Game over text, or None while the game is in progress."""
        if self._board.has_won:
            return "You Win!"
        if self._board.is_lost:
            return "You Lose!"
        return None
