"""
Gymnasium environment wrapper for Minesweeper.

Provides a standard step/reset interface over ``Board.activate`` so that
scripted or random players can drive the engine.
"""
import random
from typing import Any, Dict, Optional, Tuple, SupportsFloat

import gymnasium as gym
import numpy as np
from gymnasium import spaces

from .board import Board, BoardConfig, GameState
from .cell import FLAGGED_VALUE, MINE_VALUE
from .shell import render_grid


# ============================================================================
# Minesweeper Environment
# ============================================================================

class MinesweeperEnv(gym.Env):
    """
    Gymnasium environment for Minesweeper.

    Observation:
        2D array where:
        - -1 = hidden cell
        - -2 = flagged cell
        - 0-8 = revealed cell with adjacent mine count
        - 9 = revealed mine

    Actions:
        Discrete action space of size 2 * rows * cols.
        Action i < rows * cols reveals cell (i // cols, i % cols); the
        second half toggles the flag on the same cells.

    Rewards:
        - +1 for each safe cell revealed
        - +10 for winning the game
        - -10 for hitting a mine
        - 0 for an accepted flag toggle
        - -0.1 for an action that changed nothing
    """

    metadata = {"render_modes": ["human", "ansi"], "render_fps": 4}

    def __init__(
        self,
        config: Optional[BoardConfig] = None,
        render_mode: Optional[str] = None,
    ) -> None:
        """
        Initialize the Minesweeper environment.

        Args:
            config: Board configuration (default: 9x9 with 10 mines).
            render_mode: How to render the environment.
        """
        super().__init__()

        self.config = config or BoardConfig()
        self.render_mode = render_mode
        self.board = self._new_board()

        self.observation_space = spaces.Box(
            low=FLAGGED_VALUE,
            high=MINE_VALUE,
            shape=(self.config.rows, self.config.cols),
            dtype=np.int8,
        )

        # One reveal and one flag action per cell
        self._cell_count = self.config.total_cells
        self.action_space = spaces.Discrete(2 * self._cell_count)

        self._steps = 0

    def reset(
        self,
        *,
        seed: Optional[int] = None,
        options: Optional[Dict[str, Any]] = None,
    ) -> Tuple[np.ndarray, Dict[str, Any]]:
        """
        Start a new episode on a fresh board.

        Args:
            seed: Random seed for reproducible mine placement.
            options: Additional options (unused).

        Returns:
            Tuple of (observation, info dict).
        """
        super().reset(seed=seed)
        self.board = self._new_board()
        self._steps = 0

        return self.board.get_observation(), self._get_info()

    def _new_board(self) -> Board:
        """Build a board whose mine layout is drawn from ``np_random``."""
        seed = int(self.np_random.integers(2**32))
        return Board.from_config(self.config, rng=random.Random(seed))

    def step(
        self, action: int
    ) -> Tuple[np.ndarray, SupportsFloat, bool, bool, Dict[str, Any]]:
        """
        Execute one action in the environment.

        Args:
            action: Cell index, offset by rows * cols for a flag toggle.

        Returns:
            Tuple of (observation, reward, terminated, truncated, info).
        """
        row, col, secondary = self._decode_action(action)
        self._steps += 1

        revealed_before = self.board.revealed_count
        result = self.board.activate(row, col, secondary)
        reward = self._calculate_reward(result.changed, result.status,
                                        secondary, revealed_before)

        observation = self.board.get_observation()
        terminated = result.ended
        truncated = False

        return observation, reward, terminated, truncated, self._get_info()

    def _decode_action(self, action: int) -> Tuple[int, int, bool]:
        """Convert flat action index to (row, col, secondary)."""
        secondary = action >= self._cell_count
        index = action - self._cell_count if secondary else action
        return index // self.config.cols, index % self.config.cols, secondary

    def _calculate_reward(
        self,
        changed: bool,
        status: GameState,
        secondary: bool,
        revealed_before: int,
    ) -> float:
        """Score one activation."""
        if not changed:
            return -0.1
        if status == GameState.LOST:
            return -10.0
        if secondary:
            return 0.0
        reward = float(self.board.revealed_count - revealed_before)
        if status == GameState.WON:
            reward += 10.0
        return reward

    def _get_info(self) -> Dict[str, Any]:
        """Get info dictionary for current state."""
        return {
            "steps": self._steps,
            "revealed": self.board.revealed_count,
            "total_safe": self.config.safe_cells,
            "flags": self.board.flag_count,
            "game_state": self.board.game_state.name,
            "valid_actions": int(self.get_action_mask().sum()),
        }

    def render(self) -> Optional[str]:
        """Render the current board state."""
        if self.render_mode == "ansi":
            return render_grid(self.board)
        if self.render_mode == "human":
            print(render_grid(self.board))
        return None

    def get_action_mask(self) -> np.ndarray:
        """
        Get mask of actions that would change the board.

        Returns:
            Boolean array where True = valid action.
        """
        mask = np.zeros(self.action_space.n, dtype=bool)
        if self.board.is_ended:
            return mask
        can_flag = self.board.flag_count < self.config.mine_count
        for cell in self.board:
            index = cell.row * self.config.cols + cell.col
            if cell.is_hidden:
                mask[index] = True
                mask[self._cell_count + index] = can_flag
            elif cell.is_flagged:
                mask[self._cell_count + index] = True
        return mask
