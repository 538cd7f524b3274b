#!/usr/bin/env python3
"""Watch a random player reveal and flag its way through Minesweeper."""
import argparse
import time

import numpy as np

from src.minesweeper.board import BoardConfig
from src.minesweeper.environment import MinesweeperEnv
from src.minesweeper.shell import describe_config, render_board


def pick_action(mask: np.ndarray, picker: np.random.Generator,
                flag_chance: float) -> int:
    """Choose a valid action, flagging with probability ``flag_chance``."""
    cell_count = len(mask) // 2
    reveals = np.flatnonzero(mask[:cell_count])
    flags = np.flatnonzero(mask[cell_count:]) + cell_count
    if len(flags) and (not len(reveals) or picker.random() < flag_chance):
        return int(picker.choice(flags))
    return int(picker.choice(reveals))


def play_game(env: MinesweeperEnv, picker: np.random.Generator,
              flag_chance: float, delay: float, seed=None) -> dict:
    """Play one game to the end and return the final info dict."""
    env.reset(seed=seed)
    info = {}
    done = False
    while not done:
        action = pick_action(env.get_action_mask(), picker, flag_chance)
        _, reward, terminated, truncated, info = env.step(action)
        done = terminated or truncated

        kind = "flag" if action >= env.config.total_cells else "reveal"
        index = action % env.config.total_cells
        print(f"{kind} ({index // env.config.cols}, {index % env.config.cols})"
              f" -> reward {reward:+.1f}")
        time.sleep(delay)

    print(render_board(env.board, reveal_all=True))
    return info


def demo(games: int, config: BoardConfig, flag_chance: float,
         delay: float, seed=None) -> None:
    env = MinesweeperEnv(config=config)
    picker = np.random.default_rng(seed)
    print(describe_config(config))

    wins = 0
    for game in range(games):
        print(f"\n=== Game {game + 1}/{games} ===")
        info = play_game(env, picker, flag_chance, delay,
                         seed=None if seed is None else seed + game)
        if info.get("game_state") == "WON":
            wins += 1
        print(f"{info['game_state']} after {info['steps']} steps, "
              f"{info['flags']} flags left standing")

    print(f"\n=== Final: {wins}/{games} wins ===")


if __name__ == "__main__":
    parser = argparse.ArgumentParser()
    parser.add_argument("--games", type=int, default=3, help="Number of games")
    parser.add_argument("--rows", type=int, default=6, help="Board rows")
    parser.add_argument("--cols", type=int, default=6, help="Board columns")
    parser.add_argument("--mines", type=int, default=4, help="Number of mines")
    parser.add_argument("--flag-chance", type=float, default=0.2,
                        help="Probability of a flag action per move")
    parser.add_argument("--delay", type=float, default=0.1, help="Delay between moves")
    parser.add_argument("--seed", type=int, default=None, help="Random seed")
    args = parser.parse_args()

    demo(args.games, BoardConfig(args.rows, args.cols, args.mines),
         args.flag_chance, args.delay, args.seed)
