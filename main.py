#!/usr/bin/env python3
"""
Minesweeper - Main entry point.

Usage:
    python main.py play [--difficulty {beginner,intermediate,expert}]
    python main.py play --rows R --cols C --mines M [--seed N]
"""
import argparse
import logging
import random
import sys
from typing import Optional

from src.minesweeper.board import BoardConfig
from src.minesweeper.errors import InvalidConfiguration
from src.minesweeper.session import Difficulty, GameSession
from src.minesweeper.shell import TextShell, describe_config


def build_config(args: argparse.Namespace) -> BoardConfig:
    """Resolve the board configuration from command line flags."""
    custom = (args.rows, args.cols, args.mines)
    if any(value is not None for value in custom):
        if any(value is None for value in custom):
            raise InvalidConfiguration(
                "--rows, --cols and --mines must be given together"
            )
        return BoardConfig(args.rows, args.cols, args.mines)
    return Difficulty.from_name(args.difficulty).config


def play(args: argparse.Namespace) -> int:
    """Play interactively in the terminal."""
    try:
        config = build_config(args)
    except ValueError as exc:
        print(f"Invalid board: {exc}")
        return 2

    rng: Optional[random.Random] = None
    if args.seed is not None:
        rng = random.Random(args.seed)

    print(describe_config(config))
    session = GameSession(config, rng=rng)
    TextShell(session).run()
    print(f"\nGames played: {session.games_started}")
    return 0


def main() -> int:
    """Main entry point."""
    parser = argparse.ArgumentParser(description="Minesweeper")
    parser.add_argument(
        "--verbose", "-v", action="store_true", help="Enable debug logging"
    )
    subparsers = parser.add_subparsers(dest="command", help="Command to run")

    play_parser = subparsers.add_parser("play", help="Play in the terminal")
    play_parser.add_argument(
        "--difficulty",
        choices=[member.name.lower() for member in Difficulty],
        default="intermediate",
        help="Preset board size",
    )
    play_parser.add_argument("--rows", type=int, default=None, help="Custom rows")
    play_parser.add_argument("--cols", type=int, default=None, help="Custom columns")
    play_parser.add_argument("--mines", type=int, default=None, help="Custom mine count")
    play_parser.add_argument(
        "--seed", type=int, default=None, help="Seed for mine placement"
    )

    args = parser.parse_args()

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(asctime)s %(name)s %(levelname)s: %(message)s",
    )

    if args.command == "play":
        return play(args)
    parser.print_help()
    return 1


if __name__ == "__main__":
    sys.exit(main())
