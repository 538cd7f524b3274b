"""
Text presentation layer for Minesweeper.

Turns typed commands into board activations and board state into ASCII
output. This is the only module that knows how cells are drawn.
"""
from dataclasses import dataclass
from enum import Enum
from typing import Callable, Optional

from .board import Board, BoardConfig
from .cell import FLAGGED_VALUE, HIDDEN_VALUE, MINE_VALUE
from .session import GameSession


SYMBOLS = {
    HIDDEN_VALUE: ".",
    FLAGGED_VALUE: "F",
    MINE_VALUE: "*",
    0: " ",
}

HELP_TEXT = """Commands:
  r ROW COL   reveal a cell
  f ROW COL   toggle a flag
  n           start a new game
  h           show this help
  q           quit"""


def cell_symbol(value: int) -> str:
    """Map a display code to its one-character symbol."""
    return SYMBOLS.get(value, str(value))


def render_grid(board: Board, reveal_all: bool = False) -> str:
    """
    Render board as ASCII string, one line per row.

    With ``reveal_all`` every mine and number is drawn, for showing the
    full layout once play has stopped.
    """
    lines = []
    obs = board.get_observation(reveal_all=reveal_all)
    for row in range(board.rows):
        lines.append(
            "".join(cell_symbol(int(value)) + " " for value in obs[row])
        )
    return "\n".join(lines)


def render_board(board: Board, reveal_all: bool = False) -> str:
    """
    Render board with row/column headers and a status line.

    Columns are labelled with the last digit of their index so wide
    boards stay aligned.
    """
    width = len(str(board.rows - 1))
    header = " " * (width + 1) + " ".join(
        str(col % 10) for col in range(board.cols)
    )
    lines = [header]
    for row, line in enumerate(render_grid(board, reveal_all).split("\n")):
        lines.append(f"{row:>{width}} {line.rstrip()}")
    lines.append(
        f"Mines left: {board.remaining_mines}  "
        f"State: {board.game_state.name.lower()}"
    )
    return "\n".join(lines)


# ============================================================================
# Command Parsing
# ============================================================================

class CommandError(ValueError):
    """Raised for input the shell cannot understand."""


class CommandKind(Enum):
    REVEAL = "r"
    FLAG = "f"
    NEW = "n"
    HELP = "h"
    QUIT = "q"


COMMAND_WORDS = {
    "r": CommandKind.REVEAL,
    "reveal": CommandKind.REVEAL,
    "f": CommandKind.FLAG,
    "flag": CommandKind.FLAG,
    "n": CommandKind.NEW,
    "new": CommandKind.NEW,
    "h": CommandKind.HELP,
    "help": CommandKind.HELP,
    "q": CommandKind.QUIT,
    "quit": CommandKind.QUIT,
}

@dataclass(frozen=True)
class Command:
    kind: CommandKind
    row: Optional[int] = None
    col: Optional[int] = None


def parse_command(text: str) -> Command:
    """
    Parse one line of player input.

    Raises:
        CommandError: If the line is empty or malformed.
    """
    parts = text.split()
    if not parts:
        raise CommandError("Empty command")

    kind = COMMAND_WORDS.get(parts[0].lower())
    if kind is None:
        raise CommandError(f"Unknown command: {parts[0]}")

    if kind not in (CommandKind.REVEAL, CommandKind.FLAG):
        if len(parts) != 1:
            raise CommandError(f"'{parts[0]}' takes no arguments")
        return Command(kind)

    if len(parts) != 3:
        raise CommandError(f"Usage: {kind.value} ROW COL")
    try:
        row, col = int(parts[1]), int(parts[2])
    except ValueError:
        raise CommandError("ROW and COL must be integers") from None
    return Command(kind, row, col)


# ============================================================================
# Interactive Shell
# ============================================================================

class TextShell:
    """
    Plays a game session through typed commands.

    Args:
        session: Session holding the current board.
        output: Callable receiving each block of text to show.
    """

    def __init__(
        self,
        session: GameSession,
        output: Callable[[str], None] = print,
    ) -> None:
        self.session = session
        self.output = output

    def handle(self, line: str) -> bool:
        """
        Apply one line of input.

        Returns:
            False when the player asked to quit, True otherwise.
        """
        try:
            command = parse_command(line)
        except CommandError as exc:
            self.output(str(exc))
            return True

        if command.kind == CommandKind.QUIT:
            return False
        if command.kind == CommandKind.HELP:
            self.output(HELP_TEXT)
            return True
        if command.kind == CommandKind.NEW:
            self.session.restart()
            self.output(render_board(self.session.board))
            return True

        board = self.session.board
        if board.is_ended:
            self.output("Game over. Type 'n' for a new game.")
            return True
        if not board.in_bounds(command.row, command.col):
            self.output(
                f"({command.row}, {command.col}) is off the "
                f"{board.rows}x{board.cols} board"
            )
            return True

        result = self.session.activate(
            command.row, command.col, command.kind == CommandKind.FLAG
        )
        if not result.changed:
            self.output("Nothing to do there.")
            return True

        self.output(render_board(board))
        message = self.session.outcome_message()
        if message:
            self.output(message)
        return True

    def run(self, read: Callable[[str], str] = input) -> None:
        """
        Read and apply commands until quit or end of input.

        An abandoned game in progress is shown with its mines uncovered.
        """
        self.output(render_board(self.session.board))
        self.output(HELP_TEXT)
        while True:
            try:
                line = read("> ")
            except EOFError:
                break
            if not self.handle(line):
                break

        board = self.session.board
        if board.mines_placed and board.is_playing:
            self.output(render_board(board, reveal_all=True))


def describe_config(config: BoardConfig) -> str:
    """One-line summary of a board configuration."""
    density = 100 * config.mine_count / config.total_cells
    return (
        f"Board: {config.rows}x{config.cols} with {config.mine_count} mines "
        f"({density:.1f}% density)"
    )
