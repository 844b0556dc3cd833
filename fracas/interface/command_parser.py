"""Text command parser for human players.

This module parses commands like "attack 3 4" or "buy 2 2 5" into Command
objects that the HumanPlayer loop turns into engine calls.
"""

import re
from dataclasses import dataclass
from enum import Enum
from typing import Optional


class CommandType(Enum):
    """Kinds of commands a human can issue."""

    CLICK = "click"
    BUY = "buy"
    UPGRADE = "upgrade"
    END_TURN = "end"
    MAP = "map"
    STATUS = "status"
    HELP = "help"
    QUIT = "quit"


class ErrorType(Enum):
    """Classification of command input errors."""

    UNKNOWN_COMMAND = "unknown_command"
    SYNTAX_ERROR = "syntax_error"


class CommandParseError(Exception):
    """Raised when command parsing fails with classification."""

    def __init__(self, error_type: ErrorType, message: str):
        """Initialize parse error.

        Args:
            error_type: Classification of the error
            message: Human-readable error message
        """
        self.error_type = error_type
        self.message = message
        super().__init__(message)


@dataclass
class Command:
    """A parsed command.

    Attributes:
        type: What to do
        x: Column of the target cell (cell commands only)
        y: Row of the target cell (cell commands only)
        count: Troop count (buy only)
    """

    type: CommandType
    x: Optional[int] = None
    y: Optional[int] = None
    count: Optional[int] = None


# Aliases for commands that take no arguments
_SIMPLE_COMMANDS = {
    "end": CommandType.END_TURN,
    "done": CommandType.END_TURN,
    "pass": CommandType.END_TURN,
    "map": CommandType.MAP,
    "m": CommandType.MAP,
    "status": CommandType.STATUS,
    "st": CommandType.STATUS,
    "help": CommandType.HELP,
    "h": CommandType.HELP,
    "?": CommandType.HELP,
    "quit": CommandType.QUIT,
    "exit": CommandType.QUIT,
    "q": CommandType.QUIT,
}

# Verbs that act like a click on a cell
_CLICK_VERBS = ("click", "select", "attack", "c", "s", "a")

_BUY_VERBS = ("buy", "purchase", "b")
_UPGRADE_VERBS = ("upgrade", "capital", "u")

_COORDS = r"(-?\d+)[\s,]+(-?\d+)"


class CommandParser:
    """Parse text commands into Commands."""

    def parse(self, command: str) -> Command:
        """Parse a command string.

        Supported formats:
        - "<x> <y>" or "click|select|attack <x> <y>" (cell click)
        - "buy <x> <y> <count>"
        - "upgrade <x> <y>"
        - "end", "map", "status", "help", "quit"

        Coordinates may be separated by spaces or a comma.

        Args:
            command: Command string to parse

        Returns:
            Parsed Command

        Raises:
            CommandParseError: If the command is unknown or malformed
        """
        cmd = command.strip().lower()
        if not cmd:
            raise CommandParseError(ErrorType.SYNTAX_ERROR, "Empty command")

        if cmd in _SIMPLE_COMMANDS:
            return Command(type=_SIMPLE_COMMANDS[cmd])

        # Bare coordinates are a click
        match = re.fullmatch(_COORDS, cmd)
        if match:
            return Command(type=CommandType.CLICK, x=int(match.group(1)), y=int(match.group(2)))

        verb, _, rest = cmd.partition(" ")
        rest = rest.strip()

        if verb in _CLICK_VERBS:
            x, y = self._parse_coords(rest, f"{verb} <x> <y>")
            return Command(type=CommandType.CLICK, x=x, y=y)

        if verb in _BUY_VERBS:
            return self._parse_buy(rest)

        if verb in _UPGRADE_VERBS:
            x, y = self._parse_coords(rest, "upgrade <x> <y>")
            return Command(type=CommandType.UPGRADE, x=x, y=y)

        raise CommandParseError(ErrorType.UNKNOWN_COMMAND, f"Unknown command: '{verb}'")

    def _parse_coords(self, text: str, usage: str) -> tuple[int, int]:
        match = re.fullmatch(_COORDS, text)
        if not match:
            raise CommandParseError(
                ErrorType.SYNTAX_ERROR,
                f"Syntax error: expected two coordinates\nCorrect format: {usage}",
            )
        return int(match.group(1)), int(match.group(2))

    def _parse_buy(self, text: str) -> Command:
        """Parse the arguments of 'buy <x> <y> <count>'."""
        match = re.fullmatch(_COORDS + r"[\s,]+(-?\d+)", text)
        if not match:
            raise CommandParseError(
                ErrorType.SYNTAX_ERROR,
                "Syntax error: invalid buy command\nCorrect format: buy <x> <y> <count>",
            )
        count = int(match.group(3))
        if count <= 0:
            raise CommandParseError(
                ErrorType.SYNTAX_ERROR,
                f"Invalid troop count: must be positive (got {count})",
            )
        return Command(
            type=CommandType.BUY,
            x=int(match.group(1)),
            y=int(match.group(2)),
            count=count,
        )
