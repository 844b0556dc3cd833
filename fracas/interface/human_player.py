"""Human player controller for CLI interaction.

This module provides the HumanPlayer class which reads commands from the
terminal and turns them into engine operations. It only reads engine state
through snapshots.
"""

from typing import Callable

from ..engine.game_engine import GameEngine
from .command_parser import Command, CommandParseError, CommandParser, CommandType, ErrorType
from .renderer import MapRenderer


class QuitGame(Exception):
    """Raised when the player asks to leave the game."""


class HumanPlayer:
    """Human player controller class.

    Handles CLI interaction for human players: showing the map, reading
    commands, and applying them to the engine.
    """

    def __init__(
        self,
        engine: GameEngine,
        input_fn: Callable[[str], str] = input,
        output_fn: Callable[[str], None] = print,
    ):
        """Initialize human player controller.

        Args:
            engine: Engine to play on
            input_fn: Prompt reader (injectable for tests)
            output_fn: Line writer (injectable for tests)
        """
        self.engine = engine
        self.renderer = MapRenderer()
        self.parser = CommandParser()
        self._input = input_fn
        self._output = output_fn

    def _format_error_message(self, error_type: ErrorType, message: str) -> str:
        """Format error message with emoji and optional help.

        Args:
            error_type: Classification of the error
            message: Error message content

        Returns:
            Formatted error message string
        """
        formatted = f"❌ {message}"

        # Only Unknown Command errors show help hint
        if error_type == ErrorType.UNKNOWN_COMMAND:
            formatted += "\n\nAvailable commands: <x> <y>, buy, upgrade, end, map, status, help, quit"
            formatted += "\nExample: 3 4   (select or attack cell x=3, y=4)"

        return formatted

    def show_map(self) -> None:
        snapshot = self.engine.snapshot()
        highlight = None
        selected = snapshot["selectedCell"]
        if selected:
            highlight = [c.position for c in self.engine.legal_targets((selected["x"], selected["y"]))]
        self._output(self.renderer.render(snapshot, highlight=highlight))
        self._output(self.renderer.render_status(snapshot))

    def show_status(self) -> None:
        self._output(self.renderer.render_players(self.engine.snapshot()))

    def play_turn(self) -> None:
        """Read and apply commands until the human's turn is over.

        Returns when play passes to another human, the game ends, or the
        player's move budget runs out and the AI players have moved.

        Raises:
            QuitGame: If the player enters 'quit'
        """
        player_index = self.engine.current_player_index
        turn = self.engine.turn
        self.show_map()

        while self.engine.is_running and self.engine.turn == turn:
            player = self.engine.current_player
            try:
                raw = self._input(f"[Turn {turn}] [{player.name}] > ")
            except EOFError:
                raise QuitGame()

            try:
                command = self.parser.parse(raw)
            except CommandParseError as e:
                self._output(self._format_error_message(e.error_type, e.message))
                continue

            self.execute(command)

        if self.engine.current_player_index != player_index or not self.engine.is_running:
            self._output(self.engine.message)

    def execute(self, command: Command) -> None:
        """Apply a parsed command to the engine and report the result."""
        if command.type == CommandType.QUIT:
            raise QuitGame()
        if command.type == CommandType.HELP:
            self._show_help()
            return
        if command.type == CommandType.MAP:
            self.show_map()
            return
        if command.type == CommandType.STATUS:
            self.show_status()
            return
        if command.type == CommandType.END_TURN:
            self.engine.end_turn()
            self._report_events()
            return

        try:
            cell = self.engine.cell_at(command.x, command.y)
        except ValueError as e:
            self._output(self._format_error_message(ErrorType.SYNTAX_ERROR, str(e)))
            return

        if command.type == CommandType.CLICK:
            self.engine.on_cell_click(cell)
        elif command.type == CommandType.BUY:
            self.engine.purchase_troops(cell, command.count)
        elif command.type == CommandType.UPGRADE:
            self.engine.upgrade_to_capital(cell)

        self._report_events()
        if self.engine.is_running:
            self.show_map()
        else:
            self._output(self.engine.message)

    def _report_events(self) -> None:
        names = {p.id: p.name for p in self.engine.players}
        for event in self.engine.events:
            if event["type"] == "elimination":
                self._output(f"☠ {event['name']} was eliminated")
            elif event["type"] == "attack" and event["attacker"] != self.engine.current_player_index:
                outcome = "captured" if event["captured"] else "repelled at"
                self._output(
                    f"{names[event['attacker']]} {outcome} "
                    f"({event['target'][0]}, {event['target'][1]})"
                )

    def _show_help(self) -> None:
        self._output(
            "\n=== Fracas - Command Help ===\n"
            "\n"
            "  <x> <y>                 - Select your cell, or attack from the selected cell\n"
            "  buy <x> <y> <count>     - Buy troops for your cell\n"
            "  upgrade <x> <y>         - Upgrade your cell to a capital\n"
            "  end                     - End your turn\n"
            "  map                     - Show the map\n"
            "  status                  - Show all players\n"
            "  help                    - Show this help message\n"
            "  quit                    - Exit the game\n"
            "\n"
            "Map legend: 0@5 capital, 0:3 territory, [..] selected, * attackable\n"
        )
