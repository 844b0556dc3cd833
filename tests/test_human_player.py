"""Tests for the terminal player controller."""

import pytest

from fracas.engine.game_engine import GameEngine
from fracas.engine.grid import create_grid
from fracas.interface.command_parser import Command, CommandType
from fracas.interface.human_player import HumanPlayer, QuitGame
from fracas.models import Cell, GameSettings, Player
from fracas.utils import GameRNG


def _engine(ai_opponent: bool = False, enemy_capital=(4, 4), enemy_troops: int = 5) -> GameEngine:
    grid = create_grid(5, 5)
    grid[0][0] = Cell(0, 0, owner=0, troops=10, is_capital=True)
    ex, ey = enemy_capital
    grid[ey][ex] = Cell(ex, ey, owner=1, troops=enemy_troops, is_capital=True)
    players = [
        Player(id=0, name="Player 1", color="#EF5350", money=10),
        Player(
            id=1,
            name="AI 1" if ai_opponent else "Player 2",
            color="#42A5F5",
            is_ai=ai_opponent,
            money=10,
        ),
    ]
    engine = GameEngine(GameSettings(), rng=_AlwaysWinRNG(0))
    engine.load_board(grid, players)
    return engine


class _AlwaysWinRNG(GameRNG):
    """Attacks always roll high and defences always roll low."""

    def uniform(self, a: float, b: float) -> float:
        return b if a < 1.0 else a


class Console:
    """Scripted input and captured output."""

    def __init__(self, *lines: str):
        self.lines = list(lines)
        self.prompts: list[str] = []
        self.output: list[str] = []

    def input(self, prompt: str) -> str:
        self.prompts.append(prompt)
        if not self.lines:
            raise EOFError
        return self.lines.pop(0)

    def print(self, text: str = "") -> None:
        self.output.append(text)

    @property
    def text(self) -> str:
        return "\n".join(self.output)


def _human(engine: GameEngine, console: Console) -> HumanPlayer:
    return HumanPlayer(engine, input_fn=console.input, output_fn=console.print)


class TestPlayTurn:
    """Test a full human turn driven by scripted input."""

    def test_attack_then_end_turn(self):
        engine = _engine()
        console = Console("0 0", "1 0", "end")

        _human(engine, console).play_turn()

        assert engine.cell_at(1, 0).owner == 0
        assert engine.current_player_index == 1
        assert "Attack successful! Captured territory." in console.text
        assert console.prompts[0] == "[Turn 1] [Player 1] > "
        assert console.output[-1] == "Player 2's turn"

    def test_turn_ends_with_move_budget(self):
        """Test the loop returns once the last attack passes the turn."""
        engine = _engine()
        console = Console("0 0", "1 0", "1 0", "0 1", "0 1", "1 1")

        _human(engine, console).play_turn()

        assert engine.current_player_index == 1
        assert console.lines == []

    def test_unknown_command_shows_help_hint(self):
        engine = _engine()
        console = Console("fly 1 2", "end")

        _human(engine, console).play_turn()

        assert "❌ Unknown command: 'fly'" in console.text
        assert "Available commands" in console.text

    def test_syntax_error_has_no_help_hint(self):
        engine = _engine()
        console = Console("buy 1 2", "end")

        _human(engine, console).play_turn()

        assert "❌ Syntax error" in console.text
        assert "Available commands" not in console.text

    def test_outside_grid(self):
        engine = _engine()
        console = Console("9 9", "end")

        _human(engine, console).play_turn()

        assert "❌ Position (9, 9) is outside the 5x5 grid" in console.text

    def test_quit(self):
        with pytest.raises(QuitGame):
            _human(_engine(), Console("quit")).play_turn()

    def test_end_of_input_quits(self):
        with pytest.raises(QuitGame):
            _human(_engine(), Console()).play_turn()

    def test_winning_move_reports_game_over(self):
        engine = _engine(ai_opponent=True, enemy_capital=(1, 1), enemy_troops=2)
        console = Console("0 0", "1 1")

        _human(engine, console).play_turn()

        assert not engine.is_running
        assert console.output[-1] == "Game Over! Player 1 wins!"

    def test_ai_attacks_reported(self):
        """Test the human sees what the AI did during end_turn."""
        engine = _engine(ai_opponent=True)
        console = Console("end")

        _human(engine, console).play_turn()

        assert engine.current_player_index == 0
        assert console.text.count("AI 1 captured") == 3


class TestExecute:
    """Test single commands."""

    def test_buy(self):
        engine = _engine()
        console = Console()

        _human(engine, console).execute(Command(type=CommandType.BUY, x=0, y=0, count=2))

        assert engine.cell_at(0, 0).troops == 12
        assert engine.players[0].money == 8
        assert "Purchased 2 troops for 2 money." in console.text

    def test_upgrade_rejected(self):
        engine = _engine()
        console = Console()

        _human(engine, console).execute(Command(type=CommandType.UPGRADE, x=0, y=0))

        assert "Not enough money or invalid cell selection." in console.text

    def test_help(self):
        console = Console()

        _human(_engine(), console).execute(Command(type=CommandType.HELP))

        assert "Command Help" in console.text

    def test_status(self):
        console = Console()

        _human(_engine(), console).execute(Command(type=CommandType.STATUS))

        assert "> 0 Player 1" in console.text

    def test_map_marks_targets(self):
        engine = _engine()
        console = Console()
        human = _human(engine, console)
        engine.on_cell_click((0, 0))

        human.execute(Command(type=CommandType.MAP))

        assert "[0@+]" in console.text
        assert " * " in console.text
