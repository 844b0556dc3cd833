"""Tests for the terminal game loop."""

from unittest.mock import Mock

import pytest

from fracas.engine.game_engine import GameEngine
from fracas.interface.human_player import QuitGame
from fracas.models import GameSettings
from game import MAX_AI_ROUNDS, GameOrchestrator


def test_ai_only_game_runs_to_completion(capsys):
    """Test a game with no human seat plays itself out."""
    engine = GameEngine(GameSettings(human_players=0, ai_players=2, seed=8))
    engine.initialize_game()

    result = GameOrchestrator(engine).run()

    output = capsys.readouterr().out
    assert result is engine
    if engine.is_running:
        assert f"No winner after {MAX_AI_ROUNDS} AI rounds" in output
    else:
        assert "Game Over!" in output


def test_human_turns_delegated():
    """Test the loop hands each human turn to the player controller."""
    engine = GameEngine(GameSettings(human_players=2, ai_players=0, seed=1))
    engine.initialize_game()
    orchestrator = GameOrchestrator(engine)
    orchestrator.human = Mock()
    orchestrator.human.play_turn = Mock(side_effect=[None, QuitGame()])

    with pytest.raises(SystemExit) as exc:
        orchestrator.run()

    assert exc.value.code == 0
    assert orchestrator.human.play_turn.call_count == 2


def test_keyboard_interrupt_exits_cleanly(capsys):
    engine = GameEngine(GameSettings(seed=1))
    engine.initialize_game()
    orchestrator = GameOrchestrator(engine)
    orchestrator.human = Mock()
    orchestrator.human.play_turn = Mock(side_effect=KeyboardInterrupt)

    with pytest.raises(SystemExit):
        orchestrator.run()

    assert "Game interrupted by user" in capsys.readouterr().out
